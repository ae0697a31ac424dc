"""Domain events for the Order aggregate.

OrderPlaced drives post-checkout cart clearing; OrderConfirmed drives the
confirmation email.
"""

from protean.fields import DateTime, Float, Identifier, Integer, String

from foodcourt.domain import foodcourt


@foodcourt.event(part_of="Order")
class OrderPlaced:
    """A new order was persisted in Pending status."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    restaurant_id = Identifier(required=True)
    total_amount = Float(required=True)
    line_count = Integer(required=True)
    source_cart_id = Identifier()  # Set when the order was built from a cart
    created_at = DateTime(required=True)


@foodcourt.event(part_of="Order")
class OrderConfirmed:
    """The order owner confirmed the order."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    total_amount = Float(required=True)
    delivery_address = String(required=True, max_length=200)
    confirmed_at = DateTime(required=True)


@foodcourt.event(part_of="Order")
class OrderPreparing:
    __version__ = 1

    order_id = Identifier(required=True)
    prepared_at = DateTime(required=True)


@foodcourt.event(part_of="Order")
class OrderCompleted:
    __version__ = 1

    order_id = Identifier(required=True)
    completed_at = DateTime(required=True)


@foodcourt.event(part_of="Order")
class OrderCancelled:
    """The order was cancelled before completion."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    previous_status = String(required=True, max_length=20)
    reason = String(required=True, max_length=200)
    cancelled_at = DateTime(required=True)
