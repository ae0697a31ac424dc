"""Domain events for the Cart aggregate."""

from protean.fields import Float, Identifier, Integer

from foodcourt.domain import foodcourt


@foodcourt.event(part_of="Cart")
class CartItemAdded:
    """A menu item was added to the cart, or its line quantity increased."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)
    restaurant_id = Identifier(required=True)
    quantity = Integer(required=True)
    total_price = Float(required=True)


@foodcourt.event(part_of="Cart")
class CartLineUpdated:
    """A cart line was re-priced with a new quantity."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    total_price = Float(required=True)


@foodcourt.event(part_of="Cart")
class CartLineRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = Identifier(required=True)
    total_price = Float(required=True)


@foodcourt.event(part_of="Cart")
class CartCleared:
    """Every line was removed from the cart, either on request or after checkout."""

    __version__ = 1

    cart_id = Identifier(required=True)
    lines_removed = Integer(required=True)
