"""Order aggregate — the core of the foodcourt domain.

An order is placed once, with a total fixed from its lines at that moment,
and then only moves forward through a fixed state machine:

    PENDING → CONFIRMED → PREPARING → COMPLETED
    CANCELLED (from PENDING, CONFIRMED, PREPARING)

Each transition stamps its own timestamp exactly once. Cancellation has its
own entry point (``cancel``) and is never reachable through ``advance_to``.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import InvalidOperationError, ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from foodcourt.domain import foodcourt
from foodcourt.exceptions import InvalidTransitionError
from foodcourt.order.events import (
    OrderCancelled,
    OrderCompleted,
    OrderConfirmed,
    OrderPlaced,
    OrderPreparing,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    PREPARING = "Preparing"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


# State machine transition map (forward moves only; see ``cancel``)
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED},
    OrderStatus.CONFIRMED: {OrderStatus.PREPARING},
    OrderStatus.PREPARING: {OrderStatus.COMPLETED},
    OrderStatus.COMPLETED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

_CANCELLABLE_STATES = {
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.PREPARING,
}


def parse_status(value) -> OrderStatus:
    """Resolve a status name case-insensitively.

    Raises ``InvalidTransitionError`` for names outside the state machine.
    """
    if isinstance(value, OrderStatus):
        return value
    for status in OrderStatus:
        if str(value).strip().lower() == status.value.lower():
            return status
    raise InvalidTransitionError(f"Unknown order status: {value}")


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@foodcourt.entity(part_of="Order")
class OrderLine:
    """One menu item at the quantity and price captured when the order was placed."""

    menu_item_id = Identifier(required=True)
    menu_item_name = String(max_length=100)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@foodcourt.aggregate
class Order:
    user_id = Identifier(required=True)
    restaurant_id = Identifier(required=True)
    lines = HasMany(OrderLine)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    total_amount = Float(required=True, min_value=0.0)
    delivery_address = String(required=True, max_length=200)
    phone_number = String(required=True, max_length=15)
    special_instructions = String(max_length=500)
    cancellation_reason = String(max_length=200)
    source_cart_id = Identifier()
    created_at = DateTime()
    confirmed_at = DateTime()
    prepared_at = DateTime()
    completed_at = DateTime()
    cancelled_at = DateTime()

    @invariant.post
    def cancelled_order_must_have_reason(self):
        if self.status == OrderStatus.CANCELLED.value and not self.cancellation_reason:
            raise ValidationError({"cancellation_reason": ["A cancelled order must record a reason"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        user_id,
        restaurant_id,
        lines_data,
        delivery_address,
        phone_number,
        special_instructions=None,
        source_cart_id=None,
    ):
        """Create a Pending order from already-priced lines.

        Args:
            lines_data: List of dicts with menu_item_id, menu_item_name,
                        quantity, unit_price.
        """
        errors = {}
        if not lines_data:
            errors["lines"] = ["An order needs at least one line"]
        if not delivery_address or not str(delivery_address).strip():
            errors["delivery_address"] = ["Delivery address is required"]
        if not phone_number or not str(phone_number).strip():
            errors["phone_number"] = ["Phone number is required"]
        if errors:
            raise ValidationError(errors)

        now = datetime.now(UTC)
        lines_data = [dict(line, unit_price=round(line["unit_price"], 2)) for line in lines_data]
        total_amount = round(sum(line["quantity"] * line["unit_price"] for line in lines_data), 2)

        order = cls(
            user_id=user_id,
            restaurant_id=restaurant_id,
            lines=[
                OrderLine(
                    menu_item_id=line["menu_item_id"],
                    menu_item_name=line.get("menu_item_name"),
                    quantity=line["quantity"],
                    unit_price=line["unit_price"],
                )
                for line in lines_data
            ],
            status=OrderStatus.PENDING.value,
            total_amount=total_amount,
            delivery_address=delivery_address.strip(),
            phone_number=phone_number.strip(),
            special_instructions=special_instructions,
            source_cart_id=source_cart_id,
            created_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                restaurant_id=str(restaurant_id),
                total_amount=total_amount,
                line_count=len(lines_data),
                source_cart_id=str(source_cart_id) if source_cart_id else None,
                created_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transition helper
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        """Raise unless the order may move from its current status to target."""
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise InvalidTransitionError(f"Cannot transition from {current.value} to {target_status.value}")

    def is_owned_by(self, user_id) -> bool:
        return str(self.user_id) == str(user_id)

    # -------------------------------------------------------------------
    # Order lifecycle transitions
    # -------------------------------------------------------------------
    def advance_to(self, target_status):
        """Move the order one step forward along the state machine."""
        target = parse_status(target_status)
        if target == OrderStatus.CANCELLED:
            raise InvalidTransitionError("Orders are cancelled through cancellation, not a status update")

        if target == OrderStatus.CONFIRMED:
            self.confirm()
        elif target == OrderStatus.PREPARING:
            self.start_preparing()
        else:
            self.complete()

    def confirm(self):
        self._assert_can_transition(OrderStatus.CONFIRMED)
        now = datetime.now(UTC)
        self.status = OrderStatus.CONFIRMED.value
        self.confirmed_at = now

        self.raise_(
            OrderConfirmed(
                order_id=str(self.id),
                user_id=str(self.user_id),
                total_amount=self.total_amount,
                delivery_address=self.delivery_address,
                confirmed_at=now,
            )
        )

    def start_preparing(self):
        self._assert_can_transition(OrderStatus.PREPARING)
        now = datetime.now(UTC)
        self.status = OrderStatus.PREPARING.value
        self.prepared_at = now

        self.raise_(OrderPreparing(order_id=str(self.id), prepared_at=now))

    def complete(self):
        self._assert_can_transition(OrderStatus.COMPLETED)
        now = datetime.now(UTC)
        self.status = OrderStatus.COMPLETED.value
        self.completed_at = now

        self.raise_(OrderCompleted(order_id=str(self.id), completed_at=now))

    def cancel(self, reason):
        """Cancel the order. Completed and already-cancelled orders cannot be cancelled."""
        current = OrderStatus(self.status)
        if current not in _CANCELLABLE_STATES:
            raise InvalidOperationError(f"Cannot cancel an order in {current.value} status")
        if not reason or not str(reason).strip():
            raise ValidationError({"reason": ["A cancellation reason is required"]})

        now = datetime.now(UTC)
        with atomic_change(self):
            self.status = OrderStatus.CANCELLED.value
            self.cancellation_reason = reason.strip()
            self.cancelled_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                user_id=str(self.user_id),
                previous_status=current.value,
                reason=self.cancellation_reason,
                cancelled_at=now,
            )
        )
