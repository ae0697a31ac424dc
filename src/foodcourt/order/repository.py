"""Repository for the Order aggregate — read queries, newest first."""

from protean.exceptions import ValidationError

from foodcourt.domain import foodcourt
from foodcourt.exceptions import InvalidTransitionError
from foodcourt.order.order import Order, parse_status


@foodcourt.repository(part_of=Order)
class OrderRepository:
    def by_user(self, user_id) -> list[Order]:
        return self._dao.query.filter(user_id=str(user_id)).order_by("-created_at").all().items

    def by_restaurant(self, restaurant_id) -> list[Order]:
        return self._dao.query.filter(restaurant_id=str(restaurant_id)).order_by("-created_at").all().items

    def by_status(self, status) -> list[Order]:
        """Orders currently in ``status``, matched case-insensitively."""
        try:
            status = parse_status(status)
        except InvalidTransitionError:
            raise ValidationError({"status": [f"Unknown order status: {status}"]}) from None
        return self._dao.query.filter(status=status.value).order_by("-created_at").all().items
