"""Repository for the Cart aggregate."""

from foodcourt.cart.cart import Cart
from foodcourt.domain import foodcourt


@foodcourt.repository(part_of=Cart)
class CartRepository:
    def for_user(self, user_id) -> Cart | None:
        """The user's cart, or None if they have never added an item."""
        return self._dao.query.filter(user_id=str(user_id)).all().first
