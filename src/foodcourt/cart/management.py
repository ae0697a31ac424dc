"""Cart clearing — command and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from foodcourt.cart.cart import Cart
from foodcourt.domain import foodcourt


@foodcourt.command(part_of="Cart")
class ClearCart:
    """Empty the user's cart. The cart record itself is kept."""

    user_id = Identifier(required=True)


@foodcourt.command_handler(part_of=Cart)
class ClearCartHandler:
    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        if cart is None:
            return False
        cart.clear()
        repo.add(cart)
        return True
