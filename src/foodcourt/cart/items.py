"""Cart line management — commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from foodcourt.cart.cart import Cart
from foodcourt.cart.snapshot import snapshot_of
from foodcourt.domain import foodcourt
from foodcourt.menu.catalog import get_menu_item

logger = structlog.get_logger(__name__)


@foodcourt.command(part_of="Cart")
class AddItem:
    user_id = Identifier(required=True)
    restaurant_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    note = String(max_length=500)


@foodcourt.command(part_of="Cart")
class UpdateLine:
    user_id = Identifier(required=True)
    line_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    note = String(max_length=500)


@foodcourt.command(part_of="Cart")
class RemoveLine:
    user_id = Identifier(required=True)
    line_id = Identifier(required=True)


def _line_in_users_cart(repo, user_id, line_id):
    cart = repo.for_user(user_id)
    line = cart.find_line(line_id) if cart else None
    if line is None:
        raise ObjectNotFoundError(f"Cart line {line_id} not found for user {user_id}")
    return cart, line


@foodcourt.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddItem)
    def add_item(self, command):
        menu_item = get_menu_item(command.menu_item_id)
        if str(menu_item.restaurant_id) != str(command.restaurant_id):
            raise ValidationError({"menu_item_id": ["Menu item does not belong to this restaurant"]})
        if not menu_item.is_available:
            raise ValidationError({"menu_item_id": ["Menu item is not available"]})

        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        if cart is None:
            cart = Cart.create(user_id=command.user_id, restaurant_id=command.restaurant_id)
            logger.info("Cart created", user_id=str(command.user_id), restaurant_id=str(command.restaurant_id))

        cart.add_item(menu_item, command.quantity, note=command.note)
        repo.add(cart)
        return snapshot_of(cart)

    @handle(UpdateLine)
    def update_line(self, command):
        repo = current_domain.repository_for(Cart)
        cart, line = _line_in_users_cart(repo, command.user_id, command.line_id)

        # Re-price at the current menu price; fall back to the captured price
        # when the item has since been removed from the menu.
        try:
            unit_price = get_menu_item(line.menu_item_id).price
        except ObjectNotFoundError:
            unit_price = line.unit_price

        cart.update_line(line.id, unit_price, command.quantity, note=command.note)
        repo.add(cart)
        return snapshot_of(cart)

    @handle(RemoveLine)
    def remove_line(self, command):
        repo = current_domain.repository_for(Cart)
        cart, line = _line_in_users_cart(repo, command.user_id, command.line_id)
        cart.remove_line(line.id)
        repo.add(cart)
        return True
