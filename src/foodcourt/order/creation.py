"""Order creation — command and handler.

Lines are re-priced from the menu: a caller may echo the price it showed
the customer, but a price that differs from the menu is rejected and the
menu price is the one stored.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from foodcourt.domain import foodcourt
from foodcourt.menu.catalog import get_menu_item
from foodcourt.order.order import Order

logger = structlog.get_logger(__name__)


@foodcourt.command(part_of="Order")
class CreateOrder:
    user_id = Identifier(required=True)
    restaurant_id = Identifier(required=True)
    lines = Text(required=True)  # JSON: list of {menu_item_id, quantity, unit_price?}
    delivery_address = String(required=True, max_length=200)
    phone_number = String(required=True, max_length=15)
    special_instructions = String(max_length=500)


def _line_error(index, message):
    return ValidationError({"lines": [f"Line {index}: {message}"]})


def parse_lines(raw):
    """Decode the ``lines`` payload into a list of dicts."""
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            raise ValidationError({"lines": ["Lines must be a JSON list"]})
    if not isinstance(raw, list):
        raise ValidationError({"lines": ["Lines must be a JSON list"]})
    for index, requested in enumerate(raw):
        if not isinstance(requested, dict):
            raise _line_error(index, "each line must be an object")
    return raw


def price_lines(restaurant_id, requested_lines):
    """Resolve requested lines against the menu of ``restaurant_id``."""
    priced = []
    for index, requested in enumerate(requested_lines):
        quantity = requested.get("quantity")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise _line_error(index, "quantity must be a positive integer")

        menu_item_id = requested.get("menu_item_id")
        if not menu_item_id:
            raise _line_error(index, "menu_item_id is required")
        menu_item = get_menu_item(menu_item_id)
        if str(menu_item.restaurant_id) != str(restaurant_id):
            raise _line_error(index, "menu item belongs to another restaurant")
        if not menu_item.is_available:
            raise _line_error(index, "menu item is not available")

        menu_price = round(menu_item.price, 2)
        claimed_price = requested.get("unit_price")
        if claimed_price is not None:
            try:
                claimed_price = round(float(claimed_price), 2)
            except (TypeError, ValueError):
                raise _line_error(index, "unit price must be a number")
            if claimed_price != menu_price:
                logger.warning(
                    "Rejected order line with mismatched price",
                    menu_item_id=str(menu_item.id),
                    claimed_price=claimed_price,
                    menu_price=menu_price,
                )
                raise _line_error(index, "unit price does not match the menu price")

        priced.append(
            {
                "menu_item_id": str(menu_item.id),
                "menu_item_name": menu_item.name,
                "quantity": quantity,
                "unit_price": menu_price,
            }
        )
    return priced


@foodcourt.command_handler(part_of=Order)
class CreateOrderHandler:
    @handle(CreateOrder)
    def create_order(self, command):
        requested = parse_lines(command.lines)
        if not requested:
            raise ValidationError({"lines": ["An order needs at least one line"]})

        order = Order.place(
            user_id=command.user_id,
            restaurant_id=command.restaurant_id,
            lines_data=price_lines(command.restaurant_id, requested),
            delivery_address=command.delivery_address,
            phone_number=command.phone_number,
            special_instructions=command.special_instructions,
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            user_id=str(order.user_id),
            total_amount=order.total_amount,
        )
        return str(order.id)
