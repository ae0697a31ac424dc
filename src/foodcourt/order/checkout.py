"""Checkout — turn a cart into a Pending order.

The order keeps the prices captured in the cart. The cart is emptied
afterwards by the OrderPlaced handler in ``foodcourt.cart.checkout_events``,
outside this unit of work.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from foodcourt.cart.snapshot import snapshot_for_cart
from foodcourt.domain import foodcourt
from foodcourt.exceptions import ForbiddenError
from foodcourt.order.order import Order

logger = structlog.get_logger(__name__)


@foodcourt.command(part_of="Order")
class CreateOrderFromCart:
    cart_id = Identifier(required=True)
    user_id = Identifier()  # When given, must own the cart
    delivery_address = String(required=True, max_length=200)
    phone_number = String(required=True, max_length=15)
    special_instructions = String(max_length=500)


@foodcourt.command_handler(part_of=Order)
class CheckoutHandler:
    @handle(CreateOrderFromCart)
    def create_order_from_cart(self, command):
        snapshot = snapshot_for_cart(command.cart_id)
        if command.user_id and str(command.user_id) != snapshot.user_id:
            raise ForbiddenError(f"Cart {command.cart_id} does not belong to user {command.user_id}")
        if not snapshot.lines:
            raise ValidationError({"cart": ["Cannot place an order from an empty cart"]})

        lines_data = [
            {
                "menu_item_id": line.menu_item_id,
                "menu_item_name": line.menu_item_name,
                "quantity": line.quantity,
                "unit_price": round(line.subtotal / line.quantity, 2),
            }
            for line in snapshot.lines
        ]

        order = Order.place(
            user_id=snapshot.user_id,
            restaurant_id=snapshot.restaurant_id,
            lines_data=lines_data,
            delivery_address=command.delivery_address,
            phone_number=command.phone_number,
            special_instructions=command.special_instructions,
            source_cart_id=snapshot.cart_id,
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed from cart",
            order_id=str(order.id),
            cart_id=snapshot.cart_id,
            total_amount=order.total_amount,
        )
        return str(order.id)
