"""Order status updates — command and handler.

Only the order's owner may move it forward. Cancellation is not a status
update; see ``foodcourt.order.cancellation``.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from foodcourt.domain import foodcourt
from foodcourt.exceptions import ForbiddenError
from foodcourt.order.order import Order

logger = structlog.get_logger(__name__)


@foodcourt.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    new_status = String(required=True, max_length=20)
    user_id = Identifier(required=True)


@foodcourt.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        if not order.is_owned_by(command.user_id):
            raise ForbiddenError(f"Order {command.order_id} does not belong to user {command.user_id}")

        previous_status = order.status
        order.advance_to(command.new_status)
        repo.add(order)

        logger.info(
            "Order status updated",
            order_id=str(order.id),
            previous_status=previous_status,
            new_status=order.status,
        )
        return order.status
