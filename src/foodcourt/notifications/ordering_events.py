"""Notifications react to Order events — confirmation email to the order owner.

Delivery is best-effort: a missing recipient, a failed send, or an adapter
error is logged and dropped. The order status change has already committed
by the time this handler runs.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from foodcourt.account.user import User
from foodcourt.domain import foodcourt
from foodcourt.menu.catalog import restaurant_name
from foodcourt.notifications.channel import NotificationChannel, get_channel
from foodcourt.notifications.templates import get_template
from foodcourt.order.events import OrderConfirmed
from foodcourt.order.order import Order, OrderStatus

logger = structlog.get_logger(__name__)


def _recipient_email(user_id) -> str | None:
    try:
        user = current_domain.repository_for(User).get(str(user_id))
    except ObjectNotFoundError:
        return None
    return user.email or None


@foodcourt.event_handler(part_of=Order)
class OrderNotificationHandler:
    """Sends the order confirmation email."""

    @handle(OrderConfirmed)
    def on_order_confirmed(self, event: OrderConfirmed) -> None:
        email = _recipient_email(event.user_id)
        if not email:
            logger.warning(
                "No contact email for order owner, skipping confirmation",
                order_id=str(event.order_id),
                user_id=str(event.user_id),
            )
            return

        try:
            restaurant = restaurant_name(current_domain.repository_for(Order).get(str(event.order_id)).restaurant_id)
        except ObjectNotFoundError:
            restaurant = None

        content = get_template("order_confirmation").render(
            {
                "order_id": str(event.order_id),
                "total_amount": event.total_amount,
                "delivery_address": event.delivery_address,
                "status": OrderStatus.CONFIRMED.value,
                "restaurant_name": restaurant,
            }
        )

        try:
            result = get_channel(NotificationChannel.EMAIL.value).send(
                to=email,
                subject=content["subject"],
                body=content["body"],
                html_body=content.get("html_body"),
            )
        except Exception as exc:
            logger.error(
                "Confirmation email raised",
                order_id=str(event.order_id),
                error=str(exc),
            )
            return

        if result.get("status") != "sent":
            logger.error(
                "Confirmation email failed",
                order_id=str(event.order_id),
                error=result.get("error"),
            )
            return

        logger.info(
            "Confirmation email sent",
            order_id=str(event.order_id),
            message_id=result.get("message_id"),
        )
