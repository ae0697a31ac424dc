"""Cart reacts to Order events — empties the source cart after checkout.

Runs after the order's unit of work has committed. A failure here leaves
the order placed and the cart still full; it is logged and not retried.
"""

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from foodcourt.cart.cart import Cart
from foodcourt.domain import foodcourt
from foodcourt.order.events import OrderPlaced

logger = structlog.get_logger(__name__)


@foodcourt.event_handler(part_of=Cart, stream_category="foodcourt::order")
class CheckoutCartEventHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        """Clear the cart an order was built from."""
        if not event.source_cart_id:
            return

        try:
            repo = current_domain.repository_for(Cart)
            cart = repo.get(str(event.source_cart_id))
            cart.clear()
            repo.add(cart)
        except Exception as exc:
            logger.error(
                "Failed to clear cart after checkout",
                order_id=str(event.order_id),
                cart_id=str(event.source_cart_id),
                error=str(exc),
            )
            return

        logger.info(
            "Cart cleared after checkout",
            order_id=str(event.order_id),
            cart_id=str(event.source_cart_id),
        )
