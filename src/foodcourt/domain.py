"""FoodCourt bounded context — restaurant menus, carts, and orders.

Customers fill a per-restaurant cart from the menu catalogue and check it
out into an order, which then moves through a fixed status lifecycle.
Confirmation emails are sent from event handlers, after the status change
has been committed.
"""

import structlog
from protean.domain import Domain

foodcourt = Domain(name="foodcourt")

logger = structlog.get_logger(__name__)
