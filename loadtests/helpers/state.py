"""Per-user state tracking for Locust load test scenarios."""

from dataclasses import dataclass, field


@dataclass
class CheckoutState:
    """Tracks ids across one cart → checkout → confirm journey."""

    user_id: str | None = None
    restaurant_id: str | None = None
    menu_item_ids: list[str] = field(default_factory=list)
    cart_id: str | None = None
    line_ids: list[str] = field(default_factory=list)
    order_id: str | None = None
