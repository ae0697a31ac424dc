"""Read-side view of a cart, shaped for API responses and checkout."""

from dataclasses import asdict, dataclass, field

from protean.utils.globals import current_domain

from foodcourt.cart.cart import Cart
from foodcourt.menu.catalog import restaurant_name


@dataclass
class CartSnapshotLine:
    line_id: str
    menu_item_id: str
    menu_item_name: str
    unit_price: float
    quantity: int
    subtotal: float
    note: str | None = None


@dataclass
class CartSnapshot:
    cart_id: str
    user_id: str
    restaurant_id: str
    restaurant_name: str | None
    total_price: float
    lines: list[CartSnapshotLine] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


def snapshot_of(cart: Cart) -> CartSnapshot:
    return CartSnapshot(
        cart_id=str(cart.id),
        user_id=str(cart.user_id),
        restaurant_id=str(cart.restaurant_id),
        restaurant_name=restaurant_name(cart.restaurant_id),
        total_price=round(cart.total_price or 0.0, 2),
        lines=[
            CartSnapshotLine(
                line_id=str(line.id),
                menu_item_id=str(line.menu_item_id),
                menu_item_name=line.menu_item_name,
                unit_price=line.unit_price,
                quantity=line.quantity,
                subtotal=line.subtotal,
                note=line.note,
            )
            for line in cart.lines
        ],
    )


def snapshot_for_user(user_id) -> CartSnapshot | None:
    """Snapshot of the user's cart, or None when the user has no cart."""
    cart = current_domain.repository_for(Cart).for_user(user_id)
    if cart is None:
        return None
    return snapshot_of(cart)


def snapshot_for_cart(cart_id) -> CartSnapshot:
    """Snapshot of a cart by id. Raises ``ObjectNotFoundError`` when absent."""
    return snapshot_of(current_domain.repository_for(Cart).get(cart_id))
