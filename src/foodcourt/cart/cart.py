"""Cart aggregate — one per user, bound to a single restaurant.

The cart is created lazily on the first item added and is never deleted:
checkout and explicit clearing empty it, and an empty cart can be re-bound
to another restaurant. Each line captures the menu item's price at the time
it was last written, so ``subtotal`` reflects the price then, not now.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from foodcourt.cart.events import CartCleared, CartItemAdded, CartLineRemoved, CartLineUpdated
from foodcourt.domain import foodcourt
from foodcourt.exceptions import CartConflictError


def line_subtotal(unit_price, quantity):
    """Subtotal of a line whose unit price is already rounded to cents."""
    return round(unit_price * quantity, 2)


@foodcourt.entity(part_of="Cart")
class CartLine:
    menu_item_id = Identifier(required=True)
    menu_item_name = String(required=True, max_length=100)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    subtotal = Float(required=True, min_value=0.0)
    note = String(max_length=500)

    def reprice(self, unit_price, quantity):
        self.unit_price = round(unit_price, 2)
        self.quantity = quantity
        self.subtotal = line_subtotal(self.unit_price, quantity)


@foodcourt.aggregate
class Cart:
    user_id = Identifier(required=True)
    restaurant_id = Identifier(required=True)
    lines = HasMany(CartLine)
    total_price = Float(default=0.0)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_must_equal_sum_of_subtotals(self):
        expected = round(sum(line.subtotal for line in self.lines), 2)
        if abs((self.total_price or 0.0) - expected) > 0.005:
            raise ValidationError({"total_price": ["Cart total must equal the sum of line subtotals"]})

    @classmethod
    def create(cls, user_id, restaurant_id):
        now = datetime.now(UTC)
        return cls(
            user_id=user_id,
            restaurant_id=restaurant_id,
            total_price=0.0,
            created_at=now,
            updated_at=now,
        )

    def _recalculate_total(self):
        self.total_price = round(sum(line.subtotal for line in self.lines), 2)

    def find_line(self, line_id) -> CartLine | None:
        return next((line for line in self.lines if str(line.id) == str(line_id)), None)

    def add_item(self, menu_item, quantity, note=None):
        """Add ``quantity`` of a menu item, merging into an existing line for the same item.

        An empty cart follows the item's restaurant; a non-empty cart bound to
        another restaurant refuses the item.
        """
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        if str(menu_item.restaurant_id) != str(self.restaurant_id):
            if self.lines:
                raise CartConflictError(
                    f"Cart {self.id} already holds items from restaurant {self.restaurant_id}; "
                    "clear it before ordering from another restaurant"
                )
            self.restaurant_id = menu_item.restaurant_id

        existing = next((line for line in self.lines if str(line.menu_item_id) == str(menu_item.id)), None)

        with atomic_change(self):
            if existing:
                existing.reprice(menu_item.price, existing.quantity + quantity)
                existing.note = note
                line = existing
            else:
                line = CartLine(
                    menu_item_id=menu_item.id,
                    menu_item_name=menu_item.name,
                    unit_price=round(menu_item.price, 2),
                    quantity=quantity,
                    subtotal=line_subtotal(round(menu_item.price, 2), quantity),
                    note=note,
                )
                self.add_lines(line)
            self._recalculate_total()
            self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                line_id=str(line.id),
                menu_item_id=str(menu_item.id),
                restaurant_id=str(self.restaurant_id),
                quantity=quantity,
                total_price=self.total_price,
            )
        )
        return line

    def update_line(self, line_id, unit_price, quantity, note=None):
        """Set a line's quantity and note, re-pricing it at ``unit_price``."""
        line = self.find_line(line_id)
        if line is None:
            raise ValidationError({"line_id": ["Line not found in cart"]})
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        previous_quantity = line.quantity
        with atomic_change(self):
            line.reprice(unit_price, quantity)
            line.note = note
            self._recalculate_total()
            self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLineUpdated(
                cart_id=str(self.id),
                line_id=str(line.id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
                total_price=self.total_price,
            )
        )
        return line

    def remove_line(self, line_id):
        line = self.find_line(line_id)
        if line is None:
            raise ValidationError({"line_id": ["Line not found in cart"]})

        with atomic_change(self):
            self.remove_lines(line)
            self._recalculate_total()
            self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLineRemoved(
                cart_id=str(self.id),
                line_id=str(line_id),
                total_price=self.total_price,
            )
        )

    def clear(self):
        """Remove every line and reset the total. The cart itself survives."""
        removed = len(self.lines)
        with atomic_change(self):
            for line in list(self.lines):
                self.remove_lines(line)
            self.total_price = 0.0
            self.updated_at = datetime.now(UTC)

        self.raise_(CartCleared(cart_id=str(self.id), lines_removed=removed))
