"""MenuItem aggregate — a dish offered by one restaurant.

Carts and orders capture the price at the time they reference an item, so
changing ``price`` here never alters lines that already exist.
"""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, Float, Identifier, String, Text

from foodcourt.domain import foodcourt


@foodcourt.aggregate
class MenuItem:
    restaurant_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    description = Text()
    price = Float(required=True, min_value=0.0)
    is_available = Boolean(default=True)
    created_at = DateTime()

    @classmethod
    def create(cls, restaurant_id, name, price, description=None, is_available=True):
        return cls(
            restaurant_id=restaurant_id,
            name=name,
            price=round(price, 2),
            description=description,
            is_available=is_available,
            created_at=datetime.now(UTC),
        )
