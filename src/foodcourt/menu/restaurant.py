"""Restaurant aggregate — the owner of a menu."""

from datetime import UTC, datetime

from protean.fields import DateTime, String, Text

from foodcourt.domain import foodcourt


@foodcourt.aggregate
class Restaurant:
    name = String(required=True, max_length=100)
    description = Text()
    address = String(required=True, max_length=200)
    phone_number = String(required=True, max_length=20)
    created_at = DateTime()

    @classmethod
    def create(cls, name, address, phone_number, description=None):
        return cls(
            name=name,
            address=address,
            phone_number=phone_number,
            description=description,
            created_at=datetime.now(UTC),
        )
