"""User aggregate — the contact record behind every cart and order.

Registration and credential handling live outside this service; the
aggregate only carries what order notifications need.
"""

from enum import Enum

from protean.fields import String

from foodcourt.domain import foodcourt


class UserRole(Enum):
    CUSTOMER = "Customer"
    ADMIN = "Admin"


@foodcourt.aggregate
class User:
    email = String(required=True, max_length=255)
    full_name = String(max_length=150)
    role = String(choices=UserRole, default=UserRole.CUSTOMER.value)

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value
