"""Order read queries and catalogue lookups."""

import json
import time

import pytest
from foodcourt.menu.catalog import get_menu_item, list_restaurants, menu_for, restaurant_name
from foodcourt.order.cancellation import CancelOrder
from foodcourt.order.creation import CreateOrder
from foodcourt.order.order import Order
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError


def _create(restaurant, item, user_id):
    order_id = current_domain.process(
        CreateOrder(
            user_id=user_id,
            restaurant_id=restaurant.id,
            lines=json.dumps([{"menu_item_id": item.id, "quantity": 1}]),
            delivery_address="12 Market Street",
            phone_number="0901234567",
        ),
        asynchronous=False,
    )
    # Distinct created_at values for ordering assertions
    time.sleep(0.002)
    return order_id


class TestOrderQueries:
    def test_by_user_newest_first(self, restaurant, pho):
        first = _create(restaurant, pho, "user-001")
        second = _create(restaurant, pho, "user-001")
        _create(restaurant, pho, "user-002")

        orders = current_domain.repository_for(Order).by_user("user-001")
        assert [str(o.id) for o in orders] == [second, first]

    def test_by_restaurant(self, restaurant, other_restaurant, pho, banh_mi):
        mine = _create(restaurant, pho, "user-001")
        _create(other_restaurant, banh_mi, "user-001")

        orders = current_domain.repository_for(Order).by_restaurant(restaurant.id)
        assert [str(o.id) for o in orders] == [mine]

    def test_by_status(self, restaurant, pho):
        pending = _create(restaurant, pho, "user-001")
        cancelled = _create(restaurant, pho, "user-001")
        current_domain.process(CancelOrder(order_id=cancelled, reason="Oops"), asynchronous=False)

        repo = current_domain.repository_for(Order)
        assert [str(o.id) for o in repo.by_status("pending")] == [pending]
        assert [str(o.id) for o in repo.by_status("Cancelled")] == [cancelled]

    def test_by_unknown_status(self):
        with pytest.raises(ValidationError):
            current_domain.repository_for(Order).by_status("Shipped")


class TestCatalogue:
    def test_lookups(self, restaurant, pho, rolls):
        assert get_menu_item(pho.id).name == "Beef Pho"
        assert restaurant_name(restaurant.id) == "Pho Corner"
        assert [r.name for r in list_restaurants()] == ["Pho Corner"]
        assert [i.name for i in menu_for(restaurant.id)] == ["Beef Pho", "Spring Rolls"]

    def test_missing_records(self):
        assert restaurant_name("missing") is None
        with pytest.raises(ObjectNotFoundError):
            get_menu_item("missing")
        with pytest.raises(ObjectNotFoundError):
            menu_for("missing")
