"""Tests for the Cart aggregate: lines, pricing, and restaurant binding."""

import pytest
from foodcourt.cart.cart import Cart
from foodcourt.cart.events import CartCleared, CartItemAdded, CartLineRemoved, CartLineUpdated
from foodcourt.exceptions import CartConflictError
from foodcourt.menu.menu_item import MenuItem
from protean.exceptions import InvalidOperationError, ValidationError


def _item(name="Beef Pho", price=9.50, restaurant_id="rest-001"):
    return MenuItem.create(restaurant_id, name, price)


def _cart(restaurant_id="rest-001"):
    return Cart.create(user_id="user-001", restaurant_id=restaurant_id)


class TestCreateCart:
    def test_new_cart_is_empty(self):
        cart = _cart()
        assert cart.lines == []
        assert cart.total_price == 0.0
        assert cart.created_at is not None
        assert cart.updated_at == cart.created_at


class TestAddItem:
    def test_add_item_appends_line(self):
        cart = _cart()
        line = cart.add_item(_item(), 2, note="Extra basil")
        assert len(cart.lines) == 1
        assert line.menu_item_name == "Beef Pho"
        assert line.unit_price == 9.50
        assert line.quantity == 2
        assert line.subtotal == 19.0
        assert line.note == "Extra basil"
        assert cart.total_price == 19.0

    def test_same_item_merges_into_existing_line(self):
        cart = _cart()
        pho = _item()
        cart.add_item(pho, 1, note="First")
        cart.add_item(pho, 2, note="Second")
        assert len(cart.lines) == 1
        assert cart.lines[0].quantity == 3
        assert cart.lines[0].note == "Second"
        assert cart.total_price == 28.5

    def test_merge_reprices_at_current_menu_price(self):
        cart = _cart()
        pho = _item(price=9.50)
        cart.add_item(pho, 1)
        pho.price = 10.0
        cart.add_item(pho, 1)
        assert cart.lines[0].unit_price == 10.0
        assert cart.lines[0].subtotal == 20.0
        assert cart.total_price == 20.0

    def test_total_is_sum_of_subtotals(self):
        cart = _cart()
        cart.add_item(_item("Beef Pho", 9.50), 2)
        cart.add_item(_item("Spring Rolls", 4.25), 3)
        assert cart.total_price == pytest.approx(sum(line.subtotal for line in cart.lines))
        assert cart.total_price == 31.75

    def test_zero_quantity_rejected(self):
        cart = _cart()
        with pytest.raises(ValidationError) as exc:
            cart.add_item(_item(), 0)
        assert "quantity" in exc.value.messages

    def test_add_raises_event(self):
        cart = _cart()
        cart.add_item(_item(), 2)
        events = [e for e in cart._events if isinstance(e, CartItemAdded)]
        assert len(events) == 1
        assert events[0].quantity == 2
        assert events[0].total_price == 19.0

    def test_subtotal_uses_rounded_unit_price(self):
        cart = _cart()
        item = MenuItem(restaurant_id="rest-001", name="Bun Cha", price=3.335)
        line = cart.add_item(item, 3)
        assert line.unit_price == 3.33
        assert line.subtotal == 9.99
        assert cart.total_price == 9.99


class TestRestaurantBinding:
    def test_item_from_other_restaurant_conflicts_with_non_empty_cart(self):
        cart = _cart()
        cart.add_item(_item(), 1)
        with pytest.raises(CartConflictError):
            cart.add_item(_item("Banh Mi", 6.0, restaurant_id="rest-002"), 1)
        assert len(cart.lines) == 1
        assert cart.restaurant_id == "rest-001"

    def test_conflict_is_an_invalid_operation(self):
        assert issubclass(CartConflictError, InvalidOperationError)

    def test_empty_cart_rebinds_to_new_restaurant(self):
        cart = _cart()
        cart.add_item(_item(), 1)
        cart.clear()
        cart.add_item(_item("Banh Mi", 6.0, restaurant_id="rest-002"), 1)
        assert cart.restaurant_id == "rest-002"
        assert cart.total_price == 6.0


class TestUpdateLine:
    def test_update_line_reprices(self):
        cart = _cart()
        line = cart.add_item(_item(), 1)
        cart.update_line(line.id, 9.50, 4, note="Less salt")
        assert cart.lines[0].quantity == 4
        assert cart.lines[0].subtotal == 38.0
        assert cart.lines[0].note == "Less salt"
        assert cart.total_price == 38.0

    def test_update_line_raises_event(self):
        cart = _cart()
        line = cart.add_item(_item(), 1)
        cart._events.clear()
        cart.update_line(line.id, 9.50, 3)
        assert len(cart._events) == 1
        event = cart._events[0]
        assert isinstance(event, CartLineUpdated)
        assert event.previous_quantity == 1
        assert event.new_quantity == 3

    def test_update_unknown_line(self):
        cart = _cart()
        with pytest.raises(ValidationError):
            cart.update_line("missing", 9.50, 1)

    def test_update_to_zero_rejected(self):
        cart = _cart()
        line = cart.add_item(_item(), 1)
        with pytest.raises(ValidationError):
            cart.update_line(line.id, 9.50, 0)
        assert cart.lines[0].quantity == 1


class TestRemoveAndClear:
    def test_remove_line_recomputes_total(self):
        cart = _cart()
        pho = cart.add_item(_item("Beef Pho", 9.50), 1)
        cart.add_item(_item("Spring Rolls", 4.25), 2)
        cart.remove_line(pho.id)
        assert len(cart.lines) == 1
        assert cart.total_price == 8.5
        assert any(isinstance(e, CartLineRemoved) for e in cart._events)

    def test_clear_empties_cart(self):
        cart = _cart()
        cart.add_item(_item("Beef Pho", 9.50), 1)
        cart.add_item(_item("Spring Rolls", 4.25), 2)
        cart.clear()
        assert cart.lines == []
        assert cart.total_price == 0.0
        cleared = [e for e in cart._events if isinstance(e, CartCleared)]
        assert cleared[0].lines_removed == 2


class TestTotalInvariant:
    def test_total_cannot_drift_from_lines(self):
        cart = _cart()
        cart.add_item(_item(), 1)
        with pytest.raises(ValidationError) as exc:
            cart.total_price = 100.0
        assert "total_price" in exc.value.messages
