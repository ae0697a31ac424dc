"""Shared BDD fixtures and step definitions for the FoodCourt domain."""

import json

import pytest
from foodcourt.account.user import User
from foodcourt.cart.items import AddItem
from foodcourt.cart.snapshot import snapshot_for_cart, snapshot_for_user
from foodcourt.menu.menu_item import MenuItem
from foodcourt.menu.restaurant import Restaurant
from foodcourt.notifications.channel import get_channel
from foodcourt.order.creation import CreateOrder
from foodcourt.order.order import Order
from foodcourt.order.status import UpdateOrderStatus
from protean import current_domain
from pytest_bdd import given, parsers, then, when


# ---------------------------------------------------------------------------
# Scenario state
# ---------------------------------------------------------------------------
@pytest.fixture()
def world():
    """Mutable scenario state: restaurants and dishes by name, ids, captured errors."""
    return {"restaurants": {}, "dishes": {}, "user_id": "user-bdd", "order_id": None, "error": None}


def _add_to_cart(world, dish_name, quantity):
    dish = world["dishes"][dish_name]
    return current_domain.process(
        AddItem(user_id=world["user_id"], restaurant_id=dish.restaurant_id, menu_item_id=dish.id, quantity=quantity),
        asynchronous=False,
    )


def _set_status(world, status, user_id=None):
    current_domain.process(
        UpdateOrderStatus(order_id=world["order_id"], new_status=status, user_id=user_id or world["user_id"]),
        asynchronous=False,
    )


def _order(world):
    return current_domain.repository_for(Order).get(world["order_id"])


# ---------------------------------------------------------------------------
# Given
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the restaurant "{restaurant_name}" serves "{dish}" at {price:f}'))
def _(world, restaurant_name, dish, price):
    restaurant = world["restaurants"].get(restaurant_name)
    if restaurant is None:
        restaurant = Restaurant.create(name=restaurant_name, address="1 Test Street", phone_number="0900000000")
        current_domain.repository_for(Restaurant).add(restaurant)
        world["restaurants"][restaurant_name] = restaurant

    item = MenuItem.create(restaurant.id, dish, price)
    current_domain.repository_for(MenuItem).add(item)
    world["dishes"][dish] = item


@given(parsers.cfparse('a customer with email "{email}"'))
def _(world, email):
    user = User(email=email)
    current_domain.repository_for(User).add(user)
    world["user_id"] = str(user.id)


@given(parsers.cfparse('the customer adds {quantity:d} "{dish}" to the cart'))
@when(parsers.cfparse('the customer adds {quantity:d} "{dish}" to the cart'))
def _(world, quantity, dish):
    _add_to_cart(world, dish, quantity)


@given(parsers.cfparse('the price of "{dish}" changes to {price:f}'))
def _(world, dish, price):
    repo = current_domain.repository_for(MenuItem)
    item = repo.get(world["dishes"][dish].id)
    item.price = price
    repo.add(item)


@given(parsers.cfparse('the customer has placed an order for {quantity:d} "{dish}"'))
def _(world, quantity, dish):
    item = world["dishes"][dish]
    world["order_id"] = current_domain.process(
        CreateOrder(
            user_id=world["user_id"],
            restaurant_id=item.restaurant_id,
            lines=json.dumps([{"menu_item_id": str(item.id), "quantity": quantity}]),
            delivery_address="12 Market Street",
            phone_number="0901234567",
        ),
        asynchronous=False,
    )


@given("the order has been completed")
def _(world):
    for status in ("Confirmed", "Preparing", "Completed"):
        _set_status(world, status)


@given("the email channel is failing")
def _():
    get_channel("Email").configure(should_succeed=False, failure_reason="SMTP down")


# ---------------------------------------------------------------------------
# When
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the customer tries to add {quantity:d} "{dish}" to the cart'))
def _(world, quantity, dish):
    try:
        _add_to_cart(world, dish, quantity)
    except Exception as exc:
        world["error"] = exc


@when("the customer checks out the cart")
def _(world):
    from foodcourt.order.checkout import CreateOrderFromCart

    snapshot = snapshot_for_user(world["user_id"])
    world["cart_id"] = snapshot.cart_id
    world["order_id"] = current_domain.process(
        CreateOrderFromCart(
            cart_id=snapshot.cart_id,
            user_id=world["user_id"],
            delivery_address="12 Market Street",
            phone_number="0901234567",
        ),
        asynchronous=False,
    )


@when(parsers.cfparse('the customer sets the order status to "{status}"'))
def _(world, status):
    _set_status(world, status)


@when(parsers.cfparse('the customer tries to set the order status to "{status}"'))
def _(world, status):
    try:
        _set_status(world, status)
    except Exception as exc:
        world["error"] = exc


@when(parsers.cfparse('another user tries to set the order status to "{status}"'))
def _(world, status):
    try:
        _set_status(world, status, user_id="intruder")
    except Exception as exc:
        world["error"] = exc


@when(parsers.cfparse('the order is cancelled with reason "{reason}"'))
def _(world, reason):
    from foodcourt.order.cancellation import CancelOrder

    try:
        current_domain.process(CancelOrder(order_id=world["order_id"], reason=reason), asynchronous=False)
    except Exception as exc:
        world["error"] = exc


# ---------------------------------------------------------------------------
# Then
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart total is {total:f}"))
def _(world, total):
    assert snapshot_for_user(world["user_id"]).total_price == pytest.approx(total)


@then(parsers.cfparse("the cart has {count:d} lines"))
def _(world, count):
    assert len(snapshot_for_user(world["user_id"]).lines) == count


@then("the cart is rejected with a conflict")
def _(world):
    from foodcourt.exceptions import CartConflictError

    assert isinstance(world["error"], CartConflictError)


@then("the cart is empty")
def _(world):
    snapshot = snapshot_for_cart(world["cart_id"])
    assert snapshot.lines == []
    assert snapshot.total_price == 0.0


@then(parsers.cfparse("an order is placed with total {total:f}"))
def _(world, total):
    assert _order(world).total_amount == pytest.approx(total)


@then(parsers.cfparse('the order is "{status}"'))
def _(world, status):
    assert _order(world).status == status


@then(parsers.cfparse('the cancellation reason is "{reason}"'))
def _(world, reason):
    assert _order(world).cancellation_reason == reason


@then("the status change is rejected as an invalid transition")
def _(world):
    from foodcourt.exceptions import InvalidTransitionError

    assert isinstance(world["error"], InvalidTransitionError)


@then("the status change is rejected as forbidden")
def _(world):
    from foodcourt.exceptions import ForbiddenError

    assert isinstance(world["error"], ForbiddenError)


@then("the cancellation is rejected")
def _(world):
    from protean.exceptions import InvalidOperationError

    assert isinstance(world["error"], InvalidOperationError)


@then(parsers.cfparse('a confirmation email is sent to "{email}"'))
def _(email):
    sent = get_channel("Email").sent_emails
    assert [message["to"] for message in sent] == [email]
    assert sent[0]["subject"] == "Order Confirmation"


@then("no email is sent")
def _():
    assert get_channel("Email").sent_emails == []
