import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Tag each test with the marker named after its folder."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def foodcourt_bed():
    from foodcourt.domain import foodcourt

    bed = DomainFixture(foodcourt)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(foodcourt_bed):
    with foodcourt_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def run_around_tests(_ctx):
    """Reset stores and the email channel after every test."""
    yield

    from foodcourt.notifications.channel import reset_channels
    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()
    current_domain.event_store.store._data_reset()
    reset_channels()


# ---------------------------------------------------------------------------
# Catalogue and user fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def restaurant():
    from foodcourt.menu.restaurant import Restaurant
    from protean import current_domain

    restaurant = Restaurant.create(name="Pho Corner", address="12 Market Street", phone_number="0901234567")
    current_domain.repository_for(Restaurant).add(restaurant)
    return restaurant


@pytest.fixture()
def other_restaurant():
    from foodcourt.menu.restaurant import Restaurant
    from protean import current_domain

    restaurant = Restaurant.create(name="Banh Mi Bros", address="3 Dock Road", phone_number="0907654321")
    current_domain.repository_for(Restaurant).add(restaurant)
    return restaurant


def _add_menu_item(restaurant, name, price, is_available=True):
    from foodcourt.menu.menu_item import MenuItem
    from protean import current_domain

    item = MenuItem.create(restaurant.id, name, price, is_available=is_available)
    current_domain.repository_for(MenuItem).add(item)
    return item


@pytest.fixture()
def pho(restaurant):
    return _add_menu_item(restaurant, "Beef Pho", 9.50)


@pytest.fixture()
def rolls(restaurant):
    return _add_menu_item(restaurant, "Spring Rolls", 4.25)


@pytest.fixture()
def sold_out(restaurant):
    return _add_menu_item(restaurant, "Seasonal Special", 12.00, is_available=False)


@pytest.fixture()
def banh_mi(other_restaurant):
    return _add_menu_item(other_restaurant, "Banh Mi", 6.00)


@pytest.fixture()
def customer():
    from foodcourt.account.user import User
    from protean import current_domain

    user = User(email="minh@example.com", full_name="Minh Tran")
    current_domain.repository_for(User).add(user)
    return user


@pytest.fixture()
def email_adapter():
    from foodcourt.notifications.channel import get_channel

    return get_channel("Email")


@pytest.fixture()
def admin():
    from foodcourt.account.user import User, UserRole
    from protean import current_domain

    user = User(email="ops@example.com", full_name="Lan Ops", role=UserRole.ADMIN.value)
    current_domain.repository_for(User).add(user)
    return user
