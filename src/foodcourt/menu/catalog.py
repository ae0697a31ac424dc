"""Read-only catalogue lookups used by the cart and order handlers."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from foodcourt.menu.menu_item import MenuItem
from foodcourt.menu.restaurant import Restaurant


def get_menu_item(menu_item_id) -> MenuItem:
    """Return the menu item or raise ``ObjectNotFoundError``."""
    return current_domain.repository_for(MenuItem).get(menu_item_id)


def get_restaurant(restaurant_id) -> Restaurant:
    """Return the restaurant or raise ``ObjectNotFoundError``."""
    return current_domain.repository_for(Restaurant).get(restaurant_id)


def restaurant_name(restaurant_id) -> str | None:
    """Display name of a restaurant, or None when it no longer exists."""
    try:
        return get_restaurant(restaurant_id).name
    except ObjectNotFoundError:
        return None


def list_restaurants() -> list[Restaurant]:
    repo = current_domain.repository_for(Restaurant)
    return repo._dao.query.order_by("name").all().items


def menu_for(restaurant_id) -> list[MenuItem]:
    """Menu items of a restaurant, sorted by name.

    Raises ``ObjectNotFoundError`` when the restaurant does not exist.
    """
    get_restaurant(restaurant_id)
    repo = current_domain.repository_for(MenuItem)
    return repo._dao.query.filter(restaurant_id=str(restaurant_id)).order_by("name").all().items
