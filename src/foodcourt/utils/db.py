"""Schema and seed helpers for relational providers."""

import structlog
from protean.domain import Domain
from sqlalchemy import create_engine

logger = structlog.get_logger(__name__)

_RELATIONAL_PROVIDERS = ("sqlite", "postgresql")


def _relational_providers(domain: Domain):
    for _, provider in domain.providers.items():
        if provider.conn_info["provider"] in _RELATIONAL_PROVIDERS:
            yield provider


def setup_db(domain: Domain):
    """Create tables for every aggregate and entity on a relational provider."""
    with domain.domain_context():
        for provider in _relational_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])

            # Touching _dao registers the model with the provider's SQLAlchemy metadata
            for record in [*domain.registry.aggregates.values(), *domain.registry.entities.values()]:
                if record.cls.meta_.provider == provider.name:
                    domain.repository_for(record.cls)._dao  # noqa: B018

            provider._metadata.create_all(engine)
            logger.info("Schema created", provider=provider.name)


def drop_db(domain: Domain):
    with domain.domain_context():
        for provider in _relational_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])
            provider._metadata.drop_all(engine)
            logger.info("Schema dropped", provider=provider.name)


def seed_db(domain: Domain) -> dict:
    """Load a demo restaurant, its menu, a customer and an admin. Returns the created ids."""
    from foodcourt.account.user import User, UserRole
    from foodcourt.menu.menu_item import MenuItem
    from foodcourt.menu.restaurant import Restaurant

    with domain.domain_context():
        restaurant = Restaurant.create(
            name="Pho Corner",
            address="12 Market Street",
            phone_number="0901234567",
            description="Noodle soups and rice plates",
        )
        domain.repository_for(Restaurant).add(restaurant)

        items = [
            MenuItem.create(restaurant.id, "Beef Pho", 9.50, description="Rare beef, rice noodles"),
            MenuItem.create(restaurant.id, "Spring Rolls", 4.25),
            MenuItem.create(restaurant.id, "Iced Coffee", 3.00),
        ]
        for item in items:
            domain.repository_for(MenuItem).add(item)

        user = User(email="customer@example.com", full_name="Demo Customer")
        domain.repository_for(User).add(user)
        admin = User(email="admin@example.com", full_name="Demo Admin", role=UserRole.ADMIN.value)
        domain.repository_for(User).add(admin)

        logger.info("Seed data loaded", restaurant_id=str(restaurant.id), user_id=str(user.id))
        return {
            "restaurant_id": str(restaurant.id),
            "menu_item_ids": [str(item.id) for item in items],
            "user_id": str(user.id),
            "admin_id": str(admin.id),
        }
