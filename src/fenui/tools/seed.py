from __future__ import annotations

import os
from decimal import Decimal

from sqlalchemy import inspect

from fenui.domain.common.ids import CountryId
from fenui.domain.menu.entities import CountryData, DishCategory, DishData
from fenui.infrastructure.db.repositories.admin_repo import SqlAlchemyUserRepository
from fenui.infrastructure.db.repositories.country_repo import SqlAlchemyCountryRepository
from fenui.infrastructure.db.repositories.dish_repo import SqlAlchemyDishRepository
from fenui.infrastructure.db.session import get_engine
from fenui.infrastructure.security.passwords import hash_password

REQUIRED_TABLES = {"users", "countries", "dishes", "dish_views"}

COUNTRIES = [
    CountryData(name="Suíça", flag_emoji="🇨🇭", order=1),
    CountryData(name="Alemanha", flag_emoji="🇩🇪", order=2),
    CountryData(name="Japão", flag_emoji="🇯🇵", order=3),
    CountryData(name="Brasil", flag_emoji="🇧🇷", order=4),
]

# (country name, name, description, price, category, featured)
DISHES = [
    ("Suíça", "Torta de Queijo", "Recheio de queijo.", "18.00", DishCategory.SALTY, True),
    ("Suíça", "Torta de Maçã", "Creme de baunilha.", "18.00", DishCategory.SWEET, False),
    ("Alemanha", "Bratwurst", "Salsicha com mostarda.", "25.00", DishCategory.SALTY, True),
    ("Alemanha", "Cerveja de Trigo", "Chope de trigo.", "20.00", DishCategory.BEVERAGE, False),
    ("Japão", "Yakisoba", "Macarrão com legumes.", "32.00", DishCategory.SALTY, True),
    ("Brasil", "Caipirinha", "Cachaça, limão e açúcar.", "22.00", DishCategory.BEVERAGE, False),
]


def _seed_admin(users: SqlAlchemyUserRepository) -> None:
    username = os.getenv("ADMIN_USERNAME", "admin")
    password = os.getenv("ADMIN_PASSWORD")
    if not password:
        print("ADMIN_PASSWORD not set; skipping admin user")
        return

    password_hash = hash_password(password)
    if users.set_password(username, password_hash):
        print(f"admin password updated for {username}")
        return
    users.add(username, password_hash)
    print(f"admin user {username} created")


def _seed_catalog(countries: SqlAlchemyCountryRepository, dishes: SqlAlchemyDishRepository) -> None:
    if countries.list_all():
        print("catalog already populated; skipping demo data")
        return

    country_ids: dict[str, CountryId] = {}
    for data in COUNTRIES:
        country_ids[data.name] = countries.add(data).country_id

    for order, (country_name, name, description, price, category, featured) in enumerate(DISHES):
        dishes.add(
            DishData(
                name=name,
                description=description,
                price=Decimal(price),
                country_id=country_ids[country_name],
                category=category,
                is_featured=featured,
                order=order,
            )
        )
    print(f"seeded {len(COUNTRIES)} countries and {len(DISHES)} dishes")


def main() -> None:
    engine = get_engine(timeout_seconds=2.0)
    inspector = inspect(engine)
    if not REQUIRED_TABLES.issubset(set(inspector.get_table_names())):
        print("no schema yet")
        return

    _seed_admin(SqlAlchemyUserRepository(engine))
    _seed_catalog(SqlAlchemyCountryRepository(engine), SqlAlchemyDishRepository(engine))
    print("seed complete")


if __name__ == "__main__":
    main()
