from __future__ import annotations

import sys
from dataclasses import replace
from decimal import Decimal
from pathlib import Path
from typing import Sequence

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from fenui.application.dto.requests import CountryRequest, DishRequest
from fenui.application.ports.repositories import (
    UnknownCountryReferenceError,
    UnknownDishReferenceError,
)
from fenui.application.use_cases.catalog_cache import CATALOG_VERSION_KEY, CatalogCache
from fenui.application.use_cases.countries import (
    CountryInUseError,
    CountryNotFoundError,
    DeleteCountry,
    ReorderCountries,
    UpdateCountry,
)
from fenui.application.use_cases.dishes import (
    CreateDish,
    DeleteDish,
    DishNotFoundError,
    GetDish,
    ListDishes,
    RecordDishView,
)
from fenui.application.use_cases.storefront import GetCountrySummaries, GetStorefrontMenu
from fenui.domain.common.ids import CountryId, DishId
from fenui.domain.menu.entities import Country, CountryData, Dish, DishData, DishWithCountry
from fenui.domain.menu.filtering import DishFilters, filter_dishes


class FakeCountryRepository:
    def __init__(self, countries: list[Country] | None = None) -> None:
        self.countries = {int(c.country_id): c for c in countries or []}
        self.dish_country_ids: set[int] = set()

    def list_all(self) -> list[Country]:
        return sorted(self.countries.values(), key=lambda c: (c.order, c.name))

    def get(self, country_id: CountryId) -> Country | None:
        return self.countries.get(int(country_id))

    def add(self, data: CountryData) -> Country:
        country = Country(country_id=CountryId(len(self.countries) + 1), **vars(data))
        self.countries[int(country.country_id)] = country
        return country

    def update(self, country_id: CountryId, data: CountryData) -> Country | None:
        if int(country_id) not in self.countries:
            return None
        country = Country(country_id=country_id, **vars(data))
        self.countries[int(country_id)] = country
        return country

    def delete(self, country_id: CountryId) -> bool:
        return self.countries.pop(int(country_id), None) is not None

    def reorder(self, country_ids: Sequence[CountryId]) -> None:
        for position, country_id in enumerate(country_ids):
            country = self.countries.get(int(country_id))
            if country is not None:
                self.countries[int(country_id)] = replace(country, order=position)

    def has_dishes(self, country_id: CountryId) -> bool:
        return int(country_id) in self.dish_country_ids


class FakeDishRepository:
    def __init__(self, countries: FakeCountryRepository) -> None:
        self._countries = countries
        self.dishes: dict[int, Dish] = {}
        self.views: list[tuple[int, str | None]] = []
        self.list_calls = 0

    def _with_country(self, dish: Dish) -> DishWithCountry:
        country = self._countries.get(dish.country_id)
        assert country is not None
        return DishWithCountry(dish=dish, country=country)

    def list_all(self, filters: DishFilters) -> list[DishWithCountry]:
        self.list_calls += 1
        return filter_dishes((self._with_country(d) for d in self.dishes.values()), filters)

    def get(self, dish_id: DishId) -> DishWithCountry | None:
        dish = self.dishes.get(int(dish_id))
        return self._with_country(dish) if dish else None

    def add(self, data: DishData) -> DishWithCountry:
        if self._countries.get(data.country_id) is None:
            raise UnknownCountryReferenceError(f"country {data.country_id} does not exist")
        dish = Dish(dish_id=DishId(len(self.dishes) + 1), **vars(data))
        self.dishes[int(dish.dish_id)] = dish
        self._countries.dish_country_ids.add(int(data.country_id))
        return self._with_country(dish)

    def update(self, dish_id: DishId, data: DishData) -> DishWithCountry | None:
        if int(dish_id) not in self.dishes:
            return None
        dish = Dish(dish_id=dish_id, **vars(data))
        self.dishes[int(dish_id)] = dish
        return self._with_country(dish)

    def delete(self, dish_id: DishId) -> bool:
        self.views = [view for view in self.views if view[0] != int(dish_id)]
        return self.dishes.pop(int(dish_id), None) is not None

    def record_view(self, dish_id: DishId, ip_address: str | None) -> None:
        if int(dish_id) not in self.dishes:
            raise UnknownDishReferenceError(f"dish {dish_id} does not exist")
        self.views.append((int(dish_id), ip_address))


class FakeCacheStore:
    def __init__(self) -> None:
        self.values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self.values[key] = value

    def incr(self, key: str) -> int:
        value = int(self.values.get(key, "0")) + 1
        self.values[key] = str(value)
        return value


class BrokenCacheStore:
    def get(self, key: str) -> str | None:
        raise ConnectionError("cache down")

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        raise ConnectionError("cache down")

    def incr(self, key: str) -> int:
        raise ConnectionError("cache down")


def _catalog() -> tuple[FakeCountryRepository, FakeDishRepository]:
    countries = FakeCountryRepository(
        [
            Country(country_id=CountryId(1), name="Brasil", flag_emoji="🇧🇷", order=1),
            Country(country_id=CountryId(2), name="Japão", flag_emoji="🇯🇵", order=2),
        ]
    )
    return countries, FakeDishRepository(countries)


def _dish_request(**overrides: object) -> DishRequest:
    payload: dict[str, object] = {
        "name": "Coxinha",
        "description": "Frango desfiado",
        "price": "12.50",
        "countryId": 1,
        "category": "salgados",
    }
    payload.update(overrides)
    return DishRequest.model_validate(payload)


def test_create_dish_rejects_unknown_country() -> None:
    _, dishes = _catalog()
    use_case = CreateDish(dish_repository=dishes, cache=CatalogCache(FakeCacheStore()))

    with pytest.raises(CountryNotFoundError):
        use_case.execute(_dish_request(countryId=99))


def test_create_dish_bumps_catalog_version() -> None:
    _, dishes = _catalog()
    store = FakeCacheStore()

    response = CreateDish(dish_repository=dishes, cache=CatalogCache(store)).execute(
        _dish_request(tags=[" frito ", "frito"])
    )

    assert response.price == "12.50"
    assert response.tags == ["frito"]
    assert response.country.name == "Brasil"
    assert store.values[CATALOG_VERSION_KEY] == "1"


def test_list_dishes_serves_warm_cache_without_repository() -> None:
    _, dishes = _catalog()
    store = FakeCacheStore()
    cache = CatalogCache(store)
    CreateDish(dish_repository=dishes, cache=cache).execute(_dish_request())

    first = ListDishes(dish_repository=dishes, cache=cache).execute(DishFilters())
    second = ListDishes(dish_repository=dishes, cache=cache).execute(DishFilters())

    assert dishes.list_calls == 1
    assert second == first


def test_mutation_makes_next_list_read_through() -> None:
    _, dishes = _catalog()
    cache = CatalogCache(FakeCacheStore())
    create = CreateDish(dish_repository=dishes, cache=cache)
    list_dishes = ListDishes(dish_repository=dishes, cache=cache)

    create.execute(_dish_request(name="Coxinha"))
    assert len(list_dishes.execute(DishFilters())) == 1
    create.execute(_dish_request(name="Pastel"))

    assert len(list_dishes.execute(DishFilters())) == 2
    assert dishes.list_calls == 2


def test_broken_cache_falls_back_to_repository() -> None:
    _, dishes = _catalog()
    cache = CatalogCache(BrokenCacheStore())
    CreateDish(dish_repository=dishes, cache=cache).execute(_dish_request())

    result = ListDishes(dish_repository=dishes, cache=cache).execute(DishFilters())

    assert [dish.name for dish in result] == ["Coxinha"]


def test_missing_cache_store_always_reads_repository() -> None:
    _, dishes = _catalog()
    cache = CatalogCache(None)
    CreateDish(dish_repository=dishes, cache=cache).execute(_dish_request())
    list_dishes = ListDishes(dish_repository=dishes, cache=cache)

    list_dishes.execute(DishFilters())
    list_dishes.execute(DishFilters())

    assert dishes.list_calls == 2


def test_get_and_delete_unknown_dish_raise_not_found() -> None:
    _, dishes = _catalog()

    with pytest.raises(DishNotFoundError):
        GetDish(dish_repository=dishes).execute(DishId(5))
    with pytest.raises(DishNotFoundError):
        DeleteDish(dish_repository=dishes, cache=CatalogCache(None)).execute(DishId(5))


def test_record_view_on_unknown_dish_raises_not_found() -> None:
    _, dishes = _catalog()

    with pytest.raises(DishNotFoundError):
        RecordDishView(dish_repository=dishes).execute(DishId(5), "127.0.0.1")


def test_delete_country_with_dishes_is_refused() -> None:
    countries, dishes = _catalog()
    CreateDish(dish_repository=dishes, cache=CatalogCache(None)).execute(_dish_request())

    with pytest.raises(CountryInUseError):
        DeleteCountry(country_repository=countries, cache=CatalogCache(None)).execute(
            CountryId(1)
        )
    DeleteCountry(country_repository=countries, cache=CatalogCache(None)).execute(CountryId(2))
    assert countries.get(CountryId(2)) is None


def test_update_unknown_country_raises_not_found() -> None:
    countries, _ = _catalog()
    request = CountryRequest.model_validate({"name": "Chile", "flagEmoji": "🇨🇱"})

    with pytest.raises(CountryNotFoundError):
        UpdateCountry(country_repository=countries, cache=CatalogCache(None)).execute(
            CountryId(42), request
        )


def test_reorder_assigns_positions_and_ignores_unknown_ids() -> None:
    countries, _ = _catalog()
    countries.add(CountryData(name="Chile", flag_emoji="🇨🇱", order=0))

    ReorderCountries(country_repository=countries, cache=CatalogCache(None)).execute([3, 99, 1, 2])

    assert [c.name for c in countries.list_all()] == ["Chile", "Brasil", "Japão"]
    assert [c.order for c in countries.list_all()] == [0, 2, 3]


def test_storefront_menu_splits_beverages_and_highlights_featured() -> None:
    _, dishes = _catalog()
    create = CreateDish(dish_repository=dishes, cache=CatalogCache(None))
    create.execute(_dish_request(name="Coxinha", isFeatured=True))
    create.execute(_dish_request(name="Guaraná", category="bebidas"))
    create.execute(_dish_request(name="Sushi", countryId=2, isFeatured=True))

    menu = GetStorefrontMenu(dish_repository=dishes, cache=CatalogCache(None)).execute(
        DishFilters()
    )

    assert [dish.name for dish in menu.featured] == ["Coxinha", "Sushi"]
    assert [group.key for group in menu.groups] == ["Brasil", "Japão", "Bebidas"]
    assert menu.groups[-1].country is None
    assert menu.groups[-1].totalDishes == 1


def test_country_summaries_sorted_by_dish_count() -> None:
    countries, dishes = _catalog()
    create = CreateDish(dish_repository=dishes, cache=CatalogCache(None))
    create.execute(_dish_request(name="Sushi", countryId=2, price="30.00"))
    create.execute(_dish_request(name="Lámen", countryId=2, price="40.00"))

    summaries = GetCountrySummaries(
        country_repository=countries,
        dish_repository=dishes,
    ).execute()

    assert [summary.country.name for summary in summaries] == ["Japão", "Brasil"]
    assert summaries[0].averagePrice == 35.0
    assert summaries[1].totalDishes == 0
    assert summaries[1].averagePrice == 0.0
