from __future__ import annotations

import sys
from decimal import Decimal
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from fenui.domain.common.ids import CountryId, DishId
from fenui.domain.menu.entities import Country, Dish, DishCategory, DishWithCountry
from fenui.domain.menu.grouping import (
    BEVERAGE_GROUP_KEY,
    average_price,
    featured_dishes,
    group_by_country,
    summarize_countries,
)

ALEMANHA = Country(country_id=CountryId(1), name="Alemanha", flag_emoji="🇩🇪", order=2)
SUICA = Country(country_id=CountryId(2), name="Suíça", flag_emoji="🇨🇭", order=1)
ITALIA = Country(country_id=CountryId(3), name="Itália", flag_emoji="🇮🇹", order=2)


def _item(
    dish_id: int,
    country: Country,
    price: str,
    category: DishCategory = DishCategory.SALTY,
    featured: bool = False,
) -> DishWithCountry:
    return DishWithCountry(
        dish=Dish(
            dish_id=DishId(dish_id),
            name=f"Prato {dish_id}",
            description="",
            price=Decimal(price),
            country_id=country.country_id,
            category=category,
            is_featured=featured,
        ),
        country=country,
    )


def test_average_price_of_empty_group_is_zero() -> None:
    assert average_price([]) == 0.0


def test_average_price_is_float_mean() -> None:
    dishes = [_item(1, SUICA, "10.00").dish, _item(2, SUICA, "15.50").dish]
    assert average_price(dishes) == 12.75


def test_groups_follow_display_order_then_name() -> None:
    items = [
        _item(1, ITALIA, "10.00"),
        _item(2, ALEMANHA, "10.00"),
        _item(3, SUICA, "10.00"),
        _item(4, ITALIA, "12.00"),
    ]

    groups = group_by_country(items)

    assert [group.key for group in groups] == ["Suíça", "Alemanha", "Itália"]
    assert [int(item.dish.dish_id) for item in groups[2].dishes] == [1, 4]


def test_split_beverages_moves_drinks_to_trailing_bucket() -> None:
    items = [
        _item(1, SUICA, "10.00"),
        _item(2, SUICA, "8.00", DishCategory.BEVERAGE),
        _item(3, ALEMANHA, "9.00", DishCategory.BEVERAGE),
    ]

    groups = group_by_country(items, split_beverages=True)

    assert [group.key for group in groups] == ["Suíça", BEVERAGE_GROUP_KEY]
    assert groups[-1].country is None
    assert [int(item.dish.dish_id) for item in groups[-1].dishes] == [2, 3]


def test_grouping_does_not_mutate_input() -> None:
    items = [_item(1, ITALIA, "10.00"), _item(2, SUICA, "10.00")]
    snapshot = list(items)

    group_by_country(items, split_beverages=True)

    assert items == snapshot


def test_featured_dishes_respects_limit() -> None:
    items = [_item(index, SUICA, "1.00", featured=index % 2 == 0) for index in range(10)]
    assert [int(item.dish.dish_id) for item in featured_dishes(items)] == [0, 2, 4]


def test_summaries_include_countries_without_dishes() -> None:
    items = [
        _item(1, SUICA, "10.00", featured=True),
        _item(2, SUICA, "20.00"),
    ]

    summaries = summarize_countries([ALEMANHA, SUICA], items)

    by_name = {summary.country.name: summary for summary in summaries}
    assert by_name["Suíça"].total_dishes == 2
    assert by_name["Suíça"].featured_dishes == 1
    assert by_name["Suíça"].average_price == 15.0
    assert by_name["Alemanha"].total_dishes == 0
    assert by_name["Alemanha"].average_price == 0.0
