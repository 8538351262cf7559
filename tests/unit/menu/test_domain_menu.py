from __future__ import annotations

import sys
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from fenui.domain.common.ids import CountryId
from fenui.domain.common.money import format_price, parse_price
from fenui.domain.menu.entities import CountryData, DishCategory, DishData, normalize_labels


def test_parse_price_rounds_to_cents() -> None:
    assert parse_price("18") == Decimal("18.00")
    assert parse_price(2.345) == Decimal("2.35")
    assert format_price(parse_price("7.5")) == "7.50"


@pytest.mark.parametrize("value", ["abc", "-1", "NaN", "Infinity"])
def test_parse_price_rejects_invalid_values(value: str) -> None:
    with pytest.raises(ValueError):
        parse_price(value)


def test_normalize_labels_trims_and_deduplicates() -> None:
    assert normalize_labels([" vegano ", "vegano", "", "  ", "picante"]) == ("vegano", "picante")
    assert normalize_labels(None) == ()


def test_category_wire_values() -> None:
    assert DishCategory("salgados") is DishCategory.SALTY
    assert DishCategory("doces") is DishCategory.SWEET
    assert DishCategory("bebidas") is DishCategory.BEVERAGE
    with pytest.raises(ValueError):
        DishCategory("pratos")


def test_country_name_must_be_non_empty() -> None:
    with pytest.raises(ValueError):
        CountryData(name="  ", flag_emoji="🇧🇷")


def test_dish_price_must_not_be_negative() -> None:
    with pytest.raises(ValueError):
        DishData(
            name="Pastel",
            description="Frito",
            price=Decimal("-0.01"),
            country_id=CountryId(1),
            category=DishCategory.SALTY,
        )
