from __future__ import annotations

from datetime import date, time
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fenui.domain.menu.entities import DishCategory, normalize_labels


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


class CamelBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class CountryRequest(CamelBaseModel):
    name: str = Field(min_length=1, max_length=100)
    flag_emoji: str = Field(min_length=1, max_length=10)
    flag_image: str | None = None
    order: int = 0
    is_active: bool = True


class ReorderCountriesRequest(CamelBaseModel):
    country_ids: list[int]


class DishRequest(CamelBaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    country_id: int = Field(gt=0)
    category: DishCategory
    image: str | None = None
    tags: list[str] = Field(default_factory=list)
    allergens: list[str] = Field(default_factory=list)
    rating: Decimal | None = Field(default=None, ge=0, le=5, max_digits=3, decimal_places=2)
    review_count: int | None = Field(default=None, ge=0)
    is_featured: bool = False
    is_available: bool = True
    order: int = 0

    @field_validator("tags", "allergens", mode="before")
    @classmethod
    def _default_labels(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator("tags", "allergens")
    @classmethod
    def _normalize_labels(cls, value: list[str]) -> list[str]:
        return list(normalize_labels(value))


class BannerRequest(CamelBaseModel):
    title: str = Field(min_length=1)
    image: str = Field(min_length=1)
    link: str | None = None
    order: int = 0
    is_active: bool = True


class EventoRequest(CamelBaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    day: date
    start_time: time
    end_time: time
    location: str = Field(min_length=1)
    image_url: str | None = None
    country_id: int | None = Field(default=None, gt=0)
    is_featured: bool = False
    order: int = 0
    is_active: bool = True


class LoginRequest(CamelBaseModel):
    model_config = ConfigDict(str_strip_whitespace=False)

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
