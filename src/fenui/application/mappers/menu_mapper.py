from __future__ import annotations

from fenui.application.dto.requests import CountryRequest, DishRequest
from fenui.application.dto.responses import (
    CountryResponse,
    CountrySummaryResponse,
    DishGroupResponse,
    DishResponse,
)
from fenui.domain.common.ids import CountryId
from fenui.domain.common.money import format_price, parse_price
from fenui.domain.menu.entities import Country, CountryData, DishData, DishWithCountry
from fenui.domain.menu.grouping import CountrySummary, DishGroup


def to_country_response(country: Country) -> CountryResponse:
    return CountryResponse(
        id=int(country.country_id),
        name=country.name,
        flagEmoji=country.flag_emoji,
        flagImage=country.flag_image,
        order=country.order,
        isActive=country.is_active,
        createdAt=country.created_at,
    )


def to_dish_response(item: DishWithCountry) -> DishResponse:
    dish = item.dish
    return DishResponse(
        id=int(dish.dish_id),
        name=dish.name,
        description=dish.description,
        price=format_price(dish.price),
        image=dish.image,
        countryId=int(dish.country_id),
        category=dish.category.value,
        tags=list(dish.tags),
        allergens=list(dish.allergens),
        rating=format_price(dish.rating) if dish.rating is not None else None,
        reviewCount=dish.review_count,
        isFeatured=dish.is_featured,
        isAvailable=dish.is_available,
        order=dish.order,
        createdAt=dish.created_at,
        updatedAt=dish.updated_at,
        country=to_country_response(item.country),
    )


def to_dish_group_response(group: DishGroup) -> DishGroupResponse:
    return DishGroupResponse(
        key=group.key,
        country=to_country_response(group.country) if group.country is not None else None,
        totalDishes=len(group.dishes),
        dishes=[to_dish_response(item) for item in group.dishes],
    )


def to_country_summary_response(summary: CountrySummary) -> CountrySummaryResponse:
    return CountrySummaryResponse(
        country=to_country_response(summary.country),
        totalDishes=summary.total_dishes,
        featuredDishes=summary.featured_dishes,
        averagePrice=summary.average_price,
    )


def to_country_data(request: CountryRequest) -> CountryData:
    return CountryData(
        name=request.name,
        flag_emoji=request.flag_emoji,
        flag_image=request.flag_image or None,
        order=request.order,
        is_active=request.is_active,
    )


def to_dish_data(request: DishRequest) -> DishData:
    return DishData(
        name=request.name,
        description=request.description,
        price=parse_price(request.price),
        country_id=CountryId(request.country_id),
        category=request.category,
        image=request.image or None,
        tags=tuple(request.tags),
        allergens=tuple(request.allergens),
        rating=request.rating,
        review_count=request.review_count,
        is_featured=request.is_featured,
        is_available=request.is_available,
        order=request.order,
    )
