from __future__ import annotations

from datetime import date, datetime, time

from pydantic import BaseModel, Field


class CountryResponse(BaseModel):
    id: int
    name: str
    flagEmoji: str
    flagImage: str | None = None
    order: int
    isActive: bool
    createdAt: datetime


class DishResponse(BaseModel):
    id: int
    name: str
    description: str
    price: str
    image: str | None = None
    countryId: int
    category: str
    tags: list[str] = Field(default_factory=list)
    allergens: list[str] = Field(default_factory=list)
    rating: str | None = None
    reviewCount: int | None = None
    isFeatured: bool
    isAvailable: bool
    order: int
    createdAt: datetime
    updatedAt: datetime
    country: CountryResponse


class DishGroupResponse(BaseModel):
    key: str
    country: CountryResponse | None = None
    totalDishes: int
    dishes: list[DishResponse] = Field(default_factory=list)


class StorefrontMenuResponse(BaseModel):
    featured: list[DishResponse] = Field(default_factory=list)
    groups: list[DishGroupResponse] = Field(default_factory=list)


class CountrySummaryResponse(BaseModel):
    country: CountryResponse
    totalDishes: int
    featuredDishes: int
    averagePrice: float


class BulkUploadErrorResponse(BaseModel):
    prato: str
    erro: str


class BulkUploadResponse(BaseModel):
    message: str
    sucessos: int
    erros: int
    total: int
    detalhesErros: list[BulkUploadErrorResponse] = Field(default_factory=list)


class BannerResponse(BaseModel):
    id: int
    title: str
    image: str
    link: str | None = None
    order: int
    isActive: bool
    createdAt: datetime


class EventoResponse(BaseModel):
    id: int
    title: str
    description: str
    day: date
    startTime: time
    endTime: time
    location: str
    imageUrl: str | None = None
    countryId: int | None = None
    isFeatured: bool
    order: int
    isActive: bool
    createdAt: datetime
    updatedAt: datetime
    country: CountryResponse | None = None


class AdminUserResponse(BaseModel):
    id: int
    username: str


class LoginResponse(BaseModel):
    success: bool
    user: AdminUserResponse


class DashboardStatsResponse(BaseModel):
    totalDishes: int
    totalCountries: int
    totalViews: int


class SuccessResponse(BaseModel):
    success: bool = True
