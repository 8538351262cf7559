from __future__ import annotations

from fenui.application.dto.requests import BannerRequest, EventoRequest
from fenui.application.dto.responses import BannerResponse, EventoResponse
from fenui.application.mappers.menu_mapper import to_country_response
from fenui.domain.common.ids import CountryId
from fenui.domain.festival.entities import Banner, BannerData, EventoData, EventoWithCountry


def to_banner_response(banner: Banner) -> BannerResponse:
    return BannerResponse(
        id=int(banner.banner_id),
        title=banner.title,
        image=banner.image,
        link=banner.link,
        order=banner.order,
        isActive=banner.is_active,
        createdAt=banner.created_at,
    )


def to_evento_response(item: EventoWithCountry) -> EventoResponse:
    evento = item.evento
    return EventoResponse(
        id=int(evento.evento_id),
        title=evento.title,
        description=evento.description,
        day=evento.day,
        startTime=evento.start_time,
        endTime=evento.end_time,
        location=evento.location,
        imageUrl=evento.image_url,
        countryId=int(evento.country_id) if evento.country_id is not None else None,
        isFeatured=evento.is_featured,
        order=evento.order,
        isActive=evento.is_active,
        createdAt=evento.created_at,
        updatedAt=evento.updated_at,
        country=to_country_response(item.country) if item.country is not None else None,
    )


def to_banner_data(request: BannerRequest) -> BannerData:
    return BannerData(
        title=request.title,
        image=request.image,
        link=request.link or None,
        order=request.order,
        is_active=request.is_active,
    )


def to_evento_data(request: EventoRequest) -> EventoData:
    return EventoData(
        title=request.title,
        description=request.description,
        day=request.day,
        start_time=request.start_time,
        end_time=request.end_time,
        location=request.location,
        image_url=request.image_url or None,
        country_id=CountryId(request.country_id) if request.country_id is not None else None,
        is_featured=request.is_featured,
        order=request.order,
        is_active=request.is_active,
    )
