from __future__ import annotations

from datetime import date

from fenui.application.dto.requests import EventoRequest
from fenui.application.dto.responses import EventoResponse
from fenui.application.mappers.festival_mapper import to_evento_data, to_evento_response
from fenui.application.metrics.catalog_activity import record_catalog_mutation
from fenui.application.ports.repositories import EventoRepository, UnknownCountryReferenceError
from fenui.application.use_cases.countries import CountryNotFoundError
from fenui.domain.common.ids import EventoId


class EventoNotFoundError(Exception):
    pass


class ListEventos:
    """Active festival events, optionally restricted to a single day."""

    def __init__(self, evento_repository: EventoRepository) -> None:
        self._evento_repository = evento_repository

    def execute(self, day: date | None = None) -> list[EventoResponse]:
        items = self._evento_repository.list_all(day, active_only=True)
        return [to_evento_response(item) for item in items]


class GetEvento:
    def __init__(self, evento_repository: EventoRepository) -> None:
        self._evento_repository = evento_repository

    def execute(self, evento_id: EventoId) -> EventoResponse:
        item = self._evento_repository.get(evento_id)
        if item is None:
            raise EventoNotFoundError(f"evento not found for evento_id={evento_id}")
        return to_evento_response(item)


class CreateEvento:
    def __init__(self, evento_repository: EventoRepository) -> None:
        self._evento_repository = evento_repository

    def execute(self, request: EventoRequest) -> EventoResponse:
        try:
            item = self._evento_repository.add(to_evento_data(request))
        except UnknownCountryReferenceError as exc:
            raise CountryNotFoundError(
                f"country not found for country_id={request.country_id}"
            ) from exc
        record_catalog_mutation("evento", "create")
        return to_evento_response(item)


class UpdateEvento:
    def __init__(self, evento_repository: EventoRepository) -> None:
        self._evento_repository = evento_repository

    def execute(self, evento_id: EventoId, request: EventoRequest) -> EventoResponse:
        try:
            item = self._evento_repository.update(evento_id, to_evento_data(request))
        except UnknownCountryReferenceError as exc:
            raise CountryNotFoundError(
                f"country not found for country_id={request.country_id}"
            ) from exc
        if item is None:
            raise EventoNotFoundError(f"evento not found for evento_id={evento_id}")
        record_catalog_mutation("evento", "update")
        return to_evento_response(item)


class DeleteEvento:
    def __init__(self, evento_repository: EventoRepository) -> None:
        self._evento_repository = evento_repository

    def execute(self, evento_id: EventoId) -> None:
        if not self._evento_repository.delete(evento_id):
            raise EventoNotFoundError(f"evento not found for evento_id={evento_id}")
        record_catalog_mutation("evento", "delete")
