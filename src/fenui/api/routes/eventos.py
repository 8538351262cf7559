from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status

from fenui.api.auth import require_admin
from fenui.application.dto.requests import EventoRequest
from fenui.application.dto.responses import EventoResponse
from fenui.application.use_cases.eventos import (
    CreateEvento,
    DeleteEvento,
    GetEvento,
    ListEventos,
    UpdateEvento,
)
from fenui.domain.common.ids import EventoId
from fenui.infrastructure.db.repositories.evento_repo import SqlAlchemyEventoRepository

router = APIRouter(prefix="/api/eventos", tags=["eventos"])


@router.get("", response_model=list[EventoResponse])
def list_eventos(dia: date | None = Query(default=None)) -> list[EventoResponse]:
    return ListEventos(SqlAlchemyEventoRepository()).execute(dia)


@router.get("/{evento_id}", response_model=EventoResponse)
def get_evento(evento_id: int) -> EventoResponse:
    return GetEvento(SqlAlchemyEventoRepository()).execute(EventoId(evento_id))


@router.post(
    "",
    response_model=EventoResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_evento(body: EventoRequest) -> EventoResponse:
    return CreateEvento(SqlAlchemyEventoRepository()).execute(body)


@router.put("/{evento_id}", response_model=EventoResponse, dependencies=[Depends(require_admin)])
def update_evento(evento_id: int, body: EventoRequest) -> EventoResponse:
    return UpdateEvento(SqlAlchemyEventoRepository()).execute(EventoId(evento_id), body)


@router.delete(
    "/{evento_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
def delete_evento(evento_id: int) -> Response:
    DeleteEvento(SqlAlchemyEventoRepository()).execute(EventoId(evento_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
