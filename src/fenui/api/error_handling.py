from __future__ import annotations

import logging
from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from fenui.api.auth import NotAuthenticatedError
from fenui.api.middleware.request_id import get_request_id
from fenui.application.use_cases.admin import InvalidCredentialsError
from fenui.application.use_cases.banners import BannerNotFoundError
from fenui.application.use_cases.bulk_upload import InvalidBulkPayloadError
from fenui.application.use_cases.countries import CountryInUseError, CountryNotFoundError
from fenui.application.use_cases.dishes import DishNotFoundError
from fenui.application.use_cases.eventos import EventoNotFoundError

logger = logging.getLogger(__name__)


def _error_response(
    *,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
            },
            "requestId": get_request_id(),
        },
    )


def _exception_handler(status_code: int, code: str):
    async def handler(_: Request, exc: Exception) -> JSONResponse:
        details = getattr(exc, "details", None)
        return _error_response(
            status_code=status_code,
            code=code,
            message=str(exc),
            details=details if isinstance(details, dict) else None,
        )

    return handler


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    message = str(http_exc.detail) if http_exc.detail else "request failed"
    code = "HTTP_ERROR"
    if http_exc.status_code == 404:
        code = "NOT_FOUND"
    elif http_exc.status_code == 400:
        code = "BAD_REQUEST"
    elif http_exc.status_code == 405:
        code = "METHOD_NOT_ALLOWED"
    return _error_response(
        status_code=http_exc.status_code,
        code=code,
        message=message,
    )


async def _validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    return _error_response(
        status_code=400,
        code="INVALID_REQUEST",
        message="request validation failed",
        details={"errors": jsonable_encoder(validation_exc.errors())},
    )


async def _database_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "database_error",
        extra={"method": request.method, "path": request.url.path},
        exc_info=exc,
    )
    return _error_response(
        status_code=500,
        code="INTERNAL_ERROR",
        message="internal server error",
    )


def register_exception_handlers(app: FastAPI) -> None:
    mappings: list[tuple[type[Exception], int, str]] = [
        (CountryNotFoundError, 404, "COUNTRY_NOT_FOUND"),
        (DishNotFoundError, 404, "DISH_NOT_FOUND"),
        (BannerNotFoundError, 404, "BANNER_NOT_FOUND"),
        (EventoNotFoundError, 404, "EVENTO_NOT_FOUND"),
        (CountryInUseError, 409, "COUNTRY_IN_USE"),
        (InvalidBulkPayloadError, 400, "INVALID_BULK_PAYLOAD"),
        (InvalidCredentialsError, 401, "INVALID_CREDENTIALS"),
        (NotAuthenticatedError, 401, "NOT_AUTHENTICATED"),
    ]

    for exc_cls, status_code, code in mappings:
        app.add_exception_handler(exc_cls, _exception_handler(status_code, code))

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, _database_exception_handler)
