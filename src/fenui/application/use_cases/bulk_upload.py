from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from fenui.application.dto.requests import DishRequest
from fenui.application.dto.responses import BulkUploadErrorResponse, BulkUploadResponse
from fenui.application.metrics.catalog_activity import record_bulk_upload
from fenui.application.use_cases.dishes import CreateDish

logger = logging.getLogger(__name__)

REQUIRED_DISH_FIELDS = ("name", "description", "price", "countryId", "category")


class InvalidBulkPayloadError(Exception):
    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = details or {}


def _is_missing(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _describe_failure(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        return "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
    return str(exc) or exc.__class__.__name__


def _summary_message(successes: int, failures: int) -> str:
    return f"Upload concluído: {successes} prato(s) adicionado(s), {failures} erro(s)"


class BulkUploadDishes:
    """Insert a batch of dishes one record at a time.

    The whole batch is rejected up front when it is not a list or when any
    record lacks a required field. After that each record is validated and
    inserted on its own; failures are tallied and never stop the batch.
    """

    def __init__(self, create_dish: CreateDish) -> None:
        self._create_dish = create_dish

    def _prevalidate(self, payload: Any) -> list[dict[str, Any]]:
        if not isinstance(payload, list):
            raise InvalidBulkPayloadError("payload must be an array of dishes")

        for index, record in enumerate(payload):
            if not isinstance(record, dict):
                raise InvalidBulkPayloadError(
                    f"dish {index + 1} must be an object",
                    details={"index": index},
                )
            missing = [name for name in REQUIRED_DISH_FIELDS if _is_missing(record.get(name))]
            if missing:
                raise InvalidBulkPayloadError(
                    f"dish {index + 1} is missing required fields",
                    details={"index": index, "missingFields": missing},
                )
        return payload

    def execute(self, payload: Any) -> BulkUploadResponse:
        records = self._prevalidate(payload)

        successes = 0
        failures: list[BulkUploadErrorResponse] = []
        for record in records:
            name = str(record.get("name"))
            try:
                self._create_dish.execute(DishRequest.model_validate(record))
            except Exception as exc:
                logger.warning("bulk_dish_failed", extra={"dish_name": name}, exc_info=True)
                failures.append(BulkUploadErrorResponse(prato=name, erro=_describe_failure(exc)))
                continue
            successes += 1

        record_bulk_upload(successes, len(failures))
        logger.info(
            "bulk_upload_complete",
            extra={"successes": successes, "failures": len(failures)},
        )
        return BulkUploadResponse(
            message=_summary_message(successes, len(failures)),
            sucessos=successes,
            erros=len(failures),
            total=successes + len(failures),
            detalhesErros=failures,
        )
