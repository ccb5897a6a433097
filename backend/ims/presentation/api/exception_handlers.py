"""Translate domain exceptions into the JSON response envelope.

Every component response, success or failure, has the shape
``{success, status_code, message, data}`` and the HTTP status equals
``status_code``.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ims.application.schemas.inventory import ApiEnvelope
from ims.domain.exceptions import (
    ComponentInUseError,
    DuplicateEntityError,
    EntityNotFoundError,
    InventoryPersistenceError,
    InventoryValidationError,
)

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


def envelope_response(status_code: int, message: str, data: Any = None) -> JSONResponse:
    body = ApiEnvelope(
        success=200 <= status_code < 300,
        status_code=status_code,
        message=message,
        data=data,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _describe_errors(errors: list[dict[str, Any]]) -> str:
    """First validation problem as ``field: reason``."""
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(
        str(part) for part in first.get("loc", ()) if part not in ("body", "query")
    )
    reason = str(first.get("msg", "invalid value"))
    reason = reason.removeprefix("Value error, ")
    return f"{location}: {reason}" if location else reason


async def _validation_error(request: Request, exc: InventoryValidationError) -> JSONResponse:
    return envelope_response(status.HTTP_400_BAD_REQUEST, exc.message)


async def _not_found(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    return envelope_response(status.HTTP_404_NOT_FOUND, f"{exc.entity_type} not found")


async def _duplicate(request: Request, exc: DuplicateEntityError) -> JSONResponse:
    return envelope_response(
        status.HTTP_409_CONFLICT,
        f"{exc.entity_type} with this {exc.field.replace('_', ' ')} already exists",
    )


async def _component_in_use(request: Request, exc: ComponentInUseError) -> JSONResponse:
    return envelope_response(status.HTTP_403_FORBIDDEN, exc.message)


async def _persistence_error(request: Request, exc: InventoryPersistenceError) -> JSONResponse:
    return envelope_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


async def _schema_error(request: Request, exc: ValidationError) -> JSONResponse:
    return envelope_response(status.HTTP_400_BAD_REQUEST, _describe_errors(exc.errors()))


async def _request_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return envelope_response(
        status.HTTP_400_BAD_REQUEST, _describe_errors(list(exc.errors()))
    )


async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return envelope_response(status.HTTP_500_INTERNAL_SERVER_ERROR, UNEXPECTED_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InventoryValidationError, _validation_error)
    app.add_exception_handler(EntityNotFoundError, _not_found)
    app.add_exception_handler(DuplicateEntityError, _duplicate)
    app.add_exception_handler(ComponentInUseError, _component_in_use)
    app.add_exception_handler(InventoryPersistenceError, _persistence_error)
    app.add_exception_handler(ValidationError, _schema_error)
    app.add_exception_handler(RequestValidationError, _request_error)
    app.add_exception_handler(Exception, _unexpected_error)
