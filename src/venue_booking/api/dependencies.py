"""Shared request dependencies and error responses."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from venue_booking.domain.errors import (
    DomainError,
    ErrorKind,
    OperationResult,
    StoreUnavailableError,
)

if TYPE_CHECKING:
    from venue_booking.containers import AppContainer

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.DATE_UNAVAILABLE: status.HTTP_409_CONFLICT,
    ErrorKind.ALREADY_BOOKED: status.HTTP_409_CONFLICT,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.STORE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


async def store_ready(app: FastAPI) -> bool:
    """Return whether the store is usable, re-checking after a failed startup."""
    if app.state.store_available:
        return True
    container: AppContainer = app.state.container
    try:
        await container.venue_service.ping()
    except StoreUnavailableError:
        logger.warning("Store still unavailable")
        return False
    app.state.store_available = True
    logger.info("Store became available")
    return True


async def require_store(request: Request) -> None:
    """Reject requests while the store has never been reachable."""
    if not await store_ready(request.app):
        raise StoreUnavailableError()


def error_response(kind: ErrorKind, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=ERROR_STATUS[kind],
        content={"status": "error", "error": kind.value, "message": message},
    )


async def domain_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Render a DomainError raised by a read or write service."""
    if not isinstance(exc, DomainError):
        raise exc
    return error_response(exc.code, exc.message)


def result_response(
    result: OperationResult, success_status: int = status.HTTP_200_OK
) -> JSONResponse:
    """Render a coordinator result."""
    if not result.ok:
        kind = result.error or ErrorKind.STORE_UNAVAILABLE
        return error_response(kind, result.message)
    content: dict[str, object] = {"status": "ok"}
    if result.booking_id is not None:
        content["booking_id"] = str(result.booking_id)
    return JSONResponse(status_code=success_status, content=content)
