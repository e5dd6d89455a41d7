"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from venue_booking.api.bookings import router as bookings_router
from venue_booking.api.dependencies import domain_error_handler
from venue_booking.api.live import router as live_router
from venue_booking.api.venues import router as venues_router
from venue_booking.app_logging import configure_logging
from venue_booking.containers import AppContainer
from venue_booking.domain.errors import DomainError, StoreUnavailableError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await app.state.container.venue_service.ping()
        except StoreUnavailableError:
            logger.exception("Store unavailable at startup; rejecting requests")
            app.state.store_available = False
        try:
            await app.state.container.start_resources()
        except Exception:
            logger.exception("Failed to start realtime updates")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.state.store_available = True

    app.add_exception_handler(DomainError, domain_error_handler)
    app.include_router(venues_router)
    app.include_router(bookings_router)
    app.include_router(live_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
