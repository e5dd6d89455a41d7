"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import AsyncClient

from venue_booking.adapters.supabase_booking_repository import (
    SupabaseBookingRepository,
)
from venue_booking.adapters.supabase_realtime_bridge import SupabaseRealtimeBridge
from venue_booking.adapters.supabase_venue_repository import SupabaseVenueRepository
from venue_booking.config import Settings
from venue_booking.services.bookings import BookingService
from venue_booking.services.coordinator import BookingCoordinator
from venue_booking.services.notifications import ChangeNotificationBus
from venue_booking.services.venues import VenueService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    bus: ChangeNotificationBus
    venue_service: VenueService
    booking_service: BookingService
    coordinator: BookingCoordinator
    start_resources: Callable[[], Awaitable[None]]
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = AsyncClient(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    venue_repository = SupabaseVenueRepository(supabase_client)
    booking_repository = SupabaseBookingRepository(supabase_client)
    bus = ChangeNotificationBus(
        venue_repository=venue_repository,
        booking_repository=booking_repository,
    )
    venue_service = VenueService(repository=venue_repository, bus=bus)
    booking_service = BookingService(
        repository=booking_repository, venue_service=venue_service
    )
    coordinator = BookingCoordinator(
        venue_repository=venue_repository,
        booking_repository=booking_repository,
        bus=bus,
    )
    realtime_bridge = SupabaseRealtimeBridge(client=supabase_client, bus=bus)

    async def start_resources() -> None:
        if resolved_settings.realtime_enabled:
            await realtime_bridge.start()

    async def close_resources() -> None:
        await realtime_bridge.stop()

    return AppContainer(
        settings=resolved_settings,
        bus=bus,
        venue_service=venue_service,
        booking_service=booking_service,
        coordinator=coordinator,
        start_resources=start_resources,
        close_resources=close_resources,
    )
