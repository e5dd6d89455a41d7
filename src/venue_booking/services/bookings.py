"""Booking records and the calendar read model."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from venue_booking.domain.availability import CalendarDay, describe_calendar
from venue_booking.domain.bookings import Booking, BookingStatus
from venue_booking.services.venues import VenueService


class BookingRepository(Protocol):
    """Persistence interface for bookings."""

    async def create_booking(
        self,
        venue_id: UUID,
        user_id: str,
        booking_date: str,
        status: BookingStatus,
    ) -> Booking:
        """Insert a new booking row and return it.

        A confirmed booking also adds its date to the venue's unavailable
        dates; both writes commit together or not at all. Raises
        BookingConflictError when a confirmed booking already exists for the
        venue and date.
        """

    async def list_bookings_by_user(self, user_id: str) -> list[Booking]:
        """Return a user's bookings, newest first."""

    async def find_bookings(self, venue_id: UUID, booking_date: str) -> list[Booking]:
        """Return bookings for a venue on a date."""

    async def list_bookings_by_venue(self, venue_id: UUID) -> list[Booking]:
        """Return all bookings for a venue."""


@dataclass
class BookingService:
    """Read-side service for bookings."""

    repository: BookingRepository
    venue_service: VenueService

    async def list_for_user(self, user_id: str) -> list[Booking]:
        """Return the bookings made by a user."""
        return await self.repository.list_bookings_by_user(user_id)

    async def calendar(self, venue_id: str | UUID) -> list[CalendarDay]:
        """Return the venue's unavailable dates annotated with their cause."""
        venue = await self.venue_service.get_venue(venue_id)
        bookings = await self.repository.list_bookings_by_venue(venue.id)
        return describe_calendar(venue, bookings)
