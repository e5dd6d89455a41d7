"""Supabase-backed booking repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import AsyncClient

from venue_booking.adapters.supabase_errors import UNIQUE_VIOLATION, execute
from venue_booking.domain.bookings import Booking, BookingStatus
from venue_booking.domain.errors import BookingConflictError, StoreUnavailableError
from venue_booking.services.bookings import BookingRepository

_COLUMNS = "id, venue_id, user_id, booking_date, status, booked_at"


@dataclass
class SupabaseBookingRepository(BookingRepository):
    """Supabase implementation for bookings.

    The bookings table carries a partial unique index on
    (venue_id, booking_date) for confirmed rows, so concurrent inserts for the
    same date cannot both succeed.
    """

    client: AsyncClient

    async def create_booking(
        self,
        venue_id: UUID,
        user_id: str,
        booking_date: str,
        status: BookingStatus,
    ) -> Booking:
        """Insert a booking through the book_venue_date function.

        A confirmed booking marks its date unavailable on the venue in the
        same transaction.
        """
        try:
            response = await execute(
                self.client.rpc(
                    "book_venue_date",
                    {
                        "p_venue_id": str(venue_id),
                        "p_user_id": user_id,
                        "p_day": booking_date,
                        "p_status": status.value,
                    },
                )
            )
        except APIError as exc:
            if exc.code == UNIQUE_VIOLATION:
                raise BookingConflictError(booking_date) from exc
            raise
        if not response.data:
            raise StoreUnavailableError("Failed to create booking")
        return _parse_booking(response.data[0])

    async def list_bookings_by_user(self, user_id: str) -> list[Booking]:
        """Return a user's bookings, newest first."""
        response = await execute(
            self.client.table("bookings")
            .select(_COLUMNS)
            .eq("user_id", user_id)
            .order("booked_at", desc=True)
        )
        return [_parse_booking(row) for row in response.data or []]

    async def find_bookings(self, venue_id: UUID, booking_date: str) -> list[Booking]:
        """Return bookings for a venue on a date."""
        response = await execute(
            self.client.table("bookings")
            .select(_COLUMNS)
            .eq("venue_id", str(venue_id))
            .eq("booking_date", booking_date)
        )
        return [_parse_booking(row) for row in response.data or []]

    async def list_bookings_by_venue(self, venue_id: UUID) -> list[Booking]:
        """Return all bookings for a venue ordered by date."""
        response = await execute(
            self.client.table("bookings")
            .select(_COLUMNS)
            .eq("venue_id", str(venue_id))
            .order("booking_date")
        )
        return [_parse_booking(row) for row in response.data or []]


def _parse_booking(row: dict[str, object]) -> Booking:
    """Parse a bookings row into a domain model."""
    return Booking(
        id=UUID(str(row["id"])),
        venue_id=UUID(str(row["venue_id"])),
        user_id=str(row["user_id"]),
        booking_date=str(row["booking_date"]),
        status=BookingStatus(str(row.get("status") or "confirmed")),
        booked_at=datetime.fromisoformat(str(row["booked_at"])),
    )
