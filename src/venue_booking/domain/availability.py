"""Availability rules for venue calendar dates."""

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from uuid import UUID

from venue_booking.domain.bookings import Booking, BookingStatus
from venue_booking.domain.errors import InvalidInputError
from venue_booking.domain.venues import Venue

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class DateReason(Enum):
    """Why a venue is unavailable on a date."""

    OWNER_BLOCK = "owner_block"
    BOOKING = "booking"


@dataclass(frozen=True)
class CalendarDay:
    """An unavailable date annotated with its cause."""

    day: str
    reason: DateReason
    booking_id: UUID | None = None


def parse_calendar_date(raw: str | None) -> str:
    """Validate a YYYY-MM-DD calendar date and return it normalized."""
    value = (raw or "").strip()
    if not value:
        raise InvalidInputError("A date is required")
    if not _ISO_DATE.match(value):
        raise InvalidInputError(f"Invalid date {value!r}; expected YYYY-MM-DD")
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError as exc:
        raise InvalidInputError(f"Invalid date {value!r}") from exc


def is_bookable(venue: Venue, day: str) -> bool:
    """Return true when the venue snapshot leaves the date open."""
    return day not in venue.unavailable_dates


def describe_calendar(venue: Venue, bookings: list[Booking]) -> list[CalendarDay]:
    """Annotate each unavailable date with the booking or owner block behind it.

    Dates listed on the venue with no confirmed booking are owner blocks.
    Confirmed bookings whose date was unblocked afterwards are not listed,
    since the venue no longer reports them as unavailable.
    """
    booked = {
        booking.booking_date: booking.id
        for booking in bookings
        if booking.venue_id == venue.id
        and booking.status is BookingStatus.CONFIRMED
    }
    days = []
    for day in sorted(venue.unavailable_dates):
        booking_id = booked.get(day)
        if booking_id is None:
            days.append(CalendarDay(day=day, reason=DateReason.OWNER_BLOCK))
        else:
            days.append(
                CalendarDay(day=day, reason=DateReason.BOOKING, booking_id=booking_id)
            )
    return days
