"""JSON serialization of domain records for API responses."""

from venue_booking.domain.availability import CalendarDay
from venue_booking.domain.bookings import Booking
from venue_booking.domain.venues import Venue


def serialize_venue(venue: Venue) -> dict[str, object]:
    return {
        "id": str(venue.id),
        "owner_id": venue.owner_id,
        "name": venue.name,
        "location": venue.location,
        "description": venue.description,
        "image_url": venue.image_url,
        "unavailable_dates": sorted(venue.unavailable_dates),
        "created_at": venue.created_at.isoformat(),
    }


def serialize_booking(booking: Booking) -> dict[str, object]:
    return {
        "id": str(booking.id),
        "venue_id": str(booking.venue_id),
        "user_id": booking.user_id,
        "booking_date": booking.booking_date,
        "status": booking.status.value,
        "booked_at": booking.booked_at.isoformat(),
    }


def serialize_calendar_day(day: CalendarDay) -> dict[str, object]:
    return {
        "date": day.day,
        "reason": day.reason.value,
        "booking_id": str(day.booking_id) if day.booking_id else None,
    }
