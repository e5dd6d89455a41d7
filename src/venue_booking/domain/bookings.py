"""Domain models for bookings."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class BookingStatus(Enum):
    """Booking lifecycle states; only CONFIRMED is produced today."""

    CONFIRMED = "confirmed"
    PENDING = "pending"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Booking:
    """Represents a reservation of one venue for one date."""

    id: UUID
    venue_id: UUID
    user_id: str
    booking_date: str
    status: BookingStatus
    booked_at: datetime
