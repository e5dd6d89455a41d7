"""Domain error codes and operation results."""

from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class ErrorKind(Enum):
    """Error kinds reported to callers of the booking core."""

    INVALID_INPUT = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"
    DATE_UNAVAILABLE = "DATE_UNAVAILABLE"
    ALREADY_BOOKED = "ALREADY_BOOKED"
    CONFLICT = "CONFLICT"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorKind
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidInputError(DomainError):
    """Raised when a venue id, date or required venue field is malformed."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorKind.INVALID_INPUT, message=message)


class VenueNotFoundError(DomainError):
    """Raised when a referenced venue does not exist."""

    def __init__(self, venue_id: UUID) -> None:
        super().__init__(
            code=ErrorKind.NOT_FOUND, message=f"Venue {venue_id} not found"
        )


class DateUnavailableError(DomainError):
    """Raised when the venue snapshot already marks the date unavailable."""

    def __init__(self, booking_date: str) -> None:
        super().__init__(
            code=ErrorKind.DATE_UNAVAILABLE,
            message=f"{booking_date} is not available for this venue",
        )


class AlreadyBookedError(DomainError):
    """Raised when a confirmed booking already exists for the venue and date."""

    def __init__(self, booking_date: str) -> None:
        super().__init__(
            code=ErrorKind.ALREADY_BOOKED,
            message=f"{booking_date} is already booked for this venue",
        )


class BookingConflictError(DomainError):
    """Raised when the store rejects a second confirmed booking for a date."""

    def __init__(self, booking_date: str) -> None:
        super().__init__(
            code=ErrorKind.CONFLICT,
            message=f"Another booking for {booking_date} was committed first",
        )


class StoreUnavailableError(DomainError):
    """Raised when the underlying store is unreachable or not initialized."""

    def __init__(self, message: str = "Booking store is unavailable") -> None:
        super().__init__(code=ErrorKind.STORE_UNAVAILABLE, message=message)


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a coordinator operation."""

    ok: bool
    booking_id: UUID | None = None
    error: ErrorKind | None = None
    message: str = ""

    @classmethod
    def success(
        cls, booking_id: UUID | None = None, message: str = ""
    ) -> "OperationResult":
        return cls(ok=True, booking_id=booking_id, message=message)

    @classmethod
    def failure(cls, error: DomainError) -> "OperationResult":
        return cls(ok=False, error=error.code, message=error.message)
