"""Booking transaction coordinator.

Turns book, block and unblock intents into store writes while keeping the
no-double-booking invariant: at most one confirmed booking per venue and
date. The venue snapshot check and the booking lookup below are advisory;
two callers can pass both before either writes. The booking store's unique
constraint on confirmed (venue_id, booking_date) rows settles that race, and
the loser is reported as a conflict. The same store write marks the booked
date unavailable on the venue, so a confirmed booking never exists without
it.

Every outcome leaves this module as an OperationResult. Nothing raised by
the stores propagates past the coordinator.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from uuid import UUID

from venue_booking.domain.availability import is_bookable, parse_calendar_date
from venue_booking.domain.bookings import BookingStatus
from venue_booking.domain.errors import (
    AlreadyBookedError,
    DateUnavailableError,
    DomainError,
    InvalidInputError,
    OperationResult,
    StoreUnavailableError,
    VenueNotFoundError,
)
from venue_booking.domain.venues import Venue
from venue_booking.services.bookings import BookingRepository
from venue_booking.services.notifications import (
    ChangeNotificationBus,
    Collection,
    Mutation,
)
from venue_booking.services.venues import VenueRepository, parse_venue_id

logger = logging.getLogger(__name__)


@dataclass
class BookingCoordinator:
    """Check-then-commit orchestration for bookings and date blocks."""

    venue_repository: VenueRepository
    booking_repository: BookingRepository
    bus: ChangeNotificationBus

    async def book(
        self, venue_id: str | UUID, user_id: str, booking_date: str
    ) -> OperationResult:
        """Book a venue for a date on behalf of a user."""
        return await self._run(
            "book", lambda: self._book(venue_id, user_id, booking_date)
        )

    async def block_date(self, venue_id: str | UUID, day: str) -> OperationResult:
        """Mark a date unavailable; blocking a blocked date succeeds."""
        return await self._run("block_date", lambda: self._toggle(venue_id, day, True))

    async def unblock_date(self, venue_id: str | UUID, day: str) -> OperationResult:
        """Reopen a date; unblocking an open date succeeds.

        This also reopens dates held by a confirmed booking. The booking
        record stays in place.
        """
        return await self._run(
            "unblock_date", lambda: self._toggle(venue_id, day, False)
        )

    async def _run(
        self, operation: str, action: Callable[[], Awaitable[OperationResult]]
    ) -> OperationResult:
        try:
            return await action()
        except DomainError as exc:
            logger.info(
                "Booking operation rejected",
                extra={"operation": operation, "error": exc.code.value},
            )
            return OperationResult.failure(exc)
        except Exception:
            logger.exception(
                "Booking operation failed", extra={"operation": operation}
            )
            return OperationResult.failure(StoreUnavailableError())

    async def _book(
        self, venue_id: str | UUID, user_id: str, booking_date: str
    ) -> OperationResult:
        parsed_id = parse_venue_id(venue_id)
        day = parse_calendar_date(booking_date)
        if not user_id or not user_id.strip():
            raise InvalidInputError("A user id is required")
        venue = await self._load_venue(parsed_id)

        if not is_bookable(venue, day):
            raise DateUnavailableError(day)

        existing = await self.booking_repository.find_bookings(parsed_id, day)
        if any(booking.status is BookingStatus.CONFIRMED for booking in existing):
            raise AlreadyBookedError(day)

        booking = await self.booking_repository.create_booking(
            venue_id=parsed_id,
            user_id=user_id,
            booking_date=day,
            status=BookingStatus.CONFIRMED,
        )
        logger.info(
            "Booking confirmed",
            extra={"booking_id": str(booking.id), "venue_id": str(parsed_id)},
        )
        await self.bus.publish(Mutation(Collection.VENUES, venue.owner_id))
        await self.bus.publish(Mutation(Collection.BOOKINGS, user_id))
        return OperationResult.success(booking_id=booking.id)

    async def _toggle(
        self, venue_id: str | UUID, day: str, unavailable: bool
    ) -> OperationResult:
        parsed_id = parse_venue_id(venue_id)
        parsed_day = parse_calendar_date(day)
        venue = await self._load_venue(parsed_id)
        if unavailable:
            await self.venue_repository.add_unavailable_date(parsed_id, parsed_day)
        else:
            await self.venue_repository.remove_unavailable_date(parsed_id, parsed_day)
        await self.bus.publish(Mutation(Collection.VENUES, venue.owner_id))
        return OperationResult.success()

    async def _load_venue(self, venue_id: UUID) -> Venue:
        venue = await self.venue_repository.get_venue(venue_id)
        if venue is None:
            raise VenueNotFoundError(venue_id)
        return venue
