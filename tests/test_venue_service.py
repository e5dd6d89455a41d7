"""Tests for venue and booking read services."""

import asyncio

import pytest

from venue_booking.domain.availability import DateReason
from venue_booking.domain.errors import InvalidInputError, VenueNotFoundError
from venue_booking.domain.venues import VenueDetails
from venue_booking.services.bookings import BookingService
from venue_booking.services.coordinator import BookingCoordinator
from venue_booking.services.notifications import ChangeNotificationBus, Topic
from venue_booking.services.venues import VenueService
from tests.conftest import (
    InMemoryBookingRepository,
    InMemoryVenueRepository,
    SnapshotRecorder,
)


def test_create_venue_trims_fields_and_notifies_owner_feed(
    venue_repository: InMemoryVenueRepository, bus: ChangeNotificationBus
) -> None:
    service = VenueService(repository=venue_repository, bus=bus)
    feed = SnapshotRecorder()

    async def scenario():  # type: ignore[no-untyped-def]
        await bus.subscribe(Topic.venues_by_owner("owner-1"), feed)
        return await service.create_venue(
            "owner-1", VenueDetails(name=" Loft ", location=" Dock 2 ")
        )

    venue = asyncio.run(scenario())

    assert venue.name == "Loft"
    assert venue.location == "Dock 2"
    assert venue.unavailable_dates == frozenset()
    assert feed.latest == [venue]


@pytest.mark.parametrize(
    ("owner_id", "details"),
    [
        ("owner-1", VenueDetails(name="", location="Dock 2")),
        ("owner-1", VenueDetails(name="Loft", location="  ")),
        ("", VenueDetails(name="Loft", location="Dock 2")),
    ],
)
def test_create_venue_requires_fields(
    venue_repository: InMemoryVenueRepository,
    bus: ChangeNotificationBus,
    owner_id: str,
    details: VenueDetails,
) -> None:
    service = VenueService(repository=venue_repository, bus=bus)

    with pytest.raises(InvalidInputError):
        asyncio.run(service.create_venue(owner_id, details))

    assert not venue_repository.venues


def test_update_details_keeps_owner_and_calendar(
    venue_repository: InMemoryVenueRepository, bus: ChangeNotificationBus
) -> None:
    service = VenueService(repository=venue_repository, bus=bus)

    async def scenario():  # type: ignore[no-untyped-def]
        venue = await service.create_venue(
            "owner-1", VenueDetails(name="Loft", location="Dock 2")
        )
        await venue_repository.add_unavailable_date(venue.id, "2025-09-01")
        return await service.update_details(
            str(venue.id),
            VenueDetails(name="Loft 2", location="Dock 3", description="Bigger"),
        )

    updated = asyncio.run(scenario())

    assert updated.name == "Loft 2"
    assert updated.description == "Bigger"
    assert updated.owner_id == "owner-1"
    assert updated.unavailable_dates == {"2025-09-01"}


def test_get_missing_venue_raises_not_found(
    venue_repository: InMemoryVenueRepository, bus: ChangeNotificationBus
) -> None:
    service = VenueService(repository=venue_repository, bus=bus)

    with pytest.raises(VenueNotFoundError):
        asyncio.run(service.get_venue("6f1c1a52-3c47-4a8e-9d2e-2b1f0d7e9a10"))


def test_list_by_owner_filters(
    venue_repository: InMemoryVenueRepository, bus: ChangeNotificationBus
) -> None:
    service = VenueService(repository=venue_repository, bus=bus)

    async def scenario():  # type: ignore[no-untyped-def]
        await service.create_venue("alice", VenueDetails(name="A", location="X"))
        await service.create_venue("bob", VenueDetails(name="B", location="Y"))
        return await service.list_by_owner("alice"), await service.list_all()

    mine, everything = asyncio.run(scenario())

    assert [venue.name for venue in mine] == ["A"]
    assert len(everything) == 2


def test_calendar_and_user_bookings(
    venue_repository: InMemoryVenueRepository,
    booking_repository: InMemoryBookingRepository,
    bus: ChangeNotificationBus,
    coordinator: BookingCoordinator,
) -> None:
    venue_service = VenueService(repository=venue_repository, bus=bus)
    service = BookingService(repository=booking_repository, venue_service=venue_service)

    async def scenario():  # type: ignore[no-untyped-def]
        venue = await venue_service.create_venue(
            "owner-1", VenueDetails(name="Loft", location="Dock 2")
        )
        await coordinator.book(str(venue.id), "u1", "2025-08-15")
        await coordinator.block_date(str(venue.id), "2025-09-01")
        return await service.calendar(str(venue.id)), await service.list_for_user("u1")

    calendar, bookings = asyncio.run(scenario())

    assert [(day.day, day.reason) for day in calendar] == [
        ("2025-08-15", DateReason.BOOKING),
        ("2025-09-01", DateReason.OWNER_BLOCK),
    ]
    assert calendar[0].booking_id == bookings[0].id
    assert [booking.booking_date for booking in bookings] == ["2025-08-15"]
