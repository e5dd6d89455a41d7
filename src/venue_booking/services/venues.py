"""Venue listing and owner-side venue management."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from venue_booking.domain.errors import InvalidInputError, VenueNotFoundError
from venue_booking.domain.venues import Venue, VenueDetails
from venue_booking.services.notifications import (
    ChangeNotificationBus,
    Collection,
    Mutation,
)

logger = logging.getLogger(__name__)


class VenueRepository(Protocol):
    """Persistence interface for venues and their unavailable dates."""

    async def create_venue(self, owner_id: str, details: VenueDetails) -> Venue:
        """Create a venue with no unavailable dates and return it."""

    async def get_venue(self, venue_id: UUID) -> Venue | None:
        """Return a venue by id, if present."""

    async def list_venues(self) -> list[Venue]:
        """Return all venues, newest first."""

    async def list_venues_by_owner(self, owner_id: str) -> list[Venue]:
        """Return the venues owned by a user, newest first."""

    async def update_venue_details(
        self, venue_id: UUID, details: VenueDetails
    ) -> Venue | None:
        """Replace the display fields of a venue and return it, if present."""

    async def add_unavailable_date(self, venue_id: UUID, day: str) -> None:
        """Add a date to the venue's unavailable set; no-op when present."""

    async def remove_unavailable_date(self, venue_id: UUID, day: str) -> None:
        """Remove a date from the venue's unavailable set; no-op when absent."""

    async def ping(self) -> None:
        """Raise StoreUnavailableError when the store cannot be reached."""


def parse_venue_id(raw: str | UUID | None) -> UUID:
    """Parse a venue id, raising InvalidInputError when malformed."""
    if isinstance(raw, UUID):
        return raw
    if raw is not None and not isinstance(raw, str):
        raise InvalidInputError(f"Invalid venue id {raw!r}")
    if not raw or not raw.strip():
        raise InvalidInputError("A venue id is required")
    try:
        return UUID(raw.strip())
    except ValueError as exc:
        raise InvalidInputError(f"Invalid venue id {raw!r}") from exc


def validate_details(details: VenueDetails) -> VenueDetails:
    """Require a name and location and strip surrounding whitespace."""
    cleaned = VenueDetails(
        name=details.name.strip(),
        location=details.location.strip(),
        description=details.description.strip(),
        image_url=details.image_url.strip(),
    )
    missing = [
        label
        for label, value in (("name", cleaned.name), ("location", cleaned.location))
        if not value
    ]
    if missing:
        raise InvalidInputError(f"Missing required venue fields: {', '.join(missing)}")
    return cleaned


@dataclass
class VenueService:
    """Application service for venue listings."""

    repository: VenueRepository
    bus: ChangeNotificationBus

    async def create_venue(self, owner_id: str, details: VenueDetails) -> Venue:
        """Create a venue owned by the user and notify live queries."""
        if not owner_id or not owner_id.strip():
            raise InvalidInputError("An owner id is required")
        venue = await self.repository.create_venue(
            owner_id.strip(), validate_details(details)
        )
        logger.info(
            "Venue created", extra={"venue_id": str(venue.id), "owner_id": owner_id}
        )
        await self.bus.publish(Mutation(Collection.VENUES, venue.owner_id))
        return venue

    async def update_details(
        self, venue_id: str | UUID, details: VenueDetails
    ) -> Venue:
        """Replace a venue's display fields."""
        parsed_id = parse_venue_id(venue_id)
        venue = await self.repository.update_venue_details(
            parsed_id, validate_details(details)
        )
        if venue is None:
            raise VenueNotFoundError(parsed_id)
        await self.bus.publish(Mutation(Collection.VENUES, venue.owner_id))
        return venue

    async def get_venue(self, venue_id: str | UUID) -> Venue:
        """Return a venue or raise VenueNotFoundError."""
        parsed_id = parse_venue_id(venue_id)
        venue = await self.repository.get_venue(parsed_id)
        if venue is None:
            raise VenueNotFoundError(parsed_id)
        return venue

    async def list_all(self) -> list[Venue]:
        return await self.repository.list_venues()

    async def list_by_owner(self, owner_id: str) -> list[Venue]:
        return await self.repository.list_venues_by_owner(owner_id)

    async def ping(self) -> None:
        """Raise StoreUnavailableError when the venue store is unreachable."""
        await self.repository.ping()
