"""Supabase-backed venue repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import AsyncClient

from venue_booking.adapters.supabase_errors import execute
from venue_booking.domain.errors import StoreUnavailableError
from venue_booking.domain.venues import Venue, VenueDetails
from venue_booking.services.venues import VenueRepository

_COLUMNS = (
    "id, owner_id, name, location, description, image_url, "
    "unavailable_dates, created_at"
)


@dataclass
class SupabaseVenueRepository(VenueRepository):
    """Supabase implementation for venue persistence."""

    client: AsyncClient

    async def create_venue(self, owner_id: str, details: VenueDetails) -> Venue:
        """Insert a venue row and return it."""
        response = await execute(
            self.client.table("venues").insert(
                {
                    "owner_id": owner_id,
                    "name": details.name,
                    "location": details.location,
                    "description": details.description,
                    "image_url": details.image_url,
                    "unavailable_dates": [],
                }
            )
        )
        if not response.data:
            raise StoreUnavailableError("Failed to create venue")
        return _parse_venue(response.data[0])

    async def get_venue(self, venue_id: UUID) -> Venue | None:
        """Return a venue by id, if present."""
        response = await execute(
            self.client.table("venues")
            .select(_COLUMNS)
            .eq("id", str(venue_id))
            .limit(1)
        )
        if not response.data:
            return None
        return _parse_venue(response.data[0])

    async def list_venues(self) -> list[Venue]:
        """Return all venues, newest first."""
        response = await execute(
            self.client.table("venues")
            .select(_COLUMNS)
            .order("created_at", desc=True)
        )
        return [_parse_venue(row) for row in response.data or []]

    async def list_venues_by_owner(self, owner_id: str) -> list[Venue]:
        """Return venues owned by a user, newest first."""
        response = await execute(
            self.client.table("venues")
            .select(_COLUMNS)
            .eq("owner_id", owner_id)
            .order("created_at", desc=True)
        )
        return [_parse_venue(row) for row in response.data or []]

    async def update_venue_details(
        self, venue_id: UUID, details: VenueDetails
    ) -> Venue | None:
        """Update display fields and return the venue, if present."""
        response = await execute(
            self.client.table("venues")
            .update(
                {
                    "name": details.name,
                    "location": details.location,
                    "description": details.description,
                    "image_url": details.image_url,
                }
            )
            .eq("id", str(venue_id))
        )
        if not response.data:
            return None
        return _parse_venue(response.data[0])

    async def add_unavailable_date(self, venue_id: UUID, day: str) -> None:
        """Add a date with a server-side array union."""
        await execute(
            self.client.rpc(
                "venue_add_unavailable_date",
                {"p_venue_id": str(venue_id), "p_day": day},
            )
        )

    async def remove_unavailable_date(self, venue_id: UUID, day: str) -> None:
        """Remove a date with a server-side array difference."""
        await execute(
            self.client.rpc(
                "venue_remove_unavailable_date",
                {"p_venue_id": str(venue_id), "p_day": day},
            )
        )

    async def ping(self) -> None:
        """Issue a minimal read to confirm the store is reachable."""
        await execute(self.client.table("venues").select("id").limit(1))


def _parse_venue(row: dict[str, object]) -> Venue:
    """Parse a venues row into a domain model."""
    return Venue(
        id=UUID(str(row["id"])),
        owner_id=str(row["owner_id"]),
        name=str(row.get("name") or ""),
        location=str(row.get("location") or ""),
        description=str(row.get("description") or ""),
        image_url=str(row.get("image_url") or ""),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        unavailable_dates=frozenset(
            str(day) for day in row.get("unavailable_dates") or []
        ),
    )
