"""Domain models for venues."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class VenueDetails:
    """Owner-editable display fields of a venue."""

    name: str
    location: str
    description: str = ""
    image_url: str = ""


@dataclass(frozen=True)
class Venue:
    """Represents a bookable venue listing."""

    id: UUID
    owner_id: str
    name: str
    location: str
    description: str
    image_url: str
    created_at: datetime
    unavailable_dates: frozenset[str] = field(default_factory=frozenset)
