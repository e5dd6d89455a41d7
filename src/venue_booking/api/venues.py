"""Venue listing endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, Request, status

from venue_booking.api.dependencies import require_store
from venue_booking.api.models import VenuePayload
from venue_booking.api.serializers import serialize_venue
from venue_booking.domain.venues import VenueDetails

if TYPE_CHECKING:
    from venue_booking.containers import AppContainer

router = APIRouter(tags=["venues"], dependencies=[Depends(require_store)])


def _details(payload: VenuePayload) -> VenueDetails:
    return VenueDetails(
        name=payload.name,
        location=payload.location,
        description=payload.description,
        image_url=payload.image_url,
    )


@router.post("/venues", status_code=status.HTTP_201_CREATED)
async def create_venue(
    payload: VenuePayload,
    request: Request,
    x_user_id: str | None = Header(default=None),
) -> dict[str, object]:
    """Create a venue owned by the calling user."""
    container: AppContainer = request.app.state.container
    venue = await container.venue_service.create_venue(
        x_user_id or "", _details(payload)
    )
    return {"venue": serialize_venue(venue)}


@router.get("/venues")
async def list_venues(request: Request) -> dict[str, object]:
    """Return every venue."""
    container: AppContainer = request.app.state.container
    venues = await container.venue_service.list_all()
    return {"venues": [serialize_venue(venue) for venue in venues]}


@router.get("/venues/{venue_id}")
async def get_venue(venue_id: str, request: Request) -> dict[str, object]:
    """Return a single venue."""
    container: AppContainer = request.app.state.container
    venue = await container.venue_service.get_venue(venue_id)
    return {"venue": serialize_venue(venue)}


@router.patch("/venues/{venue_id}")
async def update_venue(
    venue_id: str, payload: VenuePayload, request: Request
) -> dict[str, object]:
    """Replace a venue's display fields."""
    container: AppContainer = request.app.state.container
    venue = await container.venue_service.update_details(venue_id, _details(payload))
    return {"venue": serialize_venue(venue)}


@router.get("/owners/{owner_id}/venues")
async def list_owner_venues(owner_id: str, request: Request) -> dict[str, object]:
    """Return the venues owned by a user."""
    container: AppContainer = request.app.state.container
    venues = await container.venue_service.list_by_owner(owner_id)
    return {"venues": [serialize_venue(venue) for venue in venues]}
