"""Booking and calendar endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, Request, status
from fastapi.responses import JSONResponse

from venue_booking.api.dependencies import require_store, result_response
from venue_booking.api.models import BookingPayload
from venue_booking.api.serializers import serialize_booking, serialize_calendar_day

if TYPE_CHECKING:
    from venue_booking.containers import AppContainer

router = APIRouter(tags=["bookings"], dependencies=[Depends(require_store)])


@router.post("/venues/{venue_id}/bookings")
async def book_venue(
    venue_id: str,
    payload: BookingPayload,
    request: Request,
    x_user_id: str | None = Header(default=None),
) -> JSONResponse:
    """Book a venue for one date as the calling user."""
    container: AppContainer = request.app.state.container
    result = await container.coordinator.book(venue_id, x_user_id or "", payload.date)
    return result_response(result, success_status=status.HTTP_201_CREATED)


@router.put("/venues/{venue_id}/blocked-dates/{day}")
async def block_date(venue_id: str, day: str, request: Request) -> JSONResponse:
    """Block a date on the venue calendar."""
    container: AppContainer = request.app.state.container
    return result_response(await container.coordinator.block_date(venue_id, day))


@router.delete("/venues/{venue_id}/blocked-dates/{day}")
async def unblock_date(venue_id: str, day: str, request: Request) -> JSONResponse:
    """Reopen a date on the venue calendar."""
    container: AppContainer = request.app.state.container
    return result_response(await container.coordinator.unblock_date(venue_id, day))


@router.get("/venues/{venue_id}/calendar")
async def venue_calendar(venue_id: str, request: Request) -> dict[str, object]:
    """Return unavailable dates with the reason behind each."""
    container: AppContainer = request.app.state.container
    days = await container.booking_service.calendar(venue_id)
    return {
        "venue_id": venue_id,
        "unavailable": [serialize_calendar_day(day) for day in days],
    }


@router.get("/users/{user_id}/bookings")
async def list_user_bookings(user_id: str, request: Request) -> dict[str, object]:
    """Return the bookings made by a user."""
    container: AppContainer = request.app.state.container
    bookings = await container.booking_service.list_for_user(user_id)
    return {"bookings": [serialize_booking(booking) for booking in bookings]}
