"""WebSocket endpoints streaming live query results."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from venue_booking.api.dependencies import store_ready
from venue_booking.api.serializers import serialize_booking, serialize_venue
from venue_booking.services.notifications import Collection, Snapshot, Topic

if TYPE_CHECKING:
    from venue_booking.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["live"])


@router.websocket("/ws/venues")
async def live_venues(websocket: WebSocket) -> None:
    await _stream(websocket, Topic.venues())


@router.websocket("/ws/owners/{owner_id}/venues")
async def live_owner_venues(websocket: WebSocket, owner_id: str) -> None:
    await _stream(websocket, Topic.venues_by_owner(owner_id))


@router.websocket("/ws/users/{user_id}/bookings")
async def live_user_bookings(websocket: WebSocket, user_id: str) -> None:
    await _stream(websocket, Topic.bookings_by_user(user_id))


async def _stream(websocket: WebSocket, topic: Topic) -> None:
    """Push the topic's full result set on connect and after every change."""
    if not await store_ready(websocket.app):
        await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
        return
    container: AppContainer = websocket.app.state.container
    await websocket.accept()

    async def push(snapshot: Snapshot) -> None:
        await websocket.send_json(_snapshot_message(topic, snapshot))

    handle = await container.bus.subscribe(topic, push)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug("Live query client disconnected", extra={"topic": topic.key})
    finally:
        container.bus.unsubscribe(handle)


def _snapshot_message(topic: Topic, snapshot: Snapshot) -> dict[str, object]:
    if topic.collection is Collection.VENUES:
        items = [serialize_venue(venue) for venue in snapshot]
    else:
        items = [serialize_booking(booking) for booking in snapshot]
    return {"collection": topic.collection.value, "key": topic.key, "items": items}
