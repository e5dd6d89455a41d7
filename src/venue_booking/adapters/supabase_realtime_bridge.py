"""Forward Supabase realtime change events to the local notification bus."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

from supabase import AsyncClient

from venue_booking.services.notifications import (
    ChangeNotificationBus,
    Collection,
    Mutation,
)

logger = logging.getLogger(__name__)

_KEY_COLUMNS = {Collection.VENUES: "owner_id", Collection.BOOKINGS: "user_id"}


def mutation_from_change(
    collection: Collection, payload: dict[str, Any]
) -> Mutation:
    """Build a bus mutation from a postgres_changes payload.

    The key is read from the new record, or the old one for deletes. When
    neither carries it every filtered subscription of the collection is
    refreshed.
    """
    data = payload.get("data", payload)
    column = _KEY_COLUMNS[collection]
    for record_key in ("record", "new", "old_record", "old"):
        record = data.get(record_key) if isinstance(data, dict) else None
        if isinstance(record, dict) and record.get(column):
            return Mutation(collection, str(record[column]))
    return Mutation(collection)


@dataclass
class SupabaseRealtimeBridge:
    """Relays writes made by other processes into live queries."""

    client: AsyncClient
    bus: ChangeNotificationBus
    channel_name: str = "venue-booking-changes"
    _channel: Any = None
    _pending: set[asyncio.Task[None]] = field(default_factory=set)

    async def start(self) -> None:
        """Subscribe to change events on the venues and bookings tables."""
        if self._channel is not None:
            return
        loop = asyncio.get_running_loop()
        channel = self.client.channel(self.channel_name)
        for collection in Collection:
            channel.on_postgres_changes(
                "*",
                schema="public",
                table=collection.value,
                callback=self._forwarder(loop, collection),
            )
        await channel.subscribe()
        self._channel = channel
        logger.info("Realtime bridge subscribed", extra={"channel": self.channel_name})

    async def stop(self) -> None:
        """Remove the realtime channel, if subscribed."""
        if self._channel is None:
            return
        channel, self._channel = self._channel, None
        await self.client.remove_channel(channel)

    def _forwarder(self, loop: asyncio.AbstractEventLoop, collection: Collection):
        def forward(payload: dict[str, Any]) -> None:
            mutation = mutation_from_change(collection, payload)
            task = loop.create_task(self.bus.publish(mutation))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

        return forward
