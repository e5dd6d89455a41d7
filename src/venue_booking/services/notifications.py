"""Live query fan-out for venue and booking changes."""

from __future__ import annotations

import inspect
import itertools
import logging
from collections.abc import Awaitable, Callable, Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from venue_booking.domain.bookings import Booking
from venue_booking.domain.venues import Venue

if TYPE_CHECKING:
    from venue_booking.services.bookings import BookingRepository
    from venue_booking.services.venues import VenueRepository

logger = logging.getLogger(__name__)

Snapshot = Sequence[Venue] | Sequence[Booking]
SnapshotCallback = Callable[[Snapshot], Awaitable[None] | None]


class Collection(Enum):
    """Store collections that publish changes."""

    VENUES = "venues"
    BOOKINGS = "bookings"


@dataclass(frozen=True)
class Topic:
    """A live query: a collection plus an optional owner or user filter."""

    collection: Collection
    key: str | None = None

    @classmethod
    def venues(cls) -> "Topic":
        return cls(Collection.VENUES)

    @classmethod
    def venues_by_owner(cls, owner_id: str) -> "Topic":
        return cls(Collection.VENUES, owner_id)

    @classmethod
    def bookings_by_user(cls, user_id: str) -> "Topic":
        return cls(Collection.BOOKINGS, user_id)

    def matches(self, mutation: "Mutation") -> bool:
        """Return true when the mutation can change this query's result."""
        if self.collection is not mutation.collection:
            return False
        return self.key is None or mutation.key is None or self.key == mutation.key


@dataclass(frozen=True)
class Mutation:
    """A committed change; key is the venue owner or booking user, if known."""

    collection: Collection
    key: str | None = None


@dataclass(frozen=True)
class SubscriptionHandle:
    """Token returned by subscribe and accepted by unsubscribe."""

    id: UUID
    topic: Topic


@dataclass
class _Subscription:
    handle: SubscriptionHandle
    callback: SnapshotCallback
    delivered: int = 0


@dataclass
class ChangeNotificationBus:
    """Publish-subscribe bus delivering full result sets, never diffs.

    Every refresh draws a sequence number before it queries the store. A
    subscription only accepts snapshots newer than the last one it received,
    so when refreshes overlap the read that started later wins, whichever
    finishes first.
    """

    venue_repository: VenueRepository
    booking_repository: BookingRepository
    _subscriptions: dict[UUID, _Subscription] = field(default_factory=dict)
    _sequence: Iterator[int] = field(default_factory=lambda: itertools.count(1))

    async def subscribe(
        self, topic: Topic, callback: SnapshotCallback
    ) -> SubscriptionHandle:
        """Register a callback and deliver the current result set to it."""
        if topic.collection is Collection.BOOKINGS and not topic.key:
            raise ValueError("Booking subscriptions must be filtered by user")
        handle = SubscriptionHandle(id=uuid4(), topic=topic)
        subscription = _Subscription(handle=handle, callback=callback)
        self._subscriptions[handle.id] = subscription
        sequence = next(self._sequence)
        try:
            snapshot = await self._query(topic)
        except Exception:
            self.unsubscribe(handle)
            raise
        await self._deliver(subscription, snapshot, sequence)
        return handle

    def unsubscribe(self, handle: SubscriptionHandle) -> None:
        """Stop deliveries for a handle; unknown handles are ignored."""
        self._subscriptions.pop(handle.id, None)

    @property
    def subscription_count(self) -> int:
        return len(self._subscriptions)

    async def publish(self, mutation: Mutation) -> None:
        """Push recomputed result sets to every subscription the change affects."""
        topics = list(
            dict.fromkeys(
                subscription.handle.topic
                for subscription in self._subscriptions.values()
                if subscription.handle.topic.matches(mutation)
            )
        )
        for topic in topics:
            sequence = next(self._sequence)
            try:
                snapshot = await self._query(topic)
            except Exception:
                logger.exception(
                    "Failed to refresh live query",
                    extra={"collection": topic.collection.value, "key": topic.key},
                )
                continue
            for subscription in list(self._subscriptions.values()):
                if subscription.handle.topic == topic:
                    await self._deliver(subscription, snapshot, sequence)

    async def _query(self, topic: Topic) -> Snapshot:
        if topic.collection is Collection.VENUES:
            if topic.key is None:
                return await self.venue_repository.list_venues()
            return await self.venue_repository.list_venues_by_owner(topic.key)
        return await self.booking_repository.list_bookings_by_user(topic.key or "")

    async def _deliver(
        self, subscription: _Subscription, snapshot: Snapshot, sequence: int
    ) -> None:
        if subscription.handle.id not in self._subscriptions:
            return
        if sequence <= subscription.delivered:
            logger.debug(
                "Dropped stale live query result",
                extra={"subscription_id": str(subscription.handle.id)},
            )
            return
        subscription.delivered = sequence
        try:
            result = subscription.callback(list(snapshot))
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception(
                "Subscriber callback failed",
                extra={"subscription_id": str(subscription.handle.id)},
            )
