"""In-process change notifications for per-user tables.

Repositories publish a ``ChangeEvent`` after every committed write. Progress
stores subscribe with a callback and reload on each event; the SSE endpoint
uses ``listen()`` to get a queue it can drain.
"""

import asyncio
import itertools
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Literal
from uuid import UUID


logger = logging.getLogger(__name__)

EventType = Literal["INSERT", "UPDATE", "DELETE"]
Listener = Callable[["ChangeEvent"], Awaitable[None]]


@dataclass(frozen=True)
class ChangeEvent:
    table: str
    user_id: UUID
    event_type: EventType = "UPDATE"
    key: str | None = None
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_payload(self) -> dict[str, str | None]:
        return {
            "table": self.table,
            "user_id": str(self.user_id),
            "event_type": self.event_type,
            "key": self.key,
            "occurred_at": self.occurred_at.isoformat(),
        }


@dataclass
class Subscription:
    """Handle returned by ``ChangeFeed.subscribe``."""

    feed: "ChangeFeed"
    subscription_id: int
    user_id: UUID
    tables: frozenset[str]
    listener: Listener

    def matches(self, event: ChangeEvent) -> bool:
        return event.user_id == self.user_id and event.table in self.tables

    def unsubscribe(self) -> None:
        self.feed.unsubscribe(self)


class ChangeFeed:
    """Per-user, per-table publish/subscribe on the running event loop."""

    def __init__(self) -> None:
        self._subscriptions: dict[int, Subscription] = {}
        self._ids = itertools.count(1)

    def subscribe(self, user_id: UUID, tables: Iterable[str], listener: Listener) -> Subscription:
        subscription = Subscription(
            feed=self,
            subscription_id=next(self._ids),
            user_id=user_id,
            tables=frozenset(tables),
            listener=listener,
        )
        self._subscriptions[subscription.subscription_id] = subscription
        logger.debug("Subscribed %s to %s for user %s", subscription.subscription_id, sorted(subscription.tables), user_id)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        self._subscriptions.pop(subscription.subscription_id, None)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    async def publish(self, event: ChangeEvent) -> None:
        """Deliver an event to every matching subscriber.

        A failing listener is logged and does not stop delivery to the others.
        """
        for subscription in list(self._subscriptions.values()):
            if not subscription.matches(event):
                continue
            try:
                await subscription.listener(event)
            except Exception:
                logger.exception(
                    "Change listener %s failed for %s on %s",
                    subscription.subscription_id,
                    event.event_type,
                    event.table,
                )

    @asynccontextmanager
    async def listen(
        self, user_id: UUID, tables: Iterable[str], maxsize: int = 100
    ) -> AsyncIterator["asyncio.Queue[ChangeEvent]"]:
        """Queue-backed subscription for streaming consumers."""
        queue: asyncio.Queue[ChangeEvent] = asyncio.Queue(maxsize=maxsize)

        async def _enqueue(event: ChangeEvent) -> None:
            if queue.full():
                # Slow consumer: drop the oldest, the newest one still triggers a reload
                queue.get_nowait()
            queue.put_nowait(event)

        subscription = self.subscribe(user_id, tables, _enqueue)
        try:
            yield queue
        finally:
            subscription.unsubscribe()


change_feed = ChangeFeed()
