"""FastAPI wiring for progress stores."""

import asyncio
import logging
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated
from uuid import UUID, uuid4

from fastapi import Depends, Request, Response

from web3journey.auth import OptionalUserId
from web3journey.config.settings import get_settings
from web3journey.database.session import async_session_maker

from .local_cache import LocalProgressCache
from .protocols import ProgressRepository
from .realtime import ChangeFeed, change_feed
from .repository import SqlProgressRepository
from .store import ProgressStore


logger = logging.getLogger(__name__)

LOCAL_PROGRESS_HEADER = "X-Local-Progress-Id"
LOCAL_PROGRESS_COOKIE = "local_progress_id"
LOCAL_PROGRESS_COOKIE_MAX_AGE = 60 * 60 * 24 * 365


@dataclass
class _RegistryEntry:
    store: ProgressStore
    loaded_at: float | None = None


class ProgressStoreRegistry:
    """Bound, loaded stores for the most recently active users.

    At most ``max_users`` stores stay subscribed to the change feed; the least
    recently used one is closed first. The feed only sees writes made by this
    process, so a store older than ``ttl_seconds`` is reloaded on its next
    request to pick up writes from other workers.
    """

    def __init__(
        self,
        repository: ProgressRepository,
        feed: ChangeFeed,
        max_users: int = 1000,
        ttl_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.repository = repository
        self.feed = feed
        self.max_users = max_users
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: OrderedDict[UUID, _RegistryEntry] = OrderedDict()
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def _is_fresh(self, entry: _RegistryEntry) -> bool:
        return (
            entry.store.loaded
            and entry.loaded_at is not None
            and self.clock() - entry.loaded_at < self.ttl_seconds
        )

    def _evict(self) -> None:
        while len(self._entries) > self.max_users:
            user_id, entry = self._entries.popitem(last=False)
            entry.store.close()
            logger.debug("Evicted progress store for user %s", user_id)

    async def get(self, user_id: UUID | None) -> ProgressStore:
        if user_id is None:
            return ProgressStore(self.repository, None)

        entry = self._entries.get(user_id)
        if entry is not None and self._is_fresh(entry):
            self._entries.move_to_end(user_id)
            return entry.store

        async with self._lock:
            entry = self._entries.get(user_id)
            if entry is None:
                store = ProgressStore(self.repository, user_id)
                store.bind(self.feed)
                entry = _RegistryEntry(store)
                self._entries[user_id] = entry
                self._evict()
            else:
                self._entries.move_to_end(user_id)

            # A failed reload keeps the previous mirror and retries next time
            if not self._is_fresh(entry) and await entry.store.load_all():
                entry.loaded_at = self.clock()
        return entry.store

    def clear(self) -> None:
        for entry in self._entries.values():
            entry.store.close()
        self._entries.clear()


class LocalCacheRegistry:
    """One on-disk cache per browser, keyed by the client's progress id."""

    def __init__(self, directory: str | Path, max_open: int = 256) -> None:
        self.directory = Path(directory)
        self.max_open = max_open
        self._caches: OrderedDict[UUID, LocalProgressCache] = OrderedDict()
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._caches)

    def path_for(self, client_id: UUID) -> Path:
        return self.directory / f"{client_id}.json"

    async def get(self, client_id: UUID) -> LocalProgressCache:
        async with self._lock:
            cache = self._caches.get(client_id)
            if cache is not None:
                self._caches.move_to_end(client_id)
                return cache

            cache = await LocalProgressCache.open(self.path_for(client_id))
            self._caches[client_id] = cache
            # Every write is already on disk, so closed caches just reopen from file
            while len(self._caches) > self.max_open:
                self._caches.popitem(last=False)
            return cache

    def clear(self) -> None:
        self._caches.clear()


_settings = get_settings()
registry = ProgressStoreRegistry(
    SqlProgressRepository(async_session_maker, change_feed),
    change_feed,
    max_users=_settings.PROGRESS_STORE_MAX_USERS,
    ttl_seconds=_settings.PROGRESS_STORE_TTL_SECONDS,
)

_local_caches: LocalCacheRegistry | None = None


def get_local_cache_registry() -> LocalCacheRegistry:
    global _local_caches  # noqa: PLW0603
    if _local_caches is None:
        settings = get_settings()
        _local_caches = LocalCacheRegistry(settings.LOCAL_PROGRESS_DIR, max_open=settings.LOCAL_PROGRESS_MAX_OPEN)
    return _local_caches


def reset_local_cache() -> None:
    global _local_caches  # noqa: PLW0603
    _local_caches = None


def _client_progress_id(request: Request) -> UUID | None:
    raw = request.headers.get(LOCAL_PROGRESS_HEADER) or request.cookies.get(LOCAL_PROGRESS_COOKIE)
    if not raw:
        return None
    try:
        return UUID(raw)
    except ValueError:
        logger.debug("Ignoring malformed local progress id %r", raw)
        return None


async def get_progress_store(user_id: OptionalUserId) -> ProgressStore:
    return await registry.get(user_id)


async def get_local_cache(request: Request, response: Response) -> LocalProgressCache:
    """The calling browser's cache. New visitors get an id cookie."""
    client_id = _client_progress_id(request)
    if client_id is None:
        client_id = uuid4()
        response.set_cookie(
            LOCAL_PROGRESS_COOKIE,
            str(client_id),
            max_age=LOCAL_PROGRESS_COOKIE_MAX_AGE,
            httponly=True,
            samesite="lax",
        )
    response.headers[LOCAL_PROGRESS_HEADER] = str(client_id)
    return await get_local_cache_registry().get(client_id)


CurrentProgressStore = Annotated[ProgressStore, Depends(get_progress_store)]
CurrentLocalCache = Annotated[LocalProgressCache, Depends(get_local_cache)]
