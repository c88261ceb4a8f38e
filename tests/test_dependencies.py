"""Per-user store registry and per-browser cache registry."""

from uuid import uuid4

import pytest

from web3journey.progress.dependencies import LocalCacheRegistry, ProgressStoreRegistry
from web3journey.progress.schemas import ProgressStatus

from .fakes import FakeProgressRepository


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestProgressStoreRegistry:
    @pytest.mark.asyncio
    async def test_store_is_reused_while_fresh(self, feed) -> None:
        repository = FakeProgressRepository(feed)
        registry = ProgressStoreRegistry(repository, feed, clock=FakeClock())
        user_id = uuid4()

        first = await registry.get(user_id)
        second = await registry.get(user_id)

        assert first is second
        assert repository.fetch_count == 1
        registry.clear()

    @pytest.mark.asyncio
    async def test_stale_store_reloads_writes_from_other_workers(self, feed) -> None:
        repository = FakeProgressRepository(feed)
        clock = FakeClock()
        registry = ProgressStoreRegistry(repository, feed, ttl_seconds=60, clock=clock)
        user_id = uuid4()
        store = await registry.get(user_id)

        # Written by another process, so no change event reaches this feed
        repository.seed_learning(user_id, "ethereum-fundamentals", "evm")
        clock.now = 30
        await registry.get(user_id)
        assert store.get_topic_status("ethereum-fundamentals", "evm") == ProgressStatus.NOT_STARTED

        clock.now = 61
        assert await registry.get(user_id) is store
        assert store.get_topic_status("ethereum-fundamentals", "evm") == ProgressStatus.COMPLETED
        assert repository.fetch_count == 2
        registry.clear()

    @pytest.mark.asyncio
    async def test_failed_reload_keeps_previous_mirror(self, feed) -> None:
        repository = FakeProgressRepository(feed)
        clock = FakeClock()
        registry = ProgressStoreRegistry(repository, feed, ttl_seconds=60, clock=clock)
        user_id = uuid4()
        repository.seed_learning(user_id, "ethereum-fundamentals", "evm")
        await registry.get(user_id)

        repository.fail_reads = True
        clock.now = 120
        store = await registry.get(user_id)

        assert store.get_topic_status("ethereum-fundamentals", "evm") == ProgressStatus.COMPLETED
        registry.clear()

    @pytest.mark.asyncio
    async def test_least_recently_used_store_is_closed(self, feed) -> None:
        registry = ProgressStoreRegistry(FakeProgressRepository(feed), feed, max_users=2, clock=FakeClock())
        alice, bob, carol = uuid4(), uuid4(), uuid4()

        await registry.get(alice)
        await registry.get(bob)
        await registry.get(alice)
        await registry.get(carol)

        assert len(registry) == 2
        assert feed.subscriber_count == 2
        # bob was evicted, so a new store is loaded for him
        assert (await registry.get(bob)) is not None
        assert len(registry) == 2

        registry.clear()
        assert feed.subscriber_count == 0

    @pytest.mark.asyncio
    async def test_anonymous_store_is_not_kept(self, feed) -> None:
        registry = ProgressStoreRegistry(FakeProgressRepository(feed), feed)

        store = await registry.get(None)

        assert store.user_id is None
        assert len(registry) == 0


class TestLocalCacheRegistry:
    @pytest.mark.asyncio
    async def test_each_client_gets_its_own_file(self, tmp_path) -> None:
        registry = LocalCacheRegistry(tmp_path)
        first, second = uuid4(), uuid4()

        await (await registry.get(first)).update_module_status("blockchain-basics", "completed")
        other = await registry.get(second)

        assert other.get_module_status("blockchain-basics") == "not_started"
        assert registry.path_for(first).exists()
        assert not registry.path_for(second).exists()

    @pytest.mark.asyncio
    async def test_evicted_cache_reopens_from_disk(self, tmp_path) -> None:
        registry = LocalCacheRegistry(tmp_path, max_open=1)
        first, second = uuid4(), uuid4()
        cache = await registry.get(first)
        await cache.update_skill("solidity", 55)

        await registry.get(second)
        reopened = await registry.get(first)

        assert reopened is not cache
        assert len(registry) == 1
        assert reopened.state.skills == cache.state.skills
