"""Stats service: lazy row creation, streaks, minutes and achievements."""

from datetime import date
from uuid import uuid4

import pytest

from web3journey.progress.store import ProgressStore
from web3journey.stats.service import StatsService


TODAY = date(2026, 5, 10)


@pytest.fixture
def user_id():
    return uuid4()


@pytest.fixture
def service(stats_repository, user_id) -> StatsService:
    return StatsService(stats_repository, user_id, today=lambda: TODAY)


@pytest.fixture
async def progress(progress_repository, user_id) -> ProgressStore:
    store = ProgressStore(progress_repository, user_id)
    await store.load_all()
    return store


class TestLoad:
    @pytest.mark.asyncio
    async def test_first_load_creates_the_row(self, service, stats_repository) -> None:
        stats = await service.load()

        assert stats.current_streak == 0
        assert stats.achievements == []
        assert stats_repository.create_count == 1

        await service.load()
        assert stats_repository.create_count == 1

    @pytest.mark.asyncio
    async def test_anonymous_has_no_stats(self, stats_repository) -> None:
        service = StatsService(stats_repository, None)

        assert await service.load() is None
        assert not await service.record_activity()
        assert service.to_response().current_streak == 0
        assert stats_repository.create_count == 0


class TestActivity:
    @pytest.mark.asyncio
    async def test_activity_counts_once_per_day(self, service) -> None:
        assert await service.record_activity()
        assert not await service.record_activity()

        assert service.current_streak == 1
        assert service.longest_streak == 1
        assert service.stats.last_activity_date == TODAY

    @pytest.mark.asyncio
    async def test_failed_streak_write_leaves_memory_unchanged(self, service, stats_repository) -> None:
        await service.load()
        stats_repository.fail_writes = True

        assert not await service.record_activity()
        assert service.current_streak == 0

    @pytest.mark.asyncio
    async def test_learning_minutes(self, service) -> None:
        assert await service.add_learning_minutes(45)
        assert await service.add_learning_minutes(45)
        assert not await service.add_learning_minutes(0)

        assert service.total_learning_minutes == 90
        assert service.to_response().learning_time == "1h 30m"


class TestAchievements:
    @pytest.mark.asyncio
    async def test_unlock_is_persisted_and_monotonic(self, service, progress, stats_repository, user_id) -> None:
        await progress.set_topic_status("ethereum-fundamentals", "evm", "completed")

        assert await service.check_and_unlock_achievements(progress) == ["first_step"]
        assert stats_repository.rows[user_id].achievements == ["first_step"]

        # Undoing progress never takes an achievement away
        await progress.set_topic_status("ethereum-fundamentals", "evm", "not_started")
        assert await service.check_and_unlock_achievements(progress) == []
        assert service.achievements == ["first_step"]

    @pytest.mark.asyncio
    async def test_failed_persist_unlocks_nothing(self, service, progress, stats_repository) -> None:
        await service.load()
        await progress.set_topic_status("ethereum-fundamentals", "evm", "completed")
        stats_repository.fail_writes = True

        assert await service.check_and_unlock_achievements(progress) == []
        assert service.achievements == []

        stats_repository.fail_writes = False
        assert await service.check_and_unlock_achievements(progress) == ["first_step"]

    @pytest.mark.asyncio
    async def test_unlocked_and_locked_lists(self, service, progress) -> None:
        await progress.set_topic_status("ethereum-fundamentals", "evm", "completed")
        await service.check_and_unlock_achievements(progress)

        assert [a.id.value for a in service.unlocked_achievements()] == ["first_step"]
        assert len(service.locked_achievements()) == 10
