"""Streak, study-time and achievement bookkeeping for one user.

Unlike progress writes, stats changes are only reflected in memory after the
remote update succeeded. Achievements in particular are never shown unlocked
unless the store has them.
"""

import logging
from collections.abc import Callable
from datetime import date
from uuid import UUID

from web3journey.catalog import Achievement, get_locked_achievements, get_unlocked_achievements
from web3journey.exceptions import RemoteStoreError
from web3journey.progress.local_cache import format_learning_time
from web3journey.progress.store import ProgressStore

from .achievements import AchievementInputs, evaluate_achievements
from .protocols import StatsRepository
from .schemas import StatsResponse, UserStatsRecord
from .streak import next_streak


logger = logging.getLogger(__name__)


class StatsService:
    def __init__(
        self,
        repository: StatsRepository,
        user_id: UUID | None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.repository = repository
        self.user_id = user_id
        self.today = today
        self.stats: UserStatsRecord | None = None
        self.loading = False

    @property
    def current_streak(self) -> int:
        return self.stats.current_streak if self.stats else 0

    @property
    def longest_streak(self) -> int:
        return self.stats.longest_streak if self.stats else 0

    @property
    def total_learning_minutes(self) -> int:
        return self.stats.total_learning_minutes if self.stats else 0

    @property
    def achievements(self) -> list[str]:
        return list(self.stats.achievements) if self.stats else []

    async def load(self) -> UserStatsRecord | None:
        """Fetch the user's stats, creating a zero-valued row on first use."""
        if self.user_id is None:
            self.stats = None
            return None

        self.loading = True
        try:
            stats = await self.repository.get(self.user_id)
            if stats is None:
                stats = await self.repository.create(self.user_id)
        except RemoteStoreError:
            logger.exception("Error fetching stats for user %s", self.user_id)
            return self.stats
        finally:
            self.loading = False

        self.stats = stats
        return stats

    async def _ensure_loaded(self) -> bool:
        if self.user_id is None:
            return False
        if self.stats is None:
            await self.load()
        return self.stats is not None

    async def record_activity(self) -> bool:
        """Count today towards the streak. Returns True when something changed."""
        if not await self._ensure_loaded():
            return False

        update = next_streak(
            self.stats.current_streak,
            self.stats.longest_streak,
            self.stats.last_activity_date,
            self.today(),
        )
        if update is None:
            return False

        values = {
            "current_streak": update.current_streak,
            "longest_streak": update.longest_streak,
            "last_activity_date": update.last_activity_date,
        }
        try:
            await self.repository.update(self.user_id, values)
        except RemoteStoreError:
            logger.exception("Error updating streak for user %s", self.user_id)
            return False

        self.stats = self.stats.model_copy(update=values)
        return True

    async def add_learning_minutes(self, minutes: int) -> bool:
        if minutes <= 0 or not await self._ensure_loaded():
            return False

        total = self.stats.total_learning_minutes + minutes
        try:
            await self.repository.update(self.user_id, {"total_learning_minutes": total})
        except RemoteStoreError:
            logger.exception("Error adding learning minutes for user %s", self.user_id)
            return False

        self.stats = self.stats.model_copy(update={"total_learning_minutes": total})
        return True

    async def check_and_unlock_achievements(self, progress: ProgressStore) -> list[str]:
        """Persist newly earned achievements and return their ids.

        Returns an empty list when nothing new qualifies or the write failed.
        """
        if not await self._ensure_loaded():
            return []

        current = list(self.stats.achievements)
        inputs = AchievementInputs.from_progress(progress, self.stats.current_streak)
        new_ids = evaluate_achievements(inputs, current)
        if not new_ids:
            return []

        combined = current + new_ids
        try:
            await self.repository.update(self.user_id, {"achievements": combined})
        except RemoteStoreError:
            logger.exception("Error saving achievements %s for user %s", new_ids, self.user_id)
            return []

        self.stats = self.stats.model_copy(update={"achievements": combined})
        logger.info("User %s unlocked %s", self.user_id, ", ".join(new_ids))
        return new_ids

    def unlocked_achievements(self) -> list[Achievement]:
        return get_unlocked_achievements(self.achievements)

    def locked_achievements(self) -> list[Achievement]:
        return get_locked_achievements(self.achievements)

    def to_response(self) -> StatsResponse:
        if self.stats is None:
            return StatsResponse()
        return StatsResponse(
            current_streak=self.stats.current_streak,
            longest_streak=self.stats.longest_streak,
            last_activity_date=self.stats.last_activity_date,
            total_learning_minutes=self.stats.total_learning_minutes,
            learning_time=format_learning_time(self.stats.total_learning_minutes),
            achievements=list(self.stats.achievements),
        )
