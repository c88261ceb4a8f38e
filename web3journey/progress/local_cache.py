"""Progress cache for visitors without an account.

Everything lives in one JSON document on local disk, rewritten after every
mutation. Modules carry a four-state status (``mastered`` is a manual
"beyond completed" mark only this cache knows about); topics and projects use
the same three states as the account-backed store.
"""

import asyncio
import json
import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from uuid import uuid4

import aiofiles
import aiofiles.os
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from web3journey.catalog import AchievementId, Catalog, ModuleLevel, get_catalog

from . import calculator
from .schemas import ProgressStatus


logger = logging.getLogger(__name__)

CACHE_VERSION = 1


class LearningStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    MASTERED = "mastered"


FINISHED_MODULE_STATUSES = frozenset({LearningStatus.COMPLETED, LearningStatus.MASTERED})


class Skill(str, Enum):
    BLOCKCHAIN = "blockchain"
    SOLIDITY = "solidity"
    FRONTEND = "frontend"
    SECURITY = "security"
    DEFI = "defi"
    NFT = "nft"


class LocalModuleProgress(BaseModel):
    id: str
    status: LearningStatus = LearningStatus.NOT_STARTED
    topics: dict[str, ProgressStatus] = Field(default_factory=dict)
    last_accessed_at: datetime | None = None
    completed_at: datetime | None = None

    @property
    def completed_topics(self) -> list[str]:
        return [topic_id for topic_id, status in self.topics.items() if status == ProgressStatus.COMPLETED]


class LocalProjectProgress(BaseModel):
    id: str
    status: ProgressStatus = ProgressStatus.NOT_STARTED
    started_at: datetime | None = None
    completed_at: datetime | None = None


class LearningRecord(BaseModel):
    learned_on: date
    module_id: str
    duration: int


def _initial_skills() -> dict[Skill, int]:
    return dict.fromkeys(Skill, 0)


class LocalProgressState(BaseModel):
    """Serialized shape of the cache file."""

    version: int = CACHE_VERSION
    module_progress: dict[str, LocalModuleProgress] = Field(default_factory=dict)
    project_progress: dict[str, LocalProjectProgress] = Field(default_factory=dict)
    learning_records: list[LearningRecord] = Field(default_factory=list)
    total_learning_minutes: int = 0
    current_streak: int = 0
    last_learning_date: date | None = None
    skills: dict[Skill, int] = Field(default_factory=_initial_skills)
    achievements: list[str] = Field(default_factory=list)


def format_learning_time(minutes: int) -> str:
    """Render minutes as ``45m``, ``2h`` or ``1h 30m``."""
    if minutes < 60:
        return f"{minutes}m"
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins}m" if mins > 0 else f"{hours}h"


class LocalProgressCache:
    def __init__(
        self,
        path: str | Path,
        catalog: Catalog | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.path = Path(path)
        self.catalog = catalog or get_catalog()
        self.clock = clock
        self.state = LocalProgressState()
        self._lock = asyncio.Lock()

    @classmethod
    async def open(cls, path: str | Path, catalog: Catalog | None = None, **kwargs) -> "LocalProgressCache":
        cache = cls(path, catalog=catalog, **kwargs)
        await cache.load()
        return cache

    async def load(self) -> None:
        """Read the snapshot from disk; a missing or unreadable file starts fresh."""
        if not self.path.exists():
            self.state = LocalProgressState()
            return

        async with aiofiles.open(self.path, encoding="utf-8") as f:
            raw = await f.read()
        try:
            self.state = LocalProgressState.model_validate_json(raw)
        except PydanticValidationError:
            logger.warning("Discarding unreadable progress cache at %s", self.path)
            self.state = LocalProgressState()

    async def _persist(self) -> None:
        """Write the snapshot to a fresh temp file, then swap it in."""
        await aiofiles.os.makedirs(self.path.parent, exist_ok=True)
        payload = json.dumps(self.state.model_dump(mode="json"), ensure_ascii=False, indent=2)
        tmp_path = self.path.with_name(f"{self.path.name}.{uuid4().hex}.tmp")
        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(payload)
        try:
            await aiofiles.os.replace(tmp_path, self.path)
        except OSError:
            await aiofiles.os.remove(tmp_path)
            raise

    @asynccontextmanager
    async def _mutation(self) -> AsyncIterator[None]:
        """Serialize a state change together with the write that persists it."""
        async with self._lock:
            yield
            await self._persist()

    # Reads

    def get_module_status(self, module_id: str) -> LearningStatus:
        entry = self.state.module_progress.get(module_id)
        return entry.status if entry else LearningStatus.NOT_STARTED

    def get_topic_status(self, module_id: str, topic_id: str) -> ProgressStatus:
        entry = self.state.module_progress.get(module_id)
        if entry is None:
            return ProgressStatus.NOT_STARTED
        return entry.topics.get(topic_id, ProgressStatus.NOT_STARTED)

    def get_project_status(self, project_id: str) -> ProgressStatus:
        entry = self.state.project_progress.get(project_id)
        return entry.status if entry else ProgressStatus.NOT_STARTED

    def _completed_topics(self) -> dict[str, frozenset[str]]:
        return calculator.completed_topics_by_module(
            self.catalog,
            (
                (module_id, topic_id)
                for module_id, entry in self.state.module_progress.items()
                for topic_id in entry.completed_topics
            ),
        )

    def module_completion_percentage(self, module_id: str) -> int:
        return calculator.module_percentage(self.catalog, self._completed_topics(), module_id)

    def level_completion_percentage(self, level: ModuleLevel | str) -> int:
        return calculator.level_percentage(self.catalog, self._completed_topics(), level)

    def course_completion_percentage(self) -> int:
        return calculator.course_percentage(self.catalog, self._completed_topics())

    def total_completed_topics(self) -> int:
        return calculator.total_completed(self.catalog, self._completed_topics())

    def completed_module_ids(self) -> list[str]:
        return calculator.completed_module_ids(self.catalog, self._completed_topics())

    def overall_progress(self, total_modules: int | None = None) -> int:
        """Share of modules marked completed or mastered."""
        if total_modules is None:
            total_modules = len(self.catalog.modules)
        finished = sum(1 for m in self.state.module_progress.values() if m.status in FINISHED_MODULE_STATUSES)
        return calculator.percentage(finished, total_modules)

    @property
    def learning_time(self) -> str:
        return format_learning_time(self.state.total_learning_minutes)

    # Writes

    def _module_entry(self, module_id: str, default_status: LearningStatus) -> LocalModuleProgress:
        entry = self.state.module_progress.get(module_id)
        if entry is None:
            entry = LocalModuleProgress(id=module_id, status=default_status)
            self.state.module_progress[module_id] = entry
        return entry

    async def update_module_status(self, module_id: str, status: LearningStatus | str) -> None:
        status = LearningStatus(status)
        async with self._mutation():
            now = self.clock()
            entry = self._module_entry(module_id, status)
            entry.status = status
            entry.last_accessed_at = now
            if status in FINISHED_MODULE_STATUSES:
                entry.completed_at = now

            if any(m.status in FINISHED_MODULE_STATUSES for m in self.state.module_progress.values()):
                self._add_achievement(AchievementId.FIRST_STEP.value)

    async def complete_module_topic(self, module_id: str, topic_id: str) -> None:
        await self.set_topic_status(module_id, topic_id, ProgressStatus.COMPLETED)

    async def set_topic_status(self, module_id: str, topic_id: str, status: ProgressStatus | str) -> None:
        status = ProgressStatus(status)
        async with self._mutation():
            entry = self._module_entry(module_id, LearningStatus.IN_PROGRESS)
            entry.topics[topic_id] = status
            entry.last_accessed_at = self.clock()

    async def update_project_status(self, project_id: str, status: ProgressStatus | str) -> None:
        status = ProgressStatus(status)
        async with self._mutation():
            now = self.clock()
            previous = self.state.project_progress.get(project_id)
            self.state.project_progress[project_id] = LocalProjectProgress(
                id=project_id,
                status=status,
                started_at=now if status == ProgressStatus.IN_PROGRESS else (previous.started_at if previous else None),
                completed_at=now if status == ProgressStatus.COMPLETED else None,
            )

            if any(p.status == ProgressStatus.COMPLETED for p in self.state.project_progress.values()):
                self._add_achievement(AchievementId.FULL_STACK.value)

    async def add_learning_record(self, module_id: str, duration: int) -> None:
        """Log a study session and advance the local streak."""
        async with self._mutation():
            today = self.clock().date()
            last = self.state.last_learning_date

            streak = self.state.current_streak
            if last is None:
                streak = 1
            else:
                diff_days = (today - last).days
                if diff_days == 1:
                    streak += 1
                elif diff_days > 1:
                    streak = 1

            self.state.learning_records.append(
                LearningRecord(learned_on=today, module_id=module_id, duration=duration)
            )
            self.state.total_learning_minutes += duration
            self.state.current_streak = streak
            self.state.last_learning_date = today

    async def update_skill(self, skill: Skill | str, value: int) -> None:
        skill = Skill(skill)
        async with self._mutation():
            self.state.skills[skill] = min(100, max(0, value))

    def _add_achievement(self, achievement_id: str) -> bool:
        if achievement_id in self.state.achievements:
            return False
        self.state.achievements.append(achievement_id)
        return True

    async def unlock_achievement(self, achievement_id: str) -> bool:
        """Idempotent set-insert; returns True when the id was new."""
        async with self._lock:
            added = self._add_achievement(achievement_id)
            if added:
                await self._persist()
        return added

    async def reset_progress(self) -> None:
        async with self._mutation():
            self.state = LocalProgressState()
