"""Per-user progress store.

Holds an in-memory mirror of the user's learning_progress and
project_progress rows and answers every read and aggregate from it.

Writes are optimistic: the mirror is updated first, then the row is upserted
remotely. A failed upsert is logged and reported through the returned
``SyncResult`` and ``sync_errors`` but the local value stays visible. When
bound to a ``ChangeFeed``, any change to the user's rows triggers a full
reload that replaces the mirror.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from uuid import UUID, uuid4

from web3journey.catalog import Catalog, ModuleLevel, get_catalog
from web3journey.exceptions import RemoteStoreError

from . import calculator
from .protocols import ProgressRepository
from .realtime import ChangeEvent, ChangeFeed, Subscription
from .schemas import (
    LearningProgressRecord,
    ProgressSnapshot,
    ProgressStatus,
    ProjectProgressRecord,
    SyncResult,
)


logger = logging.getLogger(__name__)

PROGRESS_TABLES = ("learning_progress", "project_progress")


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ProgressStore:
    def __init__(
        self,
        repository: ProgressRepository,
        user_id: UUID | None,
        catalog: Catalog | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.repository = repository
        self.user_id = user_id
        self.catalog = catalog or get_catalog()
        self.clock = clock

        self.loading = False
        self.loaded = False
        self.sync_errors: list[str] = []

        self._learning: dict[tuple[str, str], LearningProgressRecord] = {}
        self._projects: dict[str, ProjectProgressRecord] = {}
        self._in_flight = 0
        self._subscription: Subscription | None = None

    @property
    def syncing(self) -> bool:
        return self._in_flight > 0

    @property
    def learning_records(self) -> list[LearningProgressRecord]:
        return list(self._learning.values())

    @property
    def project_records(self) -> list[ProjectProgressRecord]:
        return list(self._projects.values())

    # Loading and reconciliation

    async def load_all(self) -> bool:
        """Fetch every record for the user and replace the mirror.

        Returns False when the fetch failed; the previous mirror is kept.
        """
        if self.user_id is None:
            self._learning = {}
            self._projects = {}
            self.loaded = True
            return True

        self.loading = True
        try:
            learning, projects = await asyncio.gather(
                self.repository.fetch_learning(self.user_id),
                self.repository.fetch_projects(self.user_id),
            )
        except RemoteStoreError:
            logger.exception("Error fetching progress for user %s", self.user_id)
            return False
        finally:
            self.loading = False

        self._learning = {(r.module_id, r.topic_id): r for r in learning}
        self._projects = {r.project_id: r for r in projects}
        self.loaded = True
        logger.debug(
            "Loaded %d topic and %d project records for user %s", len(self._learning), len(self._projects), self.user_id
        )
        return True

    def bind(self, feed: ChangeFeed) -> None:
        """Reload the whole mirror whenever the user's progress rows change."""
        if self.user_id is None or self._subscription is not None:
            return
        self._subscription = feed.subscribe(self.user_id, PROGRESS_TABLES, self._on_change)

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    async def _on_change(self, event: ChangeEvent) -> None:
        logger.debug("Change on %s for user %s, reloading", event.table, event.user_id)
        await self.load_all()

    # Reads

    def get_topic_status(self, module_id: str, topic_id: str) -> ProgressStatus:
        record = self._learning.get((module_id, topic_id))
        return record.status if record else ProgressStatus.NOT_STARTED

    def get_project_status(self, project_id: str) -> ProgressStatus:
        record = self._projects.get(project_id)
        return record.status if record else ProgressStatus.NOT_STARTED

    def _completed_topics(self) -> dict[str, frozenset[str]]:
        return calculator.completed_topics_by_module(
            self.catalog,
            (key for key, record in self._learning.items() if record.status == ProgressStatus.COMPLETED),
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

    def completed_project_ids(self) -> list[str]:
        """Completed catalog projects, in catalog order."""
        return [
            project.id
            for project in self.catalog.projects
            if self.get_project_status(project.id) == ProgressStatus.COMPLETED
        ]

    def snapshot(self) -> ProgressSnapshot:
        completed = self._completed_topics()
        return ProgressSnapshot(
            learning=self.learning_records,
            projects=self.project_records,
            course_percentage=calculator.course_percentage(self.catalog, completed),
            level_percentages={
                level.value: calculator.level_percentage(self.catalog, completed, level) for level in ModuleLevel
            },
            module_percentages={
                module.id: calculator.module_percentage(self.catalog, completed, module.id)
                for module in self.catalog.modules
            },
            total_completed_topics=calculator.total_completed(self.catalog, completed),
            completed_module_ids=calculator.completed_module_ids(self.catalog, completed),
            completed_project_ids=self.completed_project_ids(),
            sync_errors=list(self.sync_errors),
        )

    # Writes

    async def set_topic_status(
        self, module_id: str, topic_id: str, status: ProgressStatus | str, notes: str | None = None
    ) -> SyncResult:
        if self.user_id is None:
            return SyncResult(synced=False, skipped=True)

        status = ProgressStatus(status)
        now = self.clock()
        completed_at = now if status == ProgressStatus.COMPLETED else None
        existing = self._learning.get((module_id, topic_id))
        if existing is not None:
            record = existing.model_copy(
                update={
                    "status": status,
                    "notes": notes or existing.notes,
                    "completed_at": completed_at,
                    "updated_at": now,
                }
            )
        else:
            record = LearningProgressRecord(
                id=uuid4(),
                user_id=self.user_id,
                module_id=module_id,
                topic_id=topic_id,
                status=status,
                notes=notes or None,
                completed_at=completed_at,
                created_at=now,
                updated_at=now,
            )
        self._learning[(module_id, topic_id)] = record

        return await self._sync(self.repository.upsert_learning(record), f"topic {module_id}/{topic_id}")

    async def set_project_status(
        self,
        project_id: str,
        status: ProgressStatus | str,
        github_url: str | None = None,
        demo_url: str | None = None,
        notes: str | None = None,
    ) -> SyncResult:
        if self.user_id is None:
            return SyncResult(synced=False, skipped=True)

        status = ProgressStatus(status)
        now = self.clock()
        completed_at = now if status == ProgressStatus.COMPLETED else None
        existing = self._projects.get(project_id)
        if existing is not None:
            record = existing.model_copy(
                update={
                    "status": status,
                    "github_url": github_url or existing.github_url,
                    "demo_url": demo_url or existing.demo_url,
                    "notes": notes or existing.notes,
                    "completed_at": completed_at,
                    "updated_at": now,
                }
            )
        else:
            record = ProjectProgressRecord(
                id=uuid4(),
                user_id=self.user_id,
                project_id=project_id,
                status=status,
                github_url=github_url or None,
                demo_url=demo_url or None,
                notes=notes or None,
                completed_at=completed_at,
                created_at=now,
                updated_at=now,
            )
        self._projects[project_id] = record

        return await self._sync(self.repository.upsert_project(record), f"project {project_id}")

    async def _sync(self, write: Awaitable[None], label: str) -> SyncResult:
        self._in_flight += 1
        try:
            await write
        except RemoteStoreError as e:
            logger.error("Failed to sync %s for user %s: %s", label, self.user_id, e.message)
            self.sync_errors.append(f"{label}: {e.message}")
            return SyncResult(synced=False, error=e.message)
        finally:
            self._in_flight -= 1
        return SyncResult(synced=True)
