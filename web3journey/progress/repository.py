"""SQLAlchemy-backed progress repository."""

import logging
from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from web3journey.exceptions import RemoteStoreError

from .models import LearningProgress, ProjectProgress
from .realtime import ChangeEvent, ChangeFeed
from .schemas import LearningProgressRecord, ProjectProgressRecord


logger = logging.getLogger(__name__)


def upsert_statement(
    session: AsyncSession, model: type, values: dict, conflict_keys: list[str], update_keys: list[str]
):
    """Build an INSERT ... ON CONFLICT DO UPDATE for the session's dialect."""
    dialect = session.get_bind().dialect.name
    insert = sqlite_insert if dialect == "sqlite" else pg_insert
    stmt = insert(model).values(**values)
    return stmt.on_conflict_do_update(
        index_elements=conflict_keys,
        set_={key: getattr(stmt.excluded, key) for key in update_keys},
    )


class SqlProgressRepository:
    """Progress rows in the relational store.

    Each call opens its own short-lived session so a long-lived progress
    store can hold the repository without pinning a connection.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession], feed: ChangeFeed | None = None) -> None:
        self.session_maker = session_maker
        self.feed = feed

    async def fetch_learning(self, user_id: UUID) -> list[LearningProgressRecord]:
        try:
            async with self.session_maker() as session:
                result = await session.execute(select(LearningProgress).where(LearningProgress.user_id == user_id))
                return [LearningProgressRecord.model_validate(row) for row in result.scalars()]
        except SQLAlchemyError as e:
            raise RemoteStoreError("select", LearningProgress.__tablename__, e) from e

    async def fetch_projects(self, user_id: UUID) -> list[ProjectProgressRecord]:
        try:
            async with self.session_maker() as session:
                result = await session.execute(select(ProjectProgress).where(ProjectProgress.user_id == user_id))
                return [ProjectProgressRecord.model_validate(row) for row in result.scalars()]
        except SQLAlchemyError as e:
            raise RemoteStoreError("select", ProjectProgress.__tablename__, e) from e

    async def upsert_learning(self, record: LearningProgressRecord) -> None:
        now = datetime.now(UTC)
        values = {
            "id": record.id or uuid4(),
            "user_id": record.user_id,
            "module_id": record.module_id,
            "topic_id": record.topic_id,
            "status": record.status.value,
            "notes": record.notes,
            "completed_at": record.completed_at,
            "created_at": record.created_at or now,
            "updated_at": now,
        }
        await self._upsert(
            LearningProgress,
            values,
            conflict_keys=["user_id", "module_id", "topic_id"],
            update_keys=["status", "notes", "completed_at", "updated_at"],
            user_id=record.user_id,
            key=f"{record.module_id}/{record.topic_id}",
        )

    async def upsert_project(self, record: ProjectProgressRecord) -> None:
        now = datetime.now(UTC)
        values = {
            "id": record.id or uuid4(),
            "user_id": record.user_id,
            "project_id": record.project_id,
            "status": record.status.value,
            "github_url": record.github_url,
            "demo_url": record.demo_url,
            "notes": record.notes,
            "completed_at": record.completed_at,
            "created_at": record.created_at or now,
            "updated_at": now,
        }
        await self._upsert(
            ProjectProgress,
            values,
            conflict_keys=["user_id", "project_id"],
            update_keys=["status", "github_url", "demo_url", "notes", "completed_at", "updated_at"],
            user_id=record.user_id,
            key=record.project_id,
        )

    async def _upsert(
        self,
        model: type[LearningProgress] | type[ProjectProgress],
        values: dict,
        conflict_keys: list[str],
        update_keys: list[str],
        user_id: UUID,
        key: str,
    ) -> None:
        table = model.__tablename__
        try:
            async with self.session_maker() as session:
                await session.execute(upsert_statement(session, model, values, conflict_keys, update_keys))
                await session.commit()
        except SQLAlchemyError as e:
            raise RemoteStoreError("upsert", table, e) from e

        logger.debug("Upserted %s %s for user %s", table, key, user_id)
        if self.feed is not None:
            await self.feed.publish(ChangeEvent(table=table, user_id=user_id, event_type="UPDATE", key=key))
