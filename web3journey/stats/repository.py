"""SQLAlchemy-backed stats repository."""

import logging
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from web3journey.exceptions import RemoteStoreError
from web3journey.progress.realtime import ChangeEvent, ChangeFeed

from .models import UserStats
from .schemas import UserStatsRecord


logger = logging.getLogger(__name__)

TABLE = UserStats.__tablename__


class SqlStatsRepository:
    def __init__(self, session_maker: async_sessionmaker[AsyncSession], feed: ChangeFeed | None = None) -> None:
        self.session_maker = session_maker
        self.feed = feed

    async def get(self, user_id: UUID) -> UserStatsRecord | None:
        try:
            async with self.session_maker() as session:
                result = await session.execute(select(UserStats).where(UserStats.user_id == user_id))
                row = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise RemoteStoreError("select", TABLE, e) from e
        return UserStatsRecord.model_validate(row) if row else None

    async def create(self, user_id: UUID) -> UserStatsRecord:
        now = datetime.now(UTC)
        values = {
            "id": uuid4(),
            "user_id": user_id,
            "current_streak": 0,
            "longest_streak": 0,
            "last_activity_date": None,
            "total_learning_minutes": 0,
            "achievements": [],
            "created_at": now,
            "updated_at": now,
        }
        try:
            async with self.session_maker() as session:
                insert = sqlite_insert if session.get_bind().dialect.name == "sqlite" else pg_insert
                # Two tabs may race to create the row; the loser keeps the winner's
                stmt = insert(UserStats).values(**values).on_conflict_do_nothing(index_elements=["user_id"])
                await session.execute(stmt)
                await session.commit()
                result = await session.execute(select(UserStats).where(UserStats.user_id == user_id))
                row = result.scalar_one()
        except SQLAlchemyError as e:
            raise RemoteStoreError("insert", TABLE, e) from e

        logger.info("Created stats row for user %s", user_id)
        return UserStatsRecord.model_validate(row)

    async def update(self, user_id: UUID, values: dict[str, Any]) -> None:
        try:
            async with self.session_maker() as session:
                result = await session.execute(
                    update(UserStats)
                    .where(UserStats.user_id == user_id)
                    .values(**values, updated_at=datetime.now(UTC))
                )
                await session.commit()
        except SQLAlchemyError as e:
            raise RemoteStoreError("update", TABLE, e) from e

        if result.rowcount == 0:
            raise RemoteStoreError("update", TABLE, LookupError(f"no stats row for user {user_id}"))

        if self.feed is not None:
            await self.feed.publish(ChangeEvent(table=TABLE, user_id=user_id, event_type="UPDATE"))
