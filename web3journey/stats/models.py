"""Database model for per-user learning stats."""

from datetime import UTC, date, datetime
from uuid import UUID, uuid4

from sqlalchemy import JSON, Date, DateTime, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from web3journey.database.base import Base


def _utcnow() -> datetime:
    return datetime.now(UTC)


class UserStats(Base):
    """Streak, study time and unlocked achievements for one user."""

    __tablename__ = "user_stats"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, unique=True, index=True)
    current_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    longest_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_activity_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    total_learning_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    achievements: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )
