"""Database models for topic and project progress."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from web3journey.database.base import Base


def _utcnow() -> datetime:
    return datetime.now(UTC)


class LearningProgress(Base):
    """A user's status on one topic of one module."""

    __tablename__ = "learning_progress"
    __table_args__ = (UniqueConstraint("user_id", "module_id", "topic_id", name="uq_learning_progress_user_topic"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    module_id: Mapped[str] = mapped_column(String(100), nullable=False)
    topic_id: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="not_started")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    def __repr__(self) -> str:
        return (
            f"<LearningProgress(user_id={self.user_id}, module_id={self.module_id}, "
            f"topic_id={self.topic_id}, status={self.status})>"
        )


class ProjectProgress(Base):
    """A user's status on one hands-on project."""

    __tablename__ = "project_progress"
    __table_args__ = (UniqueConstraint("user_id", "project_id", name="uq_project_progress_user_project"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    project_id: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="not_started")
    github_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    demo_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    def __repr__(self) -> str:
        return f"<ProjectProgress(user_id={self.user_id}, project_id={self.project_id}, status={self.status})>"
