"""Schemas for progress tracking."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ProgressStatus(str, Enum):
    """Status of a topic or project in the account-backed progress model."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class LearningProgressRecord(BaseModel):
    """One row of learning_progress: a user's status on a single topic."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID | None = None
    user_id: UUID
    module_id: str
    topic_id: str
    status: ProgressStatus
    notes: str | None = None
    completed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProjectProgressRecord(BaseModel):
    """One row of project_progress: a user's status on a single project."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID | None = None
    user_id: UUID
    project_id: str
    status: ProgressStatus
    github_url: str | None = None
    demo_url: str | None = None
    notes: str | None = None
    completed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TopicStatusUpdate(BaseModel):
    """Request body for setting a topic status."""

    status: ProgressStatus
    notes: str | None = Field(None, max_length=10000)


class ProjectStatusUpdate(BaseModel):
    """Request body for setting a project status."""

    status: ProgressStatus
    github_url: str | None = Field(None, max_length=2048)
    demo_url: str | None = Field(None, max_length=2048)
    notes: str | None = Field(None, max_length=10000)


class SyncResult(BaseModel):
    """Outcome of the remote write behind an optimistic update.

    The local value is applied regardless of ``synced``; ``error`` carries the
    remote failure message when the write did not go through.
    """

    synced: bool
    skipped: bool = False
    error: str | None = None


class TopicStatusResponse(BaseModel):
    module_id: str
    topic_id: str
    status: ProgressStatus
    module_percentage: int
    sync: SyncResult


class ProjectStatusResponse(BaseModel):
    project_id: str
    status: ProgressStatus
    sync: SyncResult


class ModuleProgressResponse(BaseModel):
    """Per-topic statuses of one module plus its completion percentage."""

    module_id: str
    percentage: int
    completed: bool
    topics: dict[str, ProgressStatus]


class ProgressSnapshot(BaseModel):
    """Everything the progress screens need in one payload."""

    learning: list[LearningProgressRecord] = Field(default_factory=list)
    projects: list[ProjectProgressRecord] = Field(default_factory=list)
    course_percentage: int = 0
    level_percentages: dict[str, int] = Field(default_factory=dict)
    module_percentages: dict[str, int] = Field(default_factory=dict)
    total_completed_topics: int = 0
    completed_module_ids: list[str] = Field(default_factory=list)
    completed_project_ids: list[str] = Field(default_factory=list)
    sync_errors: list[str] = Field(default_factory=list)


class LocalModuleStatusUpdate(BaseModel):
    """Module status for the no-account cache; accepts ``mastered``."""

    status: str = Field(..., pattern="^(not_started|in_progress|completed|mastered)$")


class LearningRecordCreate(BaseModel):
    module_id: str
    duration: int = Field(..., ge=0, le=24 * 60, description="Minutes studied")


class SkillUpdate(BaseModel):
    value: int


class LocalProgressSummary(BaseModel):
    """The no-account cache plus the aggregates computed from it."""

    state: dict
    course_percentage: int
    overall_progress: int
    module_percentages: dict[str, int]
    completed_module_ids: list[str]
    learning_time: str
