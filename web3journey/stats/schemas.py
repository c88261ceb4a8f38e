"""Schemas for the stats API."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from web3journey.catalog import Achievement


class UserStatsRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: UUID
    current_streak: int = 0
    longest_streak: int = 0
    last_activity_date: date | None = None
    total_learning_minutes: int = 0
    achievements: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class StatsResponse(BaseModel):
    current_streak: int = 0
    longest_streak: int = 0
    last_activity_date: date | None = None
    total_learning_minutes: int = 0
    learning_time: str = "0m"
    achievements: list[str] = Field(default_factory=list)


class ActivityResponse(BaseModel):
    updated: bool
    stats: StatsResponse


class LearningMinutesRequest(BaseModel):
    minutes: int = Field(..., gt=0, le=24 * 60)


class AchievementCheckResponse(BaseModel):
    new_achievements: list[str]
    achievements: list[str]


class AchievementListResponse(BaseModel):
    unlocked: list[Achievement]
    locked: list[Achievement]
