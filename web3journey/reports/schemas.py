"""Data behind the learning report."""

from datetime import datetime

from pydantic import BaseModel, Field

from web3journey.i18n import Locale


class ModuleRow(BaseModel):
    module_id: str
    name: str
    level: str
    completed_topics: int
    total_topics: int
    percentage: int
    status: str


class ProjectRow(BaseModel):
    project_id: str
    name: str
    difficulty: str
    status: str


class AchievementRow(BaseModel):
    achievement_id: str
    icon: str
    name: str
    description: str


class LearningReport(BaseModel):
    """Everything the PDF shows, already localized."""

    locale: Locale
    user_name: str
    generated_at: datetime
    total_progress: int = Field(..., ge=0, le=100)
    completed_topics: int
    total_topics: int
    completed_modules: int
    total_modules: int
    completed_projects: int
    total_projects: int
    current_streak: int = 0
    longest_streak: int = 0
    modules: list[ModuleRow]
    projects: list[ProjectRow]
    achievements: list[AchievementRow] = Field(default_factory=list)
