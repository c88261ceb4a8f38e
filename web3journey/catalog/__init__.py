"""Static curriculum: modules, topics, projects and achievements."""

from .achievements import ACHIEVEMENTS, get_achievement_by_id, get_locked_achievements, get_unlocked_achievements
from .catalog import Catalog, get_catalog
from .models import (
    Achievement,
    AchievementId,
    LearningModule,
    ModuleLevel,
    Project,
    ProjectDifficulty,
    Resource,
    Topic,
)
from .modules import LEARNING_MODULES
from .projects import DIFFICULTY_COLORS, DIFFICULTY_STARS, PROJECTS


__all__ = [
    "ACHIEVEMENTS",
    "DIFFICULTY_COLORS",
    "DIFFICULTY_STARS",
    "LEARNING_MODULES",
    "PROJECTS",
    "Achievement",
    "AchievementId",
    "Catalog",
    "LearningModule",
    "ModuleLevel",
    "Project",
    "ProjectDifficulty",
    "Resource",
    "Topic",
    "get_achievement_by_id",
    "get_catalog",
    "get_locked_achievements",
    "get_unlocked_achievements",
]
