"""Learning streaks, study time and achievement unlocking."""

from .achievements import RULES, AchievementInputs, evaluate_achievements
from .service import StatsService
from .streak import StreakUpdate, is_new_day, next_streak, should_continue_streak


__all__ = [
    "RULES",
    "AchievementInputs",
    "StatsService",
    "StreakUpdate",
    "evaluate_achievements",
    "is_new_day",
    "next_streak",
    "should_continue_streak",
]
