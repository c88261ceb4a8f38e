"""Consecutive-day learning streaks.

All functions work on calendar dates. ``today`` defaults to the local date
and can be passed explicitly so callers and tests control the clock.
"""

from dataclasses import dataclass
from datetime import date


def _today(today: date | None) -> date:
    return today if today is not None else date.today()


def is_new_day(last_date: date | None, today: date | None = None) -> bool:
    """True when there is no previous activity or it happened on another day."""
    return last_date is None or last_date != _today(today)


def should_continue_streak(last_date: date | None, today: date | None = None) -> bool:
    """True when the last activity was at most one day ago."""
    if last_date is None:
        return False
    return (_today(today) - last_date).days <= 1


@dataclass(frozen=True)
class StreakUpdate:
    current_streak: int
    longest_streak: int
    last_activity_date: date


def next_streak(
    current_streak: int,
    longest_streak: int,
    last_date: date | None,
    today: date | None = None,
) -> StreakUpdate | None:
    """Streak values after activity today, or None if today was already counted.

    A gap of two or more days restarts the streak at 1: the day of renewed
    activity counts.
    """
    today = _today(today)
    if not is_new_day(last_date, today):
        return None

    streak = current_streak + 1 if should_continue_streak(last_date, today) else 1
    return StreakUpdate(
        current_streak=streak,
        longest_streak=max(longest_streak, streak),
        last_activity_date=today,
    )
