"""Consecutive-day streak rules."""

from datetime import date

from web3journey.stats.streak import is_new_day, next_streak, should_continue_streak


TODAY = date(2026, 5, 10)


class TestDayChecks:
    def test_is_new_day(self) -> None:
        assert is_new_day(None, TODAY)
        assert is_new_day(date(2026, 5, 9), TODAY)
        assert not is_new_day(TODAY, TODAY)

    def test_should_continue_streak(self) -> None:
        assert not should_continue_streak(None, TODAY)
        assert should_continue_streak(TODAY, TODAY)
        assert should_continue_streak(date(2026, 5, 9), TODAY)
        assert not should_continue_streak(date(2026, 5, 8), TODAY)

    def test_month_boundary(self) -> None:
        assert should_continue_streak(date(2026, 4, 30), date(2026, 5, 1))


class TestNextStreak:
    def test_first_activity_starts_at_one(self) -> None:
        update = next_streak(0, 0, None, TODAY)
        assert (update.current_streak, update.longest_streak, update.last_activity_date) == (1, 1, TODAY)

    def test_consecutive_day_increments(self) -> None:
        update = next_streak(4, 6, date(2026, 5, 9), TODAY)
        assert update.current_streak == 5
        assert update.longest_streak == 6

    def test_longest_follows_current(self) -> None:
        update = next_streak(6, 6, date(2026, 5, 9), TODAY)
        assert update.longest_streak == 7

    def test_gap_restarts_at_one(self) -> None:
        update = next_streak(12, 12, date(2026, 5, 7), TODAY)
        assert update.current_streak == 1
        assert update.longest_streak == 12

    def test_same_day_is_counted_once(self) -> None:
        assert next_streak(3, 3, TODAY, TODAY) is None
