"""Gamification rule tests: level formula, login streaks, daily rollover."""

from datetime import date, timedelta

from roboquest.progress.models import UserProgress
from roboquest.progress.rules import level_from_xp, roll_over_daily, update_streak

D = date(2025, 3, 10)


class TestLevelFromXP:
    """floor(total_xp / 200) + 1."""

    def test_zero_xp_is_level_one(self):
        assert level_from_xp(0) == 1

    def test_just_below_first_threshold(self):
        assert level_from_xp(199) == 1

    def test_exact_threshold(self):
        assert level_from_xp(200) == 2

    def test_just_below_second_threshold(self):
        assert level_from_xp(399) == 2

    def test_large_xp(self):
        assert level_from_xp(2000) == 11

    def test_custom_divisor(self):
        assert level_from_xp(250, xp_per_level=100) == 3


class TestUpdateStreak:
    """Streak accrues once per calendar day of login."""

    def test_consecutive_day_extends_streak(self):
        progress = UserProgress(streak_days=3, last_login_date=D, login_dates=[D])
        updated = update_streak(progress, D + timedelta(days=1))
        assert updated.streak_days == 4
        assert updated.last_login_date == D + timedelta(days=1)

    def test_gap_resets_streak_to_one(self):
        progress = UserProgress(streak_days=5, last_login_date=D, login_dates=[D])
        updated = update_streak(progress, D + timedelta(days=3))
        assert updated.streak_days == 1

    def test_same_day_login_is_noop(self):
        progress = UserProgress(streak_days=2, last_login_date=D, login_dates=[D])
        assert update_streak(progress, D) is progress

    def test_first_login_starts_streak(self):
        updated = update_streak(UserProgress(), D)
        assert updated.streak_days == 1
        assert updated.login_dates == [D]

    def test_signup_day_login_keeps_zero_streak(self):
        """Signup records today's login, so logging in the same day changes nothing."""
        progress = UserProgress.initial(D)
        assert update_streak(progress, D).streak_days == 0

    def test_login_history_capped_at_thirty(self):
        dates = [D - timedelta(days=i) for i in range(30, 0, -1)]
        progress = UserProgress(streak_days=30, last_login_date=dates[-1], login_dates=dates)
        updated = update_streak(progress, D)
        assert len(updated.login_dates) == 30
        assert updated.login_dates[-1] == D
        assert dates[0] not in updated.login_dates
        assert updated.streak_days == 31

    def test_login_also_rolls_daily_progress(self):
        progress = UserProgress(last_login_date=D, last_active_date=D, login_dates=[D], daily_progress=2)
        updated = update_streak(progress, D + timedelta(days=1))
        assert updated.daily_progress == 0
        assert updated.last_active_date == D + timedelta(days=1)

    def test_input_not_mutated(self):
        progress = UserProgress(streak_days=1, last_login_date=D, login_dates=[D])
        update_streak(progress, D + timedelta(days=1))
        assert progress.streak_days == 1
        assert progress.login_dates == [D]


class TestRollOverDaily:
    def test_new_day_resets_counter(self):
        progress = UserProgress(last_active_date=D - timedelta(days=1), daily_progress=2)
        rolled = roll_over_daily(progress, D)
        assert rolled.daily_progress == 0
        assert rolled.last_active_date == D

    def test_same_day_keeps_counter(self):
        progress = UserProgress(last_active_date=D, daily_progress=2)
        assert roll_over_daily(progress, D) is progress
