"""Pure gamification rules: level from XP, login streaks, daily rollover.

Days are calendar ``date`` values; no timezone normalization is applied.
"""

from __future__ import annotations

from datetime import date, timedelta

from roboquest.progress.models import UserProgress

XP_PER_LEVEL = 200
LOGIN_HISTORY_DAYS = 30


def level_from_xp(total_xp: int, xp_per_level: int = XP_PER_LEVEL) -> int:
    """floor(total_xp / xp_per_level) + 1.

    >>> level_from_xp(199), level_from_xp(200), level_from_xp(399)
    (1, 2, 2)
    """
    return max(total_xp, 0) // xp_per_level + 1


def roll_over_daily(progress: UserProgress, today: date) -> UserProgress:
    """Reset ``daily_progress`` when the record was last active on another day."""
    if progress.last_active_date == today:
        return progress
    return progress.model_copy(update={"daily_progress": 0, "last_active_date": today})


def update_streak(
    progress: UserProgress,
    today: date,
    history_days: int = LOGIN_HISTORY_DAYS,
) -> UserProgress:
    """Apply a login on ``today`` to the streak counters.

    A second login on the same day changes nothing. A login the day after the
    last one extends the streak; any other gap (or a first login) restarts it at 1.
    """
    if today in progress.login_dates:
        return progress

    if progress.last_login_date == today - timedelta(days=1):
        streak = progress.streak_days + 1
    elif progress.last_login_date != today:
        streak = 1
    else:
        streak = progress.streak_days

    rolled = roll_over_daily(progress, today)
    return rolled.model_copy(
        update={
            "streak_days": streak,
            "login_dates": [*progress.login_dates, today][-history_days:],
            "last_login_date": today,
            "last_active_date": today,
        }
    )
