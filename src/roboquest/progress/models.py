"""Per-user progress and settings records."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field


class UserProgress(BaseModel):
    """Gamification state for a single learner.

    Sequences typed as ``list`` are logically sets: the reducer never appends an
    id that is already present.
    """

    level: int = Field(0, ge=0)
    total_xp: int = Field(0, ge=0)
    streak_days: int = Field(0, ge=0)
    last_login_date: date | None = None
    last_active_date: date | None = None
    login_dates: list[date] = []
    daily_goal: int = Field(2, ge=1)
    daily_progress: int = Field(0, ge=0)
    lessons_completed: int = Field(0, ge=0)
    projects_built: int = Field(0, ge=0)
    courses_completed: list[str] = []
    courses_in_progress: dict[str, list[int]] = {}
    completed_tutorials: list[str] = []
    completed_projects: list[str] = []
    achievements: list[str] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None
    revision: int = Field(0, ge=0)

    @classmethod
    def initial(cls, today: date, daily_goal: int = 2, created_at: datetime | None = None) -> UserProgress:
        """Zero-valued record as created at signup."""
        return cls(
            last_login_date=today,
            last_active_date=today,
            login_dates=[today],
            daily_goal=daily_goal,
            created_at=created_at,
        )


class UserSettings(BaseModel):
    language: str = "en"
    theme: str = "light"
    sound_effects: bool = True
    background_music: bool = False
    notifications: bool = True
    email_updates: bool = False
    parental_notifications: bool = True
    updated_at: datetime | None = None
