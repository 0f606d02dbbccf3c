"""Request/response schemas for progress endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from roboquest.auth.schemas import UserResponse
from roboquest.progress.achievements import Achievement
from roboquest.progress.models import UserProgress, UserSettings


class ProgressResponse(BaseModel):
    user: UserResponse
    progress: UserProgress
    settings: UserSettings


class ProjectCompleteRequest(BaseModel):
    """Accepted for telemetry only; nothing here is stored."""

    time_spent: int | None = Field(None, ge=0)
    user_code: str | None = Field(None, max_length=100_000)


class CompletionResponse(BaseModel):
    message: str
    progress: UserProgress
    already_completed: bool = False
    xp_earned: int = 0


class ProjectCompletionResponse(CompletionResponse):
    time_spent: int | None = None


class ModuleCompletionResponse(CompletionResponse):
    course_completed: bool = False


class AchievementsResponse(BaseModel):
    achievements: list[Achievement]
    earned: int
    total: int
