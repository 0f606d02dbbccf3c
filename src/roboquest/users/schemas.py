"""Request/response schemas for profile and settings endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from roboquest.auth.schemas import UserResponse
from roboquest.progress.models import UserSettings


class SettingsUpdateRequest(BaseModel):
    """Partial settings update. ``daily_goal`` is stored on the progress record."""

    language: str | None = Field(None, min_length=2, max_length=8)
    theme: str | None = Field(None, max_length=16)
    sound_effects: bool | None = None
    background_music: bool | None = None
    notifications: bool | None = None
    email_updates: bool | None = None
    parental_notifications: bool | None = None
    daily_goal: int | None = Field(None, ge=1, le=50)


class SettingsResponse(BaseModel):
    message: str = "Settings updated"
    settings: UserSettings
    daily_goal: int | None = None


class ProfileResponse(BaseModel):
    message: str = "Profile updated"
    user: UserResponse
