"""Request/response schemas for catalog endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from roboquest.catalog.models import ContentItem, Course, Difficulty, PracticeProject


class ContentUploadRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=5000)
    type: str = "video"
    category: str = "general"
    difficulty: Difficulty = Difficulty.BEGINNER
    duration: str = ""
    youtube_id: str | None = Field(None, max_length=32)
    xp_reward: int | None = Field(None, ge=0)
    is_our_content: bool = False


class ContentUpdateRequest(BaseModel):
    """Partial update; fields left out or sent as null keep their stored value."""

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    type: str | None = None
    category: str | None = None
    difficulty: Difficulty | None = None
    duration: str | None = None
    youtube_id: str | None = Field(None, max_length=32)
    xp_reward: int | None = Field(None, ge=0)


class ContentResponse(BaseModel):
    message: str
    content: ContentItem


class ContentListResponse(BaseModel):
    content: list[ContentItem]


class CourseListResponse(BaseModel):
    courses: list[Course]


class CourseResponse(BaseModel):
    course: Course


class ProjectListResponse(BaseModel):
    projects: list[PracticeProject]


class ProjectResponse(BaseModel):
    project: PracticeProject


class ViewRecordedResponse(BaseModel):
    message: str = "View recorded"
    views: int
