"""Catalog records: tutorials and showcase videos, courses, practice projects."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, computed_field


class ContentKind(str, Enum):
    """Partition of the single content store."""

    TUTORIAL = "tutorial"
    SHOWCASE = "showcase"


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ContentItem(BaseModel):
    """A video tutorial or one of our own showcase projects."""

    id: str
    kind: ContentKind = ContentKind.TUTORIAL
    title: str
    description: str = ""
    type: str = "video"
    category: str = "general"
    difficulty: Difficulty = Difficulty.BEGINNER
    duration: str = ""
    youtube_id: str | None = None
    xp_reward: int = Field(50, ge=0)
    views: int = Field(0, ge=0)
    likes: int = Field(0, ge=0)
    uploaded_by: str | None = None
    uploaded_at: datetime
    updated_at: datetime | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_our_content(self) -> bool:
        return self.kind is ContentKind.SHOWCASE


class CourseModule(BaseModel):
    id: int = Field(..., ge=1)
    title: str
    type: str
    duration: str


class Course(BaseModel):
    id: str
    title: str
    description: str
    category: str
    difficulty: Difficulty
    estimated_hours: str
    module_count: int = Field(..., ge=1)
    external_url: str | None = None
    provider: str | None = None
    modules: list[CourseModule]

    def has_module(self, module_id: int) -> bool:
        return any(m.id == module_id for m in self.modules)


class ProjectTest(BaseModel):
    description: str
    input: str = ""
    expected_output: str


class PracticeProject(BaseModel):
    id: str
    title: str
    description: str
    category: str
    difficulty: Difficulty
    estimated_time: str
    xp_reward: int = 0
    type: str
    language: str | None = None
    source: str
    external_url: str | None = None
    youtube_id: str | None = None
    instructions: list[str] = []
    starting_code: str | None = None
    solution: str | None = None
    tests: list[ProjectTest] = []
