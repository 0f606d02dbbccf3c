"""Achievement badges, recomputed from progress counters on every read.

Nothing here is persisted: ``UserProgress.achievements`` keeps its place in the
record shape but the server never writes to it.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from pydantic import BaseModel

from roboquest.progress.models import UserProgress


@dataclass(frozen=True)
class AchievementDefinition:
    id: str
    title: str
    description: str
    category: str
    requirement: int
    metric: Callable[[UserProgress], int]


ACHIEVEMENTS: list[AchievementDefinition] = [
    # Learning
    AchievementDefinition(
        "first_lesson", "Getting Started", "Complete your first lesson", "learning", 1,
        lambda p: p.lessons_completed,
    ),
    AchievementDefinition(
        "lesson_master", "Dedicated Learner", "Complete 10 lessons", "learning", 10,
        lambda p: p.lessons_completed,
    ),
    AchievementDefinition(
        "lesson_expert", "Learning Expert", "Complete 50 lessons", "learning", 50,
        lambda p: p.lessons_completed,
    ),
    # Milestones
    AchievementDefinition(
        "first_project", "Builder", "Complete your first project", "milestone", 1,
        lambda p: p.projects_built,
    ),
    AchievementDefinition(
        "first_course", "Course Master", "Complete your first full course", "milestone", 1,
        lambda p: len(p.courses_completed),
    ),
    AchievementDefinition(
        "level_up", "Rising Star", "Reach Level 5", "milestone", 5,
        lambda p: p.level,
    ),
    AchievementDefinition(
        "xp_collector", "XP Collector", "Earn 500 XP", "milestone", 500,
        lambda p: p.total_xp,
    ),
    AchievementDefinition(
        "xp_master", "XP Master", "Earn 2000 XP", "milestone", 2000,
        lambda p: p.total_xp,
    ),
    # Streaks
    AchievementDefinition(
        "week_streak", "Consistent Learner", "Maintain a 7-day learning streak", "streak", 7,
        lambda p: p.streak_days,
    ),
    AchievementDefinition(
        "month_streak", "Dedication Master", "Maintain a 30-day learning streak", "streak", 30,
        lambda p: p.streak_days,
    ),
]


class Achievement(BaseModel):
    id: str
    title: str
    description: str
    category: str
    requirement: int
    progress: int
    earned: bool


def evaluate_achievements(progress: UserProgress) -> list[Achievement]:
    """Badge status for every definition, progress capped at the requirement."""
    result = []
    for definition in ACHIEVEMENTS:
        value = definition.metric(progress)
        result.append(
            Achievement(
                id=definition.id,
                title=definition.title,
                description=definition.description,
                category=definition.category,
                requirement=definition.requirement,
                progress=min(value, definition.requirement),
                earned=value >= definition.requirement,
            )
        )
    return result
