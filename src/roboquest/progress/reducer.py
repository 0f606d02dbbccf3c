"""Progress reducer: ``apply_event(progress, event, today) -> Transition``.

Every ledger mutation is expressed as an event applied to the current record.
The function is pure, so the same code runs server-side inside an optimistic
store transaction and client-side against offline state.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Union

from roboquest.progress.models import UserProgress
from roboquest.progress.rules import (
    LOGIN_HISTORY_DAYS,
    XP_PER_LEVEL,
    level_from_xp,
    roll_over_daily,
    update_streak,
)


@dataclass(frozen=True)
class TutorialCompleted:
    tutorial_id: str
    xp_reward: int


@dataclass(frozen=True)
class ProjectCompleted:
    project_id: str


@dataclass(frozen=True)
class ModuleCompleted:
    course_id: str
    module_id: int
    module_count: int


@dataclass(frozen=True)
class LoginRecorded:
    pass


@dataclass(frozen=True)
class DailyRolledOver:
    pass


@dataclass(frozen=True)
class DailyGoalChanged:
    daily_goal: int


ProgressEvent = Union[
    TutorialCompleted,
    ProjectCompleted,
    ModuleCompleted,
    LoginRecorded,
    DailyRolledOver,
    DailyGoalChanged,
]


@dataclass(frozen=True)
class Transition:
    progress: UserProgress
    changed: bool = False
    xp_awarded: int = 0
    course_completed: bool = False
    already_completed: bool = False


@dataclass(frozen=True)
class Policy:
    xp_per_level: int = XP_PER_LEVEL
    login_history_days: int = LOGIN_HISTORY_DAYS


DEFAULT_POLICY = Policy()


def apply_event(
    progress: UserProgress,
    event: ProgressEvent,
    today: date,
    policy: Policy = DEFAULT_POLICY,
    now: datetime | None = None,
) -> Transition:
    """Apply ``event`` to ``progress`` as observed on ``today``.

    A changing transition bumps ``revision`` and stamps ``updated_at``; a
    no-op returns the input record untouched.
    """
    transition = _reduce(progress, event, today, policy)
    if not transition.changed:
        return transition

    stamped = transition.progress.model_copy(
        update={
            "revision": progress.revision + 1,
            "updated_at": now or datetime.now(timezone.utc),
        }
    )
    return Transition(
        progress=stamped,
        changed=True,
        xp_awarded=transition.xp_awarded,
        course_completed=transition.course_completed,
        already_completed=transition.already_completed,
    )


def _reduce(progress: UserProgress, event: ProgressEvent, today: date, policy: Policy) -> Transition:
    if isinstance(event, TutorialCompleted):
        if event.tutorial_id in progress.completed_tutorials:
            return Transition(progress, already_completed=True)
        rolled = roll_over_daily(progress, today)
        total_xp = rolled.total_xp + event.xp_reward
        updated = rolled.model_copy(
            update={
                "total_xp": total_xp,
                "level": level_from_xp(total_xp, policy.xp_per_level),
                "lessons_completed": rolled.lessons_completed + 1,
                "daily_progress": rolled.daily_progress + 1,
                "completed_tutorials": [*rolled.completed_tutorials, event.tutorial_id],
            }
        )
        return Transition(updated, changed=True, xp_awarded=event.xp_reward)

    if isinstance(event, ProjectCompleted):
        if event.project_id in progress.completed_projects:
            return Transition(progress, already_completed=True)
        rolled = roll_over_daily(progress, today)
        updated = rolled.model_copy(
            update={
                "projects_built": rolled.projects_built + 1,
                "completed_projects": [*rolled.completed_projects, event.project_id],
            }
        )
        return Transition(updated, changed=True)

    if isinstance(event, ModuleCompleted):
        done = progress.courses_in_progress.get(event.course_id, [])
        if event.module_id in done:
            return Transition(
                progress,
                already_completed=True,
                course_completed=event.course_id in progress.courses_completed,
            )
        modules = [*done, event.module_id]
        course_completed = len(modules) >= event.module_count
        courses_completed = progress.courses_completed
        if course_completed and event.course_id not in courses_completed:
            courses_completed = [*courses_completed, event.course_id]
        rolled = roll_over_daily(progress, today)
        updated = rolled.model_copy(
            update={
                "courses_in_progress": {**rolled.courses_in_progress, event.course_id: modules},
                "courses_completed": courses_completed,
            }
        )
        return Transition(updated, changed=True, course_completed=course_completed)

    if isinstance(event, LoginRecorded):
        updated = update_streak(progress, today, policy.login_history_days)
        return Transition(updated, changed=updated is not progress)

    if isinstance(event, DailyRolledOver):
        updated = roll_over_daily(progress, today)
        return Transition(updated, changed=updated is not progress)

    if isinstance(event, DailyGoalChanged):
        if event.daily_goal == progress.daily_goal:
            return Transition(progress)
        return Transition(progress.model_copy(update={"daily_goal": event.daily_goal}), changed=True)

    msg = f"Unknown progress event: {event!r}"
    raise TypeError(msg)
