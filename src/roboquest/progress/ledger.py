"""Progress ledger: reads, completions and logins for a single learner's record.

Each write runs :func:`roboquest.progress.reducer.apply_event` inside
:meth:`KeyValueStore.transact`, so the reducer always sees the latest stored
revision and the ``leaderboard:xp`` score is updated in the same MULTI block.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

import structlog
from redis.asyncio.client import Pipeline

from roboquest.catalog.models import ContentItem, Course, PracticeProject
from roboquest.errors import NotFoundError
from roboquest.progress.models import UserProgress, UserSettings
from roboquest.progress.reducer import (
    DEFAULT_POLICY,
    DailyGoalChanged,
    DailyRolledOver,
    LoginRecorded,
    ModuleCompleted,
    Policy,
    ProgressEvent,
    ProjectCompleted,
    Transition,
    TutorialCompleted,
    apply_event,
)
from roboquest.storage.kv_store import KeyValueStore, Mutation

logger = structlog.get_logger()

LEADERBOARD_KEY = "leaderboard:xp"


def progress_key(user_id: str) -> str:
    return f"user:{user_id}:progress"


def settings_key(user_id: str) -> str:
    return f"user:{user_id}:settings"


class ProgressLedger:
    """Owns ``user:{id}:progress`` and ``user:{id}:settings``."""

    def __init__(
        self,
        store: KeyValueStore,
        policy: Policy = DEFAULT_POLICY,
        default_daily_goal: int = 2,
        default_tutorial_xp: int = 50,
    ) -> None:
        self.store = store
        self.policy = policy
        self.default_daily_goal = default_daily_goal
        self.default_tutorial_xp = default_tutorial_xp

    # --- Read path ---

    async def get_or_init_progress(self, user_id: str, today: date) -> tuple[UserProgress, UserSettings]:
        """Return the learner's progress and settings.

        A missing progress record yields a zero-valued default that is not
        stored. A stored record last active on another day gets its daily
        counter reset, and the reset is persisted.
        """
        raw = await self.store.get(progress_key(user_id))
        if raw is None:
            progress = UserProgress.initial(today, self.default_daily_goal)
        else:
            progress = UserProgress.model_validate(raw)
            if progress.last_active_date != today:
                transition = await self._apply(user_id, DailyRolledOver(), today)
                progress = transition.progress
                if transition.changed:
                    logger.info("daily_progress_rolled_over", user_id=user_id, today=today.isoformat())

        return progress, await self.get_settings(user_id)

    async def get_settings(self, user_id: str) -> UserSettings:
        raw = await self.store.get(settings_key(user_id))
        return UserSettings.model_validate(raw) if raw is not None else UserSettings()

    # --- Writes ---

    async def initialize(self, user_id: str, today: date) -> UserProgress:
        """Create the signup-time progress and settings records."""
        now = datetime.now(timezone.utc)
        progress = UserProgress.initial(today, self.default_daily_goal, created_at=now)

        def create(_current: dict | None) -> Mutation[UserProgress]:
            return Mutation(
                value=progress.model_dump(mode="json"),
                result=progress,
                side_effects=[_leaderboard_score(user_id, progress.total_xp)],
            )

        await self.store.transact(progress_key(user_id), create)
        await self.store.set(settings_key(user_id), UserSettings().model_dump(mode="json"))
        return progress

    async def complete_tutorial(self, user_id: str, tutorial: ContentItem, today: date) -> Transition:
        """Award the tutorial's XP once; repeats report ``already_completed``."""
        xp_reward = tutorial.xp_reward or self.default_tutorial_xp
        transition = await self._apply(user_id, TutorialCompleted(tutorial.id, xp_reward), today)
        if transition.changed:
            logger.info(
                "tutorial_completed",
                user_id=user_id,
                tutorial_id=tutorial.id,
                xp_awarded=transition.xp_awarded,
                total_xp=transition.progress.total_xp,
                level=transition.progress.level,
            )
        return transition

    async def complete_project(
        self,
        user_id: str,
        project: PracticeProject,
        today: date,
        time_spent: int | None = None,
    ) -> Transition:
        """Record a built project. Awards no XP."""
        transition = await self._apply(user_id, ProjectCompleted(project.id), today)
        if transition.changed:
            logger.info("project_completed", user_id=user_id, project_id=project.id, time_spent=time_spent)
        return transition

    async def complete_course_module(
        self,
        user_id: str,
        course: Course,
        module_id: int,
        today: date,
    ) -> Transition:
        """Mark one module done; the course completes once every module is done."""
        if not course.has_module(module_id):
            raise NotFoundError("Module not found")

        event = ModuleCompleted(course.id, module_id, course.module_count)
        transition = await self._apply(user_id, event, today)
        if transition.changed:
            logger.info("module_completed", user_id=user_id, course_id=course.id, module_id=module_id)
            if transition.course_completed:
                logger.info("course_completed", user_id=user_id, course_id=course.id)
        return transition

    async def record_login(self, user_id: str, today: date) -> Transition:
        """Apply the daily streak rule for a login on ``today``."""
        return await self._apply(user_id, LoginRecorded(), today)

    async def set_daily_goal(self, user_id: str, daily_goal: int, today: date) -> Transition:
        return await self._apply(user_id, DailyGoalChanged(daily_goal), today)

    async def _apply(self, user_id: str, event: ProgressEvent, today: date) -> Transition:
        def mutate(current: dict | None) -> Mutation[Transition]:
            if current is None:
                progress = UserProgress.initial(
                    today, self.default_daily_goal, created_at=datetime.now(timezone.utc)
                )
            else:
                progress = UserProgress.model_validate(current)

            transition = apply_event(progress, event, today, self.policy)
            if not transition.changed:
                return Mutation(value=None, result=transition)
            return Mutation(
                value=transition.progress.model_dump(mode="json"),
                result=transition,
                side_effects=[_leaderboard_score(user_id, transition.progress.total_xp)],
            )

        return await self.store.transact(progress_key(user_id), mutate)


def _leaderboard_score(user_id: str, total_xp: int):
    def effect(pipe: Pipeline) -> None:
        pipe.zadd(LEADERBOARD_KEY, {user_id: total_xp})

    return effect

