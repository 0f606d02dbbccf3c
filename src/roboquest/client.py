"""Offline-capable progress client.

``ProgressClient`` talks to the progress endpoints over httpx. Reads never
raise: when the backend cannot be reached (or answers with an error), the
client installs zero-valued progress and settings and flags itself offline.
Completions made while offline are applied to local state with the same
reducer the server uses, and are not persisted.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from roboquest.middleware.request_id import CLIENT_HEADER
from roboquest.progress.models import UserProgress, UserSettings
from roboquest.progress.reducer import (
    DEFAULT_POLICY,
    ModuleCompleted,
    Policy,
    ProgressEvent,
    ProjectCompleted,
    Transition,
    TutorialCompleted,
    apply_event,
)

logger = structlog.get_logger()

API_PREFIX = "/api/v1"
CLIENT_NAME = "progress-client"


class ProgressClient:
    """Learner-side view of the progress ledger."""

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
        policy: Policy = DEFAULT_POLICY,
        today: Callable[[], date] = date.today,
    ) -> None:
        headers = {CLIENT_HEADER: CLIENT_NAME}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._http = httpx.AsyncClient(base_url=base_url, headers=headers, transport=transport, timeout=timeout)
        self._policy = policy
        self._today = today

        self.progress: UserProgress | None = None
        self.settings: UserSettings | None = None
        self.user: dict[str, Any] | None = None
        self.is_offline = False
        self.error: str | None = None

    async def __aenter__(self) -> ProgressClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # --- Read path ---

    async def refresh(self) -> UserProgress:
        """Fetch progress and settings. Falls back to defaults instead of raising."""
        try:
            response = await self._http.get(f"{API_PREFIX}/user/progress")
            response.raise_for_status()
            payload = response.json()
            progress = UserProgress.model_validate(payload["progress"])
            settings = UserSettings.model_validate(payload.get("settings") or {})
        except (httpx.HTTPError, ValueError, KeyError, ValidationError) as exc:
            self._go_offline(exc, defaults=True)
            return self.progress  # type: ignore[return-value]

        self.progress = progress
        self.settings = settings
        self.user = payload.get("user")
        self.is_offline = False
        self.error = None
        return progress

    # --- Completions ---

    async def complete_tutorial(self, tutorial_id: str, xp_reward: int = 50) -> Transition:
        """``xp_reward`` is only used when the completion is applied offline."""
        return await self._complete(
            f"{API_PREFIX}/tutorial/{tutorial_id}/complete",
            None,
            TutorialCompleted(tutorial_id, xp_reward),
        )

    async def complete_project(
        self,
        project_id: str,
        time_spent: int | None = None,
        user_code: str | None = None,
    ) -> Transition:
        return await self._complete(
            f"{API_PREFIX}/project/{project_id}/complete",
            {"time_spent": time_spent, "user_code": user_code},
            ProjectCompleted(project_id),
        )

    async def complete_course_module(self, course_id: str, module_id: int, module_count: int) -> Transition:
        return await self._complete(
            f"{API_PREFIX}/course/{course_id}/module/{module_id}/complete",
            None,
            ModuleCompleted(course_id, module_id, module_count),
        )

    async def _complete(self, path: str, body: dict[str, Any] | None, event: ProgressEvent) -> Transition:
        if not self.is_offline:
            try:
                response = await self._http.post(path, json=body)
            except httpx.HTTPError as exc:
                self._go_offline(exc)
            else:
                if response.status_code < 500:
                    # 4xx (unknown item, expired token) is the caller's problem, not an outage
                    response.raise_for_status()
                    return self._accept(response.json())
                self._go_offline(httpx.HTTPStatusError(
                    f"Server error {response.status_code}", request=response.request, response=response,
                ))

        return self._apply_locally(event)

    def _accept(self, payload: dict[str, Any]) -> Transition:
        progress = UserProgress.model_validate(payload["progress"])
        self.progress = progress
        already = bool(payload.get("already_completed"))
        return Transition(
            progress=progress,
            changed=not already,
            xp_awarded=int(payload.get("xp_earned") or 0),
            course_completed=bool(payload.get("course_completed")),
            already_completed=already,
        )

    def _apply_locally(self, event: ProgressEvent) -> Transition:
        if self.progress is None:
            self.progress = UserProgress.initial(self._today())
        transition = apply_event(self.progress, event, self._today(), self._policy)
        self.progress = transition.progress
        return transition

    def _go_offline(self, exc: Exception, defaults: bool = False) -> None:
        self.is_offline = True
        self.error = f"Unable to reach the progress service: {exc}"
        if defaults:
            self.progress = UserProgress()
            self.settings = UserSettings()
        logger.warning("progress_client_offline", error=str(exc))
