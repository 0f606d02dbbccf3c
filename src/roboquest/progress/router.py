"""Progress endpoints: the learner's ledger read path and completions."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends

from roboquest.auth.dependencies import get_current_user
from roboquest.auth.roles import CurrentUser
from roboquest.auth.service import IdentityService
from roboquest.catalog.service import CatalogService
from roboquest.dependencies import get_catalog, get_identity_service, get_ledger, get_today
from roboquest.errors import AuthenticationError, NotFoundError
from roboquest.progress.achievements import evaluate_achievements
from roboquest.progress.ledger import ProgressLedger
from roboquest.progress.schemas import (
    AchievementsResponse,
    CompletionResponse,
    ModuleCompletionResponse,
    ProgressResponse,
    ProjectCompleteRequest,
    ProjectCompletionResponse,
)

router = APIRouter(prefix="/api/v1", tags=["Progress"])


@router.get("/user/progress", response_model=ProgressResponse)
async def get_progress(
    user: CurrentUser = Depends(get_current_user),
    ledger: ProgressLedger = Depends(get_ledger),
    identities: IdentityService = Depends(get_identity_service),
    today: date = Depends(get_today),
) -> ProgressResponse:
    """Progress and settings; a new day resets the daily counter."""
    identity = await identities.get_identity(user.id)
    if identity is None:
        raise AuthenticationError("User not found")
    progress, settings = await ledger.get_or_init_progress(user.id, today)
    return ProgressResponse(user=identities.to_response(identity), progress=progress, settings=settings)


@router.get("/user/achievements", response_model=AchievementsResponse)
async def get_achievements(
    user: CurrentUser = Depends(get_current_user),
    ledger: ProgressLedger = Depends(get_ledger),
    today: date = Depends(get_today),
) -> AchievementsResponse:
    progress, _ = await ledger.get_or_init_progress(user.id, today)
    achievements = evaluate_achievements(progress)
    return AchievementsResponse(
        achievements=achievements,
        earned=sum(1 for a in achievements if a.earned),
        total=len(achievements),
    )


@router.post("/tutorial/{tutorial_id}/complete", response_model=CompletionResponse)
async def complete_tutorial(
    tutorial_id: str,
    user: CurrentUser = Depends(get_current_user),
    ledger: ProgressLedger = Depends(get_ledger),
    catalog: CatalogService = Depends(get_catalog),
    today: date = Depends(get_today),
) -> CompletionResponse:
    """Award a tutorial's XP (tutorials and showcase items alike)."""
    try:
        tutorial = await catalog.get_content(tutorial_id)
    except NotFoundError as e:
        raise NotFoundError("Tutorial not found") from e

    transition = await ledger.complete_tutorial(user.id, tutorial, today)
    if transition.already_completed:
        return CompletionResponse(
            message="Tutorial already completed",
            progress=transition.progress,
            already_completed=True,
        )
    return CompletionResponse(
        message="Tutorial completed successfully",
        progress=transition.progress,
        xp_earned=transition.xp_awarded,
    )


@router.post("/project/{project_id}/complete", response_model=ProjectCompletionResponse)
async def complete_project(
    project_id: str,
    body: ProjectCompleteRequest | None = None,
    user: CurrentUser = Depends(get_current_user),
    ledger: ProgressLedger = Depends(get_ledger),
    catalog: CatalogService = Depends(get_catalog),
    today: date = Depends(get_today),
) -> ProjectCompletionResponse:
    project = await catalog.get_project(project_id)
    time_spent = body.time_spent if body else None
    transition = await ledger.complete_project(user.id, project, today, time_spent=time_spent)
    if transition.already_completed:
        return ProjectCompletionResponse(
            message="Project already completed",
            progress=transition.progress,
            already_completed=True,
        )
    return ProjectCompletionResponse(
        message="Project completion recorded (no XP awarded).",
        progress=transition.progress,
        time_spent=time_spent,
    )


@router.post(
    "/course/{course_id}/module/{module_id}/complete",
    response_model=ModuleCompletionResponse,
)
async def complete_course_module(
    course_id: str,
    module_id: int,
    user: CurrentUser = Depends(get_current_user),
    ledger: ProgressLedger = Depends(get_ledger),
    catalog: CatalogService = Depends(get_catalog),
    today: date = Depends(get_today),
) -> ModuleCompletionResponse:
    """Mark a module done; ``course_completed`` tells the caller to celebrate."""
    course = await catalog.get_course(course_id)
    transition = await ledger.complete_course_module(user.id, course, module_id, today)
    message = (
        "Module already completed"
        if transition.already_completed
        else "Module completion recorded (no XP awarded)."
    )
    return ModuleCompletionResponse(
        message=message,
        progress=transition.progress,
        already_completed=transition.already_completed,
        course_completed=transition.course_completed,
    )
