"""User profile and settings endpoints: /api/v1/user/*."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends

from roboquest.auth.dependencies import get_current_user
from roboquest.auth.roles import CurrentUser
from roboquest.auth.schemas import ProfileUpdateRequest
from roboquest.auth.service import IdentityService
from roboquest.dependencies import get_identity_service, get_ledger, get_store, get_today
from roboquest.progress.ledger import ProgressLedger
from roboquest.storage.kv_store import KeyValueStore
from roboquest.users.schemas import ProfileResponse, SettingsResponse, SettingsUpdateRequest
from roboquest.users.service import update_user_settings

router = APIRouter(prefix="/api/v1/user", tags=["Users"])


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    body: ProfileUpdateRequest,
    user: CurrentUser = Depends(get_current_user),
    identities: IdentityService = Depends(get_identity_service),
) -> ProfileResponse:
    """Update name and parent email."""
    identity = await identities.update_profile(user.id, body)
    return ProfileResponse(user=identities.to_response(identity))


@router.put("/settings", response_model=SettingsResponse)
async def update_settings(
    body: SettingsUpdateRequest,
    user: CurrentUser = Depends(get_current_user),
    store: KeyValueStore = Depends(get_store),
    ledger: ProgressLedger = Depends(get_ledger),
    today: date = Depends(get_today),
) -> SettingsResponse:
    settings, daily_goal = await update_user_settings(store, ledger, user.id, body, today)
    return SettingsResponse(settings=settings, daily_goal=daily_goal)
