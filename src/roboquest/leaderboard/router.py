"""Leaderboard endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from roboquest.auth.service import IdentityService
from roboquest.config import Settings, get_settings
from roboquest.dependencies import get_identity_service, get_store
from roboquest.leaderboard.service import LeaderboardEntry, get_leaderboard
from roboquest.storage.kv_store import KeyValueStore

router = APIRouter(prefix="/api/v1", tags=["Leaderboard"])


class LeaderboardResponse(BaseModel):
    leaderboard: list[LeaderboardEntry]


@router.get("/leaderboard", response_model=LeaderboardResponse)
async def leaderboard(
    store: KeyValueStore = Depends(get_store),
    identities: IdentityService = Depends(get_identity_service),
    settings: Settings = Depends(get_settings),
) -> LeaderboardResponse:
    entries = await get_leaderboard(store, identities, limit=settings.leaderboard_size)
    return LeaderboardResponse(leaderboard=entries)
