"""Leaderboard: top learners by total XP.

Scores live in the ``leaderboard:xp`` sorted set, written in the same
transaction as each progress update; entries are enriched from the stored
progress and identity records.
"""

from __future__ import annotations

from pydantic import BaseModel

from roboquest.auth.service import IdentityService
from roboquest.progress.ledger import LEADERBOARD_KEY, progress_key
from roboquest.progress.models import UserProgress
from roboquest.storage.kv_store import KeyValueStore


class LeaderboardEntry(BaseModel):
    rank: int
    user_id: str
    display_name: str
    total_xp: int
    level: int
    streak_days: int
    lessons_completed: int


def _display_name(first_name: str | None, last_name: str | None) -> str:
    parts = [p for p in (first_name, last_name) if p]
    return " ".join(parts) if parts else "Anonymous Learner"


async def get_leaderboard(
    store: KeyValueStore,
    identities: IdentityService,
    limit: int = 10,
) -> list[LeaderboardEntry]:
    """Top ``limit`` users by total XP; members whose record vanished are skipped."""
    ranked = await store.top(LEADERBOARD_KEY, limit)
    if not ranked:
        return []

    user_ids = [member for member, _ in ranked]
    rows = await store.mget([progress_key(u) for u in user_ids])
    profiles = await identities.get_identities(user_ids)

    entries: list[LeaderboardEntry] = []
    for user_id, row in zip(user_ids, rows):
        if row is None:
            continue
        progress = UserProgress.model_validate(row)
        identity = profiles.get(user_id)
        entries.append(
            LeaderboardEntry(
                rank=len(entries) + 1,
                user_id=user_id,
                display_name=_display_name(
                    identity.first_name if identity else None,
                    identity.last_name if identity else None,
                ),
                total_xp=progress.total_xp,
                level=progress.level,
                streak_days=progress.streak_days,
                lessons_completed=progress.lessons_completed,
            )
        )
    return entries
