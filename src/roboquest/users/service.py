"""Settings business logic."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, Any

import structlog

from roboquest.progress.ledger import settings_key
from roboquest.progress.models import UserSettings
from roboquest.storage.kv_store import Mutation

if TYPE_CHECKING:
    from roboquest.progress.ledger import ProgressLedger
    from roboquest.storage.kv_store import KeyValueStore
    from roboquest.users.schemas import SettingsUpdateRequest

logger = structlog.get_logger()


async def update_user_settings(
    store: KeyValueStore,
    ledger: ProgressLedger,
    user_id: str,
    request: SettingsUpdateRequest,
    today: date,
) -> tuple[UserSettings, int | None]:
    """
    Merge the provided settings fields into the stored record.

    Only the provided keys are updated; others remain unchanged. A provided
    ``daily_goal`` is written to the progress record instead. Returns the
    merged settings and the daily goal now in effect (None if untouched).
    """
    updates = request.model_dump(exclude_unset=True, exclude_none=True)
    daily_goal = updates.pop("daily_goal", None)

    def merge(current: dict[str, Any] | None) -> Mutation[UserSettings]:
        settings = UserSettings.model_validate(current) if current is not None else UserSettings()
        merged = settings.model_copy(update={**updates, "updated_at": datetime.now(timezone.utc)})
        return Mutation(value=merged.model_dump(mode="json"), result=merged)

    settings = await store.transact(settings_key(user_id), merge)

    if daily_goal is not None:
        transition = await ledger.set_daily_goal(user_id, daily_goal, today)
        daily_goal = transition.progress.daily_goal

    logger.info("settings_updated", user_id=user_id, fields=sorted(updates), daily_goal=daily_goal)
    return settings, daily_goal
