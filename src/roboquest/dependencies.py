"""Shared FastAPI dependencies: store, clock and service factories."""

from __future__ import annotations

from datetime import date

from fastapi import Depends

from roboquest.auth.service import IdentityService
from roboquest.catalog.service import CatalogService
from roboquest.config import Settings, get_settings
from roboquest.progress.ledger import ProgressLedger
from roboquest.progress.reducer import Policy
from roboquest.redis_client import get_redis
from roboquest.storage.kv_store import KeyValueStore


def get_today() -> date:
    """The calendar day requests are evaluated against (server local time)."""
    return date.today()


def get_store(settings: Settings = Depends(get_settings)) -> KeyValueStore:
    return KeyValueStore(get_redis(), max_retries=settings.store_max_retries)


def get_ledger(
    store: KeyValueStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> ProgressLedger:
    return ProgressLedger(
        store,
        policy=Policy(xp_per_level=settings.xp_per_level, login_history_days=settings.login_history_days),
        default_daily_goal=settings.default_daily_goal,
        default_tutorial_xp=settings.default_tutorial_xp,
    )


def get_catalog(
    store: KeyValueStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> CatalogService:
    return CatalogService(store, default_xp_reward=settings.default_tutorial_xp)


def get_identity_service(
    store: KeyValueStore = Depends(get_store),
    ledger: ProgressLedger = Depends(get_ledger),
) -> IdentityService:
    return IdentityService(store, ledger)
