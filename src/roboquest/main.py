"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from roboquest.auth.router import router as auth_router
from roboquest.catalog.router import router as catalog_router
from roboquest.catalog.seed import seed_catalog
from roboquest.config import get_settings
from roboquest.errors import BackendUnavailableError
from roboquest.health.router import router as health_router
from roboquest.leaderboard.router import router as leaderboard_router
from roboquest.middleware import setup_middleware
from roboquest.progress.router import router as progress_router
from roboquest.redis_client import close_redis, get_redis, init_redis
from roboquest.storage.kv_store import KeyValueStore
from roboquest.users.router import router as users_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    await init_redis(settings)

    if settings.seed_catalog_on_startup:
        try:
            await seed_catalog(KeyValueStore(get_redis(), max_retries=settings.store_max_retries))
        except BackendUnavailableError:
            logger.warning("catalog_seed_failed", exc_info=True)

    yield

    await close_redis()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="RoboQuest API",
        description="Progress, catalog and gamification backend for the RoboQuest kids' coding app",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(auth_router)
    app.include_router(progress_router)
    app.include_router(users_router)
    app.include_router(catalog_router)
    app.include_router(leaderboard_router)

    return app


app = create_app()
