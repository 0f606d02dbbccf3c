"""Process-wide Redis client for the progress, catalog and identity stores."""

import redis.asyncio as redis

from roboquest.config import Settings

_pool: redis.Redis | None = None


def build_redis(settings: Settings) -> redis.Redis:
    """Client with bounded socket timeouts.

    A stalled server surfaces as a timeout, which the store turns into a 503,
    instead of a completion request hanging until the frontend gives up.
    """
    return redis.from_url(  # type: ignore[no-untyped-call]
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        max_connections=settings.redis_max_connections,
        socket_timeout=settings.redis_socket_timeout_seconds,
        socket_connect_timeout=settings.redis_socket_timeout_seconds,
        health_check_interval=30,
    )


async def init_redis(settings: Settings) -> None:
    global _pool  # noqa: PLW0603
    _pool = build_redis(settings)


def use_redis(client: redis.Redis) -> None:
    """Install an already-built client (e.g. an in-process fake) as the pool."""
    global _pool  # noqa: PLW0603
    _pool = client


async def close_redis() -> None:
    global _pool  # noqa: PLW0603
    if _pool:
        await _pool.aclose()
        _pool = None


def get_redis() -> redis.Redis:
    if _pool is None:
        msg = "Redis not initialized. Call init_redis() first."
        raise RuntimeError(msg)
    return _pool
