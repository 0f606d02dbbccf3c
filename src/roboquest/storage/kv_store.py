"""JSON key-value store over Redis.

Plain ``get``/``set``/``mget`` serve the read-mostly catalog. Per-user progress
goes through :meth:`KeyValueStore.transact`, an optimistic WATCH/MULTI/EXEC
loop, so two concurrent writes to the same record cannot both apply on top of
the same stale read.
"""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

import structlog
from redis.asyncio import Redis
from redis.asyncio.client import Pipeline
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError
from redis.exceptions import WatchError

from roboquest.errors import BackendUnavailableError

logger = structlog.get_logger()

T = TypeVar("T")

_UNREACHABLE = (RedisConnectionError, RedisTimeoutError)


@dataclass
class Mutation(Generic[T]):
    """Outcome of a transact() callback.

    ``value`` is written back unless it is None. ``side_effects`` are queued
    on the same MULTI block after the SET.
    """

    value: Any
    result: T
    side_effects: list[Callable[[Pipeline], None]] = field(default_factory=list)


class KeyValueStore:
    """Namespaced get/set/multi-get over JSON strings."""

    def __init__(self, redis: Redis, max_retries: int = 10) -> None:
        self.redis = redis
        self.max_retries = max_retries

    async def get(self, key: str) -> Any:
        """Return the decoded value at ``key`` or None."""
        raw = await self._call(self.redis.get(key))
        return _decode(raw)

    async def set(self, key: str, value: Any) -> None:
        """JSON-encode and store ``value`` at ``key``."""
        await self._call(self.redis.set(key, _encode(value)))

    async def mget(self, keys: list[str]) -> list[Any]:
        """Decode several keys at once, keeping order; missing keys yield None."""
        if not keys:
            return []
        raws = await self._call(self.redis.mget(keys))
        return [_decode(raw) for raw in raws]

    async def add(self, key: str, value: Any) -> bool:
        """Store ``value`` only if ``key`` does not exist yet. Returns True if stored."""
        return bool(await self._call(self.redis.set(key, _encode(value), nx=True)))

    async def delete(self, key: str) -> bool:
        """Remove ``key``. Returns True if something was deleted."""
        return bool(await self._call(self.redis.delete(key)))

    async def top(self, key: str, count: int) -> list[tuple[str, float]]:
        """Highest-scored members of the sorted set at ``key``, best first."""
        return await self._call(self.redis.zrevrange(key, 0, count - 1, withscores=True))

    async def transact(
        self,
        key: str,
        mutate: Callable[[Any], Mutation[T]],
    ) -> T:
        """Optimistically read-modify-write ``key``.

        ``mutate`` receives the decoded current value (None if absent) and
        must be free of I/O; it may be called again when another writer
        touched the key between WATCH and EXEC.
        """
        try:
            async with self.redis.pipeline(transaction=True) as pipe:
                for attempt in range(1, self.max_retries + 1):
                    try:
                        await pipe.watch(key)
                        current = _decode(await pipe.get(key))
                        mutation = mutate(current)
                        if mutation.value is None and not mutation.side_effects:
                            await pipe.unwatch()
                            return mutation.result
                        pipe.multi()
                        if mutation.value is not None:
                            pipe.set(key, _encode(mutation.value))
                        for effect in mutation.side_effects:
                            effect(pipe)
                        await pipe.execute()
                        return mutation.result
                    except WatchError:
                        logger.info("progress_write_conflict", key=key, attempt=attempt)
                        continue
        except _UNREACHABLE as exc:
            raise BackendUnavailableError("Key-value store unavailable") from exc

        msg = f"Gave up writing {key} after {self.max_retries} conflicting attempts"
        raise BackendUnavailableError(msg)

    @staticmethod
    async def _call(awaitable: Awaitable[T]) -> T:
        try:
            return await awaitable
        except _UNREACHABLE as exc:
            raise BackendUnavailableError("Key-value store unavailable") from exc


def _encode(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), default=str)


def _decode(raw: str | bytes | None) -> Any:
    if raw is None:
        return None
    return json.loads(raw)
