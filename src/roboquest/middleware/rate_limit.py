"""Per-IP fixed-window rate limiting backed by Redis counters.

Requests are counted per scope: ``auth`` covers signup and login and gets a
tighter budget than the rest of the ``api``, so password guessing runs out
long before a learner clicking through lessons does.
"""

import time
from dataclasses import dataclass
from typing import Any

import structlog
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from roboquest.redis_client import get_redis

logger = structlog.get_logger()

_EXEMPT_PATHS = frozenset({"/health", "/ready"})
AUTH_PREFIX = "/api/v1/auth/"


@dataclass(frozen=True)
class RateLimitScope:
    name: str
    limit: int


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Count requests per client IP and scope; reject with 429 past the limit."""

    def __init__(
        self,
        app: Any,  # noqa: ANN401
        requests_per_window: int = 100,
        auth_requests_per_window: int = 20,
        window_seconds: int = 60,
    ) -> None:
        super().__init__(app)
        self.api_scope = RateLimitScope("api", requests_per_window)
        self.auth_scope = RateLimitScope("auth", auth_requests_per_window)
        self.window_seconds = window_seconds

    def scope_for(self, path: str) -> RateLimitScope:
        return self.auth_scope if path.startswith(AUTH_PREFIX) else self.api_scope

    async def _hit(self, scope: RateLimitScope, client_ip: str) -> int | None:
        """Increment this window's counter. None when Redis is not usable."""
        window = int(time.time()) // self.window_seconds
        rate_key = f"ratelimit:{scope.name}:{client_ip}:{window}"
        try:
            pipe = get_redis().pipeline()
            pipe.incr(rate_key)
            pipe.expire(rate_key, self.window_seconds + 1)
            results: list[Any] = await pipe.execute()
        except RuntimeError:
            # Redis not initialized
            return None
        except (RedisConnectionError, RedisTimeoutError) as exc:
            logger.warning("rate_limit_unavailable", error=str(exc))
            return None
        return int(results[0])

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in _EXEMPT_PATHS:
            return await call_next(request)

        scope = self.scope_for(request.url.path)
        client_ip = request.client.host if request.client else "unknown"
        count = await self._hit(scope, client_ip)
        if count is None:
            return await call_next(request)

        headers = {
            "X-RateLimit-Limit": str(scope.limit),
            "X-RateLimit-Remaining": str(max(0, scope.limit - count)),
            "X-RateLimit-Scope": scope.name,
        }
        if count > scope.limit:
            logger.warning("rate_limited", scope=scope.name, client_ip=client_ip)
            return JSONResponse(
                status_code=429,
                content={"detail": "Rate limit exceeded. Try again later."},
                headers={**headers, "Retry-After": str(self.window_seconds)},
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response
