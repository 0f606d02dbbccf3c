"""Request ID middleware: generates or propagates X-Request-Id."""

import re
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

CLIENT_HEADER = "X-RoboQuest-Client"

_SAFE_TOKEN = re.compile(r"^[A-Za-z0-9._\-/]{1,64}$")


def _safe(value: str | None) -> str | None:
    return value if value and _SAFE_TOKEN.match(value) else None


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Bind a request id, path and calling client to the structlog context.

    Ids supplied by callers are only reused when they are short plain tokens;
    anything else is replaced so it cannot inject text into log lines.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = _safe(request.headers.get("X-Request-Id")) or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=request.url.path,
            client=_safe(request.headers.get(CLIENT_HEADER)) or "web",
        )
        response = await call_next(request)
        response.headers["X-Request-Id"] = request_id
        return response
