"""CORS middleware configuration."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from roboquest.config import Settings
from roboquest.middleware.request_id import CLIENT_HEADER


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Allow the learner and admin frontends.

    Rate-limit headers are exposed so the frontend can tell a throttled login
    (scope ``auth``) from a throttled lesson request.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-Id", CLIENT_HEADER],
        expose_headers=[
            "X-Request-Id",
            "X-RateLimit-Limit",
            "X-RateLimit-Remaining",
            "X-RateLimit-Scope",
            "Retry-After",
        ],
    )
