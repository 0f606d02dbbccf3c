"""Shared test fixtures."""

from __future__ import annotations

import os
import tempfile
from collections.abc import AsyncGenerator
from dataclasses import dataclass
from datetime import date, timedelta

import fakeredis
import pytest
import pytest_asyncio
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from roboquest.auth.jwt import reset_keys
from roboquest.catalog.seed import seed_catalog
from roboquest.config import get_settings
from roboquest.dependencies import get_today
from roboquest.main import create_app
from roboquest.redis_client import close_redis, use_redis
from roboquest.storage.kv_store import KeyValueStore

ADMIN_EMAIL = "admin@roboquest.dev"
PASSWORD = "secret123"
DAY_ONE = date(2025, 3, 10)

_keys: tuple[str, str] | None = None


def _ensure_test_keys() -> tuple[str, str]:
    """Generate an RSA key pair once per session and point settings at it."""
    global _keys  # noqa: PLW0603
    if _keys is None:
        tmpdir = tempfile.mkdtemp(prefix="roboquest_test_keys_")
        private_path = os.path.join(tmpdir, "jwt_private.pem")
        public_path = os.path.join(tmpdir, "jwt_public.pem")

        key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
        with open(private_path, "wb") as f:
            f.write(
                key.private_bytes(
                    encoding=serialization.Encoding.PEM,
                    format=serialization.PrivateFormat.PKCS8,
                    encryption_algorithm=serialization.NoEncryption(),
                )
            )
        with open(public_path, "wb") as f:
            f.write(
                key.public_key().public_bytes(
                    encoding=serialization.Encoding.PEM,
                    format=serialization.PublicFormat.SubjectPublicKeyInfo,
                )
            )
        _keys = (private_path, public_path)

    os.environ["ROBOQUEST_JWT_PRIVATE_KEY_PATH"] = _keys[0]
    os.environ["ROBOQUEST_JWT_PUBLIC_KEY_PATH"] = _keys[1]
    os.environ["ROBOQUEST_ADMIN_EMAIL"] = ADMIN_EMAIL
    get_settings.cache_clear()
    reset_keys()
    return _keys


@dataclass
class Clock:
    """Stand-in for the server's calendar day."""

    today: date = DAY_ONE

    def advance(self, days: int = 1) -> date:
        self.today = self.today + timedelta(days=days)
        return self.today


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def fake_server() -> fakeredis.FakeServer:
    return fakeredis.FakeServer()


@pytest_asyncio.fixture
async def redis(fake_server: fakeredis.FakeServer) -> AsyncGenerator[fakeredis.FakeAsyncRedis, None]:
    """In-process Redis, fresh per test, installed as the app's pool."""
    fake = fakeredis.FakeAsyncRedis(server=fake_server, decode_responses=True)
    use_redis(fake)
    yield fake
    fake_server.connected = True
    await close_redis()


@pytest.fixture
def store(redis: fakeredis.FakeAsyncRedis) -> KeyValueStore:
    return KeyValueStore(redis)


@pytest_asyncio.fixture
async def app(store: KeyValueStore, clock: Clock) -> FastAPI:
    _ensure_test_keys()
    application = create_app()
    application.dependency_overrides[get_today] = lambda: clock.today
    await seed_catalog(store)
    return application


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the app (no network, no lifespan)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def signup_and_login(
    client: AsyncClient,
    email: str,
    password: str = PASSWORD,
    first_name: str | None = None,
) -> dict[str, str]:
    """Create an account and return its bearer headers."""
    resp = await client.post(
        "/api/v1/auth/signup",
        json={"email": email, "password": password, "first_name": first_name},
    )
    assert resp.status_code == 200, resp.text
    resp = await client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest_asyncio.fixture
async def auth_headers(client: AsyncClient) -> dict[str, str]:
    """Bearer headers for a signed-up learner."""
    return await signup_and_login(client, "learner@example.com", first_name="Ada")


@pytest_asyncio.fixture
async def admin_headers(client: AsyncClient) -> dict[str, str]:
    """Bearer headers for the administrator account."""
    return await signup_and_login(client, ADMIN_EMAIL, first_name="Admin")
