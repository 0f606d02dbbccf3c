"""
Identity business logic.

Handles signup, credential checks with account lockout, and profile updates.
Identities live at ``identity:{user_id}`` with an ``identity:email:{email}``
lookup key that doubles as the uniqueness guard.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from typing import TYPE_CHECKING

import structlog
from pydantic import BaseModel

from roboquest.auth.password import (
    check_needs_rehash,
    hash_password,
    validate_password_strength,
    verify_password,
)
from roboquest.auth.roles import CurrentUser, Role, resolve_role
from roboquest.auth.schemas import ProfileUpdateRequest, SignupRequest, UserResponse
from roboquest.config import get_settings
from roboquest.errors import AccountLockedError, AuthenticationError, NotFoundError, ValidationFailure

if TYPE_CHECKING:
    from redis.asyncio import Redis

    from roboquest.progress.ledger import ProgressLedger
    from roboquest.storage.kv_store import KeyValueStore

logger = structlog.get_logger()


class Identity(BaseModel):
    id: str
    email: str
    password_hash: str
    first_name: str | None = None
    last_name: str | None = None
    birth_date: date | None = None
    parent_email: str | None = None
    created_at: datetime
    updated_at: datetime | None = None


def identity_key(user_id: str) -> str:
    return f"identity:{user_id}"


def email_key(email: str) -> str:
    return f"identity:email:{email.strip().lower()}"


class IdentityService:
    """Issue identities, verify credentials, maintain profile metadata."""

    def __init__(self, store: KeyValueStore, ledger: ProgressLedger) -> None:
        self.store = store
        self.ledger = ledger

    # ---------------------------------------------------------------------------
    # Lookups
    # ---------------------------------------------------------------------------

    async def get_identity(self, user_id: str) -> Identity | None:
        raw = await self.store.get(identity_key(user_id))
        return Identity.model_validate(raw) if raw is not None else None

    async def get_identity_by_email(self, email: str) -> Identity | None:
        user_id = await self.store.get(email_key(email))
        if user_id is None:
            return None
        return await self.get_identity(user_id)

    async def get_identities(self, user_ids: list[str]) -> dict[str, Identity]:
        """Batch-load identities; unknown ids are left out."""
        rows = await self.store.mget([identity_key(i) for i in user_ids])
        return {row["id"]: Identity.model_validate(row) for row in rows if row is not None}

    # ---------------------------------------------------------------------------
    # Signup / login
    # ---------------------------------------------------------------------------

    async def signup(self, request: SignupRequest, today: date) -> Identity:
        """
        Create an identity plus its zero-valued progress and settings records.

        Raises:
            ValidationFailure: If the password is out of bounds or the email is taken.
        """
        validate_password_strength(request.password)

        user_id = str(uuid.uuid4())
        if not await self.store.add(email_key(request.email), user_id):
            msg = "Email already registered"
            raise ValidationFailure(msg)

        identity = Identity(
            id=user_id,
            email=request.email,
            password_hash=hash_password(request.password),
            first_name=request.first_name,
            last_name=request.last_name,
            birth_date=request.birth_date,
            parent_email=request.parent_email,
            created_at=datetime.now(timezone.utc),
        )
        try:
            await self.store.set(identity_key(user_id), identity.model_dump(mode="json"))
            await self.ledger.initialize(user_id, today)
        except Exception:
            # Release the email claim so the learner can sign up again.
            logger.warning("signup_rolled_back", user_id=user_id)
            await self.store.delete(identity_key(user_id))
            await self.store.delete(email_key(request.email))
            raise

        logger.info(
            "user_created",
            user_id=user_id,
            role=self.role_of(identity).value,
            email=identity.email,
            parent_email=identity.parent_email,
        )
        return identity

    async def authenticate(self, email: str, password: str) -> Identity:
        """
        Check email + password.

        Raises:
            AuthenticationError: If credentials are invalid.
            AccountLockedError: If too many attempts failed recently.
        """
        identity = await self.get_identity_by_email(email)
        if identity is None:
            logger.info("login_failed", reason="unknown_email", email=email)
            msg = "Invalid email or password"
            raise AuthenticationError(msg)

        redis = self.store.redis
        if await check_account_lockout(redis, identity.id):
            msg = "Account temporarily locked. Try again later."
            raise AccountLockedError(msg)

        if not verify_password(password, identity.password_hash):
            attempts = await increment_failed_login(redis, identity.id)
            logger.info("login_failed", user_id=identity.id, attempts=attempts)
            msg = "Invalid email or password"
            raise AuthenticationError(msg)

        await clear_failed_login(redis, identity.id)

        if check_needs_rehash(identity.password_hash):
            identity = identity.model_copy(update={"password_hash": hash_password(password)})
            await self.store.set(identity_key(identity.id), identity.model_dump(mode="json"))
            logger.info("password_rehashed", user_id=identity.id)

        return identity

    async def login(self, email: str, password: str, today: date) -> Identity:
        """Authenticate and credit today's login to the streak."""
        identity = await self.authenticate(email, password)
        transition = await self.ledger.record_login(identity.id, today)
        logger.info(
            "login_succeeded",
            user_id=identity.id,
            streak_days=transition.progress.streak_days,
        )
        return identity

    # ---------------------------------------------------------------------------
    # Profile
    # ---------------------------------------------------------------------------

    async def update_profile(self, user_id: str, request: ProfileUpdateRequest) -> Identity:
        """Merge the non-null fields of ``request`` into the identity."""
        identity = await self.get_identity(user_id)
        if identity is None:
            msg = "User not found"
            raise NotFoundError(msg)

        updates = {k: v for k, v in request.model_dump().items() if v is not None}
        identity = identity.model_copy(update={**updates, "updated_at": datetime.now(timezone.utc)})
        await self.store.set(identity_key(user_id), identity.model_dump(mode="json"))
        return identity

    # ---------------------------------------------------------------------------
    # Principals
    # ---------------------------------------------------------------------------

    @staticmethod
    def role_of(identity: Identity) -> Role:
        return resolve_role(identity.email, get_settings().admin_email)

    def principal(self, identity: Identity) -> CurrentUser:
        return CurrentUser(
            id=identity.id,
            email=identity.email,
            role=self.role_of(identity),
            first_name=identity.first_name,
            last_name=identity.last_name,
        )

    def to_response(self, identity: Identity) -> UserResponse:
        role = self.role_of(identity)
        return UserResponse(
            id=identity.id,
            email=identity.email,
            role=role.value,
            is_admin=role is Role.ADMIN,
            first_name=identity.first_name,
            last_name=identity.last_name,
            birth_date=identity.birth_date,
            parent_email=identity.parent_email,
            created_at=identity.created_at,
        )


# ---------------------------------------------------------------------------
# Account lockout
# ---------------------------------------------------------------------------


async def check_account_lockout(redis: Redis, user_id: str) -> bool:
    """Check if the account is locked due to too many failed login attempts."""
    settings = get_settings()
    count_str = await redis.get(f"login_attempts:{user_id}")
    if count_str is None:
        return False
    return int(count_str) >= settings.account_lockout_threshold


async def increment_failed_login(redis: Redis, user_id: str) -> int:
    """Increment failed login counter. Returns the new count."""
    settings = get_settings()
    key = f"login_attempts:{user_id}"
    count = await redis.incr(key)
    if count == 1:
        await redis.expire(key, settings.account_lockout_duration_minutes * 60)
    return int(count)


async def clear_failed_login(redis: Redis, user_id: str) -> None:
    await redis.delete(f"login_attempts:{user_id}")
