"""Identity router: /api/v1/auth/* endpoints."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends

from roboquest.auth.jwt import create_access_token
from roboquest.auth.schemas import LoginRequest, SignupRequest, SignupResponse, TokenResponse
from roboquest.auth.service import IdentityService
from roboquest.config import get_settings
from roboquest.dependencies import get_identity_service, get_today

router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])


@router.post("/signup", response_model=SignupResponse)
async def signup(
    body: SignupRequest,
    identities: IdentityService = Depends(get_identity_service),
    today: date = Depends(get_today),
) -> SignupResponse:
    """Create an account with zero-valued progress."""
    identity = await identities.signup(body, today)
    return SignupResponse(user=identities.to_response(identity))


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    identities: IdentityService = Depends(get_identity_service),
    today: date = Depends(get_today),
) -> TokenResponse:
    """Login with email + password; records today's login for the streak."""
    identity = await identities.login(body.email, body.password, today)
    settings = get_settings()
    role = identities.role_of(identity)
    return TokenResponse(
        access_token=create_access_token(identity.id, identity.email, role.value),
        expires_in=settings.jwt_access_token_expire_minutes * 60,
        user=identities.to_response(identity),
    )
