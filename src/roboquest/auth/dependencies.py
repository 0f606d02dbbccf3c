"""FastAPI authentication dependencies."""

from __future__ import annotations

import jwt
from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from roboquest.auth.jwt import verify_token
from roboquest.auth.roles import CurrentUser
from roboquest.auth.service import IdentityService
from roboquest.dependencies import get_identity_service
from roboquest.errors import AuthenticationError, ForbiddenError

_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Security(_bearer),
    identities: IdentityService = Depends(get_identity_service),
) -> CurrentUser:
    """
    Verify the bearer token and resolve it into a principal.

    The role is decided here, once, from the stored identity's email.
    """
    if credentials is None:
        msg = "No authorization token provided"
        raise AuthenticationError(msg)
    try:
        payload = verify_token(credentials.credentials, expected_type="access")
    except jwt.InvalidTokenError as e:
        raise AuthenticationError(str(e)) from e

    identity = await identities.get_identity(str(payload["sub"]))
    if identity is None:
        msg = "User not found"
        raise AuthenticationError(msg)
    return identities.principal(identity)


async def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """Gate for content administration routes."""
    if not user.can_manage_content:
        msg = "Admin access required"
        raise ForbiddenError(msg)
    return user
