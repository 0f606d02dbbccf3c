"""Roles and the authenticated principal."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    LEARNER = "learner"
    ADMIN = "admin"


def resolve_role(email: str, admin_email: str) -> Role:
    """The single administrator is identified by email."""
    return Role.ADMIN if email.strip().lower() == admin_email.strip().lower() else Role.LEARNER


@dataclass(frozen=True)
class CurrentUser:
    """Principal resolved once per request from the bearer token."""

    id: str
    email: str
    role: Role
    first_name: str | None = None
    last_name: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @property
    def can_manage_content(self) -> bool:
        return self.role is Role.ADMIN
