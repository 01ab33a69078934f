"""Schemas for login: roles and the authenticated session."""

from enum import Enum

from pydantic import BaseModel, Field


class Role(str, Enum):
    """Access tier; decides which menu operations a session may invoke."""

    ADMIN = "ADMIN"
    STAFF = "STAFF"
    GUEST = "GUEST"


def resolve_role(token: str | None) -> Role:
    """Map a free-form role token to a Role (case-insensitive). Unknown tokens fall back to GUEST."""
    if not token or not token.strip():
        return Role.GUEST
    normalized = token.strip().upper()
    if normalized == Role.ADMIN.value:
        return Role.ADMIN
    if normalized == Role.STAFF.value:
        return Role.STAFF
    return Role.GUEST


class Session(BaseModel):
    """Authenticated user for the lifetime of the process. Never persisted."""

    model_config = {"frozen": True}

    username: str = Field(..., min_length=1, description="Username from the matched credential line.")
    role_name: str = Field(..., min_length=1, description="Role token exactly as written in the credentials file.")

    @property
    def role(self) -> Role:
        return resolve_role(self.role_name)
