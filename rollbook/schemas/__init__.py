"""Pydantic schemas for records and sessions."""

from rollbook.schemas.auth import Role, Session, resolve_role
from rollbook.schemas.student import (
    FIELD_DELIMITER,
    NAME_MAX_LEN,
    StudentRecord,
    StudentUpdate,
)

__all__ = [
    "FIELD_DELIMITER",
    "NAME_MAX_LEN",
    "Role",
    "Session",
    "StudentRecord",
    "StudentUpdate",
    "resolve_role",
]
