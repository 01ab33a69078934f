"""Pydantic schemas for student records and partial updates."""

import math

from pydantic import BaseModel, Field, field_validator

# Field delimiter of the student store line format.
FIELD_DELIMITER = "|"

# Names longer than this do not fit the store's fixed-width legacy readers.
NAME_MAX_LEN = 127

MARKS_DECIMALS = 2


def sanitize_name(value: str) -> str:
    """Replace the field delimiter with spaces, drop line breaks and surrounding whitespace."""
    if not isinstance(value, str):
        raise ValueError("name must be text")
    cleaned = value.replace(FIELD_DELIMITER, " ").replace("\r", " ").replace("\n", " ").strip()
    if not cleaned:
        raise ValueError("name must be non-empty")
    if len(cleaned) > NAME_MAX_LEN:
        raise ValueError(f"name must be at most {NAME_MAX_LEN} characters")
    return cleaned


def normalize_marks(value: float) -> float:
    """Reject NaN/inf and round to the precision the store keeps."""
    if not math.isfinite(value):
        raise ValueError("marks must be a finite number")
    return round(value, MARKS_DECIMALS)


class StudentRecord(BaseModel):
    """One student line of the store: unique roll, display name, numeric mark."""

    model_config = {"frozen": True}

    roll: int = Field(..., gt=0, description="Unique positive roll number.")
    name: str = Field(..., description="Student name; delimiter characters are replaced by spaces.")
    marks: float = Field(..., description="Mark, kept to two decimal places.")

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return sanitize_name(v)

    @field_validator("marks")
    @classmethod
    def validate_marks(cls, v: float) -> float:
        return normalize_marks(v)


class StudentUpdate(BaseModel):
    """New field values for Update. None leaves the field unchanged."""

    name: str | None = None
    marks: float | None = None

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return sanitize_name(v)

    @field_validator("marks")
    @classmethod
    def validate_marks(cls, v: float | None) -> float | None:
        if v is None:
            return None
        return normalize_marks(v)

    def apply(self, record: StudentRecord) -> StudentRecord:
        """Return a copy of record with the non-empty fields of this update applied."""
        changes = self.model_dump(exclude_none=True)
        if not changes:
            return record
        return StudentRecord(
            roll=record.roll,
            name=changes.get("name", record.name),
            marks=changes.get("marks", record.marks),
        )
