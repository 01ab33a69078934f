"""Validated parsing of console input. Each parser returns an InputResult instead of raising."""

import math
import re

from pydantic import BaseModel

from rollbook.schemas.student import sanitize_name

_INT_PATTERN = re.compile(r"[+-]?\d+")

MSG_INVALID_INPUT = "Invalid input. Try again."
MSG_INVALID_CHOICE = "Invalid choice. Try again."
MSG_INVALID_ROLL = "Invalid roll number."
MSG_INVALID_MARKS = "Invalid marks."


class InputResult(BaseModel):
    """Parsed value, or the message to show the user when the input was rejected."""

    value: int | float | str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _accept(value: int | float | str | None) -> InputResult:
    return InputResult(value=value)


def _reject(message: str) -> InputResult:
    return InputResult(error=message)


def _parse_int(text: str) -> int | None:
    s = text.strip()
    if not _INT_PATTERN.fullmatch(s):
        return None
    return int(s)


def _parse_float(text: str) -> float | None:
    try:
        value = float(text.strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_choice(text: str, max_choice: int) -> InputResult:
    """Menu choice: integer in 1..max_choice."""
    choice = _parse_int(text)
    if choice is None:
        return _reject(MSG_INVALID_INPUT)
    if not 1 <= choice <= max_choice:
        return _reject(MSG_INVALID_CHOICE)
    return _accept(choice)


def parse_roll(text: str) -> InputResult:
    """Roll number: positive base-10 integer."""
    roll = _parse_int(text)
    if roll is None or roll <= 0:
        return _reject(MSG_INVALID_ROLL)
    return _accept(roll)


def parse_marks(text: str) -> InputResult:
    marks = _parse_float(text)
    if marks is None:
        return _reject(MSG_INVALID_MARKS)
    return _accept(marks)


def parse_name(text: str) -> InputResult:
    """Name with delimiters replaced by spaces; must be non-empty and within the length limit."""
    try:
        return _accept(sanitize_name(text))
    except ValueError as e:
        return _reject(f"Invalid name: {e}.")


def parse_optional_name(text: str) -> InputResult:
    """Like parse_name, but blank input means "keep current" (value None)."""
    if not text.strip():
        return _accept(None)
    return parse_name(text)


def parse_optional_marks(text: str) -> InputResult:
    """Like parse_marks, but blank input means "keep current" (value None)."""
    if not text.strip():
        return _accept(None)
    return parse_marks(text)
