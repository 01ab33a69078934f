"""Encode and decode student records as single `roll|name|marks` lines."""

import re

from pydantic import ValidationError

from rollbook.core.errors import RecordDecodeError
from rollbook.schemas.student import FIELD_DELIMITER, MARKS_DECIMALS, StudentRecord

# Base-10 integer roll, optional sign (non-positive rolls fail model validation).
_ROLL_PATTERN = re.compile(r"[+-]?\d+")
# Plain decimal marks; rejects nan/inf and underscore separators float() would accept.
_MARKS_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

FIELD_COUNT = 3


def encode_record(record: StudentRecord) -> str:
    """Serialize record without a trailing newline. The name is already sanitized by the model."""
    return FIELD_DELIMITER.join(
        (str(record.roll), record.name, f"{record.marks:.{MARKS_DECIMALS}f}")
    )


def decode_record(line: str) -> StudentRecord:
    """
    Parse one store line into a StudentRecord.
    Raises RecordDecodeError for wrong field count, non-numeric roll/marks, or invalid values.
    """
    text = line.rstrip("\r\n")
    fields = text.split(FIELD_DELIMITER)
    if len(fields) != FIELD_COUNT:
        raise RecordDecodeError(line, f"expected {FIELD_COUNT} fields, got {len(fields)}")
    roll_text, name, marks_text = fields
    roll_text = roll_text.strip()
    marks_text = marks_text.strip()
    if not _ROLL_PATTERN.fullmatch(roll_text):
        raise RecordDecodeError(line, "roll is not an integer")
    if not _MARKS_PATTERN.fullmatch(marks_text):
        raise RecordDecodeError(line, "marks is not a number")
    try:
        return StudentRecord(roll=int(roll_text), name=name, marks=float(marks_text))
    except ValidationError as e:
        raise RecordDecodeError(line, f"invalid record ({e.error_count()} errors)") from e
