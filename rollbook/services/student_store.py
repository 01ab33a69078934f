"""Flat-file student store: linear reads, appends, and rewrite-all mutations.

The store is a text file with one `roll|name|marks` line per record. Reads treat a
missing file as an empty store and skip malformed lines. Update and delete
regenerate the whole file into a temp file in the same directory and swap it in
with os.replace, so a failure never leaves the store missing.
"""

import logging
import os
import stat
import tempfile
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import TextIO

from rollbook.core.errors import DuplicateRollError, RecordDecodeError, StoreError, StoreWriteError
from rollbook.schemas.student import StudentRecord, StudentUpdate
from rollbook.services.record_codec import decode_record, encode_record

logger = logging.getLogger(__name__)

# Per-record rewrite step: return the record to keep (possibly edited) or None to drop it.
RecordTransform = Callable[[StudentRecord], StudentRecord | None]

TEMP_PREFIX = ".rollbook-"
TEMP_SUFFIX = ".tmp"

# Rewrites and appends carry undecodable bytes through unchanged.
WRITE_ERRORS = "surrogateescape"


class StudentStore:
    """Student records persisted as a pipe-delimited text file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _open_for_read(self) -> TextIO | None:
        """Open the store for reading; None when it does not exist yet."""
        try:
            return self.path.open("r", encoding="utf-8", errors="replace")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StoreError(f"cannot read student file '{self.path}': {e}") from e

    @staticmethod
    def _decode_lines(fh: TextIO, on_skip: Callable[[int, RecordDecodeError], None]) -> Iterator[StudentRecord]:
        for lineno, line in enumerate(fh, start=1):
            if not line.strip():
                continue
            try:
                yield decode_record(line)
            except RecordDecodeError as e:
                on_skip(lineno, e)

    def _log_skipped(self, lineno: int, err: RecordDecodeError) -> None:
        logger.debug("Skipping malformed line %s:%d (%s)", self.path, lineno, err.reason)

    def iter_records(self) -> Iterator[StudentRecord]:
        """Lazily yield every decodable record in file order. Each call starts from the top."""
        fh = self._open_for_read()
        if fh is None:
            return
        with fh:
            yield from self._decode_lines(fh, self._log_skipped)

    def read_all(self) -> list[StudentRecord]:
        """All decodable records in file order; [] when the store file is missing."""
        return list(self.iter_records())

    def find(self, roll: int) -> StudentRecord | None:
        for record in self.iter_records():
            if record.roll == roll:
                return record
        return None

    def exists(self, roll: int) -> bool:
        return self.find(roll) is not None

    def append_record(self, record: StudentRecord) -> None:
        """Append one encoded line. Raises StoreWriteError if the file cannot be opened or written."""
        line = encode_record(record) + "\n"
        try:
            if self._needs_leading_newline():
                line = "\n" + line
            with self.path.open("a", encoding="utf-8", errors=WRITE_ERRORS) as fh:
                fh.write(line)
        except OSError as e:
            raise StoreWriteError(
                f"Failed to open student file for writing: {e}", str(self.path)
            ) from e
        logger.info("Appended record roll=%s to %s", record.roll, self.path)

    def _needs_leading_newline(self) -> bool:
        """True when the store ends without a line break (hand-edited file)."""
        try:
            with self.path.open("rb") as fh:
                fh.seek(0, os.SEEK_END)
                if fh.tell() == 0:
                    return False
                fh.seek(-1, os.SEEK_END)
                return fh.read(1) not in (b"\n", b"\r")
        except FileNotFoundError:
            return False

    def add(self, record: StudentRecord) -> None:
        """Append record unless its roll is already present. Raises DuplicateRollError."""
        if self.exists(record.roll):
            raise DuplicateRollError(record.roll)
        self.append_record(record)

    def rewrite_all(self, transform: RecordTransform) -> int:
        """
        Regenerate the store from transform(record) for every record, in order.

        Records for which transform returns None are dropped. Malformed source lines are
        dropped too. Survivors go to a temp file next to the store which then replaces it
        atomically. Returns the number of records written. Raises StoreWriteError; on
        failure the original file is left as it was.
        """
        dropped: list[int] = []

        def _drop(lineno: int, err: RecordDecodeError) -> None:
            dropped.append(lineno)
            self._log_skipped(lineno, err)

        try:
            src = self.path.open("r", encoding="utf-8", errors=WRITE_ERRORS)
            src_mode = stat.S_IMODE(os.fstat(src.fileno()).st_mode)
        except OSError as e:
            raise StoreWriteError(f"Error opening student file for rewrite: {e}", str(self.path)) from e

        written = 0
        tmp_name: str | None = None
        try:
            with src, tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                errors=WRITE_ERRORS,
                dir=self.path.parent,
                prefix=TEMP_PREFIX,
                suffix=TEMP_SUFFIX,
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                for record in self._decode_lines(src, _drop):
                    result = transform(record)
                    if result is None:
                        continue
                    tmp.write(encode_record(result) + "\n")
                    written += 1
                tmp.flush()
                os.fsync(tmp.fileno())
            # NamedTemporaryFile is created 0600; keep the store's own permissions.
            os.chmod(tmp_name, src_mode)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None:
                _discard(tmp_name)
            raise StoreWriteError(f"Failed to rewrite student file: {e}", str(self.path)) from e
        except BaseException:
            if tmp_name is not None:
                _discard(tmp_name)
            raise

        if dropped:
            logger.warning(
                "Rewrite of %s dropped %d malformed line(s): %s", self.path, len(dropped), dropped
            )
        logger.info("Rewrote %s with %d record(s)", self.path, written)
        return written

    def update(self, roll: int, changes: StudentUpdate) -> bool:
        """Apply changes to the record with this roll. False (store untouched) if absent."""
        if not self.exists(roll):
            return False

        def _edit(record: StudentRecord) -> StudentRecord:
            return changes.apply(record) if record.roll == roll else record

        self.rewrite_all(_edit)
        return True

    def delete(self, roll: int) -> bool:
        """Remove the record with this roll. False (store untouched) if absent."""
        if not self.exists(roll):
            return False
        self.rewrite_all(lambda record: None if record.roll == roll else record)
        return True


def _discard(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Could not remove temp file %s: %s", path, e)
