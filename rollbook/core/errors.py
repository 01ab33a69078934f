"""Exception types shared by the stores and the console menu."""


class RollbookError(Exception):
    """Base class for recoverable rollbook failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuthenticationError(RollbookError):
    """Login did not produce a session."""


class CredentialStoreUnavailableError(AuthenticationError):
    """Raised when the credentials file is missing or unreadable."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"credentials file '{path}' not found.")


class InvalidCredentialsError(AuthenticationError):
    """Raised when no credential line matches the supplied username and password."""

    def __init__(self) -> None:
        super().__init__("Invalid username or password.")


class StoreError(RollbookError):
    """Student store operation failed."""


class StoreWriteError(StoreError):
    """Raised when the store or its temp file cannot be opened, written or replaced."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(message)


class DuplicateRollError(StoreError):
    """Raised when adding a record whose roll is already in the store."""

    def __init__(self, roll: int) -> None:
        self.roll = roll
        super().__init__(f"a student with roll {roll} already exists.")


class RecordDecodeError(ValueError):
    """Raised when a store line is not a well-formed `roll|name|marks` record."""

    def __init__(self, line: str, reason: str) -> None:
        self.line = line
        self.reason = reason
        super().__init__(f"{reason}: {line!r}")


class EndOfInput(EOFError):
    """Console input is exhausted; the current operation cannot proceed."""
