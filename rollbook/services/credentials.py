"""Plaintext credential table lookup.

The credentials file holds one `username password role` record per line. It is
educational only: passwords are stored and compared in plain text, there is no
lockout and no rate limiting.
"""

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import NamedTuple

from rollbook.core.errors import CredentialStoreUnavailableError, InvalidCredentialsError
from rollbook.schemas.auth import Session

logger = logging.getLogger(__name__)


class Credential(NamedTuple):
    username: str
    password: str
    role: str


class CredentialStore:
    """Reads the credential table fresh on every login attempt (no caching)."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def iter_credentials(self) -> Iterator[Credential]:
        """Yield well-formed credential lines in file order. Raises CredentialStoreUnavailableError if unreadable."""
        try:
            fh = self.path.open("r", encoding="utf-8", errors="replace")
        except OSError as e:
            raise CredentialStoreUnavailableError(str(self.path)) from e
        with fh:
            for line in fh:
                tokens = line.split()
                # Extra tokens after the role are ignored.
                if len(tokens) < 3:
                    continue
                yield Credential(tokens[0], tokens[1], tokens[2])

    def authenticate(self, username: str, password: str) -> Session:
        """
        Return a Session for the first line matching username and password exactly (case-sensitive).
        Raises CredentialStoreUnavailableError or InvalidCredentialsError.
        """
        for cred in self.iter_credentials():
            if cred.username == username and cred.password == password:
                logger.info("Login succeeded: user=%s role=%s", cred.username, cred.role)
                return Session(username=cred.username, role_name=cred.role)
        raise InvalidCredentialsError()
