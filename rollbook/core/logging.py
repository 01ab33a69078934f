"""Process-wide logging setup for the console entrypoint."""

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rollbook.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
# Local time, so no UTC "Z" suffix.
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def configure_logging(settings: "Settings") -> None:
    """Send log records to stderr so stdout carries only the console protocol."""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stderr,
    )
