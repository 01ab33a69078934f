"""
Console entrypoint. No business logic; only wiring. Run from the data directory:

  python -m rollbook.main

or, once installed, `rollbook`. Reads credentials.txt and student.txt from the
working directory unless ROLLBOOK_CREDENTIALS_FILE / ROLLBOOK_STUDENT_FILE say otherwise.
"""

import sys

from dotenv import load_dotenv

from rollbook.console.menu import run_session
from rollbook.core.config import get_settings
from rollbook.core.logging import configure_logging


def main() -> int:
    load_dotenv()
    settings = get_settings()
    configure_logging(settings)
    return run_session(settings)


if __name__ == "__main__":
    sys.exit(main())
