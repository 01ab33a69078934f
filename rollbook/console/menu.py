"""Login and role-gated menu loop over the student store.

A run authenticates once, then loops over the numbered menu for the session's
role until Logout is chosen or console input runs out. Every failure is handled
at the operation boundary; nothing raised by an operation ends the loop.
"""

import logging
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING

from rollbook.console.io import Console
from rollbook.console.prompts import (
    parse_choice,
    parse_marks,
    parse_name,
    parse_optional_marks,
    parse_optional_name,
    parse_roll,
)
from rollbook.core.errors import (
    CredentialStoreUnavailableError,
    DuplicateRollError,
    EndOfInput,
    InvalidCredentialsError,
    StoreError,
)
from rollbook.schemas.auth import Role, Session
from rollbook.schemas.student import StudentRecord, StudentUpdate
from rollbook.services.credentials import CredentialStore
from rollbook.services.student_store import StudentStore

if TYPE_CHECKING:
    from rollbook.core.config import Settings

logger = logging.getLogger(__name__)

TABLE_RULE = "-" * 62


class Operation(str, Enum):
    """Menu entries; the value is the label printed next to the choice number."""

    ADD = "Add Student"
    DISPLAY = "Display Students"
    SEARCH = "Search Student"
    UPDATE = "Update Student"
    DELETE = "Delete Student"
    LOGOUT = "Logout"


# Most to least privileged. Menu numbers follow tuple order, starting at 1.
ROLE_OPERATIONS: dict[Role, tuple[Operation, ...]] = {
    Role.ADMIN: (
        Operation.ADD,
        Operation.DISPLAY,
        Operation.SEARCH,
        Operation.UPDATE,
        Operation.DELETE,
        Operation.LOGOUT,
    ),
    Role.STAFF: (Operation.DISPLAY, Operation.SEARCH, Operation.LOGOUT),
    Role.GUEST: (Operation.DISPLAY, Operation.LOGOUT),
}


def operations_for(session: Session) -> tuple[Operation, ...]:
    return ROLE_OPERATIONS[session.role]


class MenuRunner:
    """Cooperative menu loop for one authenticated session."""

    def __init__(self, session: Session, store: StudentStore, console: Console) -> None:
        self.session = session
        self.store = store
        self.console = console
        self.operations = operations_for(session)
        self._handlers: dict[Operation, Callable[[], None]] = {
            Operation.ADD: self.add_student,
            Operation.DISPLAY: self.display_students,
            Operation.SEARCH: self.search_student,
            Operation.UPDATE: self.update_student,
            Operation.DELETE: self.delete_student,
        }

    def run(self) -> None:
        """Loop until Logout or end of input."""
        try:
            while True:
                operation = self._read_choice()
                if operation is None:
                    continue
                if operation is Operation.LOGOUT:
                    self.console.print("Logging out...")
                    return
                self.dispatch(operation)
        except EndOfInput:
            logger.info("Console input exhausted; ending session for %s", self.session.username)

    def _read_choice(self) -> Operation | None:
        self.console.print()
        self.console.print(
            f"====== {self.session.role.value} MENU "
            f"(user: {self.session.username} role: {self.session.role_name}) ======"
        )
        for number, operation in enumerate(self.operations, start=1):
            self.console.print(f"{number}. {operation.value}")
        result = parse_choice(self.console.ask("Enter choice: "), len(self.operations))
        if not result.ok:
            self.console.print(result.error)
            return None
        return self.operations[result.value - 1]

    def dispatch(self, operation: Operation) -> None:
        """Run one operation. Store failures are reported as warnings; EndOfInput propagates."""
        if operation not in self.operations:
            raise PermissionError(f"{operation.value} is not permitted for role {self.session.role.value}")
        try:
            self._handlers[operation]()
        except StoreError as e:
            logger.warning("%s failed: %s", operation.value, e.message)
            self.console.print(f"Warning: {e.message}")

    def _ask_roll(self, prompt: str) -> int | None:
        result = parse_roll(self.console.ask(prompt))
        if not result.ok:
            self.console.print(result.error)
            return None
        return result.value

    def add_student(self) -> None:
        self.console.print()
        roll = self._ask_roll("Enter Roll: ")
        if roll is None:
            return
        if self.store.exists(roll):
            self.console.print(f"Error: a student with roll {roll} already exists.")
            return

        name = parse_name(self.console.ask("Enter Name (spaces allowed): "))
        if not name.ok:
            self.console.print(name.error)
            return
        marks = parse_marks(self.console.ask("Enter Marks: "))
        if not marks.ok:
            self.console.print(marks.error)
            return

        try:
            self.store.add(StudentRecord(roll=roll, name=name.value, marks=marks.value))
        except DuplicateRollError as e:
            self.console.print(f"Error: {e.message}")
            return
        self.console.print("Student added successfully.")

    def display_students(self) -> None:
        records = self.store.read_all()
        if not records:
            self.console.print("No student records found.")
            return
        self.console.print()
        self.console.print(f"{'Roll':<6}  {'Name':<30}  {'Marks':>6}")
        self.console.print(TABLE_RULE)
        for record in records:
            self.console.print(f"{record.roll:<6d}  {record.name:<30}  {record.marks:6.2f}")

    def search_student(self) -> None:
        roll = self._ask_roll("Enter Roll to search: ")
        if roll is None:
            return
        if not self.store.path.exists():
            self.console.print("No student records found.")
            return
        record = self.store.find(roll)
        if record is None:
            self.console.print(f"Record not found for roll {roll}.")
            return
        self.console.print()
        self.console.print("Record Found:")
        self.console.print(f"Roll : {record.roll}")
        self.console.print(f"Name : {record.name}")
        self.console.print(f"Marks: {record.marks:.2f}")

    def update_student(self) -> None:
        roll = self._ask_roll("Enter Roll to update: ")
        if roll is None:
            return
        current = self.store.find(roll)
        if current is None:
            self.console.print(f"Record not found for roll {roll}.")
            return
        self.console.print(f"Current Name : {current.name}")
        self.console.print(f"Current Marks: {current.marks:.2f}")

        name = parse_optional_name(self.console.ask("Enter new Name (blank to keep current): "))
        if not name.ok:
            self.console.print(f"{name.error} Keeping current name.")
        marks = parse_optional_marks(self.console.ask("Enter new Marks (blank to keep current): "))
        if not marks.ok:
            self.console.print("Invalid marks input; keeping current marks.")

        changes = StudentUpdate(
            name=name.value if name.ok else None,
            marks=marks.value if marks.ok else None,
        )
        if self.store.update(roll, changes):
            self.console.print(f"Record updated for roll {roll}.")
        else:
            self.console.print(f"Record not found for roll {roll}.")

    def delete_student(self) -> None:
        roll = self._ask_roll("Enter Roll to delete: ")
        if roll is None:
            return
        if self.store.delete(roll):
            self.console.print(f"Record deleted for roll {roll}.")
        else:
            self.console.print(f"Record not found for roll {roll}.")


def login(credentials: CredentialStore, console: Console) -> Session | None:
    """Single login attempt. Returns None on any failure, after reporting it."""
    console.print("========= LOGIN SCREEN =========")
    try:
        username = console.ask("Username: ")
        password = console.ask("Password: ")
    except EndOfInput:
        logger.warning("Login aborted: console input exhausted")
        return None

    try:
        return credentials.authenticate(username, password)
    except CredentialStoreUnavailableError as e:
        logger.warning("Login failed: credential store unavailable (%s)", e.path)
        console.print(f"Error: {e.message}")
        console.print(f"Create '{e.path}' with lines like: admin adminpass ADMIN")
    except InvalidCredentialsError:
        logger.warning("Login failed: bad credentials for user=%s", username)
    return None


def run_session(settings: "Settings", console: Console | None = None) -> int:
    """LoggedOut -> Authenticating -> role menu -> LoggedOut. Always returns exit status 0."""
    console = console or Console()
    session = login(CredentialStore(settings.CREDENTIALS_FILE), console)
    if session is None:
        console.print()
        console.print("Login failed. Exiting...")
        return 0
    MenuRunner(session, StudentStore(settings.STUDENT_FILE), console).run()
    return 0
