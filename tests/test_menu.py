"""Console-level tests for rollbook.console.menu: login, role menus and operation dispatch."""

import io
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from rollbook.console.io import Console
from rollbook.console.menu import MenuRunner, Operation, run_session
from rollbook.core.config import Settings
from rollbook.core.errors import StoreWriteError
from rollbook.schemas.auth import Session
from rollbook.services.student_store import StudentStore

CREDENTIALS = "admin adminpass ADMIN\nstaff staffpass Staff\nguest guestpass reader\n"

LOGIN_ADMIN = "admin\nadminpass\n"


class MenuTestCase(unittest.TestCase):
    """Runs a whole console session against files in a temp directory."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.dir = Path(self._tmp.name)
        self.student_path = self.dir / "student.txt"
        self.credentials_path = self.dir / "credentials.txt"
        self.credentials_path.write_text(CREDENTIALS, encoding="utf-8")
        self.settings = Settings(
            _env_file=None,
            STUDENT_FILE=str(self.student_path),
            CREDENTIALS_FILE=str(self.credentials_path),
        )

    def run_console(self, stdin_text: str) -> str:
        """Feed stdin_text to a session; return everything written to stdout."""
        out = io.StringIO()
        status = run_session(self.settings, Console(io.StringIO(stdin_text), out))
        self.assertEqual(status, 0)
        return out.getvalue()

    def write_students(self, text: str) -> None:
        self.student_path.write_text(text, encoding="utf-8")

    def read_students(self) -> str:
        return self.student_path.read_text(encoding="utf-8")


class TestLogin(MenuTestCase):
    """One login attempt per run; failures end the process with status 0."""

    def test_wrong_password(self) -> None:
        out = self.run_console("admin\nwrong\n")
        self.assertIn("========= LOGIN SCREEN =========", out)
        self.assertIn("Login failed. Exiting...", out)
        self.assertNotIn("MENU", out)

    def test_missing_credentials_file(self) -> None:
        self.credentials_path.unlink()
        out = self.run_console(LOGIN_ADMIN)
        self.assertIn(f"Error: credentials file '{self.credentials_path}' not found.", out)
        self.assertIn("with lines like: admin adminpass ADMIN", out)
        self.assertIn("Login failed. Exiting...", out)

    def test_input_exhausted_during_login(self) -> None:
        out = self.run_console("admin\n")
        self.assertIn("Login failed. Exiting...", out)

    def test_admin_menu_header(self) -> None:
        out = self.run_console(LOGIN_ADMIN + "6\n")
        self.assertIn("====== ADMIN MENU (user: admin role: ADMIN) ======", out)
        self.assertIn("5. Delete Student", out)
        self.assertIn("Logging out...", out)


class TestRoleMenus(MenuTestCase):
    """Each role only sees and can pick its own operations."""

    def test_staff_menu(self) -> None:
        out = self.run_console("staff\nstaffpass\n4\n3\n")
        self.assertIn("====== STAFF MENU (user: staff role: Staff) ======", out)
        self.assertIn("2. Search Student", out)
        self.assertNotIn("Add Student", out)
        self.assertIn("Invalid choice. Try again.", out)
        self.assertIn("Logging out...", out)

    def test_guest_menu_and_invalid_input(self) -> None:
        out = self.run_console("guest\nguestpass\nabc\n3\n1\n2\n")
        self.assertIn("====== GUEST MENU (user: guest role: reader) ======", out)
        self.assertIn("Invalid input. Try again.", out)
        self.assertIn("Invalid choice. Try again.", out)
        self.assertIn("No student records found.", out)
        self.assertNotIn("Search Student", out)

    def test_input_exhausted_ends_menu(self) -> None:
        out = self.run_console(LOGIN_ADMIN + "2\n")
        self.assertIn("No student records found.", out)
        self.assertNotIn("Logging out...", out)

    def test_dispatch_rejects_operation_outside_role(self) -> None:
        session = Session(username="guest", role_name="GUEST")
        runner = MenuRunner(session, StudentStore(self.student_path), Console(io.StringIO(), io.StringIO()))
        with self.assertRaises(PermissionError):
            runner.dispatch(Operation.DELETE)


class TestAdminOperations(MenuTestCase):
    """End-to-end CRUD through the admin menu."""

    def test_add_then_search(self) -> None:
        out = self.run_console(LOGIN_ADMIN + "1\n101\nAda Lovelace\n91.5\n3\n101\n6\n")
        self.assertIn("Student added successfully.", out)
        self.assertIn("Record Found:", out)
        self.assertIn("Roll : 101", out)
        self.assertIn("Name : Ada Lovelace", out)
        self.assertIn("Marks: 91.50", out)
        self.assertEqual(self.read_students(), "101|Ada Lovelace|91.50\n")

    def test_add_duplicate_roll(self) -> None:
        self.write_students("101|Ada Lovelace|91.50\n")
        out = self.run_console(LOGIN_ADMIN + "1\n101\n6\n")
        self.assertIn("Error: a student with roll 101 already exists.", out)
        self.assertEqual(self.read_students(), "101|Ada Lovelace|91.50\n")

    def test_add_sanitizes_name_and_rejects_bad_marks(self) -> None:
        out = self.run_console(LOGIN_ADMIN + "1\n5\nA|B\nlots\n1\n6\nC|D\n7\n6\n")
        self.assertIn("Invalid marks.", out)
        self.assertEqual(self.read_students(), "6|C D|7.00\n")

    def test_add_invalid_roll(self) -> None:
        out = self.run_console(LOGIN_ADMIN + "1\nabc\n6\n")
        self.assertIn("Invalid roll number.", out)
        self.assertFalse(self.student_path.exists())

    def test_display_table_skips_malformed(self) -> None:
        self.write_students("1|Ann|10.00\nbad|row\n2|Bo|20.50\n")
        out = self.run_console(LOGIN_ADMIN + "2\n6\n")
        self.assertIn("Roll    Name                             Marks", out)
        self.assertIn("1       Ann                              10.00", out)
        self.assertIn("2       Bo                               20.50", out)

    def test_search_not_found(self) -> None:
        self.write_students("1|Ann|10.00\n")
        out = self.run_console(LOGIN_ADMIN + "3\n42\n6\n")
        self.assertIn("Record not found for roll 42.", out)

    def test_search_without_store_file(self) -> None:
        out = self.run_console(LOGIN_ADMIN + "3\n42\n6\n")
        self.assertIn("No student records found.", out)
        self.assertNotIn("Record not found", out)

    def test_update_marks_keep_name(self) -> None:
        self.write_students("101|Ada|50.00\n102|Bo|60.00\n")
        out = self.run_console(LOGIN_ADMIN + "4\n101\n\n75\n6\n")
        self.assertIn("Current Name : Ada", out)
        self.assertIn("Current Marks: 50.00", out)
        self.assertIn("Record updated for roll 101.", out)
        self.assertEqual(self.read_students(), "101|Ada|75.00\n102|Bo|60.00\n")

    def test_update_invalid_marks_keeps_current(self) -> None:
        self.write_students("101|Ada|50.00\n")
        out = self.run_console(LOGIN_ADMIN + "4\n101\nAda King\nabc\n6\n")
        self.assertIn("Invalid marks input; keeping current marks.", out)
        self.assertEqual(self.read_students(), "101|Ada King|50.00\n")

    def test_update_not_found(self) -> None:
        self.write_students("101|Ada|50.00\n")
        out = self.run_console(LOGIN_ADMIN + "4\n7\n6\n")
        self.assertIn("Record not found for roll 7.", out)

    def test_delete(self) -> None:
        self.write_students("1|Ann|10.00\n2|Bo|20.00\n3|Cid|30.00\n")
        out = self.run_console(LOGIN_ADMIN + "5\n2\n6\n")
        self.assertIn("Record deleted for roll 2.", out)
        self.assertEqual(self.read_students(), "1|Ann|10.00\n3|Cid|30.00\n")

    def test_delete_nonexistent_leaves_store_unchanged(self) -> None:
        self.write_students("1|Ann|10.00\n")
        before = self.student_path.read_bytes()
        out = self.run_console(LOGIN_ADMIN + "5\n999\n6\n")
        self.assertIn("Record not found for roll 999.", out)
        self.assertEqual(self.student_path.read_bytes(), before)

    def test_write_failure_reported_as_warning(self) -> None:
        with patch.object(
            StudentStore,
            "append_record",
            side_effect=StoreWriteError("Failed to open student file for writing: denied"),
        ):
            out = self.run_console(LOGIN_ADMIN + "1\n9\nZed\n1\n6\n")
        self.assertIn("Warning: Failed to open student file for writing: denied", out)
        self.assertIn("Logging out...", out)


if __name__ == "__main__":
    unittest.main()
