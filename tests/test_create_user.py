"""Tests for the create_user CLI script."""

import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from support import make_session_factory

from app.core.security import verify_password
from app.models import User
from app.scripts import create_user


class TestCreateUserScript(unittest.TestCase):
    def setUp(self) -> None:
        self.session_factory = make_session_factory()
        patcher = patch.object(create_user, "SessionLocal", self.session_factory)
        patcher.start()
        self.addCleanup(patcher.stop)

    def run_script(self, *argv: str) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = create_user.main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_creates_admin_with_hashed_password(self) -> None:
        code, out, _ = self.run_script("root", "secret123", "admin", "--email", "root@example.com")
        self.assertEqual(code, 0)
        self.assertIn("role 'admin'", out)
        with self.session_factory() as db:
            user = db.query(User).filter(User.username == "root").one()
            self.assertEqual(user.role, "admin")
            self.assertEqual(user.email, "root@example.com")
            self.assertTrue(verify_password("secret123", user.password_hash))

    def test_existing_username_fails(self) -> None:
        self.assertEqual(self.run_script("root", "secret123")[0], 0)
        code, _, err = self.run_script("root", "other-pass")
        self.assertEqual(code, 1)
        self.assertIn("already exists", err)

    def test_existing_email_fails_regardless_of_case(self) -> None:
        self.assertEqual(self.run_script("root", "secret123", "--email", "root@example.com")[0], 0)
        code, _, err = self.run_script("other", "secret123", "--email", "Root@Example.com")
        self.assertEqual(code, 1)
        self.assertIn("already in use", err)
        with self.session_factory() as db:
            self.assertEqual(db.query(User).count(), 1)

    def test_invalid_username_fails_without_writing(self) -> None:
        code, _, err = self.run_script("no way", "secret123")
        self.assertEqual(code, 1)
        self.assertIn("letters and numbers", err)
        with self.session_factory() as db:
            self.assertEqual(db.query(User).count(), 0)


if __name__ == "__main__":
    unittest.main()
