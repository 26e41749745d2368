"""Unit tests for inkwell.services.users: signup uniqueness and password authentication."""

import unittest
from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from inkwell.core.exceptions import (
    DuplicateUsername,
    InvalidCredentials,
    InvalidUsername,
    StoreError,
)
from inkwell.models import User
from inkwell.schemas.auth import CurrentUser
from inkwell.services.users import UserService
from tests.db import add_user, make_session_factory


class UserServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()
        self.addCleanup(self.db.close)
        self.users = UserService(self.db, bcrypt_rounds=4)


class TestSignup(UserServiceTestCase):
    def test_creates_user_with_hashed_password(self) -> None:
        user = self.users.signup("alice", "pw1")
        self.assertIsNotNone(user.id)
        self.assertEqual(user.username, "alice")
        self.assertNotEqual(user.password_hash, "pw1")

    def test_identity_builds_from_orm_row(self) -> None:
        user = self.users.signup("alice", "pw1")
        self.assertEqual(CurrentUser.model_validate(user), CurrentUser(id=user.id, username="alice"))

    def test_duplicate_username_is_rejected(self) -> None:
        self.users.signup("alice", "pw1")
        with self.assertRaises(DuplicateUsername) as ctx:
            self.users.signup("alice", "other")
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertEqual(self.db.query(User).count(), 1)

    def test_blank_username_is_rejected(self) -> None:
        for username in ("", "   ", "\t\n"):
            with self.assertRaises(InvalidUsername) as ctx:
                self.users.signup(username, "pw1")
            self.assertEqual(ctx.exception.status_code, 422)
        self.assertEqual(self.db.query(User).count(), 0)

    def test_username_is_stored_stripped(self) -> None:
        self.assertEqual(self.users.signup("  alice ", "pw1").username, "alice")
        with self.assertRaises(DuplicateUsername):
            self.users.signup("alice", "pw2")

    def test_overlong_username_is_rejected(self) -> None:
        with self.assertRaises(InvalidUsername):
            self.users.signup("a" * 256, "pw1")

    def test_store_failure_is_reported(self) -> None:
        with patch.object(
            self.db, "commit", side_effect=OperationalError("INSERT", {}, Exception("db down"))
        ):
            with self.assertRaises(StoreError):
                self.users.signup("alice", "pw1")


class TestAuthenticate(UserServiceTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.alice = self.users.signup("alice", "pw1")

    def test_correct_password(self) -> None:
        self.assertEqual(self.users.authenticate("alice", "pw1").id, self.alice.id)

    def test_wrong_password(self) -> None:
        with self.assertRaises(InvalidCredentials) as ctx:
            self.users.authenticate("alice", "nope")
        self.assertEqual(ctx.exception.status_code, 400)

    def test_unknown_user(self) -> None:
        with self.assertRaises(InvalidCredentials):
            self.users.authenticate("mallory", "pw1")

    def test_blank_username_never_authenticates(self) -> None:
        add_user(self.db, "", password="pw1")
        with self.assertRaises(InvalidCredentials):
            self.users.authenticate("   ", "pw1")


if __name__ == "__main__":
    unittest.main()
