"""Unit tests for the create_user command-line script."""

import unittest
from unittest.mock import patch

from inkwell.models import User
from inkwell.scripts import create_user
from tests.db import make_session_factory


class TestCreateUserScript(unittest.TestCase):
    def setUp(self) -> None:
        self.session_factory = make_session_factory()
        patcher = patch.object(create_user, "SessionLocal", self.session_factory)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_creates_user(self) -> None:
        self.assertEqual(create_user.main(["alice", "pw1"]), 0)
        with self.session_factory() as db:
            self.assertEqual(db.query(User).filter(User.username == "alice").count(), 1)

    def test_duplicate_returns_error_code(self) -> None:
        self.assertEqual(create_user.main(["alice", "pw1"]), 0)
        self.assertEqual(create_user.main(["alice", "pw2"]), 1)

    def test_blank_username_is_rejected(self) -> None:
        self.assertEqual(create_user.main(["   ", "pw1"]), 1)
        with self.session_factory() as db:
            self.assertEqual(db.query(User).count(), 0)


if __name__ == "__main__":
    unittest.main()
