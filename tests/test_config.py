"""Unit tests for inkwell.core.config.Settings validation."""

import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from inkwell.core.config import Settings


def _settings(**env: str) -> Settings:
    """Build Settings from exactly the given environment (no .env file)."""
    with patch.dict(os.environ, env, clear=True):
        return Settings(_env_file=None)


class TestJwtSecretRequired(unittest.TestCase):
    """A missing or blank JWT_SECRET is a startup error; there is no default secret."""

    def test_missing_secret_fails(self) -> None:
        with self.assertRaises(ValidationError):
            _settings()

    def test_blank_secret_fails(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="   ")

    def test_secret_is_not_exposed_in_repr(self) -> None:
        settings = _settings(JWT_SECRET="s3cret")
        self.assertEqual(settings.JWT_SECRET.get_secret_value(), "s3cret")
        self.assertNotIn("s3cret", repr(settings))


class TestDefaults(unittest.TestCase):
    def test_session_and_listing_defaults(self) -> None:
        settings = _settings(JWT_SECRET="x")
        self.assertEqual(settings.JWT_EXPIRE_MINUTES, 60)
        self.assertEqual(settings.JWT_ALGORITHM, "HS256")
        self.assertEqual(settings.RECENT_POSTS_LIMIT, 20)
        self.assertEqual(settings.API_PREFIX, "")


class TestFieldValidators(unittest.TestCase):
    """Out-of-range or malformed values are rejected."""

    def test_database_url_must_be_postgres_or_sqlite(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="x", DATABASE_URL="mysql://localhost/db")
        self.assertEqual(
            _settings(JWT_SECRET="x", DATABASE_URL="sqlite:///blog.db").DATABASE_URL,
            "sqlite:///blog.db",
        )

    def test_expire_minutes_range(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="x", JWT_EXPIRE_MINUTES="0")

    def test_bcrypt_rounds_range(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="x", BCRYPT_ROUNDS="3")

    def test_api_prefix_must_start_with_slash(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="x", API_PREFIX="api")
        self.assertEqual(_settings(JWT_SECRET="x", API_PREFIX="/api/").API_PREFIX, "/api")

    def test_cover_extensions_are_normalized(self) -> None:
        settings = _settings(JWT_SECRET="x", ALLOWED_COVER_EXTENSIONS='["PNG", ".Jpg"]')
        self.assertEqual(settings.ALLOWED_COVER_EXTENSIONS, [".png", ".jpg"])


if __name__ == "__main__":
    unittest.main()
