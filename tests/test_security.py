"""Unit tests for inkwell.core.security: password hashing and session token issue/verify."""

import unittest
from datetime import timedelta

import jwt

from inkwell.core.exceptions import AuthError, InvalidToken, MissingToken, TokenExpired
from inkwell.core.security import SessionAuthority, hash_password, verify_password
from inkwell.schemas.auth import CurrentUser
from tests.db import FakeClock

SECRET = "unit-test-secret"
ALICE = CurrentUser(id=7, username="alice")


def _authority(clock: FakeClock, secret: str = SECRET) -> SessionAuthority:
    return SessionAuthority(secret=secret, lifetime=timedelta(hours=1), clock=clock)


class TestPasswordHashing(unittest.TestCase):
    """hash_password produces a bcrypt hash that verify_password accepts only for the right password."""

    def test_round_trip(self) -> None:
        hashed = hash_password("pw1", rounds=4)
        self.assertNotEqual(hashed, "pw1")
        self.assertTrue(verify_password("pw1", hashed))
        self.assertFalse(verify_password("pw2", hashed))

    def test_garbage_hash_is_rejected_not_raised(self) -> None:
        self.assertFalse(verify_password("pw1", "not-a-bcrypt-hash"))


class TestIssueAndVerify(unittest.TestCase):
    """A freshly issued token verifies back to the same identity."""

    def test_verify_returns_identity(self) -> None:
        authority = _authority(FakeClock())
        token = authority.issue(ALICE)
        self.assertEqual(authority.verify(token), ALICE)

    def test_claims_carry_one_hour_expiry(self) -> None:
        clock = FakeClock()
        token = _authority(clock).issue(ALICE)
        claims = jwt.decode(token, SECRET, algorithms=["HS256"], options={"verify_exp": False})
        self.assertEqual(claims["sub"], "7")
        self.assertEqual(claims["username"], "alice")
        self.assertEqual(claims["exp"] - claims["iat"], 3600)

    def test_max_age_matches_lifetime(self) -> None:
        self.assertEqual(_authority(FakeClock()).max_age_seconds, 3600)

    def test_empty_secret_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            SessionAuthority(secret="  ")


class TestExpiry(unittest.TestCase):
    """Tokens are valid strictly before exp and rejected from exp onwards."""

    def setUp(self) -> None:
        self.clock = FakeClock()
        self.authority = _authority(self.clock)
        self.issued_at = self.clock.now
        self.token = self.authority.issue(ALICE)

    def test_one_second_before_expiry_succeeds(self) -> None:
        self.clock.now = self.issued_at + timedelta(hours=1) - timedelta(seconds=1)
        self.assertEqual(self.authority.verify(self.token).id, ALICE.id)

    def test_at_expiry_fails(self) -> None:
        self.clock.now = self.issued_at + timedelta(hours=1)
        with self.assertRaises(TokenExpired):
            self.authority.verify(self.token)

    def test_after_expiry_fails(self) -> None:
        self.clock.now = self.issued_at + timedelta(hours=1, seconds=1)
        with self.assertRaises(TokenExpired):
            self.authority.verify(self.token)

    def test_sub_second_issue_time_keeps_full_lifetime(self) -> None:
        self.clock.now = self.issued_at.replace(microsecond=900000)
        token = self.authority.issue(ALICE)
        self.clock.now += timedelta(minutes=59, seconds=59, milliseconds=500)
        self.assertEqual(self.authority.verify(token), ALICE)
        self.clock.now += timedelta(milliseconds=500)
        with self.assertRaises(TokenExpired):
            self.authority.verify(token)


class TestInvalidTokens(unittest.TestCase):
    """Missing, malformed, tampered or foreign tokens are rejected."""

    def setUp(self) -> None:
        self.clock = FakeClock()
        self.authority = _authority(self.clock)

    def test_missing_token(self) -> None:
        for value in (None, ""):
            with self.assertRaises(MissingToken):
                self.authority.verify(value)

    def test_malformed_token(self) -> None:
        with self.assertRaises(InvalidToken):
            self.authority.verify("not.a.jwt")

    def test_wrong_secret(self) -> None:
        token = _authority(self.clock, secret="other-secret").issue(ALICE)
        with self.assertRaises(InvalidToken):
            self.authority.verify(token)

    def test_tampered_payload(self) -> None:
        header, _payload, signature = self.authority.issue(ALICE).split(".")
        forged = _authority(self.clock, secret="attacker").issue(
            CurrentUser(id=1, username="admin")
        )
        forged_payload = forged.split(".")[1]
        with self.assertRaises(InvalidToken):
            self.authority.verify(f"{header}.{forged_payload}.{signature}")

    def test_missing_claims(self) -> None:
        token = jwt.encode({"sub": "7"}, SECRET, algorithm="HS256")
        with self.assertRaises(InvalidToken):
            self.authority.verify(token)

    def test_non_numeric_subject(self) -> None:
        now = int(self.clock.now.timestamp())
        token = jwt.encode(
            {"sub": "alice", "username": "alice", "iat": now, "exp": now + 60},
            SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(InvalidToken):
            self.authority.verify(token)

    def test_all_failures_are_auth_errors(self) -> None:
        with self.assertRaises(AuthError) as ctx:
            self.authority.verify("garbage")
        self.assertEqual(ctx.exception.status_code, 401)


if __name__ == "__main__":
    unittest.main()
