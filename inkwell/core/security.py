"""Password hashing and signed session tokens (issue/verify)."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from inkwell.core.exceptions import InvalidToken, MissingToken, TokenExpired
from inkwell.schemas.auth import CurrentUser

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

SESSION_COOKIE_NAME = "token"
DEFAULT_SESSION_LIFETIME = timedelta(hours=1)

_REQUIRED_CLAIMS = ["sub", "username", "iat", "exp"]


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SessionAuthority:
    """
    Issues and verifies stateless, signed session tokens.

    Tokens are HS256 JWTs carrying sub (user id), username, iat and exp.
    Verification never touches the database, so a token stays valid until
    it expires; there is no revocation.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        lifetime: timedelta = DEFAULT_SESSION_LIFETIME,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret or not secret.strip():
            raise ValueError("SessionAuthority requires a non-empty signing secret")
        self._secret = secret
        self.algorithm = algorithm
        self.lifetime = lifetime
        self._clock = clock

    @property
    def max_age_seconds(self) -> int:
        """Cookie max-age matching the token lifetime."""
        return int(self.lifetime.total_seconds())

    def issue(self, identity: CurrentUser) -> str:
        """Create a signed token for the identity, expiring `lifetime` from now."""
        now = self._clock()
        # Fractional NumericDates keep the lifetime exact; datetimes would be truncated to seconds.
        payload: dict[str, Any] = {
            "sub": str(identity.id),
            "username": identity.username,
            "iat": now.timestamp(),
            "exp": (now + self.lifetime).timestamp(),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str | None) -> CurrentUser:
        """
        Return the identity embedded in a valid token.

        Raises MissingToken for an empty token, InvalidToken for a bad signature,
        malformed token or bad claims, and TokenExpired once the clock reaches exp.
        """
        if not token:
            raise MissingToken()
        try:
            # Expiry is checked below against the injected clock.
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={
                    "require": _REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.PyJWTError as e:
            raise InvalidToken() from e

        exp = payload.get("exp")
        if not isinstance(exp, (int, float)):
            raise InvalidToken()
        if self._clock().timestamp() >= exp:
            raise TokenExpired()

        username = payload.get("username")
        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError) as e:
            raise InvalidToken() from e
        if not isinstance(username, str) or not username:
            raise InvalidToken()
        return CurrentUser(id=user_id, username=username)
