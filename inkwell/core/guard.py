"""Authorization guard: resolve the caller from a session token and check resource ownership."""

from inkwell.core.exceptions import ForbiddenError
from inkwell.core.security import SessionAuthority
from inkwell.schemas.auth import CurrentUser


def resolve_session(token: str | None, authority: SessionAuthority) -> CurrentUser:
    """Verify the session token and return the caller. Raises an AuthError subclass on failure."""
    return authority.verify(token)


def require_ownership(identity: CurrentUser, resource_owner_id: int) -> None:
    """Raise ForbiddenError unless the caller owns the resource. Must run before any write."""
    if identity.id != resource_owner_id:
        raise ForbiddenError()
