"""Domain exceptions. Each carries a user-facing message and the HTTP status it maps to."""

from fastapi import status


class InkwellError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


# --- Authentication -------------------------------------------------------


class AuthError(InkwellError):
    """Session token missing, invalid or expired."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class MissingToken(AuthError):
    default_message = "Not authenticated"


class InvalidToken(AuthError):
    default_message = "Invalid session token"


class TokenExpired(AuthError):
    default_message = "Session token has expired"


class InvalidCredentials(InkwellError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid username or password"


# --- Missing resources ----------------------------------------------------


class NotFoundError(InkwellError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class PostNotFound(NotFoundError):
    default_message = "Post not found"


class CommentNotFound(NotFoundError):
    default_message = "Comment not found"


# --- Ownership ------------------------------------------------------------


class ForbiddenError(InkwellError):
    """Caller is authenticated but does not own the resource."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You are not the owner of this resource"


# --- Conflicts ------------------------------------------------------------


class ConflictError(InkwellError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class AlreadyLiked(ConflictError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "You have already liked this post"


class DuplicateUsername(ConflictError):
    # Signup reports duplicates as a generic failure.
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Signup failed: username is already taken"


# --- Input and storage ----------------------------------------------------


class InvalidUsername(InkwellError):
    status_code = status.HTTP_422_UNPROCESSABLE_CONTENT
    default_message = "Username must not be blank"


class InvalidUpload(InkwellError):
    status_code = status.HTTP_422_UNPROCESSABLE_CONTENT
    default_message = "Invalid cover upload"


class StoreError(InkwellError):
    """Raised when the database or blob storage fails. The original exception is kept as `cause`."""

    default_message = "Storage error"

    def __init__(self, message: str | None = None, cause: Exception | None = None) -> None:
        self.cause = cause
        super().__init__(message)
