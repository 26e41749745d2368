"""Pydantic request/response schemas."""

from inkwell.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    SignupRequest,
    SignupResponse,
)
from inkwell.schemas.health import HealthResponse
from inkwell.schemas.posts import (
    AuthorOut,
    CommentCreate,
    CommentOut,
    LikeResponse,
    PostDraft,
    PostOut,
    PostPatch,
)

__all__ = [
    "AuthorOut",
    "CommentCreate",
    "CommentOut",
    "CurrentUser",
    "HealthResponse",
    "LikeResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "PostDraft",
    "PostOut",
    "PostPatch",
    "SignupRequest",
    "SignupResponse",
]
