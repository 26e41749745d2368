"""Signup, login, profile and logout endpoints."""

import logging

from fastapi import APIRouter, Response

from inkwell.api.deps import Authority, SessionUser, Users
from inkwell.core.config import get_settings
from inkwell.core.security import SESSION_COOKIE_NAME
from inkwell.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    SignupRequest,
    SignupResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signup", response_model=SignupResponse)
def signup(body: SignupRequest, users: Users) -> SignupResponse:
    """Create an account. Duplicate usernames are reported as a signup failure (500)."""
    user = users.signup(body.username, body.password)
    return SignupResponse(user=CurrentUser(id=user.id, username=user.username))


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    response: Response,
    users: Users,
    authority: Authority,
) -> LoginResponse:
    """
    Authenticate with username and password.

    Returns the session token and also sets it as an HTTP-only cookie named
    `token` that expires together with the token.
    """
    user = users.authenticate(body.username, body.password)
    identity = CurrentUser(id=user.id, username=user.username)
    token = authority.issue(identity)
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=authority.max_age_seconds,
        httponly=True,
        secure=get_settings().COOKIE_SECURE,
        samesite="lax",
        path="/",
    )
    logger.info("User logged in", extra={"user_id": user.id})
    return LoginResponse(id=user.id, username=user.username, token=token)


@router.get("/profile", response_model=CurrentUser)
def profile(current_user: SessionUser) -> CurrentUser:
    """Return the identity carried by the session cookie."""
    return current_user


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response) -> MessageResponse:
    """Clear the session cookie. Tokens are stateless, so nothing is revoked server side."""
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=get_settings().COOKIE_SECURE,
        samesite="lax",
    )
    return MessageResponse(message="Logged out successfully")
