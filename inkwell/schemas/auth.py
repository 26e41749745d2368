"""Request/response schemas for signup, login and profile endpoints."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 1
PASSWORD_MAX_LEN = 128


def normalize_username(value: str) -> str:
    """Strip surrounding whitespace; raise ValueError unless 1-255 characters remain."""
    username = value.strip()
    if not USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN:
        raise ValueError(f"Username must be {USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} characters")
    return username


class SignupRequest(BaseModel):
    """Credentials for a new account."""

    username: str = Field(..., description="Username")
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, v: str) -> str:
        return normalize_username(v)


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., description="Username")
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, v: str) -> str:
        return normalize_username(v)


class CurrentUser(BaseModel):
    """Authenticated user (id, username) resolved from a session token."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str


class SignupResponse(BaseModel):
    """Response for POST /signup. Never includes the password hash."""

    user: CurrentUser


class LoginResponse(BaseModel):
    """Response for POST /login; the token is also set as an HTTP-only cookie."""

    message: str = Field(default="Login successful")
    id: int
    username: str
    token: str = Field(..., description="Signed session token")


class MessageResponse(BaseModel):
    message: str
