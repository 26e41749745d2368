"""Credential store: signup and password authentication over the users table."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from inkwell.core.exceptions import (
    DuplicateUsername,
    InvalidCredentials,
    InvalidUsername,
    StoreError,
)
from inkwell.core.security import BCRYPT_ROUNDS, hash_password, verify_password
from inkwell.models import User
from inkwell.schemas.auth import normalize_username

logger = logging.getLogger(__name__)


class UserService:
    """Creates users and checks their passwords. Usernames are unique."""

    def __init__(self, db: Session, bcrypt_rounds: int = BCRYPT_ROUNDS) -> None:
        self.db = db
        self.bcrypt_rounds = bcrypt_rounds

    def signup(self, username: str, password: str) -> User:
        """Create a user; raises InvalidUsername for a blank name and DuplicateUsername when it is taken."""
        try:
            username = normalize_username(username)
        except ValueError as e:
            raise InvalidUsername(str(e)) from e
        user = User(
            username=username,
            password_hash=hash_password(password, rounds=self.bcrypt_rounds),
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info("Signup rejected: duplicate username", extra={"username": username})
            raise DuplicateUsername() from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError("Signup failed", cause=e) from e
        self.db.refresh(user)
        logger.info("User signed up", extra={"user_id": user.id, "username": username})
        return user

    def get_by_username(self, username: str) -> User | None:
        try:
            return self.db.query(User).filter(User.username == username.strip()).first()
        except SQLAlchemyError as e:
            raise StoreError("Failed to load user", cause=e) from e

    def authenticate(self, username: str, password: str) -> User:
        """Return the user when the password matches; raises InvalidCredentials otherwise."""
        user = self.get_by_username(username) if username.strip() else None
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Login failed", extra={"username": username})
            raise InvalidCredentials()
        return user
