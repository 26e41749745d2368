"""ORM model for application users (credential store)."""

from sqlalchemy import Column, Integer, String

from inkwell.models.base import Base


class User(Base):
    """
    User account for session authentication.

    username is unique and immutable; password_hash is an opaque bcrypt hash.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
