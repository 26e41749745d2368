"""SQLAlchemy ORM models."""

from inkwell.models.base import Base
from inkwell.models.post import Comment, Post, PostLike
from inkwell.models.user import User

__all__ = ["Base", "Comment", "Post", "PostLike", "User"]
