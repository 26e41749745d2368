"""ORM models for posts and their like-set and comments."""

from datetime import UTC, datetime

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from inkwell.models.base import Base


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Post(Base):
    """
    A blog post owned by its author.

    like_count is denormalized from post_likes and only ever changes in the
    same transaction as a like row, so like_count == len(liked_by).
    Likes and comments are deleted together with the post.
    """

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    author_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(500), nullable=False)
    summary = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    cover_path = Column(String(1024), nullable=False)
    like_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    __table_args__ = (
        Index("ix_posts_created_at_id", "created_at", "id"),
        CheckConstraint("like_count >= 0", name="ck_posts_like_count_non_negative"),
    )

    author = relationship("User", foreign_keys=[author_id], lazy="joined")
    likes = relationship(
        "PostLike",
        back_populates="post",
        cascade="all, delete-orphan",
    )
    comments = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Comment.id",
    )

    @property
    def liked_by(self) -> list[int]:
        """User ids that liked this post, in like order."""
        return [like.user_id for like in sorted(self.likes, key=lambda pl: pl.id)]


class PostLike(Base):
    """One like per (post, user); the unique constraint enforces like-once."""

    __tablename__ = "post_likes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (UniqueConstraint("post_id", "user_id", name="uq_post_likes_post_user"),)

    post = relationship("Post", back_populates="likes")


class Comment(Base):
    """Comment on a post; only its author may delete it."""

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    text = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    post = relationship("Post", back_populates="comments")
    author = relationship("User", foreign_keys=[author_id], lazy="joined")
