"""Request/response schemas for posts, likes and comments."""

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, field_validator

if TYPE_CHECKING:
    from inkwell.models import Comment, Post, User


class AuthorOut(BaseModel):
    """Public view of a user attached to posts and comments."""

    id: int
    username: str

    @classmethod
    def from_model(cls, user: "User") -> "AuthorOut":
        return cls(id=user.id, username=user.username)


class CommentOut(BaseModel):
    id: int
    post_id: int
    author: AuthorOut
    text: str
    created_at: datetime

    @classmethod
    def from_model(cls, comment: "Comment") -> "CommentOut":
        return cls(
            id=comment.id,
            post_id=comment.post_id,
            author=AuthorOut.from_model(comment.author),
            text=comment.text,
            created_at=comment.created_at,
        )


class PostOut(BaseModel):
    """Full post with author, like-set and ordered comments."""

    id: int
    title: str
    summary: str
    content: str
    cover: str = Field(description="Storage path of the cover image")
    author: AuthorOut
    created_at: datetime
    updated_at: datetime
    likes: int = Field(ge=0, description="Number of likes; always equals len(liked_by)")
    liked_by: list[int] = Field(default_factory=list)
    comments: list[CommentOut] = Field(default_factory=list)

    @classmethod
    def from_model(cls, post: "Post") -> "PostOut":
        return cls(
            id=post.id,
            title=post.title,
            summary=post.summary,
            content=post.content,
            cover=post.cover_path,
            author=AuthorOut.from_model(post.author),
            created_at=post.created_at,
            updated_at=post.updated_at,
            likes=post.like_count,
            liked_by=post.liked_by,
            comments=[CommentOut.from_model(c) for c in post.comments],
        )


class CommentCreate(BaseModel):
    """Body for POST /post/{id}/comment."""

    text: str = Field(..., min_length=1, description="Comment text (non-empty)")

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Comment text must not be blank")
        return v


class LikeResponse(BaseModel):
    message: str = Field(default="Post liked successfully")
    likes: int = Field(ge=0)


@dataclass
class PostDraft:
    """Fields of a new post; cover_path comes from blob storage."""

    title: str
    summary: str
    content: str
    cover_path: str


@dataclass
class PostPatch:
    """Merge patch for a post: None means "leave unchanged"."""

    title: str | None = None
    summary: str | None = None
    content: str | None = None
    cover_path: str | None = None

    def changes(self) -> dict[str, str]:
        """Fields explicitly supplied. Blank strings count as not supplied."""
        values = {
            "title": self.title,
            "summary": self.summary,
            "content": self.content,
            "cover_path": self.cover_path,
        }
        return {k: v for k, v in values.items() if v is not None and v.strip()}
