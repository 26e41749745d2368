"""Post, like and comment endpoints. Handlers only dispatch; rules live in the mutation coordinator."""

from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile

from inkwell.api.deps import Mutations, Posts, SessionUser
from inkwell.core.config import get_settings
from inkwell.schemas.auth import MessageResponse
from inkwell.schemas.posts import (
    CommentCreate,
    CommentOut,
    LikeResponse,
    PostOut,
    PostPatch,
)

router = APIRouter()


@router.post("/post", response_model=PostOut)
def create_post(
    current_user: SessionUser,
    mutations: Mutations,
    title: Annotated[str, Form(min_length=1)],
    summary: Annotated[str, Form(min_length=1)],
    content: Annotated[str, Form(min_length=1)],
    file: Annotated[UploadFile, File(description="Cover image")],
) -> PostOut:
    """Create a post with a cover image (multipart form)."""
    post = mutations.create_post(current_user, title, summary, content, file)
    return PostOut.from_model(post)


@router.get("/allposts", response_model=list[PostOut])
def list_posts(posts: Posts) -> list[PostOut]:
    """Most recent posts, newest first."""
    recent = posts.list_recent(get_settings().RECENT_POSTS_LIMIT)
    return [PostOut.from_model(p) for p in recent]


@router.get("/post/{post_id}", response_model=PostOut)
def get_post(post_id: int, posts: Posts) -> PostOut:
    return PostOut.from_model(posts.get_by_id(post_id))


@router.put("/post/{post_id}", response_model=PostOut)
def edit_post(
    post_id: int,
    current_user: SessionUser,
    mutations: Mutations,
    title: Annotated[str | None, Form()] = None,
    summary: Annotated[str | None, Form()] = None,
    content: Annotated[str | None, Form()] = None,
    file: Annotated[UploadFile | None, File(description="New cover image")] = None,
) -> PostOut:
    """Owner-only partial update; omitted or blank fields keep their current value."""
    patch = PostPatch(title=title, summary=summary, content=content)
    post = mutations.edit_post(post_id, current_user, patch, cover=file)
    return PostOut.from_model(post)


@router.delete("/post/{post_id}", response_model=MessageResponse)
def delete_post(post_id: int, current_user: SessionUser, mutations: Mutations) -> MessageResponse:
    """Owner-only delete; removes the post's comments and likes too."""
    mutations.delete_post(post_id, current_user)
    return MessageResponse(message="Post deleted successfully")


@router.post("/post/{post_id}/like", response_model=LikeResponse)
def like_post(post_id: int, current_user: SessionUser, mutations: Mutations) -> LikeResponse:
    """Like a post once. A repeated like is rejected with 400 and leaves the count unchanged."""
    likes = mutations.like(post_id, current_user)
    return LikeResponse(likes=likes)


@router.post("/post/{post_id}/comment", response_model=PostOut)
def add_comment(
    post_id: int,
    body: CommentCreate,
    current_user: SessionUser,
    mutations: Mutations,
) -> PostOut:
    post = mutations.add_comment(post_id, current_user, body.text)
    return PostOut.from_model(post)


@router.get("/post/{post_id}/comments", response_model=list[CommentOut])
def list_comments(post_id: int, posts: Posts) -> list[CommentOut]:
    return [CommentOut.from_model(c) for c in posts.get_comments(post_id)]


@router.delete("/post/{post_id}/comment/{comment_id}", response_model=PostOut)
def delete_comment(
    post_id: int,
    comment_id: int,
    current_user: SessionUser,
    mutations: Mutations,
) -> PostOut:
    """Delete a comment; only its author may do so."""
    post = mutations.delete_comment(post_id, comment_id, current_user)
    return PostOut.from_model(post)
