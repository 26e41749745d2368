"""
Mutation coordinator: state transitions on posts, likes and comments.

Every method takes the already-verified caller identity. Owner-only
transitions check ownership before any write, and each transition commits
in a single transaction.
"""

import logging

from fastapi import UploadFile
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from inkwell.core.exceptions import AlreadyLiked, CommentNotFound, StoreError
from inkwell.core.guard import require_ownership
from inkwell.models import Comment, Post, PostLike
from inkwell.schemas.auth import CurrentUser
from inkwell.schemas.posts import PostDraft, PostPatch
from inkwell.services.post_repository import PostRepository
from inkwell.services.storage import CoverStorage

logger = logging.getLogger(__name__)


class MutationCoordinator:
    def __init__(self, db: Session, storage: CoverStorage) -> None:
        self.db = db
        self.posts = PostRepository(db)
        self.storage = storage

    # --- posts ------------------------------------------------------------

    def create_post(
        self,
        identity: CurrentUser,
        title: str,
        summary: str,
        content: str,
        cover: UploadFile,
    ) -> Post:
        """Store the cover, then create a post owned by the caller."""
        cover_path = self.storage.save(cover)
        draft = PostDraft(title=title, summary=summary, content=content, cover_path=cover_path)
        try:
            post = self.posts.create(draft, author_id=identity.id)
        except StoreError:
            self.storage.discard(cover_path)
            raise
        logger.info("Post created", extra={"post_id": post.id, "author_id": identity.id})
        return post

    def edit_post(
        self,
        post_id: int,
        identity: CurrentUser,
        patch: PostPatch,
        cover: UploadFile | None = None,
    ) -> Post:
        """Owner-only merge patch of title/summary/content and, optionally, the cover."""
        post = self.posts.get_by_id(post_id)
        require_ownership(identity, post.author_id)

        old_cover = post.cover_path
        new_cover = None
        if cover is not None and cover.filename:
            new_cover = self.storage.save(cover)
            patch.cover_path = new_cover
        try:
            post = self.posts.update(post_id, patch)
        except StoreError:
            if new_cover:
                self.storage.discard(new_cover)
            raise
        if new_cover:
            self.storage.discard(old_cover)
        logger.info("Post edited", extra={"post_id": post_id, "author_id": identity.id})
        return post

    def delete_post(self, post_id: int, identity: CurrentUser) -> None:
        """Owner-only delete; likes, comments and the cover file go with the post."""
        post = self.posts.get_by_id(post_id)
        require_ownership(identity, post.author_id)
        cover_path = post.cover_path
        self.posts.delete(post_id)
        self.storage.discard(cover_path)
        logger.info("Post deleted", extra={"post_id": post_id, "author_id": identity.id})

    # --- likes ------------------------------------------------------------

    def like(self, post_id: int, identity: CurrentUser) -> int:
        """
        Record the caller's like and return the new like count.

        The like row and the count increment commit together; updated_at is
        not touched. A second like by the same user (sequential or concurrent)
        hits the unique (post_id, user_id) constraint and raises AlreadyLiked.
        """
        post = self.posts.get_by_id(post_id)
        if identity.id in post.liked_by:
            raise AlreadyLiked()

        try:
            self.db.add(PostLike(post_id=post.id, user_id=identity.id))
            self.db.flush()
            self.db.execute(
                update(Post)
                .where(Post.id == post.id)
                .values(like_count=Post.like_count + 1, updated_at=Post.updated_at)
            )
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise AlreadyLiked() from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError("Failed to like post", cause=e) from e

        likes = self.posts.get_by_id(post_id).like_count
        logger.info("Post liked", extra={"post_id": post_id, "user_id": identity.id, "likes": likes})
        return likes

    # --- comments ---------------------------------------------------------

    def add_comment(self, post_id: int, identity: CurrentUser, text: str) -> Post:
        """Append a comment by any authenticated user; returns the updated post."""
        post = self.posts.get_by_id(post_id)
        comment = Comment(post_id=post.id, author_id=identity.id, text=text)
        self.db.add(comment)
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError("Failed to add comment", cause=e) from e
        logger.info(
            "Comment added",
            extra={"post_id": post_id, "comment_id": comment.id, "user_id": identity.id},
        )
        return self.posts.get_by_id(post_id)

    def delete_comment(self, post_id: int, comment_id: int, identity: CurrentUser) -> Post:
        """Remove one comment; only its author may do so. Order of the rest is kept."""
        post = self.posts.get_by_id(post_id)
        comment = next((c for c in post.comments if c.id == comment_id), None)
        if comment is None:
            raise CommentNotFound()
        require_ownership(identity, comment.author_id)

        post.comments.remove(comment)
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError("Failed to delete comment", cause=e) from e
        logger.info(
            "Comment deleted",
            extra={"post_id": post_id, "comment_id": comment_id, "user_id": identity.id},
        )
        return self.posts.get_by_id(post_id)
