"""Post repository: CRUD over posts with their like-set and comments."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from inkwell.core.exceptions import PostNotFound, StoreError
from inkwell.models import Comment, Post
from inkwell.schemas.posts import PostDraft, PostPatch


class PostRepository:
    """
    Data access for posts. Writes commit their own transaction and roll back
    on failure, reporting StoreError and leaving the stored post unchanged.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"Failed to {action}", cause=e) from e

    def create(self, draft: PostDraft, author_id: int) -> Post:
        post = Post(
            title=draft.title,
            summary=draft.summary,
            content=draft.content,
            cover_path=draft.cover_path,
            author_id=author_id,
            like_count=0,
        )
        self.db.add(post)
        self._commit("create post")
        self.db.refresh(post)
        return post

    def get_by_id(self, post_id: int) -> Post:
        """Return the post or raise PostNotFound."""
        try:
            post = (
                self.db.query(Post)
                .options(
                    selectinload(Post.likes),
                    selectinload(Post.comments).joinedload(Comment.author),
                )
                .filter(Post.id == post_id)
                .first()
            )
        except SQLAlchemyError as e:
            raise StoreError("Failed to load post", cause=e) from e
        if post is None:
            raise PostNotFound()
        return post

    def list_recent(self, limit: int) -> list[Post]:
        """Newest posts first, at most `limit`."""
        try:
            return (
                self.db.query(Post)
                .options(
                    selectinload(Post.likes),
                    selectinload(Post.comments).joinedload(Comment.author),
                )
                .order_by(Post.created_at.desc(), Post.id.desc())
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            raise StoreError("Failed to list posts", cause=e) from e

    def update(self, post_id: int, patch: PostPatch) -> Post:
        """Merge-patch: only fields supplied in the patch are overwritten."""
        post = self.get_by_id(post_id)
        for field, value in patch.changes().items():
            setattr(post, field, value)
        self._commit("update post")
        self.db.refresh(post)
        return post

    def delete(self, post_id: int) -> None:
        """Delete the post together with its likes and comments."""
        post = self.get_by_id(post_id)
        self.db.delete(post)
        self._commit("delete post")

    def get_comments(self, post_id: int) -> list[Comment]:
        """Comments of a post in the order they were added."""
        return list(self.get_by_id(post_id).comments)
