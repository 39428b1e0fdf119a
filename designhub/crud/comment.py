"""CRUD operations for Comment and CommentLike."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple
from sqlalchemy import select, and_, func
from sqlalchemy.orm import Session

from designhub.crud.base import CRUDBase
from designhub.models.comment import Comment, CommentLike
from designhub.models.post import Post


@dataclass
class ThreadNode:
    """A visible comment together with its visible replies."""
    comment: Comment
    replies: List["ThreadNode"] = field(default_factory=list)


def build_thread(comments: Sequence[Comment]) -> List[ThreadNode]:
    """Arrange visible comments into a reply tree.

    ``comments`` must be in chronological order. A reply is only shown when
    its parent is shown, so the subtree under a hidden comment stays hidden.
    """
    nodes: Dict[int, ThreadNode] = {comment.id: ThreadNode(comment) for comment in comments}
    roots: List[ThreadNode] = []

    for comment in comments:
        node = nodes[comment.id]
        if comment.parent_comment_id is None:
            roots.append(node)
        elif comment.parent_comment_id in nodes:
            nodes[comment.parent_comment_id].replies.append(node)
        # Replies to a hidden parent are never attached anywhere

    return roots


class CRUDComment(CRUDBase[Comment, dict, dict]):
    """CRUD operations for Comment."""

    def create_comment(
        self,
        db: Session,
        *,
        post_id: int,
        author_id: int,
        content: str,
        parent_comment_id: Optional[int] = None
    ) -> Comment:
        """Create a comment on a post, optionally as a reply."""
        post = db.get(Post, post_id)
        if not post or not post.is_active:
            raise ValueError("Post not found or deleted")

        if parent_comment_id is not None:
            parent = db.get(Comment, parent_comment_id)
            if not parent or not parent.is_active or parent.post_id != post_id:
                raise ValueError("Parent comment not found or invalid")

        comment = Comment(
            post_id=post_id,
            author_id=author_id,
            content=content,
            parent_comment_id=parent_comment_id
        )
        self._commit(db, comment)
        return comment

    def get_by_id(
        self,
        db: Session,
        *,
        comment_id: int,
        include_inactive: bool = False
    ) -> Optional[Comment]:
        """Get a comment by ID, regardless of its post's state."""
        stmt = select(Comment).where(Comment.id == comment_id)
        if not include_inactive:
            stmt = stmt.where(Comment.is_active == True)
        return db.scalars(stmt).first()

    def _visible_stmt(self, post_id: int):
        return (
            select(Comment)
            .join(Post, Post.id == Comment.post_id)
            .where(
                and_(
                    Comment.post_id == post_id,
                    Comment.is_active == True,
                    Post.is_active == True
                )
            )
        )

    def get_visible_by_post(
        self,
        db: Session,
        *,
        post_id: int,
        skip: int = 0,
        limit: int = 1000
    ) -> List[Comment]:
        """Get active comments of an active post in chronological order."""
        stmt = (
            self._visible_stmt(post_id)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
            .offset(skip)
            .limit(limit)
        )
        return list(db.scalars(stmt).all())

    def count_visible_by_post(self, db: Session, *, post_id: int) -> int:
        stmt = select(func.count()).select_from(self._visible_stmt(post_id).subquery())
        return db.scalar(stmt) or 0

    def toggle_like(
        self,
        db: Session,
        *,
        comment_id: int,
        user_id: int
    ) -> Tuple[bool, int]:
        """Toggle like on a comment.

        Returns:
            (is_liked: bool, like_count: int)
        """
        comment = self.get_by_id(db, comment_id=comment_id)
        if not comment:
            raise ValueError("Comment not found or deleted")

        stmt = select(CommentLike).where(
            and_(
                CommentLike.comment_id == comment_id,
                CommentLike.user_id == user_id
            )
        )
        existing_like = db.scalars(stmt).first()

        try:
            if existing_like:
                db.delete(existing_like)
                is_liked = False
            else:
                db.add(CommentLike(comment_id=comment_id, user_id=user_id))
                is_liked = True
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(comment)
        return is_liked, comment.like_count

    def soft_delete(
        self,
        db: Session,
        *,
        comment_id: int,
        user_id: int
    ) -> Optional[Comment]:
        """Soft delete a comment (only by author). Replies stay addressable."""
        comment = self.get_by_id(db, comment_id=comment_id)
        if not comment:
            return None

        if comment.author_id != user_id:
            raise PermissionError("Only comment author can delete the comment")

        comment.is_active = False
        self._commit(db, comment)
        return comment


# Singleton instance
crud_comment = CRUDComment(Comment)
