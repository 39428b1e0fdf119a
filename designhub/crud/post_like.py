"""CRUD operations for PostLike."""

from typing import Optional, Tuple
from sqlalchemy import select, and_
from sqlalchemy.orm import Session

from designhub.crud.base import CRUDBase
from designhub.models.post import Post
from designhub.models.post_like import PostLike


class CRUDPostLike(CRUDBase[PostLike, dict, dict]):
    """CRUD operations for PostLike."""
    
    def toggle_like(
        self,
        db: Session,
        *,
        post_id: int,
        user_id: int
    ) -> Tuple[bool, int]:
        """
        Toggle like on a post.
        
        Likes form a set keyed by user: the toggle adds the user if absent
        and removes them if present, so two toggles restore the original set.
        
        Returns:
            (is_liked: bool, like_count: int)
        """
        post = db.get(Post, post_id)
        if not post or not post.is_active:
            raise ValueError("Post not found or deleted")
        
        existing_like = self.get_like(db, post_id=post_id, user_id=user_id)
        
        try:
            if existing_like:
                db.delete(existing_like)
                is_liked = False
            else:
                db.add(PostLike(post_id=post_id, user_id=user_id))
                is_liked = True
            db.commit()
        except Exception:
            db.rollback()
            raise
        
        db.refresh(post)
        return is_liked, post.like_count
    
    def get_like(
        self,
        db: Session,
        *,
        post_id: int,
        user_id: int
    ) -> Optional[PostLike]:
        """Get like record if exists."""
        stmt = select(PostLike).where(
            and_(
                PostLike.post_id == post_id,
                PostLike.user_id == user_id
            )
        )
        return db.scalars(stmt).first()


# Singleton instance
crud_post_like = CRUDPostLike(PostLike)
