"""CRUD operations for Post."""

from typing import Iterable, List, Optional, Tuple
from sqlalchemy import select, and_, or_, func, desc, false, update
from sqlalchemy.orm import Session

from designhub.crud.base import CRUDBase
from designhub.models.comment import Comment
from designhub.models.post import Post, PostCategory, PostTag, TAG_MAX_LENGTH
from designhub.models.post_like import PostLike
from designhub.models.validation import clean_text
from designhub.schemas.post import PostCreate, PostUpdate


POST_SORT_OPTIONS = ("newest", "recent", "oldest", "popular", "discussed")


def normalize_tags(tags: Optional[Iterable[str]]) -> List[str]:
    """Trim and lower-case tags, dropping blanks. Order and duplicates are kept.

    Raises:
        ValidationError: If a tag is longer than the tag column allows
    """
    normalized = []
    for tag in tags or []:
        tag = tag.strip().lower()
        if tag:
            normalized.append(clean_text("tags", tag, max_length=TAG_MAX_LENGTH, label="Tag"))
    return normalized


class CRUDPost(CRUDBase[Post, PostCreate, PostUpdate]):
    """CRUD operations for Post."""

    def create_post(
        self,
        db: Session,
        *,
        author_id: int,
        title: str,
        content: str,
        category: str,
        tags: Optional[Iterable[str]] = None,
        images: Optional[Iterable[str]] = None,
    ) -> Post:
        """Create a new post.

        Raises:
            ValidationError: If the title, content, category or a tag breaks the model constraints
        """
        post = Post(
            author_id=author_id,
            title=title,
            content=content,
            category=category,
            images=[image.strip() for image in images or []],
        )
        post.tags = normalize_tags(tags)
        self._commit(db, post)
        return post

    def _filters(
        self,
        *,
        category: Optional[str] = None,
        author_id: Optional[int] = None,
        tag: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list:
        conditions = [Post.is_active == True]

        if category and category != "all":
            try:
                conditions.append(Post.category == PostCategory(category))
            except ValueError:
                conditions.append(false())

        if author_id:
            conditions.append(Post.author_id == author_id)

        if tag and tag.strip():
            conditions.append(Post.tag_links.any(PostTag.tag == tag.strip().lower()))

        if search and search.strip():
            pattern = f"%{search.strip()}%"
            conditions.append(
                or_(
                    Post.title.ilike(pattern),
                    Post.content.ilike(pattern),
                    Post.tag_links.any(PostTag.tag.ilike(pattern)),
                )
            )
        return conditions

    def get_multi_filtered(
        self,
        db: Session,
        *,
        category: Optional[str] = None,
        author_id: Optional[int] = None,
        tag: Optional[str] = None,
        search: Optional[str] = None,
        sort: str = "newest",
        skip: int = 0,
        limit: int = 10,
    ) -> List[Post]:
        """Get active posts with filtering, sorting and pagination."""
        stmt = select(Post).where(
            and_(*self._filters(category=category, author_id=author_id, tag=tag, search=search))
        )

        if sort == "popular":
            like_count = (
                select(func.count(PostLike.id))
                .where(PostLike.post_id == Post.id)
                .correlate(Post)
                .scalar_subquery()
            )
            stmt = stmt.order_by(desc(like_count), desc(Post.created_at), desc(Post.id))
        elif sort == "discussed":
            comment_count = (
                select(func.count(Comment.id))
                .where(and_(Comment.post_id == Post.id, Comment.is_active == True))
                .correlate(Post)
                .scalar_subquery()
            )
            stmt = stmt.order_by(desc(comment_count), desc(Post.created_at), desc(Post.id))
        elif sort == "oldest":
            stmt = stmt.order_by(Post.created_at.asc(), Post.id.asc())
        elif sort == "recent":
            stmt = stmt.order_by(desc(Post.created_at), desc(Post.id))
        else:  # newest (default): pinned first, then recency
            stmt = stmt.order_by(desc(Post.is_pinned), desc(Post.created_at), desc(Post.id))

        stmt = stmt.offset(skip).limit(limit)
        return list(db.scalars(stmt).all())

    def count_filtered(
        self,
        db: Session,
        *,
        category: Optional[str] = None,
        author_id: Optional[int] = None,
        tag: Optional[str] = None,
        search: Optional[str] = None,
    ) -> int:
        """Count active posts matching the same filters as get_multi_filtered."""
        stmt = select(func.count(Post.id)).where(
            and_(*self._filters(category=category, author_id=author_id, tag=tag, search=search))
        )
        return db.scalar(stmt) or 0

    def get_by_id(
        self,
        db: Session,
        *,
        post_id: int,
        include_inactive: bool = False
    ) -> Optional[Post]:
        """Get post by ID."""
        stmt = select(Post).where(Post.id == post_id)
        if not include_inactive:
            stmt = stmt.where(Post.is_active == True)
        return db.scalars(stmt).first()

    def update_post(
        self,
        db: Session,
        *,
        post_id: int,
        user_id: int,
        post_in: PostUpdate
    ) -> Optional[Post]:
        """Update a post (only by author)."""
        post = self.get_by_id(db, post_id=post_id)
        if not post:
            return None

        if post.author_id != user_id:
            raise PermissionError("Only post author can update the post")

        update_data = post_in.model_dump(exclude_unset=True, exclude_none=True)
        tags = update_data.pop("tags", None)
        if tags is not None:
            tags = normalize_tags(tags)
        if "images" in update_data:
            update_data["images"] = [image.strip() for image in update_data["images"]]

        post = self.update(db, db_obj=post, obj_in=update_data)
        if tags is not None:
            post.tags = tags
            self._commit(db, post)
        return post

    def soft_delete(
        self,
        db: Session,
        *,
        post_id: int,
        user_id: int
    ) -> Optional[Post]:
        """Soft delete a post (only by author). Comments are left untouched."""
        post = self.get_by_id(db, post_id=post_id)
        if not post:
            return None

        if post.author_id != user_id:
            raise PermissionError("Only post author can delete the post")

        post.is_active = False
        self._commit(db, post)
        return post

    def increment_views(self, db: Session, *, post_id: int) -> None:
        """Bump the view counter. Every call counts; there is no per-viewer dedup."""
        stmt = (
            update(Post)
            .where(Post.id == post_id)
            # Keep updated_at: a view is not an edit
            .values(views=Post.views + 1, updated_at=Post.updated_at)
        )
        try:
            db.execute(stmt)
            db.commit()
        except Exception:
            db.rollback()
            raise

    def set_pinned(
        self,
        db: Session,
        *,
        post_id: int,
        is_pinned: bool
    ) -> Optional[Post]:
        """Pin or unpin a post."""
        post = self.get_by_id(db, post_id=post_id)
        if not post:
            return None
        post.is_pinned = is_pinned
        self._commit(db, post)
        return post

    def check_user_liked(
        self,
        db: Session,
        *,
        post_id: int,
        user_id: int
    ) -> bool:
        """Check if user has liked a post."""
        stmt = select(PostLike.id).where(
            and_(
                PostLike.post_id == post_id,
                PostLike.user_id == user_id
            )
        )
        return db.scalars(stmt).first() is not None

    def trending_tags(self, db: Session, *, limit: int = 10) -> List[Tuple[str, int]]:
        """Most used tags across active posts."""
        usage = func.count(PostTag.id)
        stmt = (
            select(PostTag.tag, usage)
            .join(Post, Post.id == PostTag.post_id)
            .where(Post.is_active == True)
            .group_by(PostTag.tag)
            .order_by(desc(usage), PostTag.tag)
            .limit(limit)
        )
        return [(tag, count) for tag, count in db.execute(stmt).all()]


# Singleton instance
crud_post = CRUDPost(Post)
