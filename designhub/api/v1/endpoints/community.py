"""Community endpoints: posts, likes, comments and moderation."""

import logging
import math
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from designhub.api.deps import get_current_active_user, get_db, get_optional_current_user, require_role
from designhub.core.exceptions import CommentNotFoundException, NotOwnerException, PostNotFoundException
from designhub.crud import (
    crud_comment,
    crud_post,
    crud_post_like,
)
from designhub.crud.comment import ThreadNode, build_thread
from designhub.models.comment import Comment
from designhub.models.post import Post
from designhub.models.user import User
from designhub.schemas.post import (
    CommentCreate,
    CommentLikeResponse,
    CommentListResponse,
    CommentResponse,
    Pagination,
    PostCreate,
    PostDetailResponse,
    PostLikeResponse,
    PostListResponse,
    PostPinRequest,
    PostResponse,
    PostUpdate,
    TrendingTag,
    TrendingTagsResponse,
)
from designhub.schemas.user import AuthorSummary

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/community",
    tags=["Community"],
)


def _author(user: Optional[User]) -> Optional[AuthorSummary]:
    return AuthorSummary.model_validate(user) if user else None


def _enrich_post_response(post: Post, current_user_id: Optional[int] = None) -> PostResponse:
    """Build a post response with derived counts and the viewer's like status."""
    return PostResponse(
        id=post.id,
        author=_author(post.author),
        title=post.title,
        content=post.content,
        images=list(post.images or []),
        category=post.category,
        tags=list(post.tags),
        like_count=post.like_count,
        comment_count=post.comment_count,
        views=post.views,
        is_pinned=post.is_pinned,
        is_active=post.is_active,
        is_liked=current_user_id is not None and current_user_id in post.liked_user_ids,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


def _comment_response(
    comment: Comment,
    current_user_id: Optional[int] = None,
    replies: Optional[List[CommentResponse]] = None,
) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        post_id=comment.post_id,
        author=_author(comment.author),
        content=comment.content,
        parent_comment_id=comment.parent_comment_id,
        like_count=comment.like_count,
        reply_count=comment.reply_count,
        is_liked=current_user_id is not None and current_user_id in comment.liked_user_ids,
        is_active=comment.is_active,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
        replies=replies or [],
    )


def _thread_response(nodes: List[ThreadNode], current_user_id: Optional[int]) -> List[CommentResponse]:
    return [
        _comment_response(node.comment, current_user_id, _thread_response(node.replies, current_user_id))
        for node in nodes
    ]


def _current_user_id(current_user: Optional[User]) -> Optional[int]:
    return current_user.id if current_user else None


@router.get(
    "",
    response_model=PostListResponse,
    status_code=status.HTTP_200_OK,
    summary="List posts",
    description="""
    Get active community posts with filtering, sorting and pagination.

    **Sorting options:**
    - `newest` (default): Pinned posts first, then most recent
    - `recent`: Most recent first, ignoring pins
    - `oldest`: Oldest first
    - `popular`: Most liked first
    - `discussed`: Most commented first

    **Access:** Public (likes are personalised when authenticated)
    """,
)
def list_posts(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=50, description="Posts per page"),
    category: Optional[str] = Query(None, description="Category filter, or `all`"),
    author_id: Optional[int] = Query(None, gt=0, description="Only posts by this author"),
    tag: Optional[str] = Query(None, description="Only posts carrying this tag"),
    search: Optional[str] = Query(None, description="Search in title, content and tags"),
    sort: str = Query("newest", pattern="^(newest|recent|oldest|popular|discussed)$", description="Sorting option"),
    current_user: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db),
) -> PostListResponse:
    """List community posts."""
    filters = dict(category=category, author_id=author_id, tag=tag, search=search)
    skip = (page - 1) * limit

    posts = crud_post.get_multi_filtered(db, sort=sort, skip=skip, limit=limit, **filters)
    total = crud_post.count_filtered(db, **filters)

    user_id = _current_user_id(current_user)
    return PostListResponse(
        posts=[_enrich_post_response(post, user_id) for post in posts],
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            pages=math.ceil(total / limit),
            has_more=skip + len(posts) < total,
        ),
    )


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new post",
)
def create_post(
    post_in: PostCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> PostResponse:
    """Create a new community post."""
    post = crud_post.create_post(
        db,
        author_id=current_user.id,
        title=post_in.title,
        content=post_in.content,
        category=post_in.category,
        tags=post_in.tags,
        images=post_in.images,
    )
    logger.info(f"Post created: id={post.id}, author={current_user.id}, category={post.category.value}")
    return _enrich_post_response(post, current_user.id)


@router.get(
    "/trending/tags",
    response_model=TrendingTagsResponse,
    status_code=status.HTTP_200_OK,
    summary="Trending tags",
)
def get_trending_tags(
    limit: int = Query(10, ge=1, le=50),
    db: Session = Depends(get_db),
) -> TrendingTagsResponse:
    """Most used tags across active posts."""
    return TrendingTagsResponse(
        tags=[TrendingTag(tag=tag, count=count) for tag, count in crud_post.trending_tags(db, limit=limit)]
    )


@router.get(
    "/comments/{comment_id}",
    response_model=CommentResponse,
    status_code=status.HTTP_200_OK,
    summary="Get comment",
    description="""
    Fetch a single comment by ID. Succeeds even when the owning post has
    been deleted, so threads stay addressable for moderation.
    """,
)
def get_comment(
    comment_id: int,
    current_user: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db),
) -> CommentResponse:
    comment = crud_comment.get_by_id(db, comment_id=comment_id)
    if not comment:
        raise CommentNotFoundException()
    return _comment_response(comment, _current_user_id(current_user))


@router.post(
    "/comments/{comment_id}/like",
    response_model=CommentLikeResponse,
    status_code=status.HTTP_200_OK,
    summary="Toggle like on comment",
)
def toggle_like_comment(
    comment_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> CommentLikeResponse:
    """Toggle like on a comment."""
    try:
        is_liked, like_count = crud_comment.toggle_like(
            db, comment_id=comment_id, user_id=current_user.id
        )
    except ValueError:
        raise CommentNotFoundException()

    return CommentLikeResponse(
        comment_id=comment_id,
        is_liked=is_liked,
        like_count=like_count,
        message="Comment liked" if is_liked else "Comment unliked",
    )


@router.delete(
    "/comments/{comment_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete comment",
)
def delete_comment(
    comment_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> dict:
    """Delete a comment (soft delete). Its replies stay addressable."""
    try:
        deleted_comment = crud_comment.soft_delete(
            db, comment_id=comment_id, user_id=current_user.id
        )
    except PermissionError:
        raise NotOwnerException("You can only delete your own comments")

    if not deleted_comment:
        raise CommentNotFoundException()
    return {"message": "Comment deleted successfully"}


@router.get(
    "/{post_id}",
    response_model=PostDetailResponse,
    status_code=status.HTTP_200_OK,
    summary="Get post detail",
    description="""
    Get a post with its comment thread. Every call counts as a view.
    """,
)
def get_post_detail(
    post_id: int,
    current_user: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db),
) -> PostDetailResponse:
    """Get post detail with comments."""
    post = crud_post.get_by_id(db, post_id=post_id)
    if not post:
        raise PostNotFoundException()

    crud_post.increment_views(db, post_id=post_id)
    db.refresh(post)

    user_id = _current_user_id(current_user)
    comments = crud_comment.get_visible_by_post(db, post_id=post_id)

    enriched_post = _enrich_post_response(post, user_id)
    return PostDetailResponse(
        **enriched_post.model_dump(),
        comments=_thread_response(build_thread(comments), user_id),
    )


@router.put(
    "/{post_id}",
    response_model=PostResponse,
    status_code=status.HTTP_200_OK,
    summary="Update post",
    description="""
    Update a post. Only the author can update their own post.
    """,
)
def update_post(
    post_id: int,
    post_update: PostUpdate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> PostResponse:
    """Update a post."""
    try:
        post = crud_post.update_post(
            db, post_id=post_id, user_id=current_user.id, post_in=post_update
        )
    except PermissionError:
        raise NotOwnerException("Post not found or access denied")

    if not post:
        raise PostNotFoundException()
    return _enrich_post_response(post, current_user.id)


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete post",
    description="""
    Soft delete a post. Only the author can delete their own post.
    Comments are kept and remain addressable by ID.
    """,
)
def delete_post(
    post_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> dict:
    """Delete a post (soft delete)."""
    try:
        deleted_post = crud_post.soft_delete(
            db, post_id=post_id, user_id=current_user.id
        )
    except PermissionError:
        raise NotOwnerException("Post not found or access denied")

    if not deleted_post:
        raise PostNotFoundException()
    logger.info(f"Post deactivated: id={post_id}, by={current_user.id}")
    return {"message": "Post deleted successfully"}


@router.post(
    "/{post_id}/like",
    response_model=PostLikeResponse,
    status_code=status.HTTP_200_OK,
    summary="Toggle like on post",
    description="""
    Like or unlike a post. If already liked, it will unlike. If not liked, it will like.
    """,
)
def toggle_like_post(
    post_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> PostLikeResponse:
    """Toggle like on a post."""
    try:
        is_liked, like_count = crud_post_like.toggle_like(
            db, post_id=post_id, user_id=current_user.id
        )
    except ValueError:
        raise PostNotFoundException()

    return PostLikeResponse(
        post_id=post_id,
        is_liked=is_liked,
        like_count=like_count,
        message="Post liked" if is_liked else "Post unliked",
    )


@router.put(
    "/{post_id}/pin",
    response_model=PostResponse,
    status_code=status.HTTP_200_OK,
    summary="Pin or unpin post",
    description="""
    **Access:** Moderators and admins only
    """,
)
def pin_post(
    post_id: int,
    pin_in: PostPinRequest,
    current_user: User = Depends(require_role("moderator", "admin")),
    db: Session = Depends(get_db),
) -> PostResponse:
    post = crud_post.set_pinned(db, post_id=post_id, is_pinned=pin_in.is_pinned)
    if not post:
        raise PostNotFoundException()
    logger.info(f"Post {'pinned' if pin_in.is_pinned else 'unpinned'}: id={post_id}, by={current_user.id}")
    return _enrich_post_response(post, current_user.id)


@router.get(
    "/{post_id}/comments",
    response_model=CommentListResponse,
    status_code=status.HTTP_200_OK,
    summary="Get post comments",
)
def get_post_comments(
    post_id: int,
    current_user: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db),
) -> CommentListResponse:
    """Get the comment thread of a post."""
    if not crud_post.get_by_id(db, post_id=post_id):
        raise PostNotFoundException()

    comments = crud_comment.get_visible_by_post(db, post_id=post_id)
    return CommentListResponse(
        comments=_thread_response(build_thread(comments), _current_user_id(current_user)),
        total=len(comments),
    )


@router.post(
    "/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add comment to post",
    description="""
    Add a comment to a post. Pass `parent_comment_id` to reply to another
    comment of the same post.
    """,
)
def add_comment(
    post_id: int,
    comment_in: CommentCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> CommentResponse:
    """Add a comment or reply to a post."""
    if not crud_post.get_by_id(db, post_id=post_id):
        raise PostNotFoundException()

    try:
        comment = crud_comment.create_comment(
            db,
            post_id=post_id,
            author_id=current_user.id,
            content=comment_in.content,
            parent_comment_id=comment_in.parent_comment_id,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    return _comment_response(comment, current_user.id)
