"""Pydantic schemas for community Posts."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from designhub.models.post import PostCategory
from designhub.schemas.user import AuthorSummary


class Pagination(BaseModel):
    """Pagination block shared by list responses."""
    page: int
    limit: int
    total: int
    pages: int
    has_more: bool = Field(..., description="Whether there are more items to load")


class PostBase(BaseModel):
    """Base schema for Post."""
    title: str = Field(..., min_length=1, max_length=200, description="Post title")
    content: str = Field(..., min_length=1, max_length=10000, description="Post body")
    category: PostCategory = Field(..., description="Post category")
    tags: List[str] = Field(default_factory=list, description="Free-form tags, stored lower-cased")
    images: List[str] = Field(default_factory=list, description="Ordered image URLs")


class PostCreate(PostBase):
    """Schema for creating a new post."""
    pass


class PostUpdate(BaseModel):
    """Schema for updating a post."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1, max_length=10000)
    category: Optional[PostCategory] = None
    tags: Optional[List[str]] = None
    images: Optional[List[str]] = None


class PostResponse(BaseModel):
    """Schema for Post response."""
    id: int
    author: Optional[AuthorSummary] = None
    title: str
    content: str
    images: List[str] = []
    category: PostCategory
    tags: List[str] = []
    like_count: int
    comment_count: int
    views: int
    is_pinned: bool
    is_active: bool
    is_liked: bool = False  # Populated based on current user
    created_at: datetime
    updated_at: datetime


class PostListResponse(BaseModel):
    """Response for listing posts."""
    posts: List[PostResponse]
    pagination: Pagination


class CommentCreate(BaseModel):
    """Schema for creating a comment or a reply."""
    content: str = Field(..., min_length=1, max_length=2000, description="Comment content")
    parent_comment_id: Optional[int] = Field(None, gt=0, description="Comment being replied to")


class CommentResponse(BaseModel):
    """Schema for Comment response, with nested replies when part of a thread."""
    id: int
    post_id: int
    author: Optional[AuthorSummary] = None
    content: str
    parent_comment_id: Optional[int] = None
    like_count: int
    reply_count: int
    is_liked: bool = False
    is_active: bool
    created_at: datetime
    updated_at: datetime
    replies: List["CommentResponse"] = []


class CommentListResponse(BaseModel):
    """Response for a post's comment thread."""
    comments: List[CommentResponse]
    total: int


class PostDetailResponse(PostResponse):
    """Detailed post response with its comment thread."""
    comments: List[CommentResponse] = []


class PostLikeResponse(BaseModel):
    """Response for like action."""
    post_id: int
    is_liked: bool
    like_count: int
    message: str


class CommentLikeResponse(BaseModel):
    """Response for comment like action."""
    comment_id: int
    is_liked: bool
    like_count: int
    message: str


class PostPinRequest(BaseModel):
    """Schema for pinning or unpinning a post."""
    is_pinned: bool


class TrendingTag(BaseModel):
    tag: str
    count: int


class TrendingTagsResponse(BaseModel):
    tags: List[TrendingTag]


CommentResponse.model_rebuild()
