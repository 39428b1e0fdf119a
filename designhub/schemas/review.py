"""Pydantic schemas for product Reviews."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from designhub.schemas.post import Pagination


class ReviewCreate(BaseModel):
    """Schema for creating a review."""
    rating: int = Field(..., ge=1, le=5, description="Star rating from 1 to 5")
    comment: str = Field(..., description="Review text, 10 to 1000 characters")

    @field_validator("comment")
    @classmethod
    def validate_comment(cls, v: str) -> str:
        v = v.strip()
        if not 10 <= len(v) <= 1000:
            raise ValueError("Comment must be between 10 and 1000 characters")
        return v


class ReviewUpdate(BaseModel):
    """Schema for updating a review."""
    rating: Optional[int] = Field(None, ge=1, le=5)
    comment: Optional[str] = None

    @field_validator("comment")
    @classmethod
    def validate_comment(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not 10 <= len(v) <= 1000:
            raise ValueError("Comment must be between 10 and 1000 characters")
        return v


class ReviewResponse(BaseModel):
    """Schema for Review response."""
    id: int
    product_id: int
    user_id: int
    user: str = "Anonymous"
    avatar: Optional[str] = None
    rating: int
    comment: str
    helpful_count: int = 0
    is_verified: bool = False
    created_at: datetime


class ReviewEnvelope(BaseModel):
    """Single-review response body: ``{"review": {...}}``."""
    review: ReviewResponse


class ReviewListResponse(BaseModel):
    """Response for listing reviews of a product."""
    reviews: List[ReviewResponse]
    pagination: Pagination


class HelpfulVoteResponse(BaseModel):
    """Response for helpful vote toggle."""
    is_helpful: bool
    helpful_count: int
