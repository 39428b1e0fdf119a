"""Pydantic schemas for Products."""

from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict, Field, field_validator

from designhub.models.product import PRODUCT_CATEGORIES
from designhub.schemas.post import Pagination


class ProductCreate(BaseModel):
    """Schema for listing a new product."""
    title: str = Field(..., min_length=3, max_length=100)
    description: str = Field(..., min_length=10, max_length=2000)
    price: float = Field(..., ge=0)
    category: str

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str) -> str:
        if v not in PRODUCT_CATEGORIES:
            raise ValueError("Invalid category")
        return v


class ProductResponse(BaseModel):
    """Schema for Product response."""
    id: int
    seller_id: int
    title: str
    description: str
    price: float
    category: str
    rating: float
    review_count: int
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductListResponse(BaseModel):
    products: List[ProductResponse]
    pagination: Pagination
