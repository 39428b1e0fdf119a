"""Product review endpoints."""

import logging
import math

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from designhub.api.deps import get_current_active_user, get_db
from designhub.core.exceptions import (
    DuplicateError,
    NotOwnerException,
    ProductNotFoundException,
    ReviewNotFoundException,
)
from designhub.crud import crud_product, crud_review
from designhub.models.review import Review
from designhub.models.user import User
from designhub.schemas.post import Pagination
from designhub.schemas.review import (
    HelpfulVoteResponse,
    ReviewCreate,
    ReviewEnvelope,
    ReviewListResponse,
    ReviewResponse,
    ReviewUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/reviews",
    tags=["Reviews"],
)


def _review_response(review: Review) -> ReviewResponse:
    return ReviewResponse(
        id=review.id,
        product_id=review.product_id,
        user_id=review.user_id,
        user=review.user.name if review.user else "Anonymous",
        avatar=review.user.avatar if review.user else None,
        rating=review.rating,
        comment=review.comment,
        helpful_count=review.helpful_count,
        is_verified=review.is_verified,
        created_at=review.created_at,
    )


@router.post(
    "/product/{product_id}",
    response_model=ReviewEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Review a product",
    description="""
    Submit a review for a product. Each user can review a product once.

    **Validation:**
    - rating: 1 to 5
    - comment: 10 to 1000 characters after trimming
    """,
)
def create_review(
    product_id: int,
    review_in: ReviewCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> ReviewEnvelope:
    try:
        review = crud_review.create_review(
            db, product_id=product_id, user_id=current_user.id, review_in=review_in
        )
    except ValueError:
        raise ProductNotFoundException()
    except DuplicateError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    return ReviewEnvelope(review=_review_response(review))


@router.get(
    "/product/{product_id}",
    response_model=ReviewListResponse,
    status_code=status.HTTP_200_OK,
    summary="List product reviews",
)
def list_product_reviews(
    product_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
    db: Session = Depends(get_db),
) -> ReviewListResponse:
    """Reviews of a product, newest first."""
    if not crud_product.get_active(db, product_id=product_id):
        raise ProductNotFoundException()

    skip = (page - 1) * limit
    reviews = crud_review.get_by_product(db, product_id=product_id, skip=skip, limit=limit)
    total = crud_review.count_by_product(db, product_id=product_id)

    return ReviewListResponse(
        reviews=[_review_response(review) for review in reviews],
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            pages=math.ceil(total / limit),
            has_more=skip + len(reviews) < total,
        ),
    )


@router.put(
    "/{review_id}",
    response_model=ReviewEnvelope,
    status_code=status.HTTP_200_OK,
    summary="Update review",
)
def update_review(
    review_id: int,
    review_in: ReviewUpdate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> ReviewEnvelope:
    try:
        review = crud_review.update_review(
            db, review_id=review_id, user_id=current_user.id, review_in=review_in
        )
    except PermissionError as e:
        raise NotOwnerException(str(e))

    if not review:
        raise ReviewNotFoundException()
    return ReviewEnvelope(review=_review_response(review))


@router.delete(
    "/{review_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete review",
)
def delete_review(
    review_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> dict:
    try:
        review = crud_review.delete_review(db, review_id=review_id, user_id=current_user.id)
    except PermissionError as e:
        raise NotOwnerException(str(e))

    if not review:
        raise ReviewNotFoundException()
    logger.info(f"Review deleted: id={review_id}, by={current_user.id}")
    return {"message": "Review deleted successfully"}


@router.post(
    "/{review_id}/helpful",
    response_model=HelpfulVoteResponse,
    status_code=status.HTTP_200_OK,
    summary="Toggle helpful vote",
)
def toggle_helpful(
    review_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> HelpfulVoteResponse:
    """Mark a review as helpful, or take the vote back."""
    try:
        is_helpful, helpful_count = crud_review.toggle_helpful(
            db, review_id=review_id, user_id=current_user.id
        )
    except ValueError:
        raise ReviewNotFoundException()

    return HelpfulVoteResponse(is_helpful=is_helpful, helpful_count=helpful_count)
