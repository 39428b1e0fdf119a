"""CRUD operations for Review and helpful votes."""

import logging
from typing import List, Optional, Tuple
from sqlalchemy import select, and_, func, desc
from sqlalchemy.orm import Session

from designhub.core.exceptions import DuplicateError
from designhub.crud.base import CRUDBase
from designhub.crud.product import crud_product
from designhub.models.review import Review, ReviewHelpfulVote
from designhub.schemas.review import ReviewCreate, ReviewUpdate

logger = logging.getLogger(__name__)


class CRUDReview(CRUDBase[Review, ReviewCreate, ReviewUpdate]):
    """CRUD operations for Review."""

    def get_by_user_and_product(
        self,
        db: Session,
        *,
        user_id: int,
        product_id: int
    ) -> Optional[Review]:
        stmt = select(Review).where(
            and_(Review.user_id == user_id, Review.product_id == product_id)
        )
        return db.scalars(stmt).first()

    def create_review(
        self,
        db: Session,
        *,
        product_id: int,
        user_id: int,
        review_in: ReviewCreate
    ) -> Review:
        """Create a review and refresh the product's rating aggregates.

        Raises:
            ValueError: If the product does not exist
            DuplicateError: If the user already reviewed this product
        """
        if not crud_product.get_active(db, product_id=product_id):
            raise ValueError("Product not found")

        if self.get_by_user_and_product(db, user_id=user_id, product_id=product_id):
            raise DuplicateError("You have already reviewed this product")

        review = self.create(db, obj_in=review_in, product_id=product_id, user_id=user_id)
        crud_product.recalculate_rating(db, product_id=product_id)
        logger.info(f"Review created: id={review.id}, product={product_id}, user={user_id}")
        return review

    def get_by_product(
        self,
        db: Session,
        *,
        product_id: int,
        skip: int = 0,
        limit: int = 10
    ) -> List[Review]:
        """Get reviews for a product, newest first."""
        stmt = (
            select(Review)
            .where(Review.product_id == product_id)
            .order_by(desc(Review.created_at), desc(Review.id))
            .offset(skip)
            .limit(limit)
        )
        return list(db.scalars(stmt).all())

    def count_by_product(self, db: Session, *, product_id: int) -> int:
        stmt = select(func.count(Review.id)).where(Review.product_id == product_id)
        return db.scalar(stmt) or 0

    def update_review(
        self,
        db: Session,
        *,
        review_id: int,
        user_id: int,
        review_in: ReviewUpdate
    ) -> Optional[Review]:
        """Update a review (only by its author)."""
        review = self.get(db, review_id)
        if not review:
            return None

        if review.user_id != user_id:
            raise PermissionError("You can only update your own reviews")

        review = self.update(db, db_obj=review, obj_in=review_in.model_dump(exclude_none=True))
        crud_product.recalculate_rating(db, product_id=review.product_id)
        return review

    def delete_review(
        self,
        db: Session,
        *,
        review_id: int,
        user_id: int
    ) -> Optional[Review]:
        """Delete a review (only by its author)."""
        review = self.get(db, review_id)
        if not review:
            return None

        if review.user_id != user_id:
            raise PermissionError("You can only delete your own reviews")

        product_id = review.product_id
        self.delete(db, id=review_id)
        crud_product.recalculate_rating(db, product_id=product_id)
        return review

    def toggle_helpful(
        self,
        db: Session,
        *,
        review_id: int,
        user_id: int
    ) -> Tuple[bool, int]:
        """Toggle the user's helpful vote on a review.

        Returns:
            (is_helpful: bool, helpful_count: int)
        """
        review = self.get(db, review_id)
        if not review:
            raise ValueError("Review not found")

        stmt = select(ReviewHelpfulVote).where(
            and_(
                ReviewHelpfulVote.review_id == review_id,
                ReviewHelpfulVote.user_id == user_id
            )
        )
        existing_vote = db.scalars(stmt).first()

        try:
            if existing_vote:
                db.delete(existing_vote)
                is_helpful = False
            else:
                db.add(ReviewHelpfulVote(review_id=review_id, user_id=user_id))
                is_helpful = True
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(review)
        return is_helpful, review.helpful_count


# Singleton instance
crud_review = CRUDReview(Review)
