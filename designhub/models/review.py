"""Review model for product reviews and helpful votes."""

from sqlalchemy import Column, Integer, Text, TIMESTAMP, ForeignKey, Index, Boolean, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship, validates
from ..core.exceptions import ValidationError
from ..database import Base
from .validation import clean_text
from .vote import UserVote, vote_target


RATING_MIN = 1
RATING_MAX = 5
REVIEW_COMMENT_MIN_LENGTH = 10
REVIEW_COMMENT_MAX_LENGTH = 1000


class Review(Base):
    """Model for a user's review of a product."""
    
    __tablename__ = "reviews"
    
    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=False)
    is_verified = Column(Boolean, nullable=False, default=False)
    
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
    
    __table_args__ = (
        # One review per user per product
        UniqueConstraint('product_id', 'user_id', name='uq_review_product_user'),
        Index('idx_review_product_created', 'product_id', 'created_at'),
        Index('idx_review_user_created', 'user_id', 'created_at'),
        Index('idx_review_rating', 'rating'),
    )
    
    product = relationship("Product", back_populates="reviews")
    user = relationship("User", foreign_keys=[user_id])
    helpful_votes = relationship(
        "ReviewHelpfulVote",
        back_populates="review",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    
    @validates("rating")
    def validate_rating(self, key, value):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(key, "Rating must be a whole number")
        if value < RATING_MIN:
            raise ValidationError(key, f"Rating must be at least {RATING_MIN}")
        if value > RATING_MAX:
            raise ValidationError(key, f"Rating cannot be more than {RATING_MAX}")
        return value
    
    @validates("comment")
    def validate_comment(self, key, value):
        return clean_text(
            key,
            value,
            min_length=REVIEW_COMMENT_MIN_LENGTH,
            max_length=REVIEW_COMMENT_MAX_LENGTH,
            label="Review comment",
        )
    
    @property
    def helpful_count(self) -> int:
        return len(self.helpful_votes)


class ReviewHelpfulVote(UserVote, Base):
    """A user marking a review as helpful."""

    __tablename__ = "review_helpful_votes"
    __vote_column__ = "review_id"

    review_id = vote_target("reviews")
    review = relationship("Review", back_populates="helpful_votes")
