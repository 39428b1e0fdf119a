"""Product model for marketplace listings."""

from sqlalchemy import Column, Integer, String, Text, Float, TIMESTAMP, ForeignKey, Boolean, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


PRODUCT_CATEGORIES = ("logos", "icons", "templates", "fonts", "illustrations", "ui-kits")


class Product(Base):
    """Model for a design product listed by a seller."""
    
    __tablename__ = "products"
    
    id = Column(Integer, primary_key=True, index=True)
    seller_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=False, default=0)
    category = Column(String(50), nullable=False, index=True)
    
    # Aggregates maintained from reviews
    rating = Column(Float, nullable=False, default=0)
    review_count = Column(Integer, nullable=False, default=0)
    
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
    
    __table_args__ = (
        CheckConstraint("price >= 0", name="check_product_price"),
    )
    
    seller = relationship("User", foreign_keys=[seller_id])
    reviews = relationship("Review", back_populates="product", cascade="all, delete-orphan")
