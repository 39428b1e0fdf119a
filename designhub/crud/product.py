"""CRUD operations for Product."""

from typing import List, Optional
from sqlalchemy import select, and_, func, desc
from sqlalchemy.orm import Session

from designhub.crud.base import CRUDBase
from designhub.models.product import Product
from designhub.models.review import Review
from designhub.schemas.product import ProductCreate


class CRUDProduct(CRUDBase[Product, ProductCreate, dict]):
    """CRUD operations for Product."""

    def get_active(self, db: Session, *, product_id: int) -> Optional[Product]:
        stmt = select(Product).where(and_(Product.id == product_id, Product.is_active == True))
        return db.scalars(stmt).first()

    def get_active_multi(
        self,
        db: Session,
        *,
        category: Optional[str] = None,
        skip: int = 0,
        limit: int = 20
    ) -> List[Product]:
        stmt = select(Product).where(Product.is_active == True)
        if category:
            stmt = stmt.where(Product.category == category)
        stmt = stmt.order_by(desc(Product.created_at), desc(Product.id)).offset(skip).limit(limit)
        return list(db.scalars(stmt).all())

    def count_active(self, db: Session, *, category: Optional[str] = None) -> int:
        stmt = select(func.count(Product.id)).where(Product.is_active == True)
        if category:
            stmt = stmt.where(Product.category == category)
        return db.scalar(stmt) or 0

    def recalculate_rating(self, db: Session, *, product_id: int) -> Optional[Product]:
        """Recompute the average rating and review count from all reviews."""
        product = db.get(Product, product_id)
        if not product:
            return None

        average, total = db.execute(
            select(func.avg(Review.rating), func.count(Review.id)).where(Review.product_id == product_id)
        ).one()

        product.rating = float(average or 0)
        product.review_count = total or 0
        self._commit(db, product)
        return product


# Singleton instance
crud_product = CRUDProduct(Product)
