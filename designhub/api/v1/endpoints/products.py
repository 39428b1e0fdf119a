"""Product listing endpoints."""

import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session

from designhub.api.deps import get_current_active_user, get_db
from designhub.core.exceptions import ProductNotFoundException
from designhub.crud import crud_product
from designhub.models.user import User
from designhub.schemas.post import Pagination
from designhub.schemas.product import ProductCreate, ProductListResponse, ProductResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/products",
    tags=["Products"],
)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="List a new product",
)
def create_product(
    product_in: ProductCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> ProductResponse:
    product = crud_product.create(db, obj_in=product_in, seller_id=current_user.id)
    logger.info(f"Product created: id={product.id}, seller={current_user.id}")
    return ProductResponse.model_validate(product)


@router.get(
    "",
    response_model=ProductListResponse,
    status_code=status.HTTP_200_OK,
    summary="List products",
)
def list_products(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    category: Optional[str] = Query(None),
    db: Session = Depends(get_db),
) -> ProductListResponse:
    skip = (page - 1) * limit
    products = crud_product.get_active_multi(db, category=category, skip=skip, limit=limit)
    total = crud_product.count_active(db, category=category)

    return ProductListResponse(
        products=[ProductResponse.model_validate(product) for product in products],
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            pages=math.ceil(total / limit),
            has_more=skip + len(products) < total,
        ),
    )


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    status_code=status.HTTP_200_OK,
    summary="Get product",
)
def get_product(
    product_id: int,
    db: Session = Depends(get_db),
) -> ProductResponse:
    product = crud_product.get_active(db, product_id=product_id)
    if not product:
        raise ProductNotFoundException()
    return ProductResponse.model_validate(product)
