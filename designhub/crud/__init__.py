"""CRUD operations package - exports singleton instances for all models."""

from .base import CRUDBase
from .user import crud_user
from .post import crud_post
from .post_like import crud_post_like
from .comment import crud_comment
from .product import crud_product
from .review import crud_review


__all__ = [
    # Base
    "CRUDBase",
    # CRUD instances
    "crud_user",
    "crud_post",
    "crud_post_like",
    "crud_comment",
    "crud_product",
    "crud_review",
]
