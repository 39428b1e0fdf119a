"""API v1 router aggregator."""

from fastapi import APIRouter

from designhub.api.v1.endpoints import auth, community, products, reviews, upload

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(auth.router)
api_router.include_router(community.router)
api_router.include_router(reviews.router)
api_router.include_router(products.router)
api_router.include_router(upload.router)

__all__ = ["api_router"]
