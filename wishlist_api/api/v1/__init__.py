"""API v1 routes aggregation"""

from fastapi import APIRouter

from .wishlist import router as wishlist_router

# Create v1 router
api_router = APIRouter()

api_router.include_router(wishlist_router, tags=["Wishlist"])

# Export router
router = api_router
