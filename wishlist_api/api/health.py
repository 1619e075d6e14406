"""Health check endpoints"""

from fastapi import APIRouter
from datetime import datetime, timezone

from wishlist_api.core.config import settings

router = APIRouter()

@router.get("/health")
async def health_check():
    """Basic health check"""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "store": settings.STORE_BACKEND,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
