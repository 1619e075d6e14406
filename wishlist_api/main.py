"""Main FastAPI application with all middleware"""

from fastapi import FastAPI
from contextlib import asynccontextmanager
import logging

from wishlist_api.core.config import settings
from wishlist_api.core.exceptions import register_exception_handlers
from wishlist_api.core.middleware import setup_middleware
from wishlist_api.core.monitoring import setup_logging, setup_monitoring_middleware
from wishlist_api.api.health import router as health_router
from wishlist_api.api.v1 import api_router

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    setup_logging()
    logger.info(
        f"Starting {settings.APP_NAME} {settings.APP_VERSION} "
        f"({settings.ENVIRONMENT}, store={settings.STORE_BACKEND}, "
        f"atomic_toggle={settings.WISHLIST_ATOMIC_TOGGLE})"
    )
    if not settings.firebase_configured:
        logger.warning(
            "Firebase is not configured: bearer tokens cannot be verified "
            "and authenticated calls will fail until credentials are set"
        )

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")

def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description="Per-user wishlist callables",
        version=settings.APP_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan
    )

    register_exception_handlers(app)
    setup_middleware(app)
    if settings.PROMETHEUS_ENABLED:
        setup_monitoring_middleware(app)

    app.include_router(health_router)
    app.include_router(api_router, prefix="/api/v1")
    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "wishlist_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        workers=1 if settings.DEBUG else settings.WORKERS
    )
