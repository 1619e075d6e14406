# Wishlist API Monitoring Configuration
# Prometheus metrics and logging setup

import logging
import logging.handlers
import os
import time
from fastapi import FastAPI, Request, Response
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

from .config import settings

# Metrics
request_count = Counter('http_requests_total', 'Total HTTP requests', ['method', 'endpoint', 'status'])
request_duration = Histogram('http_request_duration_seconds', 'HTTP request duration', ['method', 'endpoint'])

# Wishlist metrics
wishlist_operations = Counter(
    'wishlist_operations_total',
    'Wishlist operations by outcome',
    ['operation', 'outcome']
)

_configured = False

def setup_logging(level: str = None, log_file: str = None):
    """Configure application logging once"""
    global _configured
    if _configured:
        return

    log_level = level or settings.LOG_LEVEL
    log_file = log_file or settings.LOG_FILE

    # Configure logging format
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    handlers = [console_handler]

    # File handler with rotation
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        handlers=handlers
    )

    # Silence noisy loggers in production
    if settings.ENVIRONMENT == "production":
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("google.auth").setLevel(logging.WARNING)

    _configured = True

def record_operation(operation: str, outcome: str) -> None:
    """Count a wishlist operation outcome"""
    wishlist_operations.labels(operation=operation, outcome=outcome).inc()

def setup_monitoring_middleware(app: FastAPI):
    """Add monitoring middleware and the metrics endpoint"""

    @app.middleware("http")
    async def monitor_requests(request: Request, call_next):
        start_time = time.time()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            # Raised exceptions are rendered as 500 further out
            process_time = time.time() - start_time

            request_count.labels(
                method=request.method,
                endpoint=request.url.path,
                status=status_code
            ).inc()

            request_duration.labels(
                method=request.method,
                endpoint=request.url.path
            ).observe(process_time)

    @app.get("/metrics", include_in_schema=False)
    async def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
