"""Rate limiting using slowapi"""

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded

from wishlist_api.core.config import settings

def get_client_ip(request: Request) -> str:
    """Client address, honouring X-Forwarded-For only from trusted proxies"""
    peer = request.client.host if request.client else "unknown"

    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded and peer in settings.TRUSTED_PROXIES:
        return forwarded.split(",")[0].strip()

    return peer

# Custom key function that considers user authentication
def get_rate_limit_key(request: Request) -> str:
    """Get rate limit key based on user or IP"""
    # Set by get_caller_identity, which runs before the limited route body
    user_id = getattr(request.state, "user_id", None)

    if user_id:
        return f"user:{user_id}"

    return f"ip:{get_client_ip(request)}"

def wishlist_rate_limit() -> str:
    """Limit applied to the wishlist callables, read on every check"""
    return settings.RATE_LIMIT_DEFAULT

# Create limiter instance
limiter = Limiter(
    key_func=get_rate_limit_key,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED
)

# One budget per caller across all wishlist callables
wishlist_limiter = limiter.shared_limit(wishlist_rate_limit, scope="wishlist")

# Custom rate limit exceeded handler
async def custom_rate_limit_handler(request: Request, exc: RateLimitExceeded) -> Response:
    return JSONResponse(
        status_code=429,
        content={
            "error": {
                "status": "RESOURCE_EXHAUSTED",
                "message": f"Too many requests. {exc.detail}"
            }
        }
    )
