"""
Custom exception classes and error handlers
Errors are rendered in the callable-function envelope:
{"error": {"status": "<STATUS>", "message": "<text>"}}
"""

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from typing import Any, Dict, Optional
import logging

from .config import settings

logger = logging.getLogger(__name__)

class WishlistAPIException(HTTPException):
    """Base exception class for the wishlist API"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_status: str,
        headers: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_status = error_status

class UnauthenticatedException(WishlistAPIException):
    """401 Unauthenticated"""

    def __init__(self, detail: str = "User must be logged in"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_status="UNAUTHENTICATED",
            headers={"WWW-Authenticate": "Bearer"}
        )

class InvalidArgumentException(WishlistAPIException):
    """400 Invalid argument"""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_status="INVALID_ARGUMENT"
        )

def error_response(
    status_code: int,
    error_status: str,
    message: str,
    headers: Optional[Dict[str, Any]] = None
) -> JSONResponse:
    """Build a callable-protocol error response"""
    return JSONResponse(
        status_code=status_code,
        content={"error": {"status": error_status, "message": message}},
        headers=headers
    )

async def wishlist_exception_handler(request: Request, exc: WishlistAPIException) -> JSONResponse:
    return error_response(exc.status_code, exc.error_status, exc.detail, exc.headers)

async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Unparsable request bodies are reported as invalid arguments"""
    logger.info(f"Rejected malformed request to {request.url.path}")
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "INVALID_ARGUMENT",
        "Request body must be a JSON object"
    )

async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Store and other unexpected failures surface as INTERNAL"""
    logger.exception(
        f"Unhandled exception on {request.url.path} "
        f"(request {getattr(request.state, 'request_id', 'N/A')}): {exc}"
    )

    # Don't expose internal errors in production
    message = str(exc) if settings.DEBUG else "INTERNAL"
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL", message)

def register_exception_handlers(app) -> None:
    """Attach the error handlers to the application"""
    app.add_exception_handler(WishlistAPIException, wishlist_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
