"""
Wishlist schemas for callable request/response bodies
Field names on the wire are camelCase
"""

from pydantic import BaseModel, Field
from typing import Any, List

class CallableRequest(BaseModel):
    """Callable envelope: {"data": {...}}"""
    data: Any = None

class WishlistEntry(BaseModel):
    """Stored document payload"""
    product_id: str = Field(..., alias="productId")

    class Config:
        populate_by_name = True

class WishlistMutationResult(BaseModel):
    """Result of add and remove"""
    success: bool = True
    product_id: str = Field(..., alias="productId")

    class Config:
        populate_by_name = True

class WishlistToggleResult(BaseModel):
    """Result of toggle"""
    success: bool = True
    in_wishlist: bool = Field(..., alias="inWishlist")

    class Config:
        populate_by_name = True

class WishlistListResult(BaseModel):
    """Product ids in the caller's wishlist"""
    success: bool = True
    product_ids: List[str] = Field(default_factory=list, alias="productIds")

    class Config:
        populate_by_name = True

class WishlistMutationResponse(BaseModel):
    result: WishlistMutationResult

class WishlistToggleResponse(BaseModel):
    result: WishlistToggleResult

class WishlistListResponse(BaseModel):
    result: WishlistListResult

    class Config:
        json_schema_extra = {
            "example": {
                "result": {
                    "success": True,
                    "productIds": ["ring-001", "pendant-042"]
                }
            }
        }
