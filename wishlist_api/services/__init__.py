"""Services package"""

from .wishlist_service import WishlistService

__all__ = [
    "WishlistService"
]
