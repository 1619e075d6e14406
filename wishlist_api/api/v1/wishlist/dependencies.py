"""Wishlist dependencies"""

from fastapi import Depends

from wishlist_api.services.wishlist_service import WishlistService
from wishlist_api.store import DocumentStore, get_document_store

def get_wishlist_service(
    store: DocumentStore = Depends(get_document_store)
) -> WishlistService:
    return WishlistService.from_settings(store)
