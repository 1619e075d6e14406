"""
Wishlist callables
Each route speaks the callable protocol: POST {"data": {...}} -> {"result": {...}}
The rate limit is checked after the caller is resolved, so verified users get their own budget
"""

from fastapi import APIRouter, Body, Depends, Request, Response
from typing import Optional

from wishlist_api.core.security import CallerIdentity, get_caller_identity
from wishlist_api.middleware.rate_limit import wishlist_limiter
from wishlist_api.services.wishlist_service import WishlistService
from wishlist_api.schemas.wishlist import (
    CallableRequest,
    WishlistListResponse,
    WishlistMutationResponse,
    WishlistToggleResponse,
)
from .dependencies import get_wishlist_service

router = APIRouter()

@router.post("/addToWishlist", response_model=WishlistMutationResponse)
@wishlist_limiter
async def add_to_wishlist(
    request: Request,
    response: Response,
    payload: Optional[CallableRequest] = Body(None),
    caller: Optional[CallerIdentity] = Depends(get_caller_identity),
    service: WishlistService = Depends(get_wishlist_service)
):
    """Add a product to the caller's wishlist"""
    data = payload.data if payload else None
    return WishlistMutationResponse(result=await service.add(caller, data))

@router.post("/removeFromWishlist", response_model=WishlistMutationResponse)
@wishlist_limiter
async def remove_from_wishlist(
    request: Request,
    response: Response,
    payload: Optional[CallableRequest] = Body(None),
    caller: Optional[CallerIdentity] = Depends(get_caller_identity),
    service: WishlistService = Depends(get_wishlist_service)
):
    """Remove a product from the caller's wishlist"""
    data = payload.data if payload else None
    return WishlistMutationResponse(result=await service.remove(caller, data))

@router.post("/toggleWishlist", response_model=WishlistToggleResponse)
@wishlist_limiter
async def toggle_wishlist(
    request: Request,
    response: Response,
    payload: Optional[CallableRequest] = Body(None),
    caller: Optional[CallerIdentity] = Depends(get_caller_identity),
    service: WishlistService = Depends(get_wishlist_service)
):
    """Add the product if absent, remove it if present"""
    data = payload.data if payload else None
    return WishlistToggleResponse(result=await service.toggle(caller, data))

@router.post("/getWishlist", response_model=WishlistListResponse)
@wishlist_limiter
async def get_wishlist(
    request: Request,
    response: Response,
    caller: Optional[CallerIdentity] = Depends(get_caller_identity),
    service: WishlistService = Depends(get_wishlist_service)
):
    """Product ids in the caller's wishlist"""
    return WishlistListResponse(result=await service.list_product_ids(caller))
