"""Wishlist router"""

from fastapi import APIRouter, Depends
from typing import List

from app.schemas.wishlist import WishlistResult, WishlistViewItem
from app.services.wishlist_service import WishlistService
from app.utils.dependencies import get_wishlist_service

router = APIRouter()

@router.get("/", response_model=List[WishlistViewItem])
async def get_wishlist(service: WishlistService = Depends(get_wishlist_service)):
    """Wishlist entries with product details"""
    return await service.get_wishlist_with_products()

@router.delete("/", response_model=WishlistResult)
async def clear_wishlist(service: WishlistService = Depends(get_wishlist_service)):
    return await service.clear()

@router.get("/{product_id}")
async def wishlist_status(
    product_id: int,
    service: WishlistService = Depends(get_wishlist_service)
):
    return {"product_id": product_id, "in_wishlist": await service.is_in_wishlist(product_id)}

@router.post("/{product_id}", response_model=WishlistResult)
async def add_to_wishlist(
    product_id: int,
    service: WishlistService = Depends(get_wishlist_service)
):
    return await service.add(product_id)

@router.delete("/{product_id}", response_model=WishlistResult)
async def remove_from_wishlist(
    product_id: int,
    service: WishlistService = Depends(get_wishlist_service)
):
    return await service.remove(product_id)

@router.post("/{product_id}/toggle", response_model=WishlistResult)
async def toggle_wishlist(
    product_id: int,
    service: WishlistService = Depends(get_wishlist_service)
):
    return await service.toggle(product_id)
