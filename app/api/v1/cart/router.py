"""Cart router"""

from decimal import Decimal
from fastapi import APIRouter, Depends
from typing import List

from app.schemas.cart import AddToCartRequest, CartItemUpdate, CartItemView, CartResponse
from app.services.cart_service import CartService
from app.utils.dependencies import get_cart_service, get_product_service
from app.services.product_service import ProductService

router = APIRouter()

async def _cart_response(service: CartService, items: List[CartItemView]) -> CartResponse:
    return CartResponse(
        items=items,
        item_count=await service.get_item_count(),
        total=sum((item.line_total for item in items), Decimal("0")),
    )

@router.get("/", response_model=CartResponse)
async def get_cart(service: CartService = Depends(get_cart_service)):
    """Get cart with catalog-refreshed prices"""
    return await _cart_response(service, await service.get_all())

@router.post("/items", response_model=CartResponse)
async def add_to_cart(
    item_data: AddToCartRequest,
    service: CartService = Depends(get_cart_service),
    products: ProductService = Depends(get_product_service)
):
    """Add item to cart"""
    product = await products.get_by_id(item_data.product_id)
    items = await service.add_item(product, item_data.quantity)
    return await _cart_response(service, items)

@router.put("/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    product_id: str,
    update_data: CartItemUpdate,
    service: CartService = Depends(get_cart_service)
):
    """Update quantity; zero removes the item"""
    items = await service.update_quantity(product_id, update_data.quantity)
    return await _cart_response(service, items)

@router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_cart_item(
    product_id: str,
    service: CartService = Depends(get_cart_service)
):
    items = await service.remove_item(product_id)
    return await _cart_response(service, items)

@router.delete("/", response_model=CartResponse)
async def clear_cart(service: CartService = Depends(get_cart_service)):
    items = await service.clear()
    return await _cart_response(service, items)
