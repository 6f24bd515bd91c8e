"""
Order API routes
"""

from fastapi import APIRouter, Depends, status
from typing import List
import logging

from app.core.exceptions import BadRequestException
from app.schemas.order import Order
from app.services.cart_service import CartService
from app.services.order_service import OrderService
from app.utils.dependencies import get_cart_service, get_order_service

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post(
    "/checkout",
    response_model=Order,
    status_code=status.HTTP_201_CREATED,
    summary="Checkout",
    description="Create an order from the current cart and empty the cart"
)
async def checkout(
    cart: CartService = Depends(get_cart_service),
    service: OrderService = Depends(get_order_service)
):
    snapshot = await cart.snapshot()
    if not snapshot.items:
        raise BadRequestException("Cart is empty", error_code="CART_EMPTY")

    order = await service.create(snapshot)
    await cart.clear()
    logger.info(f"Order {order.order_number} placed with {len(order.items)} item(s)")
    return order

@router.get("/", response_model=List[Order], summary="List orders")
async def list_orders(service: OrderService = Depends(get_order_service)):
    return await service.get_all()

@router.get("/{order_id}", response_model=Order, summary="Get order")
async def get_order(
    order_id: int,
    service: OrderService = Depends(get_order_service)
):
    return await service.get_by_id(order_id)
