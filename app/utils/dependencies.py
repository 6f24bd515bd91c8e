"""
Common dependencies for FastAPI
"""

from fastapi import Depends, Request

from app.core.exceptions import NotInitializedException
from app.core.storefront import Storefront
from app.services.cart_service import CartService
from app.services.order_service import OrderService
from app.services.product_service import ProductService
from app.services.wishlist_service import WishlistService

def get_storefront(request: Request) -> Storefront:
    """
    Get the storefront created by the application lifespan

    Raises:
        NotInitializedException: If startup has not completed
    """
    storefront = getattr(request.app.state, "storefront", None)
    if storefront is None or not storefront.started:
        raise NotInitializedException("Storefront")
    return storefront

def get_product_service(storefront: Storefront = Depends(get_storefront)) -> ProductService:
    return storefront.products

def get_cart_service(storefront: Storefront = Depends(get_storefront)) -> CartService:
    return storefront.cart

def get_wishlist_service(storefront: Storefront = Depends(get_storefront)) -> WishlistService:
    return storefront.wishlist

def get_order_service(storefront: Storefront = Depends(get_storefront)) -> OrderService:
    return storefront.orders
