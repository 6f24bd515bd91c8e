"""API v1 routes aggregation"""

from fastapi import APIRouter

from .products.router import router as products_router
from .cart.router import router as cart_router
from .wishlist.router import router as wishlist_router
from .orders.router import router as orders_router

# Create v1 router
api_router = APIRouter()

# Include all routers
api_router.include_router(products_router, prefix="/products", tags=["Products"])
api_router.include_router(cart_router, prefix="/cart", tags=["Cart"])
api_router.include_router(wishlist_router, prefix="/wishlist", tags=["Wishlist"])
api_router.include_router(orders_router, prefix="/orders", tags=["Orders"])

# Export router
router = api_router
