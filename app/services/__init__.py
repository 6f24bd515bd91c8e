"""Services package"""

from .cart_service import CartService
from .notification import NotificationService
from .order_service import OrderService
from .product_service import ProductService
from .remote_store import RemoteStoreClient
from .wishlist_service import WishlistService

__all__ = [
    "CartService",
    "NotificationService",
    "OrderService",
    "ProductService",
    "RemoteStoreClient",
    "WishlistService"
]
