"""
Storefront service container

Constructed once per running client and injected into the API layer.
startup() must be awaited before use and shutdown() on exit.
"""

from typing import Optional
import logging

from app.core.cache import RedisCache
from app.core.config import Settings, get_settings
from app.services.cart_service import CartService
from app.services.notification import NotificationService
from app.services.order_service import OrderService
from app.services.product_service import ProductService
from app.services.remote_store import RemoteStore, RemoteStoreClient
from app.services.wishlist_service import WishlistService

logger = logging.getLogger(__name__)


class Storefront:
    """Owns the collaborators and the single cart instance"""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        remote: Optional[RemoteStore] = None,
        storage: Optional[RedisCache] = None,
        notifier: Optional[NotificationService] = None,
    ):
        self.settings = settings or get_settings()
        if remote is None:
            remote = RemoteStoreClient.from_settings(self.settings)
        self.remote = remote
        self.storage = storage or RedisCache(
            url=self.settings.REDIS_URL,
            max_connections=self.settings.REDIS_MAX_CONNECTIONS,
            decode_responses=self.settings.REDIS_DECODE_RESPONSES,
        )
        self.notifier = notifier or NotificationService()

        self.products = ProductService(
            remote,
            table_name=self.settings.PRODUCTS_TABLE,
            featured_min_rating=self.settings.FEATURED_MIN_RATING,
            featured_limit=self.settings.FEATURED_LIMIT,
            related_limit=self.settings.RELATED_LIMIT,
        )
        self.cart = CartService(
            self.storage,
            self.products,
            storage_key=self.settings.CART_STORAGE_KEY,
        )
        self.wishlist = WishlistService(
            remote,
            self.products,
            notifier=self.notifier,
            table_name=self.settings.WISHLIST_TABLE,
        )
        self.orders = OrderService(
            remote,
            notifier=self.notifier,
            table_name=self.settings.ORDERS_TABLE,
        )
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    async def startup(self) -> None:
        if self._started:
            return
        await self.storage.connect()
        await self.cart.load()
        self._started = True
        logger.info(f"Storefront started with {len(self.cart.cart_items)} cart line(s)")

    async def shutdown(self) -> None:
        """Release the storage connection and the remote client; safe to call more than once"""
        if self._started:
            await self.storage.disconnect()
            self._started = False
            logger.info("Storefront stopped")
        close = getattr(self.remote, "aclose", None)
        if close is not None:
            await close()
