"""Shared pytest fixtures for storefront tests."""

import pytest
from fastapi.testclient import TestClient

from app.core.cache import RedisCache
from app.core.config import Settings
from app.core.storefront import Storefront
from app.main import create_app
from app.services.cart_service import CartService
from app.services.order_service import OrderService
from app.services.product_service import ProductService
from app.services.wishlist_service import WishlistService
from tests.fakes import CollectingNotificationService, FakeRemoteStore

PRODUCTS = "products_c"
WISHLIST = "wishlist_items_c"
ORDERS = "orders_c"

CATALOG = [
    {
        "Id": 1,
        "name_c": "Ceramic Mug",
        "category_c": "Kitchen",
        "description_c": "Hand glazed stoneware mug",
        "price_c": 12.5,
        "original_price_c": 15.0,
        "rating_c": 4.8,
        "reviews_c": 210,
        "stock_c": 40,
        "images_c": "mug-front.jpg, mug-side.jpg",
        "brand_c": "Kiln & Co",
        "in_stock_c": True,
    },
    {
        "Id": 2,
        "name_c": "Linen Apron",
        "category_c": "Kitchen",
        "description_c": "Washed linen apron with pockets",
        "price_c": 30.0,
        "rating_c": 4.5,
        "reviews_c": 80,
        "stock_c": 0,
        "images_c": "apron.jpg",
        "brand_c": "Flax",
        "in_stock_c": False,
    },
    {
        "Id": 3,
        "name_c": "Desk Lamp",
        "category_c": "Lighting",
        "description_c": "Adjustable lamp for the kitchen table or desk",
        "price_c": 45.0,
        "rating_c": 4.9,
        "reviews_c": 500,
        "stock_c": 12,
        "images_c": "lamp.jpg",
        "brand_c": "Lumo",
        "in_stock_c": True,
    },
    {
        "Id": 5,
        "name_c": "Wool Throw",
        "category_c": "Home",
        "price_c": 60.0,
        "rating_c": 4.7,
        "reviews_c": 95,
        "stock_c": 3,
    },
]


@pytest.fixture
def remote():
    store = FakeRemoteStore()
    store.seed(PRODUCTS, CATALOG)
    return store


@pytest.fixture
def notifier():
    return CollectingNotificationService()


@pytest.fixture
def storage():
    return RedisCache(url=None)


@pytest.fixture
def product_service(remote):
    return ProductService(remote, table_name=PRODUCTS)


@pytest.fixture
async def cart_service(storage, product_service):
    service = CartService(storage, product_service, storage_key="test_cart")
    await service.load()
    return service


@pytest.fixture
def wishlist_service(remote, product_service, notifier):
    return WishlistService(remote, product_service, notifier=notifier, table_name=WISHLIST)


@pytest.fixture
def order_service(remote, notifier):
    return OrderService(remote, notifier=notifier, table_name=ORDERS)


@pytest.fixture
def settings():
    return Settings(REDIS_URL=None, REMOTE_STORE_PROJECT_ID="test-project")


@pytest.fixture
def storefront(settings, remote, storage, notifier):
    return Storefront(settings=settings, remote=remote, storage=storage, notifier=notifier)


@pytest.fixture
def client(storefront):
    with TestClient(create_app(storefront)) as test_client:
        yield test_client
