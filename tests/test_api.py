"""Tests for the storefront HTTP API and its lifecycle."""

import httpx
from fastapi.testclient import TestClient

from app.core.cache import RedisCache
from app.core.storefront import Storefront
from app.main import create_app
from app.schemas.remote import ErrorKind
from app.services.remote_store import RemoteStoreClient
from tests.conftest import WISHLIST


class TestStorefrontLifecycle:
    async def test_startup_loads_persisted_cart(self, settings, remote):
        storage = RedisCache(url=None)
        await storage.set(settings.CART_STORAGE_KEY, '[{"product_id": "1", "quantity": 2, "price": "12.5", "name": "Mug"}]')
        storefront = Storefront(settings=settings, remote=remote, storage=storage)

        await storefront.startup()

        assert storefront.started
        assert await storefront.cart.get_item_count() == 2

        await storefront.shutdown()
        assert not storefront.started

    async def test_shutdown_without_startup_closes_remote_client(self, settings, storage):
        client = RemoteStoreClient(
            base_url="https://store.test/v1",
            project_id="proj-1",
            public_key="pk-1",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={})),
        )
        storefront = Storefront(settings=settings, remote=client, storage=storage)

        await storefront.shutdown()

        assert client._client.is_closed
        assert not storefront.started

    def test_requests_before_startup_are_rejected(self, storefront):
        app = create_app(storefront)
        # Without the context manager the lifespan never runs
        response = TestClient(app).get("/api/v1/cart/")

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "NOT_INITIALIZED"


class TestProductRoutes:
    def test_list_and_search(self, client):
        assert [p["id"] for p in client.get("/api/v1/products/").json()] == [5, 3, 2, 1]
        assert [p["id"] for p in client.get("/api/v1/products/", params={"q": "lamp"}).json()] == [3]
        assert [p["id"] for p in client.get("/api/v1/products/", params={"category": "Home"}).json()] == [5]

    def test_get_product(self, client):
        response = client.get("/api/v1/products/1")

        assert response.status_code == 200
        assert response.json()["name"] == "Ceramic Mug"

    def test_missing_product_is_404(self, client):
        response = client.get("/api/v1/products/999")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_related(self, client):
        response = client.get("/api/v1/products/1/related")

        assert [p["id"] for p in response.json()] == [2]


class TestCartRoutes:
    def test_add_update_remove(self, client):
        response = client.post("/api/v1/cart/items", json={"product_id": 1, "quantity": 2})
        assert response.status_code == 200
        body = response.json()
        assert body["item_count"] == 2
        assert body["total"] == "25.00"

        body = client.put("/api/v1/cart/items/1", json={"quantity": 3}).json()
        assert body["items"][0]["quantity"] == 3

        body = client.put("/api/v1/cart/items/1", json={"quantity": 0}).json()
        assert body == {"items": [], "item_count": 0, "total": "0"}

    def test_add_unknown_product_is_404(self, client):
        response = client.post("/api/v1/cart/items", json={"product_id": 999})

        assert response.status_code == 404

    def test_clear(self, client):
        client.post("/api/v1/cart/items", json={"product_id": 3})

        body = client.delete("/api/v1/cart/").json()

        assert body["items"] == []


class TestWishlistRoutes:
    def test_toggle_and_list(self, client):
        assert client.post("/api/v1/wishlist/3/toggle").json()["success"]
        assert client.get("/api/v1/wishlist/3").json() == {"product_id": 3, "in_wishlist": True}

        items = client.get("/api/v1/wishlist/").json()
        assert [i["product"]["name"] for i in items] == ["Desk Lamp"]

        assert client.post("/api/v1/wishlist/3/toggle").json()["success"]
        assert client.get("/api/v1/wishlist/3").json()["in_wishlist"] is False

    def test_authorization_failure_is_401(self, client, remote):
        remote.fail_table(WISHLIST, "permission denied by policy", ErrorKind.AUTHENTICATION)

        response = client.post("/api/v1/wishlist/3")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTHENTICATION_REQUIRED"

    def test_clear_empty_wishlist(self, client):
        body = client.delete("/api/v1/wishlist/").json()

        assert body["success"] is True
        assert body["count"] == 0


class TestOrderRoutes:
    def test_checkout_creates_order_and_clears_cart(self, client):
        client.post("/api/v1/cart/items", json={"product_id": 1, "quantity": 2})
        client.post("/api/v1/cart/items", json={"product_id": 3, "quantity": 1})

        response = client.post("/api/v1/orders/checkout")

        assert response.status_code == 201
        order = response.json()
        assert order["status"] == "confirmed"
        assert order["order_number"].startswith("QC")
        assert len(order["items"]) == 2
        assert client.get("/api/v1/cart/").json()["item_count"] == 0
        assert [o["id"] for o in client.get("/api/v1/orders/").json()] == [order["id"]]

    def test_checkout_empty_cart_is_400(self, client):
        response = client.post("/api/v1/orders/checkout")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "CART_EMPTY"

    def test_failed_order_keeps_cart(self, client, remote):
        client.post("/api/v1/cart/items", json={"product_id": 1})
        remote.create_rejections.append("Order table full")

        response = client.post("/api/v1/orders/checkout")

        assert response.status_code == 502
        assert response.json()["error"]["code"] == "ORDER_CREATION_FAILED"
        assert client.get("/api/v1/cart/").json()["item_count"] == 1


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"


def test_catalog_outage_keeps_cart_readable(client, remote):
    client.post("/api/v1/cart/items", json={"product_id": 1, "quantity": 2})
    remote.unavailable = True

    body = client.get("/api/v1/cart/").json()

    assert body["item_count"] == 2
    assert body["total"] == "25.00"
