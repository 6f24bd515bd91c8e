"""Tests for the locally persisted cart."""

import json
from decimal import Decimal

import pytest

from app.core.exceptions import InvalidProductException, ValidationException
from app.services.cart_service import CartService
from tests.conftest import PRODUCTS


class TestAddItem:
    async def test_mug_scenario(self, cart_service):
        """Empty cart, add two mugs, one line with a total of 19.98."""
        items = await cart_service.add_item({"Id": 7, "name": "Mug", "price": 9.99}, 2)

        assert len(items) == 1
        assert items[0].product_id == "7"
        assert items[0].quantity == 2
        assert await cart_service.get_total() == Decimal("19.98")

    async def test_repeated_adds_merge_into_one_line(self, cart_service, product_service):
        product = await product_service.get_by_id(1)

        for quantity in (1, 3, 2):
            await cart_service.add_item(product, quantity)

        lines = [line for line in cart_service.cart_items if line.product_id == "1"]
        assert len(lines) == 1
        assert lines[0].quantity == 6

    async def test_repeat_add_keeps_cached_price(self, cart_service):
        await cart_service.add_item({"Id": 99, "name": "Poster", "price": 5})
        await cart_service.add_item({"Id": 99, "name": "Poster v2", "price": 8})

        line = cart_service.cart_items[0]
        assert line.quantity == 2
        assert line.price == Decimal("5")
        assert line.name == "Poster"

    async def test_new_line_uses_first_image(self, cart_service, product_service):
        product = await product_service.get_by_id(1)

        await cart_service.add_item(product)

        assert cart_service.cart_items[0].image == "mug-front.jpg"

    @pytest.mark.parametrize(
        "product",
        [
            None,
            {"name": "No id", "price": 1},
            {"Id": -1, "name": "Negative", "price": 1},
            {"Id": 3, "name": "", "price": 1},
            {"Id": 3, "name": "Free text price", "price": "12"},
            {"Id": 3, "name": "Negative price", "price": -0.5},
            {"Id": 3, "name": "Boolean price", "price": True},
        ],
    )
    async def test_invalid_products_are_rejected(self, cart_service, product):
        with pytest.raises(InvalidProductException):
            await cart_service.add_item(product)

        assert cart_service.cart_items == []

    async def test_zero_id_is_accepted(self, cart_service):
        await cart_service.add_item({"Id": 0, "name": "Gift card", "price": 0})

        assert cart_service.cart_items[0].product_id == "0"

    async def test_non_positive_quantity_is_rejected(self, cart_service):
        with pytest.raises(ValidationException):
            await cart_service.add_item({"Id": 3, "name": "Lamp", "price": 45}, 0)


class TestUpdateAndRemove:
    async def test_update_to_zero_removes_line(self, cart_service):
        await cart_service.add_item({"Id": 1, "name": "Mug", "price": 12.5}, 2)

        items = await cart_service.update_quantity("1", 0)

        assert items == []
        assert all(item.product_id != "1" for item in await cart_service.get_all())

    async def test_update_replaces_quantity(self, cart_service):
        await cart_service.add_item({"Id": 1, "name": "Mug", "price": 12.5}, 2)

        items = await cart_service.update_quantity(1, 5)

        assert items[0].quantity == 5

    async def test_update_unknown_product_is_noop(self, cart_service):
        await cart_service.add_item({"Id": 1, "name": "Mug", "price": 12.5})

        items = await cart_service.update_quantity("42", 3)

        assert [(i.product_id, i.quantity) for i in items] == [("1", 1)]

    async def test_remove_item(self, cart_service):
        await cart_service.add_item({"Id": 1, "name": "Mug", "price": 12.5})
        await cart_service.add_item({"Id": 3, "name": "Lamp", "price": 45})

        items = await cart_service.remove_item(1)

        assert [i.product_id for i in items] == ["3"]
        assert [i.product_id for i in await cart_service.remove_item("404")] == ["3"]

    async def test_clear_empties_cart(self, cart_service):
        await cart_service.add_item({"Id": 1, "name": "Mug", "price": 12.5}, 3)

        assert await cart_service.clear() == []
        assert await cart_service.get_all() == []
        assert await cart_service.get_item_count() == 0


class TestReconciliation:
    async def test_get_all_refreshes_from_catalog(self, remote, cart_service):
        await cart_service.add_item({"Id": 1, "name": "Old Mug", "price": 8}, 1)
        remote.tables[PRODUCTS][1]["price_c"] = 14.0

        item = (await cart_service.get_all())[0]

        assert item.price == Decimal("14.00")
        assert item.name == "Ceramic Mug"
        assert item.stock == 40

    async def test_unreachable_product_falls_back_to_cache(self, remote, cart_service):
        await cart_service.add_item({"Id": 1, "name": "Old Mug", "price": 8}, 1)
        await cart_service.add_item({"Id": 3, "name": "Lamp", "price": 40}, 1)
        remote.unavailable_ids.add(1)

        items = await cart_service.get_all()

        assert len(items) == 2
        assert (items[0].price, items[0].name, items[0].stock) == (Decimal("8"), "Old Mug", None)
        assert items[1].price == Decimal("45.00")

    async def test_catalog_row_without_price_keeps_cached_price(self, remote, cart_service):
        await cart_service.add_item({"Id": 1, "name": "Mug", "price": 12.5}, 2)
        del remote.tables[PRODUCTS][1]["price_c"]

        item = (await cart_service.get_all())[0]

        assert item.price == Decimal("12.5")
        assert item.name == "Ceramic Mug"
        assert await cart_service.get_total() == Decimal("25.0")

    async def test_total_uses_catalog_price_when_reachable(self, cart_service):
        await cart_service.add_item({"Id": 1, "name": "Mug", "price": 8}, 3)

        assert await cart_service.get_total() == Decimal("37.50")

    async def test_total_uses_cached_price_when_catalog_down(self, remote, cart_service):
        await cart_service.add_item({"Id": 1, "name": "Mug", "price": 8}, 3)
        remote.unavailable = True

        assert await cart_service.get_total() == Decimal("24")

    async def test_item_count_sums_quantities(self, cart_service):
        await cart_service.add_item({"Id": 1, "name": "Mug", "price": 8}, 3)
        await cart_service.add_item({"Id": 2, "name": "Apron", "price": 30}, 2)

        assert await cart_service.get_item_count() == 5

    async def test_snapshot_builds_order_input(self, cart_service):
        await cart_service.add_item({"Id": 1, "name": "Mug", "price": 8}, 2)
        await cart_service.add_item({"Id": 3, "name": "Lamp", "price": 45}, 1)

        snapshot = await cart_service.snapshot()

        assert snapshot.total_amount == Decimal("70.00")
        assert [(i.product_id, i.quantity) for i in snapshot.items] == [("1", 2), ("3", 1)]


class TestPersistence:
    async def test_mutations_are_persisted_and_reloaded(self, storage, product_service, cart_service):
        await cart_service.add_item({"Id": 1, "name": "Mug", "price": 12.5}, 2)

        reloaded = CartService(storage, product_service, storage_key="test_cart")
        await reloaded.load()

        assert [(line.product_id, line.quantity) for line in reloaded.cart_items] == [("1", 2)]

    async def test_corrupt_storage_loads_as_empty(self, storage, product_service):
        await storage.set("test_cart", "{not json")
        service = CartService(storage, product_service, storage_key="test_cart")

        await service.load()

        assert service.cart_items == []

    async def test_incompatible_shape_loads_as_empty(self, storage, product_service):
        await storage.set("test_cart", json.dumps([{"productId": 1, "qty": 2}]))
        service = CartService(storage, product_service, storage_key="test_cart")

        await service.load()

        assert service.cart_items == []

    async def test_duplicate_stored_lines_are_merged(self, storage, product_service):
        line = {"product_id": "1", "quantity": 1, "price": "12.5", "name": "Mug", "image": ""}
        await storage.set("test_cart", json.dumps([line, dict(line, quantity=2)]))
        service = CartService(storage, product_service, storage_key="test_cart")

        await service.load()

        assert [(line.product_id, line.quantity) for line in service.cart_items] == [("1", 3)]

    async def test_save_failure_keeps_in_memory_state(self, storage, product_service, monkeypatch):
        service = CartService(storage, product_service, storage_key="test_cart")

        async def broken_set(key, value):
            raise ConnectionError("storage offline")

        monkeypatch.setattr(storage, "set", broken_set)

        items = await service.add_item({"Id": 1, "name": "Mug", "price": 12.5})

        assert len(items) == 1
