"""
Wishlist service backed by the remote record store

Entries are scoped by the store's authenticated session; this service
never filters by owner. add() checks for an existing entry before
inserting, so overlapping calls for the same product can still create
duplicates. remove() deletes every match to compensate.
"""

from typing import List, Optional
from datetime import datetime, timezone
import asyncio
import logging

from app.core.exceptions import QuickCartException
from app.schemas.remote import Condition, OrderBy, PagingInfo, RecordQuery
from app.schemas.wishlist import WishlistEntry, WishlistResult, WishlistViewItem
from app.services.notification import NotificationService
from app.services.product_service import ProductService
from app.services.remote_store import (
    RemoteStore,
    raise_for_error,
    raise_for_results,
    require_store,
)
from app.utils.helpers import generate_record_name

logger = logging.getLogger(__name__)


class WishlistService:
    """Service for managing the wishlist"""

    def __init__(
        self,
        remote: Optional[RemoteStore],
        products: ProductService,
        notifier: Optional[NotificationService] = None,
        table_name: str = "wishlist_items_c",
    ):
        self.remote = remote
        self.products = products
        self.notifier = notifier or NotificationService()
        self.table_name = table_name

    async def get_all(self) -> List[WishlistEntry]:
        """All entries, newest first; empty on failure"""
        try:
            remote = require_store(self.remote)
            response = await remote.fetch_records(
                self.table_name,
                RecordQuery(
                    fields=["Id", "product_id_c", "added_at_c"],
                    order_by=[OrderBy(field_name="added_at_c")],
                ),
            )
        except QuickCartException as e:
            logger.error(f"Error fetching wishlist items: {e.detail}")
            return []

        if not response.success:
            logger.error(f"Error fetching wishlist items: {response.message}")
            return []

        entries = []
        for record in response.data or []:
            try:
                entries.append(WishlistEntry.from_record(record))
            except (KeyError, TypeError, ValueError) as e:
                logger.error(f"Skipping malformed wishlist record: {e}")
        return entries

    async def is_in_wishlist(self, product_id: int) -> bool:
        """Existence check; any failure reads as not present"""
        try:
            remote = require_store(self.remote)
            response = await remote.fetch_records(
                self.table_name,
                RecordQuery(
                    fields=["Id"],
                    where=[Condition(field_name="product_id_c", values=[int(product_id)])],
                    paging=PagingInfo(limit=1),
                ),
            )
        except Exception as e:
            logger.error(f"Error checking wishlist status: {e}")
            return False

        if not response.success:
            logger.error(f"Error checking wishlist status: {response.message}")
            return False
        return bool(response.data)

    async def add(self, product_id: int) -> WishlistResult:
        remote = require_store(self.remote)

        if await self.is_in_wishlist(product_id):
            return WishlistResult(success=False, message="Product already in wishlist")

        response = await remote.create_record(
            self.table_name,
            [
                {
                    "Name": generate_record_name("Wishlist Item"),
                    "product_id_c": int(product_id),
                    "added_at_c": datetime.now(timezone.utc).isoformat(),
                }
            ],
        )
        self._raise_with_notice(response, "Failed to add to wishlist")
        successful = self._results_with_notice(response, "Failed to add to wishlist")

        if not successful:
            logger.error("Unexpected response format while adding to wishlist")
            return WishlistResult(success=False, message="Unexpected response format")

        self.notifier.success("Added to wishlist!")
        return WishlistResult(
            success=True,
            message="Added to wishlist",
            count=len(successful),
            item=successful[0].data,
        )

    async def remove(self, product_id: int) -> WishlistResult:
        """Delete every entry for the product in one batch"""
        remote = require_store(self.remote)

        response = await remote.fetch_records(
            self.table_name,
            RecordQuery(
                fields=["Id"],
                where=[Condition(field_name="product_id_c", values=[int(product_id)])],
            ),
        )
        if not response.success:
            logger.error(f"Error finding wishlist item: {response.message}")
            raise_for_error(response, "Failed to remove from wishlist")

        record_ids = _record_ids(response)
        if not record_ids:
            return WishlistResult(success=False, message="Product not found in wishlist")

        return await self._delete(record_ids, "Removed from wishlist")

    async def toggle(self, product_id: int) -> WishlistResult:
        if await self.is_in_wishlist(product_id):
            return await self.remove(product_id)
        return await self.add(product_id)

    async def clear(self) -> WishlistResult:
        remote = require_store(self.remote)

        response = await remote.fetch_records(self.table_name, RecordQuery(fields=["Id"]))
        if not response.success:
            logger.error(f"Error fetching wishlist items to clear: {response.message}")
            raise_for_error(response, "Failed to clear wishlist")

        record_ids = _record_ids(response)
        if not record_ids:
            return WishlistResult(success=True, message="Wishlist already empty", count=0)

        return await self._delete(record_ids, "Wishlist cleared")

    async def get_wishlist_with_products(self) -> List[WishlistViewItem]:
        """Entries joined with their products; a failed lookup leaves product None"""
        entries = await self.get_all()
        products = await asyncio.gather(
            *(self.products.get_by_id(entry.product_id) for entry in entries),
            return_exceptions=True,
        )

        items = []
        for entry, product in zip(entries, products):
            if isinstance(product, Exception):
                logger.error(f"Error fetching product {entry.product_id}: {product}")
                product = None
            items.append(WishlistViewItem(**entry.model_dump(), product=product))
        return items

    async def _delete(self, record_ids: List[int], success_message: str) -> WishlistResult:
        remote = require_store(self.remote)
        response = await remote.delete_record(self.table_name, record_ids)
        self._raise_with_notice(response, "Failed to update wishlist")
        self._results_with_notice(response, "Failed to update wishlist")

        self.notifier.success(f"{success_message}!")
        return WishlistResult(success=True, message=success_message, count=len(record_ids))

    def _raise_with_notice(self, response, fallback: str) -> None:
        if not response.success:
            logger.error(f"{fallback}: {response.message}")
            self.notifier.error(response.message or fallback)
            raise_for_error(response, fallback)

    def _results_with_notice(self, response, fallback: str):
        for record in response.failed:
            if record.message:
                self.notifier.error(record.message)
        return raise_for_results(response, fallback)


def _record_ids(response) -> List[int]:
    """Ids of fetched rows; rows without an Id are skipped"""
    ids = []
    for row in response.data or []:
        record_id = row.get("Id") if isinstance(row, dict) else None
        if record_id is None:
            logger.error(f"Skipping wishlist row without Id: {row}")
            continue
        ids.append(record_id)
    return ids
