"""Order service: persists checkout snapshots and reads past orders"""

from typing import List, Optional
from datetime import datetime, timezone
import logging

from app.core.exceptions import (
    NotFoundException,
    OrderCreationFailedException,
    QuickCartException,
    RemoteFailureException,
)
from app.schemas.order import (
    ORDER_FIELDS,
    Order,
    OrderCreate,
    OrderStatus,
    serialize_items,
)
from app.schemas.remote import OrderBy, RecordQuery
from app.services.notification import NotificationService
from app.services.remote_store import RemoteStore, raise_for_error, require_store
from app.utils.helpers import generate_order_number

logger = logging.getLogger(__name__)

class OrderService:
    """Order writer"""

    def __init__(
        self,
        remote: Optional[RemoteStore],
        notifier: Optional[NotificationService] = None,
        table_name: str = "orders_c",
    ):
        self.remote = remote
        self.notifier = notifier or NotificationService()
        self.table_name = table_name

    async def create(self, order_data: OrderCreate) -> Order:
        """
        Persist one confirmed order record

        Raises OrderCreationFailedException if any record of the batch
        create failed; nothing is reported as created in that case.
        """
        remote = require_store(self.remote)

        record = {
            "Name": generate_order_number(),
            "order_date_c": datetime.now(timezone.utc).isoformat(),
            "status_c": OrderStatus.CONFIRMED.value,
            "total_amount_c": float(order_data.total_amount),
            "items_c": serialize_items(order_data.items),
        }
        response = await remote.create_record(self.table_name, [record])

        if not response.success:
            logger.error(f"Error creating order: {response.message}")
            self.notifier.error(response.message or "Failed to create order")
            raise_for_error(response, "Failed to create order")

        failed = response.failed
        if failed:
            logger.error(f"Failed to create order: {[r.message for r in failed]}")
            for result in failed:
                if result.message:
                    self.notifier.error(result.message)
            raise OrderCreationFailedException(failed=len(failed))

        successful = response.successful
        if not successful or not successful[0].data:
            raise RemoteFailureException("Unexpected response format")

        order = Order.from_record(successful[0].data)
        self.notifier.success("Order created successfully!")
        return order

    async def get_all(self) -> List[Order]:
        """Orders newest first; empty on failure"""
        try:
            remote = require_store(self.remote)
            response = await remote.fetch_records(
                self.table_name,
                RecordQuery(fields=ORDER_FIELDS, order_by=[OrderBy(field_name="order_date_c")]),
            )
        except QuickCartException as e:
            logger.error(f"Error fetching orders: {e.detail}")
            return []

        if not response.success:
            logger.error(f"Error fetching orders: {response.message}")
            self.notifier.error(response.message or "Failed to load orders")
            return []

        orders = []
        for row in response.data or []:
            try:
                orders.append(Order.from_record(row))
            except (KeyError, ValueError) as e:
                logger.error(f"Skipping malformed order record: {e}")
        return orders

    async def get_by_id(self, order_id: int) -> Order:
        remote = require_store(self.remote)
        response = await remote.get_record_by_id(self.table_name, int(order_id), ORDER_FIELDS)
        if not response.success:
            logger.error(f"Error fetching order {order_id}: {response.message}")
            raise_for_error(response, "Failed to fetch order")
        if not response.data:
            raise NotFoundException("Order not found")
        return Order.from_record(response.data)
