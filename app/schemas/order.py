"""Order schemas for request/response models."""

from typing import Optional, List, Dict, Any
from decimal import Decimal
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError
import enum
import json
import logging

logger = logging.getLogger(__name__)

ORDER_FIELDS = ["Id", "Name", "order_date_c", "status_c", "total_amount_c", "items_c"]


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class OrderItem(BaseModel):
    """Line item; stored blobs may spell the product key in camelCase"""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    product_id: str = Field(..., validation_alias=AliasChoices("product_id", "productId"))
    quantity: int = Field(..., ge=1)
    price: Decimal = Field(..., ge=0)
    name: str = ""


class OrderCreate(BaseModel):
    """Cart snapshot handed to the order writer at checkout"""
    total_amount: Decimal = Field(..., ge=0, description="Order total")
    items: List[OrderItem] = Field(default_factory=list)


class Order(BaseModel):
    id: int
    order_number: str
    order_date: Optional[str] = None
    status: OrderStatus = OrderStatus.CONFIRMED
    total_amount: Decimal = Decimal("0")
    items: List[OrderItem] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Order":
        """Transform an orders table row"""
        return cls(
            id=record["Id"],
            order_number=record.get("Name") or f"ORDER_{record['Id']}",
            order_date=record.get("order_date_c"),
            status=record.get("status_c") or OrderStatus.CONFIRMED,
            total_amount=record.get("total_amount_c") or 0,
            items=parse_items(record.get("items_c")),
        )


def serialize_items(items: List[OrderItem]) -> str:
    return json.dumps([item.model_dump(mode="json") for item in items])


def parse_items(blob: Optional[str]) -> List[OrderItem]:
    """Items blob that cannot be parsed yields an empty list"""
    if not blob:
        return []
    try:
        raw = json.loads(blob)
        return [OrderItem(**item) for item in raw]
    except (ValueError, TypeError, ValidationError) as e:
        logger.error(f"Error parsing order items: {e}")
        return []
