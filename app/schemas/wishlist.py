"""
Wishlist schemas
"""

from pydantic import BaseModel, Field
from typing import Optional, Dict, Any

from .product import Product


class WishlistEntry(BaseModel):
    """Wishlist record; id is assigned by the remote store"""
    id: int
    product_id: int
    added_at: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "WishlistEntry":
        product_ref = record.get("product_id_c")
        # Lookup fields may come back expanded as {"Id": ..., "Name": ...}
        if isinstance(product_ref, dict):
            product_ref = product_ref.get("Id")
        return cls(
            id=record["Id"],
            product_id=product_ref,
            added_at=record.get("added_at_c"),
        )


class WishlistViewItem(WishlistEntry):
    """Wishlist entry joined with its catalog product"""
    product: Optional[Product] = None


class WishlistResult(BaseModel):
    """Outcome of a wishlist mutation"""
    success: bool
    message: str
    count: int = Field(default=0, ge=0)
    item: Optional[Dict[str, Any]] = None
