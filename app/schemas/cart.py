"""
Cart schemas for local storage and response validation
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from decimal import Decimal


class CartLine(BaseModel):
    """Cart line as persisted in local storage"""
    product_id: str = Field(..., min_length=1, description="Product ID as string")
    quantity: int = Field(..., ge=1, description="Quantity")
    price: Decimal = Field(..., ge=0, description="Price cached when added")
    name: str = Field(..., description="Name cached when added")
    image: str = Field(default="", description="Image cached when added")


class CartItemView(CartLine):
    """Cart line refreshed against the catalog"""
    stock: Optional[int] = Field(None, description="Catalog stock, None when cached")

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class AddToCartRequest(BaseModel):
    """Schema for add to cart request"""
    product_id: int = Field(..., description="Product ID")
    quantity: int = Field(default=1, ge=1, description="Quantity to add")


class CartItemUpdate(BaseModel):
    """Schema for updating cart item; zero or less removes the line"""
    quantity: int = Field(..., description="New quantity")


class CartResponse(BaseModel):
    """Schema for cart response"""
    items: List[CartItemView]
    item_count: int
    total: Decimal
