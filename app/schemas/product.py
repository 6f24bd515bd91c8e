"""Product Pydantic schemas"""

from pydantic import BaseModel, Field, ValidationError, field_validator
from typing import List, Optional, Dict, Any
from decimal import Decimal


# Application fields read from the products table
PRODUCT_FIELDS = [
    "Id",
    "name_c",
    "category_c",
    "description_c",
    "price_c",
    "original_price_c",
    "rating_c",
    "reviews_c",
    "stock_c",
    "images_c",
    "brand_c",
    "in_stock_c",
    "material_c",
    "colors_c",
    "warranty_c",
    "weight_c",
    "dimensions_c",
    "origin_c",
]

# Narrower projection used by list views
PRODUCT_LIST_FIELDS = PRODUCT_FIELDS[:12]

_STRING_FIELDS = {
    "name": "name_c",
    "category": "category_c",
    "description": "description_c",
    "brand": "brand_c",
    "material": "material_c",
    "colors": "colors_c",
    "warranty": "warranty_c",
    "weight": "weight_c",
    "dimensions": "dimensions_c",
    "origin": "origin_c",
}


class ProductDecodeError(ValueError):
    """Record could not be turned into a Product"""


class Product(BaseModel):
    """Normalized product view model"""
    id: int = Field(..., gt=0)
    name: str = ""
    category: str = ""
    description: str = ""
    price: Decimal = Field(default=Decimal("0"), ge=0)
    original_price: Optional[Decimal] = None
    rating: float = 0
    reviews: int = Field(default=0, ge=0)
    stock: int = Field(default=0, ge=0)
    images: List[str] = Field(default_factory=list)
    brand: str = ""
    in_stock: bool = False
    material: str = ""
    colors: str = ""
    warranty: str = ""
    weight: str = ""
    dimensions: str = ""
    origin: str = ""

    @field_validator("price", "original_price")
    @classmethod
    def validate_price(cls, v):
        if v is not None:
            # Ensure price has at most 2 decimal places
            return round(v, 2)
        return v

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Product":
        """
        Decode a products table row

        Every optional field is defaulted here so callers never deal with
        missing values. Raises ProductDecodeError when the row cannot
        produce a valid product.
        """
        if not isinstance(record, dict):
            raise ProductDecodeError("Product record must be an object")

        data: Dict[str, Any] = {"id": record.get("Id")}
        for attr, column in _STRING_FIELDS.items():
            value = record.get(column)
            data[attr] = "" if value is None else str(value)

        data["price"] = record.get("price_c") or 0
        data["original_price"] = record.get("original_price_c") or None
        data["rating"] = record.get("rating_c") or 0
        data["reviews"] = record.get("reviews_c") or 0
        data["stock"] = record.get("stock_c") or 0
        data["in_stock"] = bool(record.get("in_stock_c") or False)
        data["images"] = parse_images(record.get("images_c"))

        try:
            return cls(**data)
        except ValidationError as e:
            raise ProductDecodeError(
                f"Invalid product record {record.get('Id')!r}: {e.error_count()} error(s)"
            ) from e

    @property
    def primary_image(self) -> str:
        return self.images[0] if self.images else ""


def parse_images(value: Any) -> List[str]:
    """Images are stored as a comma-separated string"""
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if str(v).strip()]
    return [part.strip() for part in str(value).split(",") if part.strip()]
