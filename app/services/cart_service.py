"""
Cart service for managing cart operations

Cart lines are owned locally and persisted under a single storage key.
Prices and stock shown to the user are refreshed from the catalog on
every read, falling back to the values cached when the line was added.
"""

from typing import Any, List, Optional
from decimal import Decimal
import logging

from pydantic import TypeAdapter

from app.core.cache import RedisCache
from app.core.exceptions import InvalidProductException, ValidationException
from app.schemas.cart import CartItemView, CartLine
from app.schemas.order import OrderCreate, OrderItem
from app.services.product_service import ProductService

logger = logging.getLogger(__name__)

_lines_adapter = TypeAdapter(List[CartLine])


class CartService:
    """
    Service for managing cart operations
    """

    def __init__(
        self,
        storage: RedisCache,
        products: ProductService,
        storage_key: str = "quickcart_cart",
    ):
        self.storage = storage
        self.products = products
        self.storage_key = storage_key
        self.cart_items: List[CartLine] = []

    async def load(self) -> None:
        """Load persisted lines; unreadable data is treated as an empty cart"""
        try:
            stored = await self.storage.get(self.storage_key)
            lines = _lines_adapter.validate_json(stored) if stored else []
        except Exception as e:
            logger.error(f"Error loading cart from storage: {e}")
            lines = []

        merged: List[CartLine] = []
        for line in lines:
            existing = self._find(line.product_id, merged)
            if existing:
                existing.quantity += line.quantity
            else:
                merged.append(line)
        self.cart_items = merged

    async def _save(self) -> None:
        try:
            await self.storage.set(
                self.storage_key,
                _lines_adapter.dump_json(self.cart_items).decode(),
            )
        except Exception as e:
            logger.error(f"Error saving cart to storage: {e}")

    def _find(
        self, product_id: Any, lines: Optional[List[CartLine]] = None
    ) -> Optional[CartLine]:
        product_id = str(product_id)
        for line in self.cart_items if lines is None else lines:
            if line.product_id == product_id:
                return line
        return None

    async def get_all(self) -> List[CartItemView]:
        """
        Get cart lines refreshed against the catalog

        A product that cannot be fetched keeps its cached values, so the
        result always has one entry per stored line.
        """
        items = []
        for line in list(self.cart_items):
            try:
                product = await self.products.get_by_id(int(line.product_id))
                items.append(
                    CartItemView(
                        product_id=line.product_id,
                        quantity=line.quantity,
                        price=product.price or line.price,
                        name=product.name or line.name,
                        image=product.primary_image or line.image,
                        stock=product.stock,
                    )
                )
            except Exception as e:
                logger.error(f"Error fetching product {line.product_id}: {e}")
                items.append(CartItemView(**line.model_dump()))
        return items

    async def add_item(self, product: Any, quantity: int = 1) -> List[CartItemView]:
        """
        Add product to cart or increase quantity if the line exists

        Cached price and name of an existing line are left untouched.
        """
        product_id, name, price, image = _validate_product(product)
        if quantity < 1:
            raise ValidationException("Quantity must be at least 1")

        existing = self._find(product_id)
        if existing:
            existing.quantity += quantity
        else:
            self.cart_items.append(
                CartLine(
                    product_id=product_id,
                    quantity=quantity,
                    price=price,
                    name=name,
                    image=image,
                )
            )

        await self._save()
        return await self.get_all()

    async def update_quantity(self, product_id: Any, quantity: int) -> List[CartItemView]:
        """Replace quantity; zero or less removes the line"""
        existing = self._find(product_id)
        if existing:
            if quantity <= 0:
                self.cart_items.remove(existing)
            else:
                existing.quantity = quantity
            await self._save()
        return await self.get_all()

    async def remove_item(self, product_id: Any) -> List[CartItemView]:
        product_id = str(product_id)
        self.cart_items = [
            line for line in self.cart_items if line.product_id != product_id
        ]
        await self._save()
        return await self.get_all()

    async def clear(self) -> List[CartItemView]:
        self.cart_items = []
        await self._save()
        return []

    async def get_item_count(self) -> int:
        try:
            return sum(line.quantity for line in self.cart_items)
        except Exception as e:
            logger.error(f"Error getting cart item count: {e}")
            return 0

    async def get_total(self) -> Decimal:
        """Cart total from refreshed prices; 0 if it cannot be computed"""
        try:
            items = await self.get_all()
            return sum((item.price * item.quantity for item in items), Decimal("0"))
        except Exception as e:
            logger.error(f"Error calculating cart total: {e}")
            return Decimal("0")

    async def snapshot(self) -> OrderCreate:
        """Current cart as order input"""
        items = await self.get_all()
        return OrderCreate(
            total_amount=sum((item.line_total for item in items), Decimal("0")),
            items=[
                OrderItem(
                    product_id=item.product_id,
                    quantity=item.quantity,
                    price=item.price,
                    name=item.name,
                )
                for item in items
            ],
        )


def _validate_product(product: Any):
    """Extract (product_id, name, price, image) from a product or raise"""
    if product is None:
        raise InvalidProductException("Product is required")

    def read(attr: str, key: str):
        if isinstance(product, dict):
            return product.get(key, product.get(attr))
        return getattr(product, attr, None)

    raw_id = read("id", "Id")
    if raw_id is None or isinstance(raw_id, bool):
        raise InvalidProductException("Product ID is required")
    try:
        if int(raw_id) < 0:
            raise ValueError(raw_id)
    except (TypeError, ValueError):
        raise InvalidProductException("Product ID is required")

    name = read("name", "name")
    if not name:
        raise InvalidProductException("Product name is required")

    price = read("price", "price")
    if isinstance(price, bool) or not isinstance(price, (int, float, Decimal)):
        raise InvalidProductException("Valid product price is required")
    price = Decimal(str(price))
    if not price.is_finite() or price < 0:
        raise InvalidProductException("Valid product price is required")

    images = read("images", "images") or []
    image = images[0] if images else ""
    return str(int(raw_id)), str(name), price, str(image)
