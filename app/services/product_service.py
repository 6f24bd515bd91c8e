"""Read-only product catalog service over the remote record store"""

from typing import List, Optional
import logging

from app.core.exceptions import NotFoundException, QuickCartException, RemoteFailureException
from app.schemas.product import (
    PRODUCT_FIELDS,
    PRODUCT_LIST_FIELDS,
    Product,
    ProductDecodeError,
)
from app.schemas.remote import (
    Condition,
    Operator,
    OrderBy,
    PagingInfo,
    RecordQuery,
    WhereGroup,
)
from app.services.remote_store import RemoteStore, raise_for_error, require_store

logger = logging.getLogger(__name__)

class ProductService:
    """
    Catalog reader

    get_by_id raises; every list read degrades to an empty list after
    logging the failure.
    """

    def __init__(
        self,
        remote: Optional[RemoteStore],
        table_name: str = "products_c",
        featured_min_rating: float = 4.7,
        featured_limit: int = 6,
        related_limit: int = 4,
    ):
        self.remote = remote
        self.table_name = table_name
        self.featured_min_rating = featured_min_rating
        self.featured_limit = featured_limit
        self.related_limit = related_limit

    async def get_by_id(self, product_id: int) -> Product:
        """Get a single product, raising NotFoundException when absent"""
        remote = require_store(self.remote)
        response = await remote.get_record_by_id(
            self.table_name, int(product_id), PRODUCT_FIELDS
        )
        if not response.success:
            logger.error(f"Error fetching product {product_id}: {response.message}")
            raise_for_error(response, "Failed to fetch product")
        if not response.data:
            raise NotFoundException("Product not found")

        try:
            return Product.from_record(response.data)
        except ProductDecodeError as e:
            logger.error(f"Error decoding product {product_id}: {e}")
            raise RemoteFailureException("Malformed product record")

    async def get_all(self) -> List[Product]:
        return await self._fetch_products(
            RecordQuery(
                fields=PRODUCT_FIELDS,
                order_by=[OrderBy(field_name="Id")],
            ),
            "fetching products",
        )

    async def get_by_category(self, category: str) -> List[Product]:
        return await self._fetch_products(
            RecordQuery(
                fields=PRODUCT_LIST_FIELDS,
                where=[Condition(field_name="category_c", values=[category])],
                order_by=[OrderBy(field_name="rating_c")],
            ),
            "fetching products by category",
        )

    async def search(self, query: str) -> List[Product]:
        """Case-insensitive match on name, category or description"""
        searchable = ["name_c", "category_c", "description_c"]
        return await self._fetch_products(
            RecordQuery(
                fields=PRODUCT_LIST_FIELDS,
                where_groups=[
                    WhereGroup(
                        operator="OR",
                        sub_groups=[
                            [Condition(field_name=field, operator=Operator.CONTAINS, values=[query])]
                            for field in searchable
                        ],
                    )
                ],
            ),
            "searching products",
        )

    async def get_related(
        self,
        product_id: int,
        category: str,
        limit: Optional[int] = None,
    ) -> List[Product]:
        """Same-category products, excluding the product itself"""
        return await self._fetch_products(
            RecordQuery(
                fields=PRODUCT_LIST_FIELDS,
                where=[
                    Condition(field_name="category_c", values=[category]),
                    Condition(
                        field_name="Id",
                        operator=Operator.NOT_EQUAL_TO,
                        values=[int(product_id)],
                    ),
                ],
                order_by=[OrderBy(field_name="rating_c")],
                paging=PagingInfo(limit=limit or self.related_limit),
            ),
            "fetching related products",
        )

    async def get_featured(self) -> List[Product]:
        return await self._fetch_products(
            RecordQuery(
                fields=PRODUCT_LIST_FIELDS,
                where=[
                    Condition(
                        field_name="rating_c",
                        operator=Operator.GREATER_THAN_OR_EQUAL_TO,
                        values=[str(self.featured_min_rating)],
                    )
                ],
                order_by=[OrderBy(field_name="reviews_c")],
                paging=PagingInfo(limit=self.featured_limit),
            ),
            "fetching featured products",
        )

    async def get_categories(self) -> List[str]:
        """Distinct non-empty category names"""
        rows = await self._fetch_rows(
            RecordQuery(fields=["category_c"], group_by=["category_c"]),
            "fetching categories",
        )
        categories: List[str] = []
        for row in rows:
            category = row.get("category_c")
            if category and category not in categories:
                categories.append(category)
        return categories

    async def _fetch_rows(self, query: RecordQuery, action: str) -> List[dict]:
        try:
            remote = require_store(self.remote)
            response = await remote.fetch_records(self.table_name, query)
        except QuickCartException as e:
            logger.error(f"Error {action}: {e.detail}")
            return []

        if not response.success:
            logger.error(f"Error {action}: {response.message}")
            return []
        return [row for row in response.data or [] if isinstance(row, dict)]

    async def _fetch_products(self, query: RecordQuery, action: str) -> List[Product]:
        products = []
        for row in await self._fetch_rows(query, action):
            try:
                products.append(Product.from_record(row))
            except ProductDecodeError as e:
                logger.error(f"Skipping product while {action}: {e}")
        return products
