"""
Product catalog API routes
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from app.schemas.product import Product
from app.services.product_service import ProductService
from app.utils.dependencies import get_product_service

router = APIRouter()

@router.get(
    "/",
    response_model=List[Product],
    summary="List products",
    description="All products, or filtered by category or a search query"
)
async def list_products(
    category: Optional[str] = None,
    q: Optional[str] = Query(None, min_length=1, description="Search text"),
    service: ProductService = Depends(get_product_service)
):
    if q:
        return await service.search(q)
    if category:
        return await service.get_by_category(category)
    return await service.get_all()

@router.get("/featured", response_model=List[Product], summary="Featured products")
async def featured_products(service: ProductService = Depends(get_product_service)):
    return await service.get_featured()

@router.get("/categories", response_model=List[str], summary="Product categories")
async def list_categories(service: ProductService = Depends(get_product_service)):
    return await service.get_categories()

@router.get("/{product_id}", response_model=Product, summary="Get product")
async def get_product(
    product_id: int,
    service: ProductService = Depends(get_product_service)
):
    return await service.get_by_id(product_id)

@router.get("/{product_id}/related", response_model=List[Product], summary="Related products")
async def related_products(
    product_id: int,
    limit: int = Query(4, ge=1, le=20),
    service: ProductService = Depends(get_product_service)
):
    """Products from the same category"""
    product = await service.get_by_id(product_id)
    return await service.get_related(product.id, product.category, limit)
