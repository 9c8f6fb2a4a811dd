"""Product API routes"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from ..core.errors import InvalidRequest, ProductNotFound
from ..database.products import ProductCatalog
from ..models.common import APIResponse, ListResponse
from ..models.product import Product

router = APIRouter(prefix="/api/products", tags=["Products"])


def get_product_catalog(request: Request) -> ProductCatalog:
    return request.app.state.product_catalog


@router.get("", response_model=ListResponse[Product])
async def list_products(
    category: Optional[str] = Query(None, description="Filter by category"),
    in_stock_only: bool = Query(False, description="Only show in-stock items"),
    catalog: ProductCatalog = Depends(get_product_catalog),
):
    """List catalog products, newest first"""
    products = await catalog.list_products(category=category, in_stock_only=in_stock_only)
    return ListResponse[Product](
        data=products,
        count=len(products),
        message="Products retrieved successfully",
    )


@router.get("/categories", response_model=APIResponse[list[str]])
async def list_categories(catalog: ProductCatalog = Depends(get_product_catalog)):
    """List all product categories"""
    return APIResponse[list[str]](data=await catalog.categories(), message="Categories retrieved successfully")


@router.get("/search", response_model=ListResponse[Product])
async def search_products(
    q: Optional[str] = Query(None, description="Search term"),
    catalog: ProductCatalog = Depends(get_product_catalog),
):
    """
    Search products by name, description or category.

    A missing or blank ``q`` is rejected.
    """
    if not q or not q.strip():
        raise InvalidRequest("Search query is required", {"hint": "Please provide a search term"})

    products = await catalog.search(q)
    return ListResponse[Product](
        data=products,
        count=len(products),
        message=f'Found {len(products)} products matching "{q.strip()}"',
    )


@router.get("/{product_id}", response_model=APIResponse[Product])
async def get_product(product_id: str, catalog: ProductCatalog = Depends(get_product_catalog)):
    """Get a product by ID"""
    product = await catalog.get_product(product_id)
    if not product:
        raise ProductNotFound(product_id)
    return APIResponse[Product](data=product, message="Product retrieved successfully")
