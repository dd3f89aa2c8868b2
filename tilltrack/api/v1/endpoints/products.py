"""
Products API endpoints for catalog management.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, ValidationError

from tilltrack.api.deps import get_catalog
from tilltrack.core.exceptions import ProductNotFoundError
from tilltrack.models.inventory import Product, ProductCategory
from tilltrack.services.catalog import CatalogService

router = APIRouter()


class ProductRequest(BaseModel):
    """Request model for creating a product."""
    name: str = Field(..., min_length=1, description="Product name")
    price: float = Field(..., ge=0, description="Tax-inclusive unit price")
    category: ProductCategory = Field(ProductCategory.OTHER, description="Category tag")
    tax_rate: float = Field(..., description="Tax rate in percent (2.1 or 8.5)")
    color: Optional[str] = None
    icon: Optional[str] = None
    stock: Optional[int] = Field(None, ge=0, description="Units in stock, omit to not track")
    min_stock: Optional[int] = Field(None, ge=0, description="Minimum stock before alerting")
    is_active: bool = True


class ProductUpdateRequest(BaseModel):
    """Request model for updating a product. Only the fields sent are changed."""
    name: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    category: Optional[ProductCategory] = None
    tax_rate: Optional[float] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    stock: Optional[int] = Field(None, ge=0)
    min_stock: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


class StockAdjustmentRequest(BaseModel):
    """Request model for a stock adjustment."""
    delta: int = Field(..., description="Units to add (positive) or remove (negative)")


@router.get("", response_model=List[Product])
async def list_products(
    active_only: bool = False,
    category: Optional[ProductCategory] = None,
    catalog: CatalogService = Depends(get_catalog)
):
    """List catalog products."""
    return catalog.list_products(active_only=active_only, category=category)


@router.post("", response_model=Product)
async def create_product(request: ProductRequest, catalog: CatalogService = Depends(get_catalog)):
    """Add a product to the catalog."""
    try:
        return catalog.add_product(request.model_dump())
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/reset", response_model=List[Product])
async def reset_catalog(catalog: CatalogService = Depends(get_catalog)):
    """Replace the catalog with the starter products."""
    return catalog.reset()


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str, catalog: CatalogService = Depends(get_catalog)):
    try:
        return catalog.get_product(product_id)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{product_id}", response_model=Product)
async def update_product(
    product_id: str,
    request: ProductUpdateRequest,
    catalog: CatalogService = Depends(get_catalog)
):
    """Update some fields of a product."""
    try:
        return catalog.update_product(product_id, request.model_dump(exclude_unset=True))
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.delete("/{product_id}")
async def delete_product(product_id: str, catalog: CatalogService = Depends(get_catalog)):
    try:
        catalog.delete_product(product_id)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"status": "deleted", "product_id": product_id}


@router.post("/{product_id}/toggle", response_model=Product)
async def toggle_product(product_id: str, catalog: CatalogService = Depends(get_catalog)):
    """Activate or deactivate a product."""
    try:
        return catalog.toggle_active(product_id)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{product_id}/stock", response_model=Product)
async def adjust_stock(
    product_id: str,
    request: StockAdjustmentRequest,
    catalog: CatalogService = Depends(get_catalog)
):
    """Adjust stock. The level never goes below zero."""
    try:
        return catalog.update_stock(product_id, request.delta)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
