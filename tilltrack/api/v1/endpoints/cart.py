"""
Cart API endpoints for the sale in progress.
"""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from tilltrack.api.deps import get_cart_ledger, get_catalog
from tilltrack.core.exceptions import ProductNotFoundError
from tilltrack.models.sales import CartTotals
from tilltrack.services.cart_ledger import CartLedger
from tilltrack.services.catalog import CatalogService

router = APIRouter()


class AddItemRequest(BaseModel):
    """Request model for adding one unit of a product."""
    product_id: str = Field(..., description="Product ID")


class SetQuantityRequest(BaseModel):
    """Request model for setting a line quantity. Zero or less removes the line."""
    quantity: int = Field(..., description="New quantity")


@router.get("", response_model=CartTotals)
async def get_cart(ledger: CartLedger = Depends(get_cart_ledger)):
    """Current cart lines and totals."""
    return ledger.totals()


@router.post("/items", response_model=CartTotals)
async def add_item(
    request: AddItemRequest,
    ledger: CartLedger = Depends(get_cart_ledger),
    catalog: CatalogService = Depends(get_catalog)
):
    """Add one unit of an active product to the cart."""
    try:
        product = catalog.get_product(request.product_id)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if not product.is_active:
        raise HTTPException(status_code=400, detail=f"Product {product.id} is not active")

    ledger.add_item(product)
    return ledger.totals()


@router.post("/items/{product_id}/decrement", response_model=CartTotals)
async def remove_item(product_id: str, ledger: CartLedger = Depends(get_cart_ledger)):
    """Remove one unit of a product from the cart."""
    ledger.remove_item(product_id)
    return ledger.totals()


@router.put("/items/{product_id}", response_model=CartTotals)
async def set_quantity(
    product_id: str,
    request: SetQuantityRequest,
    ledger: CartLedger = Depends(get_cart_ledger)
):
    """Set the quantity of a cart line."""
    ledger.set_quantity(product_id, request.quantity)
    return ledger.totals()


@router.delete("/items/{product_id}", response_model=CartTotals)
async def delete_item(product_id: str, ledger: CartLedger = Depends(get_cart_ledger)):
    """Remove a cart line whatever its quantity."""
    ledger.delete_item(product_id)
    return ledger.totals()


@router.delete("", response_model=CartTotals)
async def clear_cart(ledger: CartLedger = Depends(get_cart_ledger)):
    """Empty the cart."""
    ledger.clear()
    return ledger.totals()
