"""
Sales API endpoints for checking out the cart and reading recorded sales.
"""
from datetime import date as date_type
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from tilltrack.api.deps import get_catalog, get_transaction_factory
from tilltrack.core import clock
from tilltrack.core.exceptions import EmptyCartError
from tilltrack.core.repository import Repository, get_repository
from tilltrack.models.analytics import DailySales
from tilltrack.models.sales import PaymentMethod, Transaction
from tilltrack.services.aggregation import compute_daily_sales
from tilltrack.services.catalog import CatalogService
from tilltrack.services.transaction_factory import TransactionFactory

router = APIRouter()


class CheckoutRequest(BaseModel):
    """Request model for paying the current cart."""
    payment_method: PaymentMethod = Field(..., description="Payment method (cash, card, cheque, voucher)")
    cash_given: Optional[float] = Field(None, ge=0, description="Cash handed over, cash payments only")
    employee_id: Optional[str] = Field(None, description="Cashier ID")
    employee_name: Optional[str] = Field(None, description="Cashier name")


@router.post("/checkout", response_model=Transaction)
async def checkout(
    request: CheckoutRequest,
    factory: TransactionFactory = Depends(get_transaction_factory),
    catalog: CatalogService = Depends(get_catalog)
):
    """
    Pay the current cart.

    Records the transaction, clears the cart and decrements stock for the
    products sold.
    """
    try:
        transaction = factory.process_payment(
            request.payment_method,
            cash_given=request.cash_given,
            employee_id=request.employee_id,
            employee_name=request.employee_name
        )
    except EmptyCartError as e:
        raise HTTPException(status_code=400, detail=str(e))

    catalog.record_sale(transaction)
    return transaction


@router.get("/recent")
async def get_recent_sales(
    limit: int = 50,
    repository: Repository = Depends(get_repository)
):
    """Most recent transactions, newest first."""
    if limit > 100:
        limit = 100  # Cap at 100 for performance

    recent = repository.load_transactions()[-limit:][::-1] if limit > 0 else []
    return {
        "sales": recent,
        "count": len(recent)
    }


@router.get("/receipt/{receipt_number}", response_model=Transaction)
async def get_transaction(
    receipt_number: str,
    repository: Repository = Depends(get_repository)
):
    """Transaction details by receipt number."""
    for transaction in repository.load_transactions():
        if transaction.receipt_number == receipt_number:
            return transaction
    raise HTTPException(status_code=404, detail="Transaction not found")


@router.get("/daily", response_model=DailySales)
async def get_daily_sales(
    date: Optional[date_type] = None,
    repository: Repository = Depends(get_repository)
):
    """Totals and hourly breakdown for one day (default: today)."""
    day = date or clock.local_reference().date()
    try:
        return compute_daily_sales(repository.load_transactions(), day)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to get daily sales: {str(e)}")
