"""
Dashboard API endpoints for the daily overview.
"""
from datetime import date as date_type
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from tilltrack.core.repository import Repository, get_repository
from tilltrack.models.analytics import DashboardStats
from tilltrack.services.aggregation import compute_dashboard, compute_stock_alerts

router = APIRouter()


@router.get("/overview", response_model=DashboardStats)
async def get_dashboard_overview(
    date: Optional[date_type] = None,
    repository: Repository = Depends(get_repository)
):
    """
    Get the dashboard for a day (default: today).

    Returns revenue and comparison with the previous day, average ticket,
    hourly sales, best sellers and stock alerts.
    """
    try:
        return compute_dashboard(
            repository.load_transactions(),
            repository.load_products(),
            reference_date=date
        )
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to get dashboard overview: {str(e)}")


@router.get("/stock-alerts")
async def get_stock_alerts(repository: Repository = Depends(get_repository)):
    """Products at or under their minimum stock, most severe first."""
    alerts = compute_stock_alerts(repository.load_products())
    return {
        "alerts": alerts,
        "count": len(alerts)
    }
