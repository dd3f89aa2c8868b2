"""
Traffic API endpoints for peak hours and staffing recommendations.
"""
from datetime import date as date_type
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from tilltrack.core.repository import Repository, get_repository
from tilltrack.models.analytics import TrafficAnalysis
from tilltrack.services.traffic_analyzer import analyze_traffic

router = APIRouter()


@router.get("", response_model=TrafficAnalysis)
async def get_traffic_analysis(
    days: Optional[int] = None,
    date: Optional[date_type] = None,
    repository: Repository = Depends(get_repository)
):
    """
    Analyze customer traffic over the trailing window.

    Returns the average customers per operating hour, each hour's traffic
    level and the staffing recommended for each run of hours.
    """
    if days is not None:
        if days <= 0:
            raise HTTPException(status_code=400, detail="days must be positive")
        days = min(days, 365)  # Max 1 year

    try:
        return analyze_traffic(repository.load_transactions(), window_days=days, reference_date=date)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to analyze traffic: {str(e)}")
