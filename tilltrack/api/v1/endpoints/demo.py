"""
Demo API endpoints. Only served when ``demo_enabled`` is set.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from tilltrack.core.config import Settings, get_settings
from tilltrack.core.repository import Repository, get_repository
from tilltrack.demo import seed_demo_history

router = APIRouter()


@router.post("/seed")
async def seed_demo(
    days: Optional[int] = None,
    settings: Settings = Depends(get_settings),
    repository: Repository = Depends(get_repository)
):
    """
    Replace the stored history with generated demo transactions.

    Intended for demonstrations only; the existing history is discarded.
    """
    if not settings.demo_enabled:
        raise HTTPException(status_code=404, detail="Demo mode is disabled")

    days = days or settings.demo_days
    if days <= 0 or days > 90:
        raise HTTPException(status_code=400, detail="days must be between 1 and 90")

    transactions = seed_demo_history(repository, days=days, seed=settings.demo_seed)
    return {
        "status": "seeded",
        "days": days,
        "transactions_count": len(transactions)
    }
