"""
Celery background tasks for TillTrack application.
"""
import logging
from datetime import date, timedelta
from typing import Optional

from tilltrack.core import clock
from tilltrack.core.config import settings
from tilltrack.core.repository import get_repository
from tilltrack.demo import seed_demo_history
from tilltrack.services.aggregation import compute_dashboard, compute_stock_alerts
from tilltrack.services.traffic_analyzer import analyze_traffic
from tilltrack.worker.celery import celery

logger = logging.getLogger(__name__)


@celery.task(bind=True)
def generate_daily_report(self, report_date: Optional[str] = None):
    """Build the dashboard and traffic summary for a day (default: yesterday)."""
    try:
        logger.info("Starting daily report generation task")

        if report_date:
            day = date.fromisoformat(report_date)
        else:
            day = clock.local_reference().date() - timedelta(days=1)

        repository = get_repository()
        history = repository.load_transactions()
        dashboard = compute_dashboard(history, repository.load_products(), reference_date=day)
        traffic = analyze_traffic(history, reference_date=day)

        logger.info(f"Daily report for {day.isoformat()}: {dashboard.today_transactions} transactions, "
                    f"{dashboard.today_revenue:.2f} revenue")
        return {
            "status": "success",
            "report_date": day.isoformat(),
            "dashboard": dashboard.model_dump(mode="json"),
            "traffic": traffic.model_dump(mode="json"),
            "generated_at": clock.now().isoformat()
        }

    except Exception as e:
        logger.error(f"Failed to generate daily report: {e}")
        raise self.retry(exc=e, countdown=1800, max_retries=2)  # Retry in 30 minutes


@celery.task(bind=True)
def check_stock_levels(self):
    """Summarize stock alerts by status."""
    try:
        logger.info("Starting stock level check task")

        alerts = compute_stock_alerts(get_repository().load_products())
        by_status = {}
        for alert in alerts:
            by_status[alert.status.value] = by_status.get(alert.status.value, 0) + 1

        logger.info(f"Found {len(alerts)} stock alerts")
        return {
            "status": "success",
            "alerts_count": len(alerts),
            "by_status": by_status,
            "products": [alert.product.id for alert in alerts],
            "timestamp": clock.now().isoformat()
        }

    except Exception as e:
        logger.error(f"Failed to check stock levels: {e}")
        raise self.retry(exc=e, countdown=900, max_retries=2)  # Retry in 15 minutes


@celery.task(bind=True)
def seed_demo_history_task(self, days: Optional[int] = None):
    """Replace the stored history with demo data, when demo mode is enabled."""
    if not settings.demo_enabled:
        logger.warning("Demo seeding requested while demo mode is disabled")
        return {"status": "skipped", "reason": "demo mode disabled"}

    days = days or settings.demo_days
    transactions = seed_demo_history(get_repository(), days=days, seed=settings.demo_seed)
    return {
        "status": "success",
        "days": days,
        "transactions_count": len(transactions),
        "timestamp": clock.now().isoformat()
    }
