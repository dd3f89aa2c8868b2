"""
Aggregation Engine deriving dashboard figures from the transaction history.

All functions are pure: they take a snapshot of the history (and catalog)
and never touch storage. Days and hours are store-local, see
:mod:`tilltrack.core.clock`.
"""
import logging
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from tilltrack.core.clock import local_reference, to_local
from tilltrack.core.config import settings
from tilltrack.models.analytics import DailySales, DashboardStats, HourlySales, ProductSales
from tilltrack.models.inventory import Product, StockAlert, StockStatus
from tilltrack.models.sales import Transaction

logger = logging.getLogger(__name__)

SEVERITY_ORDER = {StockStatus.OUT: 0, StockStatus.CRITICAL: 1, StockStatus.LOW: 2}

ReferenceDate = Union[date, datetime, None]


def local_day(transaction: Transaction) -> date:
    return to_local(transaction.timestamp).date()


def transactions_for_day(history: Iterable[Transaction], day: date) -> List[Transaction]:
    """Transactions whose local calendar date is ``day``."""
    return [t for t in history if local_day(t) == day]


def transactions_since(history: Iterable[Transaction], days: int,
                       reference_date: ReferenceDate = None) -> List[Transaction]:
    """Transactions within ``days`` before the reference point, inclusive."""
    end = local_reference(reference_date)
    start = end - timedelta(days=days)
    return [t for t in history if start <= to_local(t.timestamp) <= end]


def partition_by_day(history: Iterable[Transaction],
                     reference_date: ReferenceDate = None) -> Tuple[List[Transaction], List[Transaction]]:
    """Split the history into (today, yesterday) by local calendar date."""
    today = local_reference(reference_date).date()
    yesterday = today - timedelta(days=1)
    today_transactions, yesterday_transactions = [], []
    for transaction in history:
        day = local_day(transaction)
        if day == today:
            today_transactions.append(transaction)
        elif day == yesterday:
            yesterday_transactions.append(transaction)
    return today_transactions, yesterday_transactions


def revenue_comparison(today_revenue: float, yesterday_revenue: float) -> float:
    """Percent change versus yesterday, 0 when yesterday had no revenue."""
    if yesterday_revenue == 0:
        logger.debug("No revenue yesterday, comparison set to 0")
        return 0.0
    return (today_revenue - yesterday_revenue) / yesterday_revenue * 100


def average_ticket(revenue: float, transaction_count: int) -> float:
    return revenue / transaction_count if transaction_count > 0 else 0.0


def compute_hourly_sales(transactions: Iterable[Transaction], hours: range = None) -> List[HourlySales]:
    """Fold transactions into one bucket per operating hour.

    Transactions outside the operating window are ignored.
    """
    hours = hours if hours is not None else settings.operating_hours
    first_hour = hours[0] if len(hours) else 0
    revenue = [0.0] * len(hours)
    counts = [0] * len(hours)

    for transaction in transactions:
        index = to_local(transaction.timestamp).hour - first_hour
        if 0 <= index < len(hours):
            revenue[index] += transaction.total
            counts[index] += 1

    return [
        HourlySales(hour=hour, revenue=revenue[i], transaction_count=counts[i], customer_count=counts[i])
        for i, hour in enumerate(hours)
    ]


def compute_top_products(transactions: Iterable[Transaction], limit: int = None) -> List[ProductSales]:
    """Best sellers by revenue. Ties keep the order products were first sold in."""
    limit = limit if limit is not None else settings.top_products_limit
    accumulated: Dict[str, Dict] = {}

    for transaction in transactions:
        for line in transaction.lines:
            entry = accumulated.get(line.product.id)
            if entry is None:
                accumulated[line.product.id] = {
                    "product": line.product,
                    "quantity_sold": line.quantity,
                    "revenue": line.subtotal
                }
            else:
                entry["quantity_sold"] += line.quantity
                entry["revenue"] += line.subtotal

    ranked = sorted(accumulated.values(), key=lambda entry: entry["revenue"], reverse=True)
    return [ProductSales(**entry) for entry in ranked[:limit]]


def stock_status(stock: int, min_stock: int) -> Optional[StockStatus]:
    """Classify a stock level against its minimum, None when no alert."""
    if stock == 0:
        return StockStatus.OUT
    if stock <= min_stock / 2:
        return StockStatus.CRITICAL
    if stock <= min_stock:
        return StockStatus.LOW
    return None


def compute_stock_alerts(products: Iterable[Product]) -> List[StockAlert]:
    """Alerts for products tracking stock, most severe first."""
    alerts = []
    for product in products:
        if product.stock is None or product.min_stock is None:
            continue
        status = stock_status(product.stock, product.min_stock)
        if status is not None:
            alerts.append(StockAlert(
                product=product,
                current_stock=product.stock,
                min_stock=product.min_stock,
                status=status
            ))
    return sorted(alerts, key=lambda alert: SEVERITY_ORDER[alert.status])


def compute_dashboard(
    history: Sequence[Transaction],
    products: Sequence[Product],
    reference_date: ReferenceDate = None,
    hours: range = None,
    top_limit: int = None
) -> DashboardStats:
    """
    Compute the daily dashboard.

    Args:
        history: Stored transactions, in any order
        products: Current catalog, for stock alerts
        reference_date: Day treated as "today" (default: now)
        hours: Operating window (default: from settings)
        top_limit: Number of best sellers to keep (default: from settings)

    Returns:
        DashboardStats for the reference day
    """
    history = list(history)
    products = list(products)

    today, yesterday = partition_by_day(history, reference_date)
    today_revenue = sum(t.total for t in today)
    yesterday_revenue = sum(t.total for t in yesterday)

    return DashboardStats(
        today_revenue=today_revenue,
        today_tax=sum(t.total_tax for t in today),
        today_transactions=len(today),
        average_ticket=average_ticket(today_revenue, len(today)),
        comparison_yesterday=revenue_comparison(today_revenue, yesterday_revenue),
        top_products=compute_top_products(today, top_limit),
        stock_alerts=compute_stock_alerts(products),
        hourly_data=compute_hourly_sales(today, hours)
    )


def compute_daily_sales(history: Sequence[Transaction], day: date, hours: range = None) -> DailySales:
    """Totals and hourly breakdown for one calendar day."""
    transactions = transactions_for_day(list(history), day)
    revenue = sum(t.total for t in transactions)
    return DailySales(
        day=day,
        total_revenue=revenue,
        total_tax=sum(t.total_tax for t in transactions),
        transaction_count=len(transactions),
        average_ticket=average_ticket(revenue, len(transactions)),
        hourly_breakdown=compute_hourly_sales(transactions, hours)
    )
