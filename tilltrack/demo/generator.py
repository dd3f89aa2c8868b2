"""
Synthetic transaction history for demos and for exercising the analytics.

Nothing here is a source of truth: generated transactions are tagged with
``demo-`` ids and ``DEMO-`` receipt numbers and are only written to storage
through :func:`seed_demo_history`.
"""
import logging
import math
from datetime import datetime, time, timedelta
from typing import List, Optional, Sequence

import numpy as np

from tilltrack.core.clock import local_reference
from tilltrack.core.repository import Repository
from tilltrack.demo.catalog import default_products
from tilltrack.models.inventory import Product
from tilltrack.models.sales import CartLine, CartTotals, PaymentMethod, Transaction
from tilltrack.services.aggregation import ReferenceDate

logger = logging.getLogger(__name__)

# Relative likelihood of a sale in each hour: lunch and evening peaks
HOUR_WEIGHTS = np.array([
    [7, 5],
    [8, 10],
    [9, 15],
    [10, 20],
    [11, 40],
    [12, 80],
    [13, 70],
    [14, 30],
    [15, 15],
    [16, 20],
    [17, 25],
    [18, 50],
    [19, 60],
    [20, 40],
    [21, 20],
])

WEEKDAY_BASELINE = 60
WEEKEND_BASELINE = 80
BASELINE_SPREAD = 30
MAX_LINES = 5
MAX_LINE_QUANTITY = 2
CARD_SHARE = 0.7
CASH_ROUNDING = 5


def sample_weighted_hour(rng: np.random.Generator) -> int:
    """Draw an hour by inverse sampling of the cumulative weights."""
    cumulative = np.cumsum(HOUR_WEIGHTS[:, 1])
    target = rng.random() * cumulative[-1]
    index = int(np.searchsorted(cumulative, target, side="left"))
    return int(HOUR_WEIGHTS[index, 0])


def _demo_transaction(products: Sequence[Product], timestamp: datetime,
                      day_offset: int, sequence: int, rng: np.random.Generator) -> Transaction:
    lines = []
    for _ in range(int(rng.integers(1, MAX_LINES + 1))):
        product = products[int(rng.integers(len(products)))]
        lines.append(CartLine.build(product, int(rng.integers(1, MAX_LINE_QUANTITY + 1))))
    totals = CartTotals.from_lines(lines)

    if rng.random() < CARD_SHARE:
        payment_method, cash_given, change = PaymentMethod.CARD, None, None
    else:
        payment_method = PaymentMethod.CASH
        cash_given = float(math.ceil(totals.total / CASH_ROUNDING) * CASH_ROUNDING)
        change = cash_given - totals.total

    return Transaction(
        id=f"demo-{day_offset}-{sequence}",
        lines=totals.lines,
        subtotal=totals.subtotal,
        total_tax=totals.total_tax,
        total=totals.total,
        payment_method=payment_method,
        cash_given=cash_given,
        change=change,
        timestamp=timestamp,
        receipt_number=f"DEMO-{timestamp:%Y%m%d}-{sequence:04d}"
    )


def generate_demo_transactions(
    products: Sequence[Product],
    days: int = 14,
    reference_date: ReferenceDate = None,
    rng: Optional[np.random.Generator] = None
) -> List[Transaction]:
    """
    Generate a plausible trailing history of sales.

    Args:
        products: Catalog to draw items from; inactive products are skipped
        days: Number of trailing days, the reference day included
        reference_date: Last generated day (default: today)
        rng: numpy random generator (default: fresh unseeded generator)

    Returns:
        Transactions in chronological order, empty if no product is active
    """
    rng = rng or np.random.default_rng()
    active = [p for p in products if p.is_active]
    if not active:
        logger.warning("No active products, no demo transactions generated")
        return []

    last_day = local_reference(reference_date).date()
    transactions = []
    for day_offset in range(days):
        day = last_day - timedelta(days=day_offset)
        baseline = WEEKEND_BASELINE if day.weekday() >= 5 else WEEKDAY_BASELINE
        count = baseline + int(rng.integers(0, BASELINE_SPREAD))

        for sequence in range(count):
            timestamp = datetime.combine(
                day, time(sample_weighted_hour(rng), int(rng.integers(0, 60)))
            )
            transactions.append(_demo_transaction(active, timestamp, day_offset, sequence, rng))

    transactions.sort(key=lambda t: t.timestamp)
    return transactions


def seed_demo_history(
    repository: Repository,
    days: int = 14,
    reference_date: ReferenceDate = None,
    seed: Optional[int] = None
) -> List[Transaction]:
    """Replace the stored history with generated demo transactions.

    Installs the starter catalog first when the store has no products.
    """
    products = repository.load_products()
    if not products:
        products = default_products()
        repository.save_products(products)
        logger.info(f"Installed {len(products)} starter products")

    transactions = generate_demo_transactions(
        products, days=days, reference_date=reference_date, rng=np.random.default_rng(seed)
    )
    repository.save_transactions(transactions)
    logger.info(f"Seeded {len(transactions)} demo transactions over {days} days")
    return transactions
