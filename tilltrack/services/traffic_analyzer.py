"""
Traffic Analyzer service deriving peak hours and staffing recommendations.

Customer counts are transaction counts (one customer per transaction).
"""
import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, List, Sequence

from tilltrack.core.clock import local_reference, to_local
from tilltrack.core.config import settings
from tilltrack.models.analytics import PeakHour, StaffRecommendation, TrafficAnalysis, TrafficLevel
from tilltrack.models.sales import Transaction
from tilltrack.services.aggregation import ReferenceDate

logger = logging.getLogger(__name__)

HIGH_TRAFFIC_RATIO = 0.7
MEDIUM_TRAFFIC_RATIO = 0.4

STAFF_BY_LEVEL = {
    TrafficLevel.HIGH: 3,
    TrafficLevel.MEDIUM: 2,
    TrafficLevel.LOW: 1,
}

REASON_BY_LEVEL = {
    TrafficLevel.HIGH: "Heavy traffic - fast service needed",
    TrafficLevel.MEDIUM: "Moderate traffic - balanced staffing",
    TrafficLevel.LOW: "Quiet period - reduced staff possible",
}

WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

NO_DATA = "N/A"


def classify_level(average: float, max_average: float) -> TrafficLevel:
    """Traffic level of an hour relative to the busiest hour."""
    if max_average <= 0:
        return TrafficLevel.LOW
    if average >= max_average * HIGH_TRAFFIC_RATIO:
        return TrafficLevel.HIGH
    if average >= max_average * MEDIUM_TRAFFIC_RATIO:
        return TrafficLevel.MEDIUM
    return TrafficLevel.LOW


def make_recommendation(start_hour: int, end_hour: int, level: TrafficLevel) -> StaffRecommendation:
    return StaffRecommendation(
        time_slot=f"{start_hour:02d}:00-{end_hour:02d}:00",
        start_hour=start_hour,
        end_hour=end_hour,
        recommended_staff=STAFF_BY_LEVEL[level],
        traffic_level=level,
        reason=REASON_BY_LEVEL[level]
    )


def build_staff_recommendations(peak_hours: Sequence[PeakHour]) -> List[StaffRecommendation]:
    """Collapse consecutive hours sharing a level into one recommendation each."""
    recommendations = []
    run_start = None
    run_level = None
    previous_hour = None

    for peak in peak_hours:
        if peak.level != run_level:
            if run_level is not None:
                recommendations.append(make_recommendation(run_start, previous_hour + 1, run_level))
            run_start = peak.hour
            run_level = peak.level
        previous_hour = peak.hour

    if run_level is not None:
        recommendations.append(make_recommendation(run_start, previous_hour + 1, run_level))
    return recommendations


def _busiest_and_quietest_days(transactions: Sequence[Transaction]):
    """Weekday names with the most and the fewest transactions.

    Ties keep the weekday encountered first in the history.
    """
    totals: Dict[str, int] = {}
    for transaction in transactions:
        name = WEEKDAY_NAMES[to_local(transaction.timestamp).weekday()]
        totals[name] = totals.get(name, 0) + 1

    busiest, quietest = NO_DATA, NO_DATA
    max_count, min_count = 0, float("inf")
    for name, count in totals.items():
        if count > max_count:
            max_count, busiest = count, name
        if count < min_count:
            min_count, quietest = count, name
    return busiest, quietest


def analyze_traffic(
    history: Sequence[Transaction],
    window_days: int = None,
    reference_date: ReferenceDate = None,
    hours: range = None
) -> TrafficAnalysis:
    """
    Analyze customer traffic over a trailing window.

    Each hour's average is taken over the days that had at least one
    transaction in that hour, so days without sales in an hour do not pull
    its average down.

    Args:
        history: Stored transactions
        window_days: Length of the trailing window (default: from settings)
        reference_date: End of the window (default: now)
        hours: Operating window (default: from settings)

    Returns:
        TrafficAnalysis with per-hour levels and staffing recommendations
    """
    window_days = window_days if window_days is not None else settings.traffic_window_days
    hours = hours if hours is not None else settings.operating_hours

    end = local_reference(reference_date)
    start = end - timedelta(days=window_days)
    recent = [t for t in list(history) if start <= to_local(t.timestamp) <= end]

    # (day, hour) -> transaction count and revenue
    day_hour_counts: Dict[date, Dict[int, int]] = defaultdict(lambda: defaultdict(int))
    day_hour_revenue: Dict[date, Dict[int, float]] = defaultdict(lambda: defaultdict(float))
    for transaction in recent:
        local_time = to_local(transaction.timestamp)
        day_hour_counts[local_time.date()][local_time.hour] += 1
        day_hour_revenue[local_time.date()][local_time.hour] += transaction.total

    first_hour = hours[0] if len(hours) else 0
    customers = [0] * len(hours)
    revenue = [0.0] * len(hours)
    days_observed = [0] * len(hours)
    for day, hour_counts in day_hour_counts.items():
        for hour, count in hour_counts.items():
            index = hour - first_hour
            if 0 <= index < len(hours):
                customers[index] += count
                revenue[index] += day_hour_revenue[day][hour]
                days_observed[index] += 1

    averages = [
        customers[i] / days_observed[i] if days_observed[i] > 0 else 0.0
        for i in range(len(hours))
    ]
    max_average = max(averages, default=0.0)
    if max_average == 0:
        logger.debug("No traffic in window, all hours classified low")

    peak_hours = [
        PeakHour(
            hour=hour,
            average_customers=averages[i],
            average_revenue=revenue[i] / days_observed[i] if days_observed[i] > 0 else 0.0,
            level=classify_level(averages[i], max_average)
        )
        for i, hour in enumerate(hours)
    ]

    busiest_day, quietest_day = _busiest_and_quietest_days(recent)

    return TrafficAnalysis(
        peak_hours=peak_hours,
        recommendations=build_staff_recommendations(peak_hours),
        average_customers_per_hour=sum(averages) / len(averages) if averages else 0.0,
        busiest_day=busiest_day,
        quietest_day=quietest_day
    )
