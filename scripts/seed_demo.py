#!/usr/bin/env python3
"""
Demo data population script for TillTrack.
Installs the starter catalog if needed and replaces the stored transaction
history with generated sales, for demonstrations and analytics testing.
"""
import argparse
import logging

from tilltrack.core.config import settings
from tilltrack.core.logging import configure_logging
from tilltrack.core.repository import build_repository
from tilltrack.demo import seed_demo_history
from tilltrack.services.aggregation import compute_dashboard
from tilltrack.services.traffic_analyzer import analyze_traffic

logger = logging.getLogger(__name__)


def parse_args():
    parser = argparse.ArgumentParser(description="Seed TillTrack storage with demo sales")
    parser.add_argument("--days", type=int, default=settings.demo_days, help="Trailing days to generate")
    parser.add_argument("--seed", type=int, default=settings.demo_seed, help="Random seed")
    parser.add_argument("--backend", default=settings.storage_backend,
                        choices=["memory", "sql", "redis"], help="Storage backend to seed")
    return parser.parse_args()


def main():
    args = parse_args()
    configure_logging(log_format="console")

    repository = build_repository(args.backend)
    transactions = seed_demo_history(repository, days=args.days, seed=args.seed)
    print(f"✅ Created {len(transactions)} demo transactions over the last {args.days} days")

    history = repository.load_transactions()
    dashboard = compute_dashboard(history, repository.load_products())
    traffic = analyze_traffic(history)

    print(f"Today: {dashboard.today_transactions} sales, {dashboard.today_revenue:.2f} revenue "
          f"({dashboard.comparison_yesterday:+.1f}% vs yesterday)")
    print(f"Busiest day: {traffic.busiest_day}, quietest day: {traffic.quietest_day}")
    for recommendation in traffic.recommendations:
        print(f"  {recommendation.time_slot}: {recommendation.recommended_staff} staff "
              f"({recommendation.traffic_level.value}) - {recommendation.reason}")


if __name__ == "__main__":
    main()
