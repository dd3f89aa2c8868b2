"""
Demo data entry point. Kept apart from the production data paths.
"""

from .generator import generate_demo_transactions, sample_weighted_hour, seed_demo_history

__all__ = ["generate_demo_transactions", "sample_weighted_hour", "seed_demo_history"]
