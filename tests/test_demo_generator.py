"""
Tests for the demo history generator.
"""
from collections import Counter
from datetime import date, datetime
from unittest.mock import Mock

import numpy as np
import pytest

from tilltrack.core.repository import InMemoryRepository
from tilltrack.demo import generate_demo_transactions, sample_weighted_hour, seed_demo_history
from tilltrack.demo.catalog import default_products
from tilltrack.models.sales import PaymentMethod

TODAY = date(2024, 3, 15)


def stub_rng(value):
    rng = Mock()
    rng.random.return_value = value
    return rng


class TestSampleWeightedHour:
    """Test cases for weighted hour sampling."""

    @pytest.mark.parametrize("draw,expected", [
        (0.0, 7),
        (0.01, 7),  # exactly on the first cumulative boundary
        (0.011, 8),
        (0.999999, 21),
    ])
    def test_inverse_sampling(self, draw, expected):
        assert sample_weighted_hour(stub_rng(draw)) == expected

    def test_lunch_is_the_most_likely_hour(self):
        rng = np.random.default_rng(42)

        hours = Counter(sample_weighted_hour(rng) for _ in range(20000))

        assert hours.most_common(1)[0][0] == 12
        assert set(hours) <= set(range(7, 22))


class TestGenerateDemoTransactions:
    """Test cases for generate_demo_transactions."""

    @pytest.fixture
    def transactions(self):
        return generate_demo_transactions(
            default_products(), days=7, reference_date=TODAY, rng=np.random.default_rng(3)
        )

    def test_volume_per_day(self, transactions):
        per_day = Counter(t.timestamp.date() for t in transactions)

        assert len(per_day) == 7
        for day, count in per_day.items():
            if day.weekday() >= 5:
                assert 80 <= count < 110
            else:
                assert 60 <= count < 90

    def test_chronological_and_within_trading_hours(self, transactions):
        timestamps = [t.timestamp for t in transactions]

        assert timestamps == sorted(timestamps)
        assert all(7 <= ts.hour <= 21 for ts in timestamps)
        assert max(timestamps).date() == TODAY

    def test_transactions_are_well_formed(self, transactions):
        for transaction in transactions:
            assert 1 <= len(transaction.lines) <= 5
            assert all(1 <= line.quantity <= 4 for line in transaction.lines)
            assert transaction.total == pytest.approx(sum(line.subtotal for line in transaction.lines))
            assert transaction.id.startswith("demo-")
            assert transaction.receipt_number.startswith("DEMO-")

    def test_cash_payments_round_up(self, transactions):
        cash = [t for t in transactions if t.payment_method == PaymentMethod.CASH]

        assert cash
        for transaction in cash:
            assert transaction.cash_given % 5 == 0
            assert transaction.cash_given >= transaction.total
            assert transaction.change == pytest.approx(transaction.cash_given - transaction.total)

    def test_card_share(self, transactions):
        card = sum(1 for t in transactions if t.payment_method == PaymentMethod.CARD)

        assert 0.6 < card / len(transactions) < 0.8

    def test_only_active_products_are_sold(self, make_product):
        active = make_product("active", 2.0)
        inactive = make_product("inactive", 2.0, is_active=False)

        transactions = generate_demo_transactions(
            [active, inactive], days=1, reference_date=TODAY, rng=np.random.default_rng(0)
        )

        assert {line.product.id for t in transactions for line in t.lines} == {"active"}

    def test_no_active_products(self, make_product):
        products = [make_product("inactive", 2.0, is_active=False)]

        assert generate_demo_transactions(products, days=3, reference_date=TODAY) == []

    def test_same_seed_same_history(self):
        products = default_products()

        first = generate_demo_transactions(products, 2, TODAY, np.random.default_rng(9))
        second = generate_demo_transactions(products, 2, TODAY, np.random.default_rng(9))

        assert first == second


def test_starter_catalog_is_stable():
    assert default_products() == default_products()


class TestSeedDemoHistory:
    """Test cases for seed_demo_history."""

    def test_installs_catalog_into_empty_store(self):
        repository = InMemoryRepository()

        transactions = seed_demo_history(repository, days=2, reference_date=TODAY, seed=1)

        assert len(repository.load_products()) == len(default_products())
        assert repository.load_transactions() == transactions

    def test_same_seed_into_fresh_stores_is_reproducible(self):
        first, second = InMemoryRepository(), InMemoryRepository()

        seed_demo_history(first, days=2, reference_date=TODAY, seed=7)
        seed_demo_history(second, days=2, reference_date=TODAY, seed=7)

        assert first.load_products() == second.load_products()
        assert first.load_transactions() == second.load_transactions()

    def test_keeps_existing_catalog_and_replaces_history(self, make_product, make_sale, meal):
        product = make_product("house-special", 8.0)
        old_sale = make_sale(datetime(2024, 3, 10, 12, 0), meal)
        repository = InMemoryRepository(products=[product], transactions=[old_sale])

        seed_demo_history(repository, days=1, reference_date=TODAY, seed=1)

        assert repository.load_products() == [product]
        history = repository.load_transactions()
        assert old_sale not in history
        assert {line.product.id for t in history for line in t.lines} == {"house-special"}
