"""
Shared fixtures for TillTrack tests.
"""
from datetime import datetime

import pytest

from tilltrack.models.inventory import Product, ProductCategory
from tilltrack.models.sales import CartLine, CartTotals, PaymentMethod, Transaction

FIXED_TIME = datetime(2024, 3, 1, 9, 0)


def build_product(product_id, price, tax_rate=2.1, **kwargs):
    kwargs.setdefault("name", product_id.title())
    kwargs.setdefault("category", ProductCategory.OTHER)
    return Product(
        id=product_id,
        price=price,
        tax_rate=tax_rate,
        created_at=FIXED_TIME,
        updated_at=FIXED_TIME,
        **kwargs
    )


def build_transaction(timestamp, items, payment_method=PaymentMethod.CARD, receipt_number=None):
    """Transaction at ``timestamp`` from (product, quantity) pairs."""
    totals = CartTotals.from_lines([CartLine.build(product, quantity) for product, quantity in items])
    receipt_number = receipt_number or f"{timestamp:%Y%m%d-%H%M%S}-TEST"
    return Transaction(
        id=f"TXN-{receipt_number}",
        lines=totals.lines,
        subtotal=totals.subtotal,
        total_tax=totals.total_tax,
        total=totals.total,
        payment_method=payment_method,
        timestamp=timestamp,
        receipt_number=receipt_number
    )


@pytest.fixture
def sandwich():
    return build_product("sandwich", 5.50, category=ProductCategory.SANDWICHES, stock=30, min_stock=10)


@pytest.fixture
def beer():
    return build_product("beer", 3.50, tax_rate=8.5, category=ProductCategory.ALCOHOL)


@pytest.fixture
def meal():
    return build_product("meal", 10.00, category=ProductCategory.MEALS)


@pytest.fixture
def make_sale():
    """Factory building a transaction for a single product."""
    def _make(timestamp, product, quantity=1, **kwargs):
        return build_transaction(timestamp, [(product, quantity)], **kwargs)
    return _make


@pytest.fixture
def make_transaction():
    return build_transaction


@pytest.fixture
def make_product():
    return build_product
