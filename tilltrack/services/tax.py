"""
Tax calculator for tax-inclusive prices.

Shelf prices already contain their tax. The tax portion is backed out of
an amount with ``amount * rate / (100 + rate)`` and the pre-tax portion is
always derived as ``amount - tax``, never computed on its own, so the two
parts add back up to the amount exactly.
"""
from typing import NamedTuple


REDUCED_RATE = 2.1
STANDARD_RATE = 8.5

TAX_RATES = {
    REDUCED_RATE: {
        "label": "2.1%",
        "description": "Reduced rate (food service, groceries)",
    },
    STANDARD_RATE: {
        "label": "8.5%",
        "description": "Standard rate (alcoholic drinks)",
    },
}


class TaxSplit(NamedTuple):
    """Tax-inclusive amount split into its tax and pre-tax parts."""
    tax: float
    pre_tax: float
    total: float


def is_valid_tax_rate(rate: float) -> bool:
    """Check a rate against the fixed tax rate table."""
    return rate in TAX_RATES


def tax_portion(amount: float, rate: float) -> float:
    """Return the tax contained in a tax-inclusive amount."""
    return amount * rate / (100 + rate)


def split_amount(amount: float, rate: float) -> TaxSplit:
    """Split a tax-inclusive amount into tax and pre-tax parts."""
    tax = tax_portion(amount, rate)
    return TaxSplit(tax=tax, pre_tax=amount - tax, total=amount)
