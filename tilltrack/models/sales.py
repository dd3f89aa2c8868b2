"""
Sales models: cart lines, cart totals and recorded transactions.
"""
import math
from datetime import datetime
from typing import List, Optional
import enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tilltrack.models.inventory import Product
from tilltrack.services.tax import tax_portion


class PaymentMethod(str, enum.Enum):
    """Payment method enumeration."""
    CASH = "cash"
    CARD = "card"
    CHEQUE = "cheque"
    VOUCHER = "voucher"


class CartLine(BaseModel):
    """One product in the cart.

    ``subtotal`` and ``tax_amount`` are derived from the product snapshot and
    the quantity. Use :meth:`build` to compute both; values that disagree
    with the product and quantity are rejected.
    """
    model_config = ConfigDict(frozen=True)

    product: Product
    quantity: int = Field(..., gt=0)
    subtotal: float
    tax_amount: float

    @model_validator(mode="after")
    def validate_derived_amounts(self):
        expected_subtotal = self.quantity * self.product.price
        if not math.isclose(self.subtotal, expected_subtotal, rel_tol=1e-9, abs_tol=1e-9):
            raise ValueError(f"Line subtotal {self.subtotal} does not match quantity x price {expected_subtotal}")
        expected_tax = tax_portion(expected_subtotal, self.product.tax_rate)
        if not math.isclose(self.tax_amount, expected_tax, rel_tol=1e-9, abs_tol=1e-9):
            raise ValueError(f"Line tax {self.tax_amount} does not match its subtotal ({expected_tax})")
        return self

    @classmethod
    def build(cls, product: Product, quantity: int) -> "CartLine":
        subtotal = quantity * product.price
        return cls(
            product=product,
            quantity=quantity,
            subtotal=subtotal,
            tax_amount=tax_portion(subtotal, product.tax_rate),
        )

    def with_quantity(self, quantity: int) -> "CartLine":
        return CartLine.build(self.product, quantity)


class CartTotals(BaseModel):
    """Derived view over the current cart lines."""
    lines: List[CartLine]
    subtotal: float  # excluding tax
    total_tax: float
    total: float  # including tax
    item_count: int

    @classmethod
    def from_lines(cls, lines: List[CartLine]) -> "CartTotals":
        gross = sum(line.subtotal for line in lines)
        total_tax = sum(line.tax_amount for line in lines)
        return cls(
            lines=list(lines),
            subtotal=gross - total_tax,
            total_tax=total_tax,
            total=gross,
            item_count=sum(line.quantity for line in lines),
        )


class Transaction(BaseModel):
    """Immutable record of a completed payment."""
    model_config = ConfigDict(frozen=True)

    id: str
    lines: List[CartLine]
    subtotal: float
    total_tax: float
    total: float
    payment_method: PaymentMethod
    cash_given: Optional[float] = None
    change: Optional[float] = None
    timestamp: datetime
    employee_id: Optional[str] = None
    employee_name: Optional[str] = None
    receipt_number: str

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    def __repr__(self):
        return f"<Transaction(receipt_number='{self.receipt_number}', total={self.total})>"
