"""
Transaction Factory service turning a paid cart into a stored transaction.
"""
import logging
import random
import string
import uuid
from datetime import datetime
from typing import Optional

from tilltrack.core import clock
from tilltrack.core.exceptions import EmptyCartError
from tilltrack.core.repository import Repository
from tilltrack.models.sales import PaymentMethod, Transaction
from tilltrack.services.cart_ledger import CartLedger

logger = logging.getLogger(__name__)

RECEIPT_SUFFIX_ALPHABET = string.digits + string.ascii_uppercase


def generate_receipt_number(timestamp: datetime, rng: Optional[random.Random] = None) -> str:
    """Receipt number ``YYYYMMDD-HHMMSS-XXXX``, sortable by time."""
    rng = rng or random
    suffix = "".join(rng.choice(RECEIPT_SUFFIX_ALPHABET) for _ in range(4))
    return f"{timestamp:%Y%m%d}-{timestamp:%H%M%S}-{suffix}"


class TransactionFactory:
    """Service for recording payments."""

    def __init__(self, ledger: CartLedger, repository: Repository):
        self.ledger = ledger
        self.repository = repository

    def process_payment(
        self,
        payment_method: PaymentMethod,
        cash_given: Optional[float] = None,
        employee_id: Optional[str] = None,
        employee_name: Optional[str] = None
    ) -> Transaction:
        """
        Record the current cart as a transaction and clear the cart.

        Args:
            payment_method: How the customer paid
            cash_given: Cash handed over, only kept for cash payments
            employee_id: Optional cashier ID
            employee_name: Optional cashier name

        Returns:
            The stored transaction

        Raises:
            EmptyCartError: If the cart has no lines. Nothing is stored and
                the cart is left as is.
        """
        if self.ledger.is_empty:
            raise EmptyCartError()

        payment_method = PaymentMethod(payment_method)
        totals = self.ledger.totals()
        timestamp = clock.now()

        change = None
        if payment_method != PaymentMethod.CASH:
            cash_given = None
        elif cash_given is not None:
            change = cash_given - totals.total

        transaction = Transaction(
            id=f"TXN-{timestamp:%Y%m%d}-{uuid.uuid4().hex[:8].upper()}",
            lines=totals.lines,
            subtotal=totals.subtotal,
            total_tax=totals.total_tax,
            total=totals.total,
            payment_method=payment_method,
            cash_given=cash_given,
            change=change,
            timestamp=timestamp,
            employee_id=employee_id,
            employee_name=employee_name,
            receipt_number=generate_receipt_number(timestamp),
        )

        # Storage errors propagate and leave the cart intact
        self.repository.append_transaction(transaction)
        self.ledger.clear()

        logger.info(f"Payment recorded: {transaction.receipt_number} ({payment_method.value}, {transaction.total:.2f})")
        return transaction
