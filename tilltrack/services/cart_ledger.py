"""
Cart Ledger service holding the lines of the sale in progress.
"""
import logging
from typing import List, Optional

from tilltrack.models.inventory import Product
from tilltrack.models.sales import CartLine, CartTotals

logger = logging.getLogger(__name__)


class CartLedger:
    """Running cart for a single cashier session.

    Lines keep insertion order. A quantity change replaces the line in place
    with one rebuilt from the product and the new quantity, so a line's
    subtotal and tax always agree with its quantity. Totals are never
    stored; :meth:`totals` recomputes them from the current lines.
    """

    def __init__(self):
        self._lines: List[CartLine] = []

    @property
    def lines(self) -> List[CartLine]:
        return list(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def totals(self) -> CartTotals:
        return CartTotals.from_lines(self._lines)

    def get_line(self, product_id: str) -> Optional[CartLine]:
        index = self._index_of(product_id)
        return self._lines[index] if index is not None else None

    def add_item(self, product: Product) -> CartLine:
        """Add one unit of a product."""
        index = self._index_of(product.id)
        if index is None:
            line = CartLine.build(product, 1)
            self._lines.append(line)
        else:
            line = self._lines[index].with_quantity(self._lines[index].quantity + 1)
            self._lines[index] = line
        return line

    def remove_item(self, product_id: str) -> Optional[CartLine]:
        """Remove one unit; the line goes away when its last unit does."""
        index = self._index_of(product_id)
        if index is None:
            return None
        current = self._lines[index]
        if current.quantity <= 1:
            del self._lines[index]
            return None
        line = current.with_quantity(current.quantity - 1)
        self._lines[index] = line
        return line

    def delete_item(self, product_id: str) -> None:
        """Remove a line whatever its quantity."""
        self._lines = [line for line in self._lines if line.product.id != product_id]

    def set_quantity(self, product_id: str, quantity: int) -> Optional[CartLine]:
        """Set a line's quantity. Zero or less deletes the line."""
        if quantity <= 0:
            self.delete_item(product_id)
            return None
        index = self._index_of(product_id)
        if index is None:
            return None
        line = self._lines[index].with_quantity(quantity)
        self._lines[index] = line
        return line

    def clear(self) -> None:
        self._lines = []

    def _index_of(self, product_id: str) -> Optional[int]:
        for index, line in enumerate(self._lines):
            if line.product.id == product_id:
                return index
        return None
