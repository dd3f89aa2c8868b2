"""
Tests for the Cart Ledger service.
"""
import random
from datetime import datetime

import pytest
from pydantic import ValidationError

from tilltrack.models.sales import CartLine, Transaction
from tilltrack.services.cart_ledger import CartLedger
from tilltrack.services.tax import tax_portion


def assert_reconciled(ledger):
    """Totals must always agree with the lines they are derived from."""
    totals = ledger.totals()
    gross = sum(line.subtotal for line in ledger.lines)
    tax = sum(line.tax_amount for line in ledger.lines)

    assert totals.total == pytest.approx(gross)
    assert totals.subtotal == pytest.approx(gross - tax)
    assert totals.total_tax == pytest.approx(tax)
    assert totals.item_count == sum(line.quantity for line in ledger.lines)
    for line in ledger.lines:
        assert line.subtotal == pytest.approx(line.quantity * line.product.price)
        assert line.tax_amount == pytest.approx(tax_portion(line.subtotal, line.product.tax_rate))


class TestCartLedger:
    """Test cases for CartLedger."""

    @pytest.fixture
    def ledger(self):
        return CartLedger()

    def test_new_ledger_is_empty(self, ledger):
        totals = ledger.totals()

        assert ledger.is_empty
        assert totals.lines == []
        assert totals.total == 0
        assert totals.item_count == 0

    def test_add_item_creates_line(self, ledger, meal):
        line = ledger.add_item(meal)

        assert line.quantity == 1
        assert line.subtotal == 10.0
        assert line.tax_amount == pytest.approx(0.2057, abs=1e-4)
        assert not ledger.is_empty

    def test_add_existing_item_increments_quantity(self, ledger, meal):
        ledger.add_item(meal)
        line = ledger.add_item(meal)

        assert len(ledger.lines) == 1
        assert line.quantity == 2
        assert line.subtotal == 20.0
        assert line.tax_amount == pytest.approx(tax_portion(20.0, 2.1))

    def test_quantity_change_keeps_insertion_order(self, ledger, meal, beer, sandwich):
        ledger.add_item(meal)
        ledger.add_item(beer)
        ledger.add_item(sandwich)

        ledger.add_item(meal)
        ledger.set_quantity(beer.id, 5)

        assert [line.product.id for line in ledger.lines] == ["meal", "beer", "sandwich"]

    def test_remove_item_decrements(self, ledger, beer):
        ledger.add_item(beer)
        ledger.add_item(beer)

        line = ledger.remove_item(beer.id)

        assert line.quantity == 1
        assert line.subtotal == 3.5
        assert line.tax_amount == pytest.approx(tax_portion(3.5, 8.5))

    def test_remove_last_unit_deletes_line(self, ledger, beer):
        ledger.add_item(beer)

        assert ledger.remove_item(beer.id) is None
        assert ledger.is_empty

    def test_remove_unknown_product_is_noop(self, ledger, meal):
        ledger.add_item(meal)

        assert ledger.remove_item("missing") is None
        assert len(ledger.lines) == 1

    def test_removing_quantity_times_equals_delete(self, ledger, meal, beer):
        ledger.add_item(beer)
        for _ in range(4):
            ledger.add_item(meal)

        for _ in range(4):
            ledger.remove_item(meal.id)

        assert [line.product.id for line in ledger.lines] == ["beer"]

        other = CartLedger()
        other.add_item(beer)
        for _ in range(4):
            other.add_item(meal)
        other.delete_item(meal.id)

        assert other.lines == ledger.lines

    def test_delete_item_ignores_quantity(self, ledger, meal):
        ledger.add_item(meal)
        ledger.set_quantity(meal.id, 7)

        ledger.delete_item(meal.id)

        assert ledger.is_empty

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_non_positive_quantity_deletes_line(self, ledger, meal, quantity):
        ledger.add_item(meal)

        assert ledger.set_quantity(meal.id, quantity) is None
        assert ledger.get_line(meal.id) is None

    def test_set_quantity_recomputes_line(self, ledger, sandwich):
        ledger.add_item(sandwich)

        line = ledger.set_quantity(sandwich.id, 4)

        assert line.quantity == 4
        assert line.subtotal == 22.0
        assert line.tax_amount == pytest.approx(tax_portion(22.0, 2.1))

    def test_set_quantity_of_unknown_product_does_not_add(self, ledger, meal):
        assert ledger.set_quantity(meal.id, 3) is None
        assert ledger.is_empty

    def test_clear(self, ledger, meal, beer):
        ledger.add_item(meal)
        ledger.add_item(beer)

        ledger.clear()

        assert ledger.is_empty
        assert ledger.totals().total == 0

    def test_totals_split_mixed_rates(self, ledger, meal, beer):
        ledger.add_item(meal)
        ledger.add_item(beer)
        ledger.add_item(beer)

        totals = ledger.totals()
        expected_tax = tax_portion(10.0, 2.1) + tax_portion(7.0, 8.5)

        assert totals.total == pytest.approx(17.0)
        assert totals.total_tax == pytest.approx(expected_tax)
        assert totals.subtotal == pytest.approx(17.0 - expected_tax)
        assert totals.item_count == 3

    def test_totals_reconcile_after_every_mutation(self, ledger, meal, beer, sandwich):
        rng = random.Random(7)
        products = [meal, beer, sandwich]

        for _ in range(300):
            product = rng.choice(products)
            operation = rng.choice(["add", "add", "remove", "set", "delete"])
            if operation == "add":
                ledger.add_item(product)
            elif operation == "remove":
                ledger.remove_item(product.id)
            elif operation == "set":
                ledger.set_quantity(product.id, rng.randint(-1, 6))
            else:
                ledger.delete_item(product.id)
            assert_reconciled(ledger)

    def test_lines_property_returns_copy(self, ledger, meal):
        ledger.add_item(meal)

        ledger.lines.clear()

        assert len(ledger.lines) == 1


class TestCartLine:
    """Test cases for the derived amounts of a CartLine."""

    def test_direct_construction_with_matching_amounts(self, beer):
        line = CartLine(product=beer, quantity=2, subtotal=7.0, tax_amount=tax_portion(7.0, 8.5))

        assert line == CartLine.build(beer, 2)

    def test_inconsistent_subtotal_is_rejected(self, beer):
        with pytest.raises(ValidationError):
            CartLine(product=beer, quantity=2, subtotal=5.0, tax_amount=tax_portion(5.0, 8.5))

    def test_inconsistent_tax_is_rejected(self, beer):
        with pytest.raises(ValidationError):
            CartLine(product=beer, quantity=2, subtotal=7.0, tax_amount=0.0)

    def test_tampered_stored_transaction_is_rejected(self, make_sale, meal):
        payload = make_sale(datetime(2024, 3, 15, 12, 0), meal, 2).model_dump()
        payload["lines"][0]["subtotal"] = 15.0

        with pytest.raises(ValidationError):
            Transaction.model_validate(payload)
