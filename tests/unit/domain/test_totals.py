"""Unit tests for invoice totals calculation"""

from decimal import Decimal
from types import SimpleNamespace

from invoicing.domain.totals import calculate_totals, line_tax, line_total, round_money


def line(quantity, unit_price, tax_rate):
    return SimpleNamespace(
        quantity=Decimal(quantity), unit_price=Decimal(unit_price), tax_rate=Decimal(tax_rate)
    )


class TestCalculateTotals:
    """Test aggregation of line items into invoice totals"""

    def test_single_line_with_standard_swiss_rate(self):
        """
        Given: 10 hours at 150.00 with 8.1% tax
        When: Totals are calculated
        Then: Subtotal 1500.00, tax 121.50, total 1621.50
        """
        # Arrange
        items = [line("10", "150.00", "8.1")]

        # Act
        totals = calculate_totals(items)

        # Assert
        assert totals.subtotal == Decimal("1500.00")
        assert totals.tax_total == Decimal("121.50")
        assert totals.amount_total == Decimal("1621.50")

    def test_mixed_tax_rates(self):
        """Exempt and taxed lines are summed independently"""
        # Arrange
        items = [
            line("1", "200.00", "0"),
            line("2", "50.00", "8.1"),
        ]

        # Act
        totals = calculate_totals(items)

        # Assert
        assert totals.subtotal == Decimal("300.00")
        assert totals.tax_total == Decimal("8.10")
        assert totals.amount_total == Decimal("308.10")

    def test_empty_invoice_is_zero(self):
        # Act
        totals = calculate_totals([])

        # Assert
        assert totals.subtotal == Decimal("0.00")
        assert totals.tax_total == Decimal("0.00")
        assert totals.amount_total == Decimal("0.00")

    def test_rounds_aggregate_not_each_line(self):
        """
        Given: Three lines whose taxes are each 0.045 at 5%
        When: Totals are calculated
        Then: The tax sum is rounded once to 0.14, per-line rounding would give 0.15
        """
        # Arrange
        items = [line("1", "0.90", "5") for _ in range(3)]

        # Act
        totals = calculate_totals(items)

        # Assert
        assert totals.subtotal == Decimal("2.70")
        assert totals.tax_total == Decimal("0.14")
        assert sum(line_tax(item) for item in items) == Decimal("0.15")
        assert totals.amount_total == Decimal("2.84")

    def test_total_equals_subtotal_plus_tax_for_fractional_rates(self):
        """Grand total is always exactly subtotal + tax for 2.6, 3.8, 7.7 and 8.1 percent"""
        for rate in ("2.6", "3.8", "7.7", "8.1"):
            # Arrange
            items = [line("3", "19.99", rate), line("1.5", "33.33", rate), line("7", "0.07", rate)]

            # Act
            totals = calculate_totals(items)

            # Assert
            assert totals.amount_total == totals.subtotal + totals.tax_total
            assert totals.subtotal.as_tuple().exponent == -2
            assert totals.tax_total.as_tuple().exponent == -2

    def test_accepts_float_and_string_inputs(self):
        """Values are converted through str so floats do not leak binary noise"""
        # Arrange
        items = [SimpleNamespace(quantity=3, unit_price=0.1, tax_rate="8.1")]

        # Act
        totals = calculate_totals(items)

        # Assert
        assert totals.subtotal == Decimal("0.30")
        assert totals.tax_total == Decimal("0.02")


class TestLineAmounts:
    """Test rounded per-line display values"""

    def test_line_total_and_tax(self):
        # Arrange
        item = line("1.5", "33.33", "8.1")

        # Act & Assert
        assert line_total(item) == Decimal("50.00")
        assert line_tax(item) == Decimal("4.05")

    def test_round_money_half_up(self):
        assert round_money(Decimal("0.005")) == Decimal("0.01")
        assert round_money(Decimal("2.675")) == Decimal("2.68")
        assert round_money(Decimal("-0.005")) == Decimal("-0.01")
