"""Invoice totals calculation

Only the published aggregates are rounded. Rounding each line before summing
drifts by a cent on invoices with fractional tax rates (e.g. 8.1%).
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, NamedTuple, Protocol

CENT = Decimal("0.01")


class PricedLine(Protocol):
    quantity: Decimal
    unit_price: Decimal
    tax_rate: Decimal


class InvoiceTotals(NamedTuple):
    subtotal: Decimal
    tax_total: Decimal
    amount_total: Decimal


def round_money(value: Decimal) -> Decimal:
    """Round to cents, half away from zero"""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_totals(line_items: Iterable[PricedLine]) -> InvoiceTotals:
    """
    Compute subtotal, tax total and grand total of an invoice

    Args:
        line_items: Lines exposing quantity, unit_price and tax_rate

    Returns:
        InvoiceTotals where amount_total == subtotal + tax_total exactly
    """
    subtotal = Decimal("0")
    tax_total = Decimal("0")

    for item in line_items:
        net = Decimal(str(item.quantity)) * Decimal(str(item.unit_price))
        subtotal += net
        tax_total += net * Decimal(str(item.tax_rate)) / 100

    subtotal = round_money(subtotal)
    tax_total = round_money(tax_total)
    return InvoiceTotals(subtotal, tax_total, subtotal + tax_total)


def line_total(item: PricedLine) -> Decimal:
    """Net amount of one line, rounded for display"""
    return round_money(Decimal(str(item.quantity)) * Decimal(str(item.unit_price)))


def line_tax(item: PricedLine) -> Decimal:
    """Tax amount of one line, rounded for display"""
    net = Decimal(str(item.quantity)) * Decimal(str(item.unit_price))
    return round_money(net * Decimal(str(item.tax_rate)) / 100)
