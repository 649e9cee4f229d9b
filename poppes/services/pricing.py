"""Subtotal, tax and total derived from cart lines.

Amounts stay at full Decimal precision; ``format_money`` rounds for display.
"""

from collections import namedtuple
from decimal import Decimal, ROUND_HALF_UP

from poppes.records import to_decimal

TAX_RATE = Decimal('0.05')
CENTS = Decimal('0.01')

PriceSummary = namedtuple('PriceSummary', ['subtotal', 'tax', 'total'])


def subtotal(lines):
    return sum((line.price * line.cart_quantity for line in lines), Decimal('0'))


def tax(amount):
    return to_decimal(amount) * TAX_RATE


def total(lines):
    return subtotal(lines) * (1 + TAX_RATE)


def summarize(lines):
    amount = subtotal(lines)
    return PriceSummary(subtotal=amount, tax=tax(amount), total=amount * (1 + TAX_RATE))


def breakdown_from_total(order_total):
    """Recover subtotal and tax from a stored order total."""
    order_total = to_decimal(order_total)
    amount = order_total / (1 + TAX_RATE)
    return PriceSummary(subtotal=amount, tax=order_total * TAX_RATE / (1 + TAX_RATE),
                        total=order_total)


def format_money(value):
    """Round half-up to two places and render as a string."""
    return str(to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP))
