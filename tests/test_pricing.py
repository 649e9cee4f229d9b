from decimal import Decimal

import pytest

from conftest import make_product
from poppes.records import CartLine
from poppes.services import pricing


def line(price, quantity, product_id='1'):
    return CartLine(product=make_product(id=product_id, price=price), cart_quantity=quantity)


def test_single_line_total_includes_five_percent_tax():
    lines = [line('899', 1)]

    assert pricing.subtotal(lines) == Decimal('899')
    assert pricing.tax(pricing.subtotal(lines)) == Decimal('44.95')
    assert pricing.total(lines) == Decimal('943.95')


def test_summary_over_several_lines():
    summary = pricing.summarize([line('899', 2, '1'), line('649', 1, '2'), line('450', 3, '3')])

    assert summary.subtotal == Decimal('3797')
    assert summary.tax == Decimal('189.85')
    assert summary.total == Decimal('3986.85')


@pytest.mark.parametrize('price, quantity', [('0.10', 3), ('19.99', 7), ('1234.56', 11)])
def test_total_is_subtotal_plus_tax_exactly(price, quantity):
    lines = [line(price, quantity)]
    amount = pricing.subtotal(lines)

    assert amount == Decimal(price) * quantity
    assert pricing.total(lines) == amount + pricing.tax(amount)


def test_empty_cart_costs_nothing():
    assert pricing.summarize([]) == (0, 0, 0)


def test_breakdown_from_stored_total():
    breakdown = pricing.breakdown_from_total('943.95')

    assert breakdown.subtotal == Decimal('899')
    assert breakdown.tax == Decimal('44.95')
    assert breakdown.total == Decimal('943.95')


@pytest.mark.parametrize('value, expected', [
    (Decimal('943.95'), '943.95'),
    (Decimal('899'), '899.00'),
    (Decimal('0.105'), '0.11'),
    (Decimal('2.004'), '2.00'),
    ('12.5', '12.50'),
])
def test_format_money_rounds_half_up(value, expected):
    assert pricing.format_money(value) == expected


def test_two_line_cart():
    summary = pricing.summarize([line('100', 2, '1'), line('50', 1, '2')])

    assert summary == (Decimal('250'), Decimal('12.5'), Decimal('262.5'))
