"""Money arithmetic for cart lines and totals.

Amounts are computed as Decimals and rounded half-up to the cent. The
effective (discounted) unit price is rounded first, so a line total is always
``effective_price * quantity`` and a cart total is the exact sum of its lines.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_money(value) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def effective_price(unit_price, discount_percent=None) -> Decimal:
    """Unit price after applying ``discount_percent`` (0-100), if any."""
    price = to_decimal(unit_price)
    if discount_percent:
        price = price * (HUNDRED - to_decimal(discount_percent)) / HUNDRED
    return to_money(price)


def line_total(unit_price, discount_percent, quantity: int) -> Decimal:
    return effective_price(unit_price, discount_percent) * quantity


def cart_total(lines: Iterable) -> Decimal:
    """Sum of line totals for objects exposing unit_price, discount_percent and quantity."""
    total = sum(
        (line_total(line.unit_price, line.discount_percent, line.quantity) for line in lines),
        Decimal("0"),
    )
    return to_money(total)
