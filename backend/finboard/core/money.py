from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value) -> Decimal:
    """Coerce a number to a 2-place Decimal.

    Floats go through ``str`` first so 0.1 stays 0.10 instead of
    0.1000000000000000055511151231257827.
    """

    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        d = value
    elif isinstance(value, float):
        d = Decimal(str(value))
    else:
        d = Decimal(value)
    return d.quantize(CENT, rounding=ROUND_HALF_UP)


def sum_money(values: Iterable) -> Decimal:
    total = ZERO
    for v in values:
        total += to_money(v)
    return total


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def split_evenly(total: Decimal, parts: int) -> list[Decimal]:
    """Split ``total`` into ``parts`` cent values; the last part absorbs the remainder."""

    if parts <= 0:
        raise ValueError("parts must be >= 1")
    total = to_money(total)
    base = (total / parts).quantize(CENT, rounding=ROUND_HALF_UP)
    values = [base] * parts
    values[-1] = total - base * (parts - 1)
    return values
