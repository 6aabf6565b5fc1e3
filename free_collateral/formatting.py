"""Compact number formatting for notification text.

Mirrors English compact notation: ``1234 -> "1.2K"``, ``12345 -> "12K"``,
``999999 -> "1M"``, ``-500 -> "-500"``.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

_SUFFIXES = ("", "K", "M", "B", "T")
_THOUSAND = Decimal(1000)


def _round_compact(value: Decimal) -> Decimal:
    """Keep two significant digits below 10, whole numbers from 10 upward."""
    if value >= 10:
        return value.quantize(Decimal(1), rounding=ROUND_HALF_UP)
    step = Decimal(1).scaleb(value.adjusted() - 1)
    return value.quantize(step, rounding=ROUND_HALF_UP)


def _strip_zeros(value: Decimal) -> str:
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def compact_number(value: float) -> str:
    """Render ``value`` in compact notation with K/M/B/T suffixes."""
    amount = Decimal(str(value))
    if amount == 0:
        return "0"

    sign = "-" if amount < 0 else ""
    amount = abs(amount)

    index = 0
    while index < len(_SUFFIXES) - 1 and amount >= _THOUSAND ** (index + 1):
        index += 1

    rounded = _round_compact(amount / _THOUSAND**index)
    # 999.5 rounds to 1000 and must move up to the next suffix
    if rounded >= _THOUSAND and index < len(_SUFFIXES) - 1:
        index += 1
        rounded = _round_compact(amount / _THOUSAND**index)

    return f"{sign}{_strip_zeros(rounded)}{_SUFFIXES[index]}"


def format_usd(value: float) -> str:
    return f"{compact_number(value)} USD"
