"""Helper utilities for formatting and parsing numeric form values."""
from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Mapping

UNIT_FACTORS: Mapping[str, Decimal] = {
    "億円": Decimal("100000000"),
    "万円": Decimal("10000"),
    "円": Decimal("1"),
}

_SEPARATORS = re.compile(r"[,，\s¥￥円]")
_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")


def to_decimal(value: object) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if value is None:
        return Decimal("0")
    return Decimal(str(value))


def format_number_display(value: object) -> str:
    """Return *value* with thousands separators, or an empty string when unset."""
    if value is None or value == "":
        return ""
    try:
        amount = to_decimal(value)
    except InvalidOperation:
        return ""
    if amount.is_nan() or amount.is_infinite():
        return ""
    return f"{amount.quantize(Decimal('1'), rounding=ROUND_HALF_UP):,}"


def parse_numeric_input(text: str | None) -> int | float | None:
    """Read a yen field, ignoring separators and currency marks.

    Empty or unreadable input means unset.
    """
    if text is None:
        return None
    cleaned = _SEPARATORS.sub("", str(text))
    if not _NUMBER.fullmatch(cleaned):
        return None
    number = float(cleaned)
    return int(number) if number.is_integer() else number


def format_money(value: object, unit: str = "円") -> str:
    try:
        amount = to_decimal(value)
    except InvalidOperation:
        return "—"
    factor = UNIT_FACTORS.get(unit, Decimal("1"))
    scaled = amount / factor
    if scaled.is_nan() or scaled.is_infinite():
        return "—"
    scaled = scaled.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{scaled:,}{unit}"


def format_man_yen(value: object) -> str:
    return format_money(value, "万円")


def format_percent(ratio: object) -> str:
    """Format a 0–1 ratio returned by the valuation service."""
    try:
        amount = to_decimal(ratio)
    except InvalidOperation:
        return "—"
    if amount.is_nan() or amount.is_infinite():
        return "—"
    return f"{amount * Decimal('100'):.2f}%"


def format_years(years: object) -> str:
    try:
        amount = to_decimal(years)
    except InvalidOperation:
        return "—"
    if amount.is_nan() or amount.is_infinite():
        return "—"
    return f"{amount:.2f}年"


__all__ = [
    "UNIT_FACTORS",
    "format_man_yen",
    "format_money",
    "format_number_display",
    "format_percent",
    "format_years",
    "parse_numeric_input",
    "to_decimal",
]
