"""Currency display helpers for whole-unit amounts (COP has no cents)."""

from __future__ import annotations

import re
from typing import Optional

_NON_DIGITS = re.compile(r"[^0-9]")


def digits_only(text: str | None) -> str:
    """Strip everything that is not a digit."""
    return _NON_DIGITS.sub("", text or "")


def format_currency(amount: int) -> str:
    """Render ``150000`` as ``$150,000``."""
    return f"${amount:,}"


def format_amount_input(raw: str | None) -> str:
    """Re-render a keystroke-edited amount field; empty stays empty."""

    digits = digits_only(raw)
    if not digits:
        return ""
    return format_currency(int(digits))


def parse_formatted_amount(display: str | None) -> Optional[int]:
    """Recover the integer behind a formatted amount.

    Only the digits are read, so grouping separators and the currency
    symbol never affect the value.
    """

    digits = digits_only(display)
    return int(digits) if digits else None


def format_signed(amount: int) -> str:
    """``+$25,000`` for non-negative values, ``-$25,000`` otherwise."""
    sign = "+" if amount >= 0 else "-"
    return f"{sign}{format_currency(abs(amount))}"


__all__ = [
    "digits_only",
    "format_amount_input",
    "format_currency",
    "format_signed",
    "parse_formatted_amount",
]
