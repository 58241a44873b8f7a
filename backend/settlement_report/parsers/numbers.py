"""
Number parsing for settlement reports.

Amounts may be written with a space (or non-breaking space) as the thousands
separator and a comma as the decimal mark: '16 511,71' -> Decimal('16511.71').
Already-normalised values ('16511.71') pass through unchanged.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from settlement_report.errors import InvalidNumberError

_WHITESPACE = re.compile(r"\s+")
_INTEGER = re.compile(r"^[+-]?\d+$", re.ASCII)
_AMOUNT = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$", re.ASCII)

ZERO = Decimal("0")


def normalize_number(raw: str | None) -> Decimal:
    """Parse a locale-formatted amount. Empty or missing -> Decimal('0').

    Only ASCII digits with an optional sign, decimal point and exponent are
    accepted. Anything else Decimal would take (NaN, Infinity, '1_000',
    non-ASCII digits) raises InvalidNumberError.
    """
    if raw is None:
        return ZERO
    cleaned = _WHITESPACE.sub("", raw).replace(",", ".")
    if not cleaned:
        return ZERO
    if not _AMOUNT.match(cleaned):
        raise InvalidNumberError(raw)
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        raise InvalidNumberError(raw) from None


def parse_integer(raw: str | None) -> int:
    """Parse a plain base-10 count. Empty or missing -> 0."""
    if raw is None:
        return 0
    cleaned = raw.strip()
    if not cleaned:
        return 0
    if not _INTEGER.match(cleaned):
        raise InvalidNumberError(raw)
    return int(cleaned)
