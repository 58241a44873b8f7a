"""
Positional column layouts for each report section.

Fields are located by index only. Header labels decide which section a line
belongs to but never name the fields. Index 0 of every sentinel section
(SettlementInfo, FeeInfo, TransactionInfo) is the sentinel itself.
"""

from __future__ import annotations

import logging
import warnings
from decimal import Decimal
from typing import Any, Callable, NamedTuple, Optional

from pydantic import BaseModel

from settlement_report.errors import DataQualityWarning, InvalidNumberError
from settlement_report.models import (
    Company,
    Fee,
    Organization,
    SectionState,
    Settlement,
    Transaction,
)
from settlement_report.parsers.numbers import normalize_number, parse_integer

logger = logging.getLogger(__name__)


def _text(raw: str) -> str:
    return raw


# Value stored when a number cannot be read and strict parsing is off
_INVALID_FALLBACK: dict[Callable[[str], Any], Any] = {
    normalize_number: Decimal("NaN"),
    parse_integer: None,
}


class Column(NamedTuple):
    index: int
    name: str
    decode: Callable[[str], Any] = _text


class SectionLayout(NamedTuple):
    model: type[BaseModel]
    columns: tuple[Column, ...]

    @property
    def width(self) -> int:
        return max(c.index for c in self.columns) + 1


ORGANIZATION_LAYOUT = SectionLayout(Organization, (
    Column(0, "organization_number"),
    Column(1, "merchant_name"),
))

COMPANY_LAYOUT = SectionLayout(Company, (
    Column(0, "name"),
    Column(1, "visiting_address"),
    Column(2, "postbox"),
    Column(3, "zipno"),
    Column(4, "place"),
    Column(5, "country"),
    Column(6, "company_number"),
))

SETTLEMENT_LAYOUT = SectionLayout(Settlement, (
    Column(1, "sales_unit_name"),
    Column(2, "sale_unit_number"),
    Column(3, "settlement_date"),
    Column(4, "settlement_id"),
    Column(5, "settlement_account"),
    Column(6, "gross", normalize_number),
    Column(7, "currency"),
    Column(8, "fee", normalize_number),
    Column(9, "refund", normalize_number),
    Column(10, "net", normalize_number),
    Column(11, "number_of_transactions", parse_integer),
))

FEE_LAYOUT = SectionLayout(Fee, (
    Column(1, "settlement_date"),
    Column(2, "sale_unit_name"),
    Column(3, "sale_unit_number"),
    Column(4, "fee_account"),
    Column(5, "fee", normalize_number),
    Column(6, "currency"),
))

TRANSACTION_LAYOUT = SectionLayout(Transaction, (
    Column(1, "sales_date"),
    Column(2, "sale_unit_name"),
    Column(3, "sale_unit_number"),
    Column(4, "transaction_id"),
    Column(5, "settlement_id"),
    Column(6, "order_id"),
    Column(7, "settlement_date"),
    Column(8, "gross", normalize_number),
    Column(9, "currency"),
    Column(10, "fee", normalize_number),
    Column(11, "refund", normalize_number),
    Column(12, "net", normalize_number),
))

LAYOUTS: dict[SectionState, SectionLayout] = {
    SectionState.ORGANIZATION: ORGANIZATION_LAYOUT,
    SectionState.COMPANY: COMPANY_LAYOUT,
    SectionState.SETTLEMENT: SETTLEMENT_LAYOUT,
    SectionState.FEE: FEE_LAYOUT,
    SectionState.TRANSACTION: TRANSACTION_LAYOUT,
}


def decode_row(
    values: list[str],
    layout: SectionLayout,
    *,
    strict: bool = True,
    line_number: int = 0,
    issues: Optional[list[str]] = None,
    stacklevel: int = 2,
) -> BaseModel:
    """Map one line's fields onto the layout's record type.

    Positions past the end of the line read as empty strings, so missing
    amounts become zero. In strict mode an unreadable number raises
    InvalidNumberError; otherwise it is replaced by NaN (or None for counts),
    reported as a DataQualityWarning and appended to ``issues``.
    ``stacklevel`` is handed to warnings.warn so the warning points at the
    code that asked for the parse.
    """
    if len(values) < layout.width:
        logger.debug(
            "Line %d: %s row has %d fields, expected %d",
            line_number, layout.model.__name__, len(values), layout.width,
        )

    record: dict[str, Any] = {}
    for column in layout.columns:
        raw = values[column.index] if column.index < len(values) else ""
        try:
            record[column.name] = column.decode(raw)
        except InvalidNumberError:
            if strict:
                raise InvalidNumberError(raw, column.name) from None
            message = (
                f"Line {line_number}: {layout.model.__name__}.{column.name} "
                f"is not a number: {raw!r}"
            )
            logger.warning("%s", message)
            warnings.warn(message, DataQualityWarning, stacklevel=stacklevel)
            if issues is not None:
                issues.append(message)
            record[column.name] = _INVALID_FALLBACK[column.decode]
    return layout.model(**record)
