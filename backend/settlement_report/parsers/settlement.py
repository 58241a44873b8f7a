"""
Settlement report parser.

The report is a comma-separated export with one block per section. Blocks are
recognised by the first field(s) of each line, not by line numbers, because
header rows of varying width can precede the data:

    OrganizationNumber,MerchantName                        <- header, next line is data
    Name,VisitingAddress,Postbox,...                       <- header, next line is data
    SettlementInfo,SalesUnitName,...                       <- header
    SettlementInfo,<values>                                <- one or more data rows
    FeeInfo,SettlementDate,...                             <- header
    FeeInfo,<values>                                       <- zero or more data rows
    TransactionInfo,SalesDate,...                          <- header
    TransactionInfo,<values>                               <- zero or more data rows

Lines that match neither a header nor the active section's data pattern are
skipped. Organization and company blocks are mandatory; everything else may
be empty.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

from settlement_report.errors import MalformedSectionError, MissingRequiredDataError
from settlement_report.models import (
    Company,
    Fee,
    Organization,
    ParsedReport,
    SectionState,
    Settlement,
    Transaction,
)
from settlement_report.parsers.base import BaseParser, decode_content
from settlement_report.parsers.layouts import LAYOUTS, decode_row
from settlement_report.parsers.readers import make_reader

logger = logging.getLogger(__name__)

ORGANIZATION_HEADER = "OrganizationNumber"
COMPANY_HEADER = "Name"

SETTLEMENT_SENTINEL = "SettlementInfo"
FEE_SENTINEL = "FeeInfo"
TRANSACTION_SENTINEL = "TransactionInfo"

# Sentinel -> (section, label in the second field of that section's header row)
SENTINEL_SECTIONS: dict[str, tuple[SectionState, str]] = {
    SETTLEMENT_SENTINEL: (SectionState.SETTLEMENT, "SalesUnitName"),
    FEE_SENTINEL: (SectionState.FEE, "SettlementDate"),
    TRANSACTION_SENTINEL: (SectionState.TRANSACTION, "SalesDate"),
}
SECTION_SENTINELS: dict[SectionState, str] = {
    section: sentinel for sentinel, (section, _) in SENTINEL_SECTIONS.items()
}

# Data rows of these sections are rejected until their header has been seen.
# Fee rows start their section on their own.
HEADER_REQUIRED = (SectionState.SETTLEMENT, SectionState.TRANSACTION)

_DETECT_ORGANIZATION = re.compile(r"^\s*OrganizationNumber\s*,", re.MULTILINE)
_DETECT_SETTLEMENT = re.compile(r"^\s*SettlementInfo\s*,\s*SalesUnitName\s*(,|$)", re.MULTILINE)


class ParserOptions(BaseModel):
    """Behaviour switches for SettlementReportParser."""

    model_config = ConfigDict(frozen=True)

    # True: unreadable numbers abort the parse with InvalidNumberError.
    # False: they become NaN (counts: None) and are reported as warnings.
    strict_numbers: bool = True
    reader: Literal["split", "cursor"] = "split"


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------

def is_header_row(row: list[str]) -> bool:
    """True for the column-label line that opens a section."""
    first = row[0]
    if first in (ORGANIZATION_HEADER, COMPANY_HEADER):
        return True
    entry = SENTINEL_SECTIONS.get(first)
    return entry is not None and len(row) > 1 and row[1] == entry[1]


def next_state(state: SectionState, row: list[str]) -> SectionState:
    """Return the section a row belongs to, given the section before it.

    Header labels and sentinels switch section; any other row stays in the
    current one. Only the first field is inspected.
    """
    first = row[0]
    if first == ORGANIZATION_HEADER:
        return SectionState.ORGANIZATION
    if first == COMPANY_HEADER:
        return SectionState.COMPANY
    entry = SENTINEL_SECTIONS.get(first)
    if entry is not None:
        return entry[0]
    return state


@dataclass
class _ScanContext:
    """Mutable accumulation for a single parse call."""
    state: SectionState = SectionState.INITIAL
    headers_seen: set[SectionState] = field(default_factory=set)
    organization: Optional[Organization] = None
    company: Optional[Company] = None
    settlements: list[Settlement] = field(default_factory=list)
    fees: list[Fee] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class SettlementReportParser(BaseParser):
    """
    Parser for payment settlement reports.

    Usage:
        parser = SettlementReportParser()
        report = parser.parse(content)

    Every call to parse() starts from a fresh context, so one instance can be
    reused for any number of reports.
    """

    report_name = "SETTLEMENT"

    def __init__(self, options: Optional[ParserOptions] = None):
        self.options = options or ParserOptions()

    @staticmethod
    def detect(file_content: str | bytes, filename: str = "") -> bool:
        text = decode_content(file_content)
        return bool(_DETECT_ORGANIZATION.search(text) and _DETECT_SETTLEMENT.search(text))

    def parse(self, file_content: str | bytes, filename: str = "") -> ParsedReport:
        text = decode_content(file_content)
        ctx = _ScanContext()

        for line_number, row in make_reader(self.options.reader, text).rows():
            self._process_row(ctx, row, line_number)

        if ctx.organization is None or ctx.company is None:
            missing = [
                name for name, value in (("organization", ctx.organization), ("company", ctx.company))
                if value is None
            ]
            raise MissingRequiredDataError(
                f"Missing required {' and '.join(missing)} data"
                + (f" in '{filename}'" if filename else "")
            )

        logger.info(
            "Parsed settlement report%s: %d settlements, %d fees, %d transactions",
            f" {filename}" if filename else "",
            len(ctx.settlements), len(ctx.fees), len(ctx.transactions),
        )

        return ParsedReport(
            organization=ctx.organization,
            company=ctx.company,
            settlements=tuple(ctx.settlements),
            fees=tuple(ctx.fees),
            transactions=tuple(ctx.transactions),
            warnings=tuple(ctx.warnings),
        )

    def _process_row(self, ctx: _ScanContext, row: list[str], line_number: int) -> None:
        state = next_state(ctx.state, row)

        if is_header_row(row):
            if state != ctx.state:
                logger.debug("Line %d: %s -> %s", line_number, ctx.state.value, state.value)
            ctx.state = state
            ctx.headers_seen.add(state)
            return

        if state in HEADER_REQUIRED and state not in ctx.headers_seen:
            raise MalformedSectionError(SECTION_SENTINELS[state], line_number)

        ctx.state = state

        if state == SectionState.ORGANIZATION:
            if ctx.organization is None:
                ctx.organization = self._decode(row, state, line_number, ctx)
                return
        elif state == SectionState.COMPANY:
            if ctx.company is None:
                ctx.company = self._decode(row, state, line_number, ctx)
                return
        elif state == SectionState.SETTLEMENT:
            if row[0] == SETTLEMENT_SENTINEL:
                ctx.settlements.append(self._decode(row, state, line_number, ctx))
                return
        elif state == SectionState.FEE:
            if row[0] == FEE_SENTINEL:
                ctx.fees.append(self._decode(row, state, line_number, ctx))
                return
        elif state == SectionState.TRANSACTION:
            if row[0] == TRANSACTION_SENTINEL:
                ctx.transactions.append(self._decode(row, state, line_number, ctx))
                return

        logger.debug("Line %d: skipped in %s: %s", line_number, state.value, row[:3])

    def _decode(self, row: list[str], state: SectionState, line_number: int, ctx: _ScanContext):
        return decode_row(
            row,
            LAYOUTS[state],
            strict=self.options.strict_numbers,
            line_number=line_number,
            issues=ctx.warnings,
            # decode_row <- _decode <- _process_row <- parse <- caller
            stacklevel=5,
        )


def parse_settlement_report(
    file_content: str | bytes, options: Optional[ParserOptions] = None
) -> ParsedReport:
    """Parse a settlement report with a fresh parser."""
    return SettlementReportParser(options).parse(file_content)
