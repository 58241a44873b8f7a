"""
Report format auto-detection.
Tries each registered parser's detect() method and returns the matching one.
"""

from __future__ import annotations

from settlement_report.errors import UnsupportedReportError
from settlement_report.models import ParsedReport
from settlement_report.parsers.base import BaseParser
from settlement_report.parsers.settlement import SettlementReportParser

# Register parsers here. Order matters – first match wins.
REGISTERED_PARSERS: list[type[BaseParser]] = [
    SettlementReportParser,
]


def detect_and_parse(file_content: str | bytes, filename: str = "") -> ParsedReport:
    """
    Auto-detect the report format from file content and parse it.

    Raises UnsupportedReportError if no parser matches.
    """
    for parser_cls in REGISTERED_PARSERS:
        if parser_cls.detect(file_content, filename):
            parser = parser_cls()
            return parser.parse(file_content, filename)

    raise UnsupportedReportError(
        f"Could not detect report format for file '{filename}'. "
        "Supported formats: " + ", ".join(p.report_name for p in REGISTERED_PARSERS)
    )
