"""
Exceptions raised while parsing settlement reports.

All fatal conditions are ValueErrors so callers can treat any unreadable
report the same way; the subclasses say what exactly went wrong.
"""

from __future__ import annotations

from typing import Optional


class ReportParseError(ValueError):
    """Base class for settlement report parse failures."""


class MissingRequiredDataError(ReportParseError):
    """Organization or company block was never found."""


MissingRequiredSectionError = MissingRequiredDataError


class MalformedSectionError(ReportParseError):
    """A section data row appeared before its header row."""

    def __init__(self, sentinel: str, line_number: int, message: Optional[str] = None):
        self.sentinel = sentinel
        self.line_number = line_number
        super().__init__(
            message
            or f"Line {line_number}: '{sentinel}' data row found before its header row"
        )


class InvalidNumberError(ReportParseError):
    """A numeric field holds text that is not a number."""

    def __init__(self, value: str, field: Optional[str] = None):
        self.value = value
        self.field = field
        where = f" in field '{field}'" if field else ""
        super().__init__(f"Cannot parse number{where}: {value!r}")


class UnsupportedReportError(ValueError):
    """No registered parser recognises the input."""


class DataQualityWarning(UserWarning):
    """Non-fatal problem with a field value (lenient mode only)."""
