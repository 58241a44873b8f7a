"""
Abstract base parser. All report parsers extend this.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from settlement_report.models import ParsedReport

logger = logging.getLogger(__name__)


class BaseParser(ABC):
    """
    Base class for settlement report parsers.

    Each parser must implement:
      - detect()  : check if a file is in this parser's format
      - parse()   : convert raw file content into a ParsedReport
    """

    report_name: str = "UNKNOWN"

    @staticmethod
    @abstractmethod
    def detect(file_content: str | bytes, filename: str = "") -> bool:
        """Return True if this parser can handle the given file."""
        ...

    @abstractmethod
    def parse(self, file_content: str | bytes, filename: str = "") -> ParsedReport:
        """Parse raw file content into a ParsedReport."""
        ...


def decode_content(content: str | bytes) -> str:
    """Decode UTF-8 bytes to string, dropping a leading BOM.

    Bytes that are not valid UTF-8 fall back to latin-1 with a warning.
    """
    if isinstance(content, str):
        return content.lstrip("\ufeff")
    try:
        return content.decode("utf-8").lstrip("\ufeff")
    except UnicodeDecodeError as e:
        logger.warning("Report is not valid UTF-8 (%s); decoding as latin-1", e)
    return content.decode("latin-1").lstrip("\ufeff")
