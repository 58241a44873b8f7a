"""
Field readers: the scanning primitive under the settlement report parser.

A reader hands out one trimmed field at a time via ``next_field()``, flagging
the last field of every line. ``rows()`` assembles those into per-line field
lists and drops blank lines, so the parser never sees how the text was cut up.

Two interchangeable strategies:
  - SplitFieldReader  : split the text into lines, then each line on commas
  - CursorFieldReader : walk the raw text with a single forward cursor

No quoting or escaping is interpreted; every comma is a delimiter.
Lines end with '\\n' or '\\r\\n' (the '\\r' is removed by trimming).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator, Optional

DELIMITER = ","
NEWLINE = "\n"


class FieldReader(ABC):
    """Base class for field readers over an in-memory report."""

    name: str = "UNKNOWN"

    def __init__(self, text: str):
        self._text = text

    @abstractmethod
    def next_field(self) -> Optional[tuple[str, bool]]:
        """Return (field, is_last_on_line), or None once the text is exhausted."""
        ...

    def rows(self) -> Iterator[tuple[int, list[str]]]:
        """Yield (line_number, fields) for every non-blank line, 1-based."""
        line_number = 0
        current: list[str] = []
        while True:
            item = self.next_field()
            if item is None:
                break
            value, end_of_line = item
            current.append(value)
            if end_of_line:
                line_number += 1
                if current != [""]:
                    yield line_number, current
                current = []


class SplitFieldReader(FieldReader):
    """Tokenise line by line with str.split."""

    name = "split"

    def __init__(self, text: str):
        super().__init__(text)
        self._fields = self._iter_fields()

    def _iter_fields(self) -> Iterator[tuple[str, bool]]:
        for line in self._text.split(NEWLINE):
            parts = line.split(DELIMITER)
            last = len(parts) - 1
            for i, part in enumerate(parts):
                yield part.strip(), i == last

    def next_field(self) -> Optional[tuple[str, bool]]:
        return next(self._fields, None)


class CursorFieldReader(FieldReader):
    """Extract fields with one cursor that only moves forward."""

    name = "cursor"

    def __init__(self, text: str):
        super().__init__(text)
        self._pos = 0
        self._done = False

    def next_field(self) -> Optional[tuple[str, bool]]:
        if self._done:
            return None

        text = self._text
        start = self._pos
        comma = text.find(DELIMITER, start)
        newline = text.find(NEWLINE, start)

        if comma != -1 and (newline == -1 or comma < newline):
            self._pos = comma + 1
            return text[start:comma].strip(), False
        if newline != -1:
            self._pos = newline + 1
            return text[start:newline].strip(), True

        # Final line has no terminator
        self._pos = len(text)
        self._done = True
        return text[start:].strip(), True


READERS: dict[str, type[FieldReader]] = {
    SplitFieldReader.name: SplitFieldReader,
    CursorFieldReader.name: CursorFieldReader,
}


def make_reader(strategy: str, text: str) -> FieldReader:
    try:
        reader_cls = READERS[strategy]
    except KeyError:
        raise ValueError(
            f"Unknown reader strategy {strategy!r}. Available: " + ", ".join(READERS)
        ) from None
    return reader_cls(text)
