"""
Word Bank Entries
=================
The (word, meaning) value type and the line parser for the tab-separated
bank format.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List

from qz.model.errors import ParseError

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "\t"


@dataclass(frozen=True)
class Entry:
    word: str
    meaning: str

    def to_line(self) -> str:
        return f"{self.word}{FIELD_SEPARATOR}{self.meaning}"


def parse_entries(lines: Iterable[str], strict: bool = False) -> List[Entry]:
    """
    Parse newline-delimited records of two tab-separated fields.

    Blank lines are ignored. Any other line that does not split into exactly
    two fields is skipped with a warning, or rejected when ``strict`` is set.

    Args:
        lines: Raw lines, with or without their line terminators.
        strict: Raise ParseError on the first malformed line instead of
            skipping it.

    Returns:
        The parsed entries in file order.
    """
    entries: List[Entry] = []
    skipped = 0

    for number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue

        fields = line.split(FIELD_SEPARATOR)
        if len(fields) != 2:
            if strict:
                raise ParseError(f"expected 2 tab-separated fields, found {len(fields)}", number)
            logger.warning(f"Skipping line {number}: expected 2 fields, found {len(fields)}")
            skipped += 1
            continue

        entries.append(Entry(fields[0], fields[1]))

    if skipped:
        logger.info(f"Parsed {len(entries)} entries, skipped {skipped} malformed lines.")
    return entries


def format_entries(entries: Iterable[Entry]) -> str:
    return "".join(entry.to_line() + "\n" for entry in entries)
