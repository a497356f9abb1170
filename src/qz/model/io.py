"""
Input/Output Manager
Reads and writes tab-separated word bank files and the per-user session file.
"""
import logging
import os
from importlib.resources import files
from typing import Iterable, List

from qz.model.entries import Entry, parse_entries, format_entries
from qz.model.errors import BankIOError, ParseError

logger = logging.getLogger(__name__)

DEFAULT_WORDS_RESOURCE = "words.txt"


class BankIO:
    @staticmethod
    def load_entries(filepath: str, strict: bool = False) -> List[Entry]:
        """
        Read a bank file and return its entries.

        Raises:
            BankIOError: The file cannot be opened or read.
            ParseError: The file is not valid UTF-8, holds no valid entries,
                or (strict mode) contains a malformed line.
        """
        logger.info(f"Loading word bank from: {filepath}")
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                entries = parse_entries(f, strict=strict)
        except UnicodeDecodeError as e:
            raise ParseError(f"{filepath} is not valid UTF-8 text ({e.reason})") from e
        except OSError as e:
            raise BankIOError(filepath, e.strerror or str(e)) from e

        if not entries:
            raise ParseError(f"{filepath} contains no word/meaning pairs")

        logger.info(f"Loaded {len(entries)} entries from: {filepath}")
        return entries

    @staticmethod
    def load_default_entries() -> List[Entry]:
        """Entries from the word list shipped inside the package."""
        resource = files("qz.resources").joinpath(DEFAULT_WORDS_RESOURCE)
        text = resource.read_text(encoding="utf-8")
        entries = parse_entries(text.splitlines())
        logger.info(f"Loaded {len(entries)} embedded entries.")
        return entries

    @staticmethod
    def save_entries(filepath: str, entries: Iterable[Entry]) -> None:
        logger.info(f"Saving word bank to: {filepath}")
        directory = os.path.dirname(filepath)
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(filepath, "w", encoding="utf-8", newline="\n") as f:
                f.write(format_entries(entries))
        except OSError as e:
            logger.error(f"Failed to save word bank: {e}")
            raise BankIOError(filepath, e.strerror or str(e)) from e

    @staticmethod
    def delete_session(filepath: str) -> None:
        if not os.path.exists(filepath):
            return
        try:
            os.remove(filepath)
            logger.info(f"Deleted finished session file: {filepath}")
        except OSError as e:
            raise BankIOError(filepath, e.strerror or str(e)) from e
