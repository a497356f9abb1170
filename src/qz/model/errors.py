"""
Error Taxonomy
==============
Exceptions raised by the model layer.

BankIOError and ParseError are expected failures: the view reports them to the
user and the in-memory state is left as it was. InvariantViolation means the
pairing bookkeeping is corrupt and is never caught by the application.
"""
from __future__ import annotations

from typing import Optional


class QzError(Exception):
    """Base class for all errors raised by the qz package."""


class BankIOError(QzError, OSError):
    """A word bank file could not be read or written."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class ParseError(QzError, ValueError):
    """Word bank content is malformed."""

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class InvariantViolation(QzError, AssertionError):
    """Pairing or duplicate-group state is inconsistent."""
