"""Exceptions raised by the ledger."""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for ledger errors."""


class BackupImportError(LedgerError):
    """A backup could not be imported; the ledger was left unchanged."""


class ParseError(BackupImportError):
    """The backup text is not valid JSON."""

    def __init__(self, message: str = "Failed to parse JSON") -> None:
        super().__init__(message)


class InvalidFormatError(BackupImportError):
    """The backup parsed but does not have the store shape."""

    def __init__(self, message: str = "Invalid backup format") -> None:
        super().__init__(message)
