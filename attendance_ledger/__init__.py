"""Attendance Ledger - members, sessions and attendance kept on this device."""

from .errors import BackupImportError, InvalidFormatError, LedgerError, ParseError
from .ledger import Ledger
from .models import EMPTY_STORE, AttendanceRecord, Member, Session, Store
from .persistence import LedgerStore

__version__ = "0.1.0"

__all__ = [
    "EMPTY_STORE",
    "AttendanceRecord",
    "BackupImportError",
    "InvalidFormatError",
    "Ledger",
    "LedgerError",
    "LedgerStore",
    "Member",
    "ParseError",
    "Session",
    "Store",
]
