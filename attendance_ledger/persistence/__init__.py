"""Persistence layer – each store owns its file path, data format, and I/O."""

from ._base import JsonStore
from .ledger_store import LedgerStore

__all__ = [
    "JsonStore",
    "LedgerStore",
]
