"""Durable storage for the ledger snapshot."""

from __future__ import annotations

from pathlib import Path

from ..log import logger
from ..models import EMPTY_STORE, Store, has_store_shape
from ._base import JsonStore


class LedgerStore(JsonStore):
    """The whole ledger in one JSON file.

    On-disk format: ``{"members": [...], "sessions": [...], "attendance": [...]}``

    Every save rewrites the complete snapshot.
    """

    def __init__(self, path: Path) -> None:
        super().__init__(path)

    def load(self) -> Store:
        """Load the snapshot, falling back to the empty store.

        Missing, unreadable, or malformed files are treated as "no data
        yet"; nothing is raised.
        """
        data = self.load_raw()
        if data is None:
            return EMPTY_STORE
        if not has_store_shape(data):
            logger.debug("ignoring ledger file with unexpected shape: %s", self.path)
            return EMPTY_STORE
        try:
            return Store.from_dict(data)
        except TypeError:
            logger.debug("ignoring ledger file with bad entries: %s", self.path, exc_info=True)
            return EMPTY_STORE

    def save(self, store: Store) -> None:
        """Persist *store*; failures are logged and swallowed.

        ``ValueError`` covers text that cannot be encoded, such as a lone
        surrogate brought in by an imported backup.
        """
        try:
            self.save_raw(store.to_dict())
        except (OSError, ValueError):
            logger.debug("failed to save ledger to %s", self.path, exc_info=True)
