"""The ledger: the one owned holder of the current snapshot.

A :class:`Ledger` is constructed around a :class:`LedgerStore`, loads the
snapshot from it once, and after every mutation replaces the snapshot and
writes the whole thing back.  Front ends use the methods here as their
only write path and :attr:`Ledger.snapshot` plus the view helpers as
their read path.

Ids passed to update/remove/mark must come from a current read of
:attr:`Ledger.snapshot`.  Stale ids are not an error; the call changes
nothing.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from . import export, mutations, views
from .log import logger
from .models import Member, Session, Store
from .persistence import LedgerStore


class Ledger:
    """Members, sessions and attendance backed by a JSON file."""

    def __init__(self, store: LedgerStore) -> None:
        self._store = store
        self._snapshot: Store = store.load()
        logger.debug(
            "loaded ledger from %s: %d members, %d sessions, %d records",
            store.path,
            len(self._snapshot.members),
            len(self._snapshot.sessions),
            len(self._snapshot.attendance),
        )

    @property
    def snapshot(self) -> Store:
        """The current state.  Immutable; safe to hold on to."""
        return self._snapshot

    @property
    def path(self) -> Path:
        return self._store.path

    def _commit(self, new: Store) -> None:
        self._snapshot = new
        self._store.save(new)

    # -- members --------------------------------------------------------------

    def add_member(
        self, name: str, email: str | None = None, phone: str | None = None
    ) -> Member:
        new, member = mutations.add_member(self._snapshot, name, email, phone)
        self._commit(new)
        return member

    def update_member(self, member_id: str, **patch: Any) -> None:
        self._commit(mutations.update_member(self._snapshot, member_id, **patch))

    def remove_member(self, member_id: str) -> None:
        self._commit(mutations.remove_member(self._snapshot, member_id))

    # -- sessions -------------------------------------------------------------

    def add_session(self, title: str, date: str, notes: str | None = None) -> Session:
        new, session = mutations.add_session(self._snapshot, title, date, notes)
        self._commit(new)
        return session

    def update_session(self, session_id: str, **patch: Any) -> None:
        self._commit(mutations.update_session(self._snapshot, session_id, **patch))

    def remove_session(self, session_id: str) -> None:
        self._commit(mutations.remove_session(self._snapshot, session_id))

    # -- attendance -----------------------------------------------------------

    def set_attendance(self, session_id: str, member_id: str, present: bool) -> None:
        self._commit(
            mutations.set_attendance(self._snapshot, session_id, member_id, present)
        )

    def attendance_for(self, session_id: str) -> dict[str, bool]:
        return views.attendance_for(self._snapshot, session_id)

    def roster(self, session_id: str) -> list[tuple[Member, bool]]:
        return views.roster(self._snapshot, session_id)

    def find_member(self, member_id: str) -> Member | None:
        return views.find_member(self._snapshot, member_id)

    def find_session(self, session_id: str) -> Session | None:
        return views.find_session(self._snapshot, session_id)

    # -- whole store ----------------------------------------------------------

    def clear_all(self) -> None:
        self._commit(mutations.clear_all(self._snapshot))

    def import_json(self, candidate: Any) -> None:
        """Replace everything with already-parsed backup data.

        Raises :class:`~attendance_ledger.errors.InvalidFormatError` and
        leaves the ledger untouched if the shape check fails.
        """
        self._commit(mutations.import_json(self._snapshot, candidate))

    def import_text(self, text: str) -> None:
        """Replace everything with the contents of a backup file.

        Raises :class:`~attendance_ledger.errors.ParseError` or
        :class:`~attendance_ledger.errors.InvalidFormatError`; either way
        nothing changes.
        """
        self._commit(export.parse_backup(text))

    def export_json(self) -> str:
        return export.export_json(self._snapshot)

    def export_csv(self, session_id: str) -> str:
        return export.export_csv(self._snapshot, session_id)
