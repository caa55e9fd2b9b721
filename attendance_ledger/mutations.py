"""Pure snapshot transformations.

Every function takes the current :class:`~attendance_ledger.models.Store`
and returns a new one; nothing here touches disk.  :class:`Ledger` applies
these and persists the result.

Ids handed to the update/remove/mark functions must come from a current
read of the store.  An id that is not present is a silent no-op.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from .errors import InvalidFormatError
from .ids import new_id
from .models import EMPTY_STORE, AttendanceRecord, Member, Session, Store, has_store_shape
from .views import find_member, find_session

_MEMBER_FIELDS = frozenset({"name", "email", "phone"})
_SESSION_FIELDS = frozenset({"title", "date", "notes"})


def _check_patch(patch: dict[str, Any], allowed: frozenset[str]) -> None:
    unknown = set(patch) - allowed
    if unknown:
        raise ValueError(f"cannot update field(s): {', '.join(sorted(unknown))}")


# -- members ------------------------------------------------------------------


def add_member(
    store: Store,
    name: str,
    email: str | None = None,
    phone: str | None = None,
) -> tuple[Store, Member]:
    """Append a new member with a fresh id.  No de-duplication."""
    member = Member(id=new_id(), name=name, email=email, phone=phone)
    return replace(store, members=store.members + (member,)), member


def update_member(store: Store, member_id: str, **patch: Any) -> Store:
    """Merge *patch* into the member with *member_id*."""
    _check_patch(patch, _MEMBER_FIELDS)
    return replace(
        store,
        members=tuple(
            replace(m, **patch) if m.id == member_id else m for m in store.members
        ),
    )


def remove_member(store: Store, member_id: str) -> Store:
    """Delete a member and every attendance record that references it."""
    return replace(
        store,
        members=tuple(m for m in store.members if m.id != member_id),
        attendance=tuple(a for a in store.attendance if a.member_id != member_id),
    )


# -- sessions -----------------------------------------------------------------


def add_session(
    store: Store,
    title: str,
    date: str,
    notes: str | None = None,
) -> tuple[Store, Session]:
    """Append a new session with a fresh id."""
    session = Session(id=new_id(), title=title, date=date, notes=notes)
    return replace(store, sessions=store.sessions + (session,)), session


def update_session(store: Store, session_id: str, **patch: Any) -> Store:
    """Merge *patch* into the session with *session_id*."""
    _check_patch(patch, _SESSION_FIELDS)
    return replace(
        store,
        sessions=tuple(
            replace(s, **patch) if s.id == session_id else s for s in store.sessions
        ),
    )


def remove_session(store: Store, session_id: str) -> Store:
    """Delete a session and every attendance record that references it."""
    return replace(
        store,
        sessions=tuple(s for s in store.sessions if s.id != session_id),
        attendance=tuple(a for a in store.attendance if a.session_id != session_id),
    )


# -- attendance ---------------------------------------------------------------


def set_attendance(store: Store, session_id: str, member_id: str, present: bool) -> Store:
    """Upsert the record for ``(session_id, member_id)``.

    An existing record keeps its position and only has ``present``
    overwritten; otherwise a new record is appended.  Nothing changes
    unless both the session and the member exist.
    """
    if find_session(store, session_id) is None or find_member(store, member_id) is None:
        return store
    records = list(store.attendance)
    for i, record in enumerate(records):
        if record.session_id == session_id and record.member_id == member_id:
            records[i] = replace(record, present=present)
            break
    else:
        records.append(AttendanceRecord(session_id, member_id, present))
    return replace(store, attendance=tuple(records))


# -- whole-store operations ---------------------------------------------------


def clear_all(store: Store) -> Store:  # noqa: ARG001
    """Return the empty store."""
    return EMPTY_STORE


def import_json(store: Store, candidate: Any) -> Store:  # noqa: ARG001
    """Replace the snapshot with *candidate* (already-parsed JSON).

    Only the shape is checked: a mapping with ``members``, ``sessions``
    and ``attendance`` lists.  Raises :class:`InvalidFormatError` without
    producing a new snapshot when the check fails.
    """
    if not has_store_shape(candidate):
        raise InvalidFormatError()
    try:
        return Store.from_dict(candidate)
    except TypeError as exc:
        raise InvalidFormatError() from exc
