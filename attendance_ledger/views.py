"""Read-only projections of a snapshot.

Computed on demand by scanning; a single organisation's history is small
enough that no index is kept.
"""

from __future__ import annotations

from .models import Member, Session, Store


def attendance_for(store: Store, session_id: str) -> dict[str, bool]:
    """Map member id -> present flag for every record of *session_id*.

    Members never marked for the session have no key.
    """
    return {
        record.member_id: record.present
        for record in store.attendance
        if record.session_id == session_id
    }


def find_member(store: Store, member_id: str) -> Member | None:
    return next((m for m in store.members if m.id == member_id), None)


def find_session(store: Store, session_id: str) -> Session | None:
    return next((s for s in store.sessions if s.id == session_id), None)


def roster(store: Store, session_id: str) -> list[tuple[Member, bool]]:
    """Every member with their presence at *session_id*, in member order.

    Unmarked members are reported as not present.
    """
    marks = attendance_for(store, session_id)
    return [(member, marks.get(member.id, False)) for member in store.members]


def contact_line(member: Member) -> str:
    """Email and phone joined for display, or ``""`` when neither is set."""
    return " · ".join(str(part) for part in (member.email, member.phone) if part)
