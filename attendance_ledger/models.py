"""Data model for the attendance ledger.

Entities are frozen dataclasses and the ``Store`` holds them in tuples,
so a snapshot is a value: mutations build a new ``Store`` instead of
editing the old one.  ``to_dict``/``from_dict`` convert to and from the
JSON layout used on disk and in backups::

    {"members": [...], "sessions": [...], "attendance": [...]}

``from_dict`` takes values as given and keeps unrecognised keys in
``extra``, so an imported backup exports again unchanged.  Keys that are
absent stay absent (``None``) rather than being filled in.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

_MEMBER_KEYS = ("id", "name", "email", "phone")
_SESSION_KEYS = ("id", "title", "date", "notes")
_RECORD_KEYS = ("sessionId", "memberId", "present")


def _extra(data: Mapping[str, Any], known: tuple[str, ...]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if k not in known}


def _pack(pairs: list[tuple[str, Any]], extra: Mapping[str, Any]) -> dict[str, Any]:
    data = {k: v for k, v in pairs if v is not None}
    data.update(extra)
    return data


@dataclass(frozen=True)
class Member:
    """A person tracked by the ledger."""

    id: str
    name: str
    email: str | None = None
    phone: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict, repr=False, hash=False)

    def to_dict(self) -> dict[str, Any]:
        return _pack(
            [
                ("id", self.id),
                ("name", self.name),
                ("email", self.email),
                ("phone", self.phone),
            ],
            self.extra,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Member:
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            email=data.get("email"),
            phone=data.get("phone"),
            extra=_extra(data, _MEMBER_KEYS),
        )


@dataclass(frozen=True)
class Session:
    """A dated meeting that attendance is taken for."""

    id: str
    title: str
    date: str  # ISO 8601 calendar date, e.g. "2025-11-09"
    notes: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict, repr=False, hash=False)

    def to_dict(self) -> dict[str, Any]:
        return _pack(
            [
                ("id", self.id),
                ("title", self.title),
                ("date", self.date),
                ("notes", self.notes),
            ],
            self.extra,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Session:
        extra = _extra(data, _SESSION_KEYS)
        date = data.get("date")
        # Older backups call the field "dateISO".
        if "date" not in data and "dateISO" in data:
            date = extra.pop("dateISO")
        return cls(
            id=data.get("id"),
            title=data.get("title"),
            date=date,
            notes=data.get("notes"),
            extra=extra,
        )


@dataclass(frozen=True)
class AttendanceRecord:
    """Presence of one member at one session.

    At most one record exists per ``(session_id, member_id)``.  A missing
    record means the member was never marked for that session.
    """

    session_id: str
    member_id: str
    present: bool
    extra: Mapping[str, Any] = field(default_factory=dict, repr=False, hash=False)

    @property
    def key(self) -> tuple[str, str]:
        return (self.session_id, self.member_id)

    def to_dict(self) -> dict[str, Any]:
        return _pack(
            [
                ("sessionId", self.session_id),
                ("memberId", self.member_id),
                ("present", self.present),
            ],
            self.extra,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AttendanceRecord:
        return cls(
            session_id=data.get("sessionId"),
            member_id=data.get("memberId"),
            present=data.get("present"),
            extra=_extra(data, _RECORD_KEYS),
        )


@dataclass(frozen=True)
class Store:
    """The complete ledger state: one snapshot."""

    members: tuple[Member, ...] = ()
    sessions: tuple[Session, ...] = ()
    attendance: tuple[AttendanceRecord, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.members or self.sessions or self.attendance)

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            "members": [m.to_dict() for m in self.members],
            "sessions": [s.to_dict() for s in self.sessions],
            "attendance": [a.to_dict() for a in self.attendance],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Store:
        """Build a Store from its JSON layout.

        Callers are expected to have run :func:`has_store_shape` first;
        elements that are not mappings raise ``TypeError``.
        """
        return cls(
            members=tuple(Member.from_dict(_as_mapping(m)) for m in data["members"]),
            sessions=tuple(Session.from_dict(_as_mapping(s)) for s in data["sessions"]),
            attendance=tuple(
                AttendanceRecord.from_dict(_as_mapping(a)) for a in data["attendance"]
            ),
        )


EMPTY_STORE = Store()


def has_store_shape(candidate: Any) -> bool:
    """Return True if *candidate* has the three store collections as lists.

    Structural check only: element contents are not inspected.
    """
    return (
        isinstance(candidate, Mapping)
        and isinstance(candidate.get("members"), list)
        and isinstance(candidate.get("sessions"), list)
        and isinstance(candidate.get("attendance"), list)
    )


def _as_mapping(item: Any) -> Mapping[str, Any]:
    if not isinstance(item, Mapping):
        raise TypeError(f"expected a JSON object, got {type(item).__name__}")
    return item
