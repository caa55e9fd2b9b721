"""Pure-function export and import helpers.

CSV attendance reports per session, and full JSON backups of the
snapshot.  No file I/O here; callers decide where the text goes.
"""

from __future__ import annotations

import json
from typing import Any

from .errors import ParseError
from .models import EMPTY_STORE, Session, Store
from .mutations import import_json
from .views import attendance_for, find_session

BACKUP_FILENAME = "attendance-backup.json"

CSV_HEADER = ["Member Name", "Email", "Phone", "Present", "Session Title", "Date"]

_CSV_SPECIAL = (",", '"', "\n")


def csv_field(value: Any) -> str:
    """Quote *value* for CSV if it contains a comma, quote, or newline.

    ``None`` becomes an empty field and anything else its ``str()``, since
    imported backups may hold numbers or nulls.  Embedded quotes are
    doubled; ``\\r`` alone does not trigger quoting.
    """
    text = "" if value is None else str(value)
    if any(ch in text for ch in _CSV_SPECIAL):
        return '"' + text.replace('"', '""') + '"'
    return text


def csv_row(fields: list[Any]) -> str:
    return ",".join(csv_field(f) for f in fields)


def export_csv(store: Store, session_id: str) -> str:
    """Attendance report for one session, one row per member.

    Rows follow member order and are joined with ``\\n`` (no trailing
    newline).  Raises ``KeyError`` if *session_id* is not in the store.
    """
    session = find_session(store, session_id)
    if session is None:
        raise KeyError(session_id)
    marks = attendance_for(store, session_id)
    rows = [csv_row(CSV_HEADER)]
    for member in store.members:
        rows.append(
            csv_row(
                [
                    member.name,
                    member.email,
                    member.phone,
                    "Yes" if marks.get(member.id) else "No",
                    session.title,
                    session.date,
                ]
            )
        )
    return "\n".join(rows)


def csv_filename(session: Session) -> str:
    """``<date>-<title>-attendance.csv`` with the title as given."""
    return f"{session.date}-{session.title}-attendance.csv"


def export_json(store: Store) -> str:
    """The full snapshot as pretty-printed JSON."""
    return json.dumps(store.to_dict(), indent=2, ensure_ascii=False)


def parse_backup(text: str) -> Store:
    """Parse backup *text* into a Store.

    Raises :class:`ParseError` for text that is not JSON and
    :class:`InvalidFormatError` for JSON without the store shape.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, RecursionError) as exc:
        raise ParseError() from exc
    return import_json(EMPTY_STORE, data)
