"""Shared test fixtures for the attendance-ledger test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from attendance_ledger import mutations
from attendance_ledger.ledger import Ledger
from attendance_ledger.models import EMPTY_STORE, Store
from attendance_ledger.persistence import LedgerStore


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep every test away from the real ~/.attendance-ledger."""
    home = tmp_path / "ledger-home"
    monkeypatch.setenv("ATTENDANCE_LEDGER_HOME", str(home))
    return home


@pytest.fixture
def ledger_path(tmp_path: Path) -> Path:
    return tmp_path / "store.json"


@pytest.fixture
def ledger(ledger_path: Path) -> Ledger:
    """A ledger backed by an empty file location."""
    return Ledger(LedgerStore(ledger_path))


@pytest.fixture
def week_one() -> tuple[Store, str, str]:
    """Ann, a "Week 1" session on 2025-01-01, and Ann marked present.

    Returns ``(store, session_id, member_id)``.
    """
    store, ann = mutations.add_member(EMPTY_STORE, "Ann")
    store, week = mutations.add_session(store, "Week 1", "2025-01-01")
    store = mutations.set_attendance(store, week.id, ann.id, True)
    return store, week.id, ann.id


@pytest.fixture
def sample_backup() -> dict:
    """A backup document in the on-disk layout."""
    return {
        "members": [
            {"id": "m1", "name": "Ann", "email": "ann@example.org"},
            {"id": "m2", "name": "Bo", "phone": "555-0101"},
        ],
        "sessions": [
            {"id": "s1", "title": "Week 1", "date": "2025-01-01", "notes": "Kickoff"},
        ],
        "attendance": [
            {"sessionId": "s1", "memberId": "m1", "present": True},
            {"sessionId": "s1", "memberId": "m2", "present": False},
        ],
    }
