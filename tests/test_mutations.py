"""Tests for the pure snapshot transformations."""

from __future__ import annotations

import json

import pytest

from attendance_ledger import mutations
from attendance_ledger.errors import InvalidFormatError
from attendance_ledger.export import export_json
from attendance_ledger.models import EMPTY_STORE, AttendanceRecord, Store


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------


class TestAddMember:
    def test_appends_with_fresh_id(self):
        store, ann = mutations.add_member(EMPTY_STORE, "Ann", email="ann@example.org")
        assert store.members == (ann,)
        assert ann.id
        assert ann.email == "ann@example.org"
        assert ann.phone is None

    def test_keeps_insertion_order(self):
        store, ann = mutations.add_member(EMPTY_STORE, "Ann")
        store, bo = mutations.add_member(store, "Bo")
        assert [m.name for m in store.members] == ["Ann", "Bo"]

    def test_no_dedup(self):
        store, first = mutations.add_member(EMPTY_STORE, "Ann")
        store, second = mutations.add_member(store, "Ann")
        assert len(store.members) == 2
        assert first.id != second.id

    def test_input_snapshot_untouched(self):
        mutations.add_member(EMPTY_STORE, "Ann")
        assert EMPTY_STORE.members == ()


class TestUpdateMember:
    def test_merges_patch(self):
        store, ann = mutations.add_member(EMPTY_STORE, "Ann", email="a@x.org")
        store = mutations.update_member(store, ann.id, name="Annie")
        updated = store.members[0]
        assert updated.name == "Annie"
        assert updated.email == "a@x.org"
        assert updated.id == ann.id

    def test_clear_optional_field(self):
        store, ann = mutations.add_member(EMPTY_STORE, "Ann", phone="555")
        store = mutations.update_member(store, ann.id, phone=None)
        assert store.members[0].phone is None

    def test_unknown_id_is_noop(self):
        store, _ = mutations.add_member(EMPTY_STORE, "Ann")
        assert mutations.update_member(store, "missing", name="Zed") == store

    def test_id_cannot_be_patched(self):
        store, ann = mutations.add_member(EMPTY_STORE, "Ann")
        with pytest.raises(ValueError, match="id"):
            mutations.update_member(store, ann.id, id="other")

    def test_unknown_field_rejected(self):
        store, ann = mutations.add_member(EMPTY_STORE, "Ann")
        with pytest.raises(ValueError, match="nickname"):
            mutations.update_member(store, ann.id, nickname="A")


class TestRemoveMember:
    def test_cascades_attendance(self, week_one):
        store, session_id, member_id = week_one
        store, bo = mutations.add_member(store, "Bo")
        store = mutations.set_attendance(store, session_id, bo.id, False)

        store = mutations.remove_member(store, member_id)

        assert [m.name for m in store.members] == ["Bo"]
        assert all(a.member_id != member_id for a in store.attendance)
        assert store.attendance == (AttendanceRecord(session_id, bo.id, False),)
        assert len(store.sessions) == 1

    def test_unknown_id_is_noop(self, week_one):
        store, _, _ = week_one
        assert mutations.remove_member(store, "missing") == store


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


class TestSessions:
    def test_add(self):
        store, week = mutations.add_session(EMPTY_STORE, "Week 1", "2025-01-01")
        assert store.sessions == (week,)
        assert week.notes is None

    def test_update(self):
        store, week = mutations.add_session(EMPTY_STORE, "Week 1", "2025-01-01")
        store = mutations.update_session(store, week.id, title="Week One", notes="n")
        assert store.sessions[0].title == "Week One"
        assert store.sessions[0].date == "2025-01-01"
        assert store.sessions[0].notes == "n"

    def test_update_unknown_is_noop(self):
        store, _ = mutations.add_session(EMPTY_STORE, "Week 1", "2025-01-01")
        assert mutations.update_session(store, "missing", title="x") == store

    def test_update_rejects_id(self):
        store, week = mutations.add_session(EMPTY_STORE, "Week 1", "2025-01-01")
        with pytest.raises(ValueError):
            mutations.update_session(store, week.id, id="x")

    def test_remove_cascades(self, week_one):
        store, session_id, member_id = week_one
        before_members = store.members

        store = mutations.remove_session(store, session_id)

        assert store.sessions == ()
        assert store.attendance == ()
        assert store.members == before_members

    def test_remove_keeps_other_sessions_records(self, week_one):
        store, session_id, member_id = week_one
        store, week2 = mutations.add_session(store, "Week 2", "2025-01-08")
        store = mutations.set_attendance(store, week2.id, member_id, True)

        store = mutations.remove_session(store, session_id)

        assert store.attendance == (AttendanceRecord(week2.id, member_id, True),)


# ---------------------------------------------------------------------------
# Attendance
# ---------------------------------------------------------------------------


class TestSetAttendance:
    def test_insert(self, week_one):
        store, session_id, member_id = week_one
        assert store.attendance == (AttendanceRecord(session_id, member_id, True),)

    def test_idempotent(self, week_one):
        store, session_id, member_id = week_one
        store = mutations.set_attendance(store, session_id, member_id, True)
        store = mutations.set_attendance(store, session_id, member_id, True)
        matching = [a for a in store.attendance if a.key == (session_id, member_id)]
        assert len(matching) == 1

    def test_overwrite_keeps_position(self, week_one):
        store, session_id, member_id = week_one
        store, bo = mutations.add_member(store, "Bo")
        store = mutations.set_attendance(store, session_id, bo.id, True)

        store = mutations.set_attendance(store, session_id, member_id, False)

        assert store.attendance == (
            AttendanceRecord(session_id, member_id, False),
            AttendanceRecord(session_id, bo.id, True),
        )

    def test_distinct_sessions_are_distinct_keys(self, week_one):
        store, session_id, member_id = week_one
        store, week2 = mutations.add_session(store, "Week 2", "2025-01-08")
        store = mutations.set_attendance(store, week2.id, member_id, True)
        assert len(store.attendance) == 2

    def test_unknown_session_is_noop(self, week_one):
        store, _, member_id = week_one
        assert mutations.set_attendance(store, "missing", member_id, True) == store

    def test_unknown_member_is_noop(self, week_one):
        store, session_id, _ = week_one
        assert mutations.set_attendance(store, session_id, "missing", False) == store

    def test_no_record_without_members(self):
        store, week = mutations.add_session(EMPTY_STORE, "Week 1", "2025-01-01")
        store = mutations.set_attendance(store, week.id, "nobody", True)
        assert store.attendance == ()


# ---------------------------------------------------------------------------
# Whole-store operations
# ---------------------------------------------------------------------------


class TestClearAll:
    def test_returns_empty(self, week_one):
        store, _, _ = week_one
        assert mutations.clear_all(store) == EMPTY_STORE


class TestImportJson:
    def test_replaces_wholesale(self, week_one, sample_backup):
        store, _, _ = week_one
        imported = mutations.import_json(store, sample_backup)
        assert [m.id for m in imported.members] == ["m1", "m2"]
        assert imported.sessions[0].notes == "Kickoff"

    @pytest.mark.parametrize("missing", ["members", "sessions", "attendance"])
    def test_missing_collection_rejected(self, week_one, missing):
        store, _, _ = week_one
        candidate = json.loads(export_json(store))
        del candidate[missing]
        with pytest.raises(InvalidFormatError):
            mutations.import_json(store, candidate)
        # the caller's snapshot is a value and stays as it was
        assert len(store.members) == 1
        assert len(store.attendance) == 1

    def test_non_object_rejected(self):
        for candidate in (None, [], "text", 3):
            with pytest.raises(InvalidFormatError):
                mutations.import_json(EMPTY_STORE, candidate)

    def test_non_object_element_rejected(self):
        with pytest.raises(InvalidFormatError):
            mutations.import_json(
                EMPTY_STORE, {"members": [1], "sessions": [], "attendance": []}
            )

    def test_no_deep_validation(self):
        candidate = {
            "members": [{"id": "m1", "name": "Ann"}, {"id": "m1", "name": "Ann"}],
            "sessions": [],
            "attendance": [{"sessionId": "gone", "memberId": "m1", "present": True}],
        }
        store = mutations.import_json(EMPTY_STORE, candidate)
        assert len(store.members) == 2
        assert len(store.attendance) == 1

    def test_round_trip(self, week_one):
        store, _, _ = week_one
        store, _ = mutations.add_member(store, "Bo", email="bo@x.org", phone="1")
        store, _ = mutations.add_session(store, "Week 2", "2025-01-08", notes="n")
        assert mutations.import_json(EMPTY_STORE, json.loads(export_json(store))) == store

    def test_result_is_store(self, sample_backup):
        assert isinstance(mutations.import_json(EMPTY_STORE, sample_backup), Store)
