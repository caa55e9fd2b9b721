"""Entry point for the Attendance Ledger CLI."""

from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path

from . import __version__
from .errors import BackupImportError
from .export import BACKUP_FILENAME, csv_filename
from .ledger import Ledger
from .log import enable_debug_logging, logger
from .persistence import LedgerStore
from .preferences import Preferences, load_preferences
from .views import contact_line

# ---------------------------------------------------------------------------
# Argument helpers
# ---------------------------------------------------------------------------


def _iso_date(value: str) -> str:
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO date (YYYY-MM-DD): {value}") from None


def _non_blank(value: str) -> str:
    value = value.strip()
    if not value:
        raise argparse.ArgumentTypeError("must not be empty")
    return value


def _optional(value: str | None) -> str | None:
    """Blank optional fields are stored as missing, not as ``""``."""
    if value is None:
        return None
    return value.strip() or None


def _write_output(directory: Path, filename: str, content: str) -> Path:
    target = directory / filename.replace("/", "-")
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    return target


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="attendance-ledger",
        description="Track members, sessions and attendance on this device",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"attendance-ledger {__version__}",
    )
    parser.add_argument(
        "--data",
        type=Path,
        help="Ledger file to use (default: from preferences)",
    )
    parser.add_argument(
        "--prefs",
        type=Path,
        help="Preferences file (default: ~/.attendance-ledger/preferences.yaml)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug output to stderr",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("members", help="List members")
    p = sub.add_parser("add-member", help="Add a member")
    p.add_argument("name", type=_non_blank)
    p.add_argument("--email")
    p.add_argument("--phone")
    p = sub.add_parser("update-member", help="Change a member's details")
    p.add_argument("member_id")
    p.add_argument("--name", type=_non_blank)
    p.add_argument("--email")
    p.add_argument("--phone")
    p = sub.add_parser("remove-member", help="Remove a member and their attendance")
    p.add_argument("member_id")

    sub.add_parser("sessions", help="List sessions")
    p = sub.add_parser("add-session", help="Add a session")
    p.add_argument("title", type=_non_blank)
    p.add_argument("--date", type=_iso_date, default=None, help="Default: today")
    p.add_argument("--notes")
    p = sub.add_parser("update-session", help="Change a session's details")
    p.add_argument("session_id")
    p.add_argument("--title", type=_non_blank)
    p.add_argument("--date", type=_iso_date)
    p.add_argument("--notes")
    p = sub.add_parser("remove-session", help="Remove a session and its attendance")
    p.add_argument("session_id")

    p = sub.add_parser("mark", help="Mark a member present (or --absent)")
    p.add_argument("session_id")
    p.add_argument("member_id")
    p.add_argument("--absent", action="store_true")
    p = sub.add_parser("show", help="Show attendance for a session")
    p.add_argument("session_id")

    p = sub.add_parser("export-csv", help="Write a session's attendance report")
    p.add_argument("session_id")
    p.add_argument("--output", "-o", type=Path, help="Output directory")
    p = sub.add_parser("backup", help=f"Write {BACKUP_FILENAME}")
    p.add_argument("--output", "-o", type=Path, help="Output directory")
    p = sub.add_parser("restore", help="Replace all data with a JSON backup")
    p.add_argument("file", type=Path)
    p = sub.add_parser("clear", help="Erase all data")
    p.add_argument("--yes", "-y", action="store_true", help="Do not ask")

    return parser


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_members(ledger: Ledger) -> int:
    members = ledger.snapshot.members
    if not members:
        print("No members yet. Add your first member with add-member.")
        return 0
    for m in members:
        print(f"{m.id}  {m.name}  {contact_line(m) or '(no contact)'}")
    return 0


def _cmd_sessions(ledger: Ledger) -> int:
    sessions = ledger.snapshot.sessions
    if not sessions:
        print("No sessions yet. Create one with add-session.")
        return 0
    for s in sessions:
        line = f"{s.id}  {s.date}  {s.title}"
        if s.notes:
            line += f"  ({s.notes})"
        print(line)
    return 0


def _cmd_mark(ledger: Ledger, args: argparse.Namespace) -> int:
    if ledger.find_session(args.session_id) is None:
        print(f"Unknown session: {args.session_id}", file=sys.stderr)
        return 1
    if ledger.find_member(args.member_id) is None:
        print(f"Unknown member: {args.member_id}", file=sys.stderr)
        return 1
    ledger.set_attendance(args.session_id, args.member_id, not args.absent)
    return 0


def _cmd_show(ledger: Ledger, args: argparse.Namespace) -> int:
    session = ledger.find_session(args.session_id)
    if session is None:
        print(f"Unknown session: {args.session_id}", file=sys.stderr)
        return 1
    print(f"{session.date} - {session.title}")
    rows = ledger.roster(session.id)
    if not rows:
        print("No members yet. Add members to mark attendance.")
    for member, present in rows:
        print(f"  [{'x' if present else ' '}] {member.name}  ({member.id})")
    return 0


def _cmd_export_csv(ledger: Ledger, args: argparse.Namespace, prefs: Preferences) -> int:
    session = ledger.find_session(args.session_id)
    if session is None:
        print(f"Unknown session: {args.session_id}", file=sys.stderr)
        return 1
    directory = args.output or prefs.export.resolve()
    target = _write_output(directory, csv_filename(session), ledger.export_csv(session.id))
    print(f"Wrote {target}")
    return 0


def _cmd_backup(ledger: Ledger, args: argparse.Namespace, prefs: Preferences) -> int:
    directory = args.output or prefs.export.resolve()
    target = _write_output(directory, BACKUP_FILENAME, ledger.export_json())
    print(f"Wrote {target}")
    return 0


def _cmd_restore(ledger: Ledger, args: argparse.Namespace) -> int:
    try:
        text = args.file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Cannot read {args.file}: {exc}", file=sys.stderr)
        return 1
    try:
        ledger.import_text(text)
    except BackupImportError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    snap = ledger.snapshot
    print(
        f"Restored {len(snap.members)} members, {len(snap.sessions)} sessions, "
        f"{len(snap.attendance)} attendance records"
    )
    return 0


def _cmd_clear(ledger: Ledger, args: argparse.Namespace, prefs: Preferences) -> int:
    if prefs.confirm_clear and not args.yes:
        try:
            answer = input(
                "This will erase all local data on this device. Continue? [y/N] "
            )
        except EOFError:
            answer = ""
        if answer.strip().lower() not in ("y", "yes"):
            print("Aborted.")
            return 1
    ledger.clear_all()
    print("All data cleared.")
    return 0


def _run(ledger: Ledger, args: argparse.Namespace, prefs: Preferences) -> int:
    cmd = args.command
    if cmd == "members":
        return _cmd_members(ledger)
    if cmd == "add-member":
        member = ledger.add_member(
            args.name, email=_optional(args.email), phone=_optional(args.phone)
        )
        print(member.id)
        return 0
    if cmd == "update-member":
        patch = {}
        if args.name is not None:
            patch["name"] = args.name
        if args.email is not None:
            patch["email"] = _optional(args.email)
        if args.phone is not None:
            patch["phone"] = _optional(args.phone)
        ledger.update_member(args.member_id, **patch)
        return 0
    if cmd == "remove-member":
        ledger.remove_member(args.member_id)
        return 0
    if cmd == "sessions":
        return _cmd_sessions(ledger)
    if cmd == "add-session":
        session = ledger.add_session(
            args.title,
            args.date or date.today().isoformat(),
            notes=_optional(args.notes),
        )
        print(session.id)
        return 0
    if cmd == "update-session":
        patch = {}
        if args.title is not None:
            patch["title"] = args.title
        if args.date is not None:
            patch["date"] = args.date
        if args.notes is not None:
            patch["notes"] = _optional(args.notes)
        ledger.update_session(args.session_id, **patch)
        return 0
    if cmd == "remove-session":
        ledger.remove_session(args.session_id)
        return 0
    if cmd == "mark":
        return _cmd_mark(ledger, args)
    if cmd == "show":
        return _cmd_show(ledger, args)
    if cmd == "export-csv":
        return _cmd_export_csv(ledger, args, prefs)
    if cmd == "backup":
        return _cmd_backup(ledger, args, prefs)
    if cmd == "restore":
        return _cmd_restore(ledger, args)
    if cmd == "clear":
        return _cmd_clear(ledger, args, prefs)
    raise AssertionError(f"unhandled command: {cmd}")


def main(argv: list[str] | None = None) -> int:
    """Run the Attendance Ledger CLI and return the exit status."""
    args = _build_parser().parse_args(argv)
    if args.verbose:
        enable_debug_logging()

    prefs = load_preferences(args.prefs)
    data_path = args.data or prefs.storage.resolve()
    ledger = Ledger(LedgerStore(data_path))

    try:
        return _run(ledger, args, prefs)
    except (OSError, UnicodeError) as exc:
        logger.debug("command %s failed", args.command, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
