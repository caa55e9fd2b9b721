"""User preferences for Attendance Ledger.

Loads settings from ~/.attendance-ledger/preferences.yaml.
Falls back to sensible defaults if the file doesn't exist or is invalid.
Creates a default file on first run so users can discover and edit it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .log import logger

HOME_ENV_VAR = "ATTENDANCE_LEDGER_HOME"
STORE_FILENAME = "store.json"


def ledger_home() -> Path:
    """Return the data directory (``$ATTENDANCE_LEDGER_HOME`` or ``~/.attendance-ledger``)."""
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".attendance-ledger"


def default_prefs_path() -> Path:
    return ledger_home() / "preferences.yaml"


_DEFAULT_YAML = """\
# Attendance Ledger Preferences
# Delete this file to reset to defaults.

storage:
  path: ""                # ledger file (empty = store.json next to this file)

export:
  directory: ""           # where CSV reports and backups go (empty = current dir)

confirm_clear: true       # ask before erasing all data
"""


@dataclass
class StoragePreferences:
    """Where the ledger snapshot lives."""

    path: str = ""  # Empty means ledger_home() / STORE_FILENAME

    def resolve(self) -> Path:
        if self.path:
            return Path(self.path).expanduser()
        return ledger_home() / STORE_FILENAME


@dataclass
class ExportPreferences:
    """Output location for CSV reports and JSON backups."""

    directory: str = ""

    def resolve(self) -> Path:
        return Path(self.directory).expanduser() if self.directory else Path.cwd()


@dataclass
class Preferences:
    """Top-level preferences."""

    storage: StoragePreferences = field(default_factory=StoragePreferences)
    export: ExportPreferences = field(default_factory=ExportPreferences)
    confirm_clear: bool = True


def load_preferences(path: Path | None = None) -> Preferences:
    """Load preferences from YAML file.

    Falls back to sensible defaults if the file doesn't exist or is invalid.
    Creates a default preferences file on first run.
    """
    path = path or default_prefs_path()
    prefs = Preferences()

    if path.exists():
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
            if isinstance(data.get("storage"), dict):
                sdata = data["storage"]
                if "path" in sdata:
                    prefs.storage.path = str(sdata["path"] or "")
            if isinstance(data.get("export"), dict):
                edata = data["export"]
                if "directory" in edata:
                    prefs.export.directory = str(edata["directory"] or "")
            if "confirm_clear" in data:
                prefs.confirm_clear = bool(data["confirm_clear"])
        except (OSError, UnicodeDecodeError, yaml.YAMLError, AttributeError):
            logger.debug("failed to read preferences from %s", path, exc_info=True)
            return Preferences()
    else:
        # Create default file for user to customize
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(_DEFAULT_YAML, encoding="utf-8")
        except OSError:
            logger.debug("could not write default preferences to %s", path)

    return prefs
