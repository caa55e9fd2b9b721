"""Base JSON persistence store."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from ..log import logger


class JsonStore:
    """One JSON document in one file, replaced atomically on save.

    ``save_raw`` writes a sibling temp file and renames it over ``path``,
    so a failed write leaves the previous document intact.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def load_raw(self) -> Any:
        """Parse the file, or return ``None`` if it is missing or unreadable."""
        try:
            if self.path.exists():
                return json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError):
            logger.debug("failed to load JSON store from %s", self.path, exc_info=True)
        return None

    def save_raw(self, data: Any) -> None:
        """Write *data* as pretty-printed JSON, creating parents as needed.

        Raises ``OSError`` or ``ValueError`` (e.g. unencodable text); the
        existing file is untouched in either case.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(json.dumps(data, indent=2, ensure_ascii=False))
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
