"""Package logger for Attendance Ledger."""

from __future__ import annotations

import logging

logger = logging.getLogger("attendance_ledger")


def enable_debug_logging() -> None:
    """Send DEBUG records to stderr (used by ``--verbose``)."""
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
