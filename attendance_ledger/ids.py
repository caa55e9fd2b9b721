"""Identifier generation for members and sessions."""

from __future__ import annotations

import random
import time

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def _base36(n: int) -> str:
    if n == 0:
        return "0"
    digits: list[str] = []
    while n:
        n, rem = divmod(n, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def new_id() -> str:
    """Return a fresh opaque identifier.

    Random bits followed by the current time in milliseconds, both in
    base 36.  Unique enough for one ledger; not a security token.
    """
    return _base36(random.getrandbits(52)) + _base36(int(time.time() * 1000))
