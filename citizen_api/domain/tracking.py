"""Tracking identifiers handed to citizens when they submit an application."""
from __future__ import annotations

import re
import secrets
import time

TRACKING_PREFIX = "T"
SUFFIX_LENGTH = 6
TRACKING_PATTERN = re.compile(r"T-[0-9A-Z]+-[0-9A-Z]{6}")

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("base36 encoding expects a non-negative integer")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def random_base36(length: int) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def generate_tracking_id(now_ms: int | None = None) -> str:
    """
    Build an id such as ``T-MGX3K2A1-4F9QZC``: epoch milliseconds in base36
    plus a random suffix, upper-cased.

    Collisions are not checked here; the unique constraint on
    ``applications.tracking_id`` rejects a duplicate at insert time.
    """
    millis = int(time.time() * 1000) if now_ms is None else now_ms
    return f"{TRACKING_PREFIX}-{to_base36(millis)}-{random_base36(SUFFIX_LENGTH)}".upper()


def is_valid_tracking_id(value: str | None) -> bool:
    if not value:
        return False
    return bool(TRACKING_PATTERN.fullmatch(value))
