"""Record id checks. Every DriveDesk row is keyed by a 26-character ULID string."""

from typing import Any

import ulid

RECORD_ID_LENGTH = 26


def is_valid_ulid(value: Any) -> bool:
    """True when ``value`` could be a record id; anything else can never match a row."""
    if not isinstance(value, str) or len(value) != RECORD_ID_LENGTH:
        return False
    try:
        ulid.ULID.from_str(value)
    except ValueError:
        return False
    return True
