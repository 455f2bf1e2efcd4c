from __future__ import annotations

import re
from typing import Optional, Pattern

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def first_non_empty(*values: object) -> Optional[str]:
    """Return the first value that is a non-blank string, trimmed."""

    for value in values:
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def exact_match_pattern(identifier: str) -> Pattern[str]:
    """Case-insensitive, fully anchored match for a stored email/username.

    pymongo encodes compiled patterns as BSON regexes, so the same object
    drives both the Mongo query and in-memory matching.
    """

    return re.compile(f"^{re.escape(identifier)}$", re.IGNORECASE)
