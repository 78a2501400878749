"""CSV value normalization — handles BOM, trailing spaces, timestamp quirks."""

from __future__ import annotations

import re
from datetime import datetime, timezone


def normalize_column_name(name: str) -> str:
    """Normalize a CSV column name.

    - Removes BOM characters (\\ufeff)
    - Strips leading/trailing whitespace
    - Replaces runs of spaces / non-breaking spaces with a single underscore
    - Lowercases
    - Strips non-alphanumeric characters (except underscore)
    """
    name = name.replace("\ufeff", "")
    name = name.strip()
    name = re.sub(r"[\s\u00a0]+", "_", name)
    name = name.lower()
    name = re.sub(r"[^\w]", "", name, flags=re.UNICODE)
    return name


def clean_string(value: str | None) -> str | None:
    """Strip whitespace and return None for empty strings."""
    if value is None:
        return None
    value = value.strip()
    return value if value else None


def clean_status(value: str | None) -> str | None:
    """Free-text status → UPPER_SNAKE ('in transit' → 'IN_TRANSIT'). Empty stays None."""
    value = clean_string(value)
    if value is None:
        return None
    return re.sub(r"[\s\-]+", "_", value).upper()


_TIMESTAMP_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y",
)


def parse_timestamp(raw: str | None) -> datetime | None:
    """Parse ISO-8601 (with 'Z' suffix) or a few spreadsheet formats into an aware UTC datetime."""
    raw = clean_string(raw)
    if raw is None:
        return None
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        parsed = None
        for fmt in _TIMESTAMP_FORMATS:
            try:
                parsed = datetime.strptime(raw, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
