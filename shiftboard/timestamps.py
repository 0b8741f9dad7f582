"""ISO-8601 helpers for shift timestamps.

Naive values are treated as UTC, both when parsed from payloads and when
read back from backends that drop the offset (SQLite).
"""

from __future__ import annotations

from datetime import datetime, timezone


def parse_timestamp(raw_value: str) -> datetime:
    value = raw_value.strip()
    if not value:
        raise ValueError("empty timestamp")
    if value[-1] in ("Z", "z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def isoformat_utc(value: datetime | None) -> str | None:
    """Render as ``2025-11-08T09:00:00.000Z``."""
    if value is None:
        return None
    return as_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")
