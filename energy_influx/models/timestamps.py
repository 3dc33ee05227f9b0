# energy_influx/models/timestamps.py

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def from_epoch_seconds(value: Any) -> datetime:
    """Unix epoch seconds (int, float or decimal string) to an aware UTC datetime."""
    if isinstance(value, bool):
        raise TypeError(f"Expected epoch seconds, got {value!r}")
    if isinstance(value, str):
        value = int(value.strip())
    return datetime.fromtimestamp(int(value), tz=timezone.utc)


def to_epoch_seconds(dt: datetime) -> int:
    return int(dt.timestamp())


def parse_iso(value: str) -> datetime:
    # Octopus mixes "Z" and "+01:00" suffixes.
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def parse_optional_iso(value: str | None) -> datetime | None:
    if value is None:
        return None
    return parse_iso(value)
