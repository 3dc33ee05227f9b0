# energy_influx/models/point.py
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Point:
    """One row for the time-series sink."""

    measurement: str
    timestamp: int   # epoch seconds
    tags: dict[str, str] = field(default_factory=dict)
    fields: dict[str, float | int] = field(default_factory=dict)
