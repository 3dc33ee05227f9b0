# energy_influx/models/inverter.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from energy_influx.models.timestamps import from_epoch_seconds


def _unsigned(data: dict[str, Any], key: str) -> int:
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{key} must be a non-negative integer, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{key} must be a non-negative integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{key} must be a non-negative integer, got {value!r}")
    return int(value)


@dataclass(frozen=True)
class Inverter:
    """Latest report of one microinverter (``api/v1/production/inverters``)."""

    serial_number: str
    last_report_date: datetime
    dev_type: int
    last_report_watts: int   # W
    max_report_watts: int    # W

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Inverter:
        return cls(
            serial_number=str(data["serialNumber"]),
            last_report_date=from_epoch_seconds(data["lastReportDate"]),
            dev_type=_unsigned(data, "devType"),
            last_report_watts=_unsigned(data, "lastReportWatts"),
            max_report_watts=_unsigned(data, "maxReportWatts"),
        )
