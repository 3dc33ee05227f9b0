# energy_influx/models/production.py
"""Records returned by the Envoy ``production.json`` endpoint."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from energy_influx.models.timestamps import from_epoch_seconds


class DeviceType(str, Enum):
    INVERTERS = "inverters"   # IQ inverter fleet summary
    EIM = "eim"               # Envoy Integrated Meter
    ACB = "acb"               # AC battery
    RGMS = "rgms"             # revenue grade meters
    PMUS = "pmus"             # power meter units


class MeasurementType(str, Enum):
    PRODUCTION = "production"
    NET_CONSUMPTION = "net-consumption"
    TOTAL_CONSUMPTION = "total-consumption"


class AcBatteryState(str, Enum):
    CHARGING = "charging"
    DISCHARGING = "discharging"
    FULL = "full"
    IDLE = "idle"


# camelCase JSON key -> Details attribute
_DETAIL_KEYS = {
    "whLifetime": "wh_lifetime",
    "varhLeadLifetime": "varh_lead_lifetime",
    "varhLagLifetime": "varh_lag_lifetime",
    "vahLifetime": "vah_lifetime",
    "rmsCurrent": "rms_current",
    "rmsVoltage": "rms_voltage",
    "reactPwr": "react_pwr",
    "apprntPwr": "apprnt_pwr",
    "pwrFactor": "pwr_factor",
    "whToday": "wh_today",
    "whLastSevenDays": "wh_last_seven_days",
    "vahToday": "vah_today",
    "varhLeadToday": "varh_lead_today",
    "varhLagToday": "varh_lag_today",
}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class Details:
    """Extended electrical metrics, only reported by metering devices."""

    wh_lifetime: float = 0.0
    varh_lead_lifetime: float = 0.0
    varh_lag_lifetime: float = 0.0
    vah_lifetime: float = 0.0
    rms_current: float = 0.0
    rms_voltage: float = 0.0
    react_pwr: float = 0.0
    apprnt_pwr: float = 0.0
    pwr_factor: float = 0.0
    wh_today: float = 0.0
    wh_last_seven_days: float = 0.0
    vah_today: float = 0.0
    varh_lead_today: float = 0.0
    varh_lag_today: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Details | None:
        """Return ``None`` unless every detail metric is present and numeric."""
        if not all(_is_number(data.get(key)) for key in _DETAIL_KEYS):
            return None
        return cls(**{attr: float(data[key]) for key, attr in _DETAIL_KEYS.items()})


@dataclass(frozen=True)
class Line:
    w_now: float
    details: Details

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Line:
        details = Details.from_dict(data)
        if details is None:
            raise ValueError("line is missing detail metrics")
        return cls(w_now=float(data["wNow"]), details=details)


@dataclass(frozen=True)
class Device:
    type: DeviceType
    active_count: int
    reading_time: datetime
    w_now: float
    measurement_type: MeasurementType | None = None
    wh_now: float | None = None
    state: AcBatteryState | None = None
    lines: tuple[Line, ...] | None = None
    details: Details | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Device:
        measurement_type = data.get("measurementType")
        wh_now = data.get("whNow")
        state = data.get("state")
        lines = data.get("lines")
        return cls(
            type=DeviceType(data["type"]),
            active_count=int(data["activeCount"]),
            reading_time=from_epoch_seconds(data["readingTime"]),
            w_now=float(data["wNow"]),
            measurement_type=MeasurementType(measurement_type) if measurement_type is not None else None,
            wh_now=float(wh_now) if wh_now is not None else None,
            state=AcBatteryState(state) if state is not None else None,
            lines=tuple(Line.from_dict(line) for line in lines) if lines is not None else None,
            details=Details.from_dict(data),
        )


@dataclass(frozen=True)
class Production:
    """One poll of the gateway, partitioned by role."""

    production: tuple[Device, ...] = field(default_factory=tuple)
    consumption: tuple[Device, ...] = field(default_factory=tuple)
    storage: tuple[Device, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Production:
        return cls(
            production=tuple(Device.from_dict(d) for d in data["production"]),
            consumption=tuple(Device.from_dict(d) for d in data["consumption"]),
            storage=tuple(Device.from_dict(d) for d in data["storage"]),
        )

    def devices(self) -> list[Device]:
        return [*self.production, *self.consumption, *self.storage]
