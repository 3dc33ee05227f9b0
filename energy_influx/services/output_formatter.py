# energy_influx/services/output_formatter.py

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from datetime import datetime, timedelta
from enum import Enum
from pprint import pformat
from typing import Any, Iterable, List, Optional

from energy_influx.models.consumption import Readings, StandingUnitRates
from energy_influx.models.inverter import Inverter
from energy_influx.models.production import Device, DeviceType, Production
from energy_influx.services.point_mapper import MEASUREMENT_TYPE_LABELS

RECENT_INVERTER_WINDOW = timedelta(minutes=5)


def to_jsonable(obj: Any) -> Any:
    """Convert records to JSON-safe structures."""
    if isinstance(obj, Enum):
        return obj.value
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj
    if hasattr(obj, "isoformat"):
        return obj.isoformat()
    if is_dataclass(obj):
        return to_jsonable(asdict(obj))
    if isinstance(obj, dict):
        return {str(k): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set)):
        return [to_jsonable(x) for x in obj]
    return str(obj)


def emit_section(title: str, value: Any, *, as_json: bool = False) -> None:
    if as_json:
        print(json.dumps({title: to_jsonable(value)}, indent=2))
    else:
        print(f"{title}: {pformat(value)}")


# ----------------------------------------------------------------------
# Envoy


def format_device_stats(device: Device) -> str:
    if device.type is DeviceType.EIM:
        if device.measurement_type is None or device.details is None:
            return f"{device.reading_time}: EIM reading incomplete"
        return (
            f"{device.reading_time}: {MEASUREMENT_TYPE_LABELS[device.measurement_type]:<9} "
            f"{device.w_now:7.3f} W, {device.details.wh_today} Wh so far today, "
            f"{device.details.wh_lifetime} Wh total"
        )
    if device.type is DeviceType.INVERTERS:
        return f"{device.active_count} inverters producing {device.w_now} W"
    return f"Unsupported device type {device.type.value}"


def recent_inverters(
    inverters: Iterable[Inverter],
    now: datetime,
    window: timedelta = RECENT_INVERTER_WINDOW,
) -> List[Inverter]:
    return [inv for inv in inverters if now - inv.last_report_date < window]


def format_inverter(inverter: Inverter) -> str:
    return (
        f"{inverter.last_report_date} Inverter {inverter.serial_number} "
        f"producing {inverter.last_report_watts} W (max {inverter.max_report_watts} W)"
    )


def emit_envoy_stats(
    production: Production,
    inverters: Iterable[Inverter],
    now: datetime,
    *,
    as_json: bool = False,
) -> None:
    devices = [*production.production, *production.consumption]
    recent = recent_inverters(inverters, now)
    if as_json:
        payload = {
            "timestamp": now.isoformat(),
            "devices": to_jsonable(devices),
            "recent_inverters": to_jsonable(recent),
        }
        print(json.dumps(payload))
        return
    for device in devices:
        print(format_device_stats(device))
    for inverter in recent:
        print(format_inverter(inverter))


# ----------------------------------------------------------------------
# Octopus


def format_readings(meter_type: str, readings: Readings) -> List[str]:
    lines = [f"{meter_type} consumption: {len(readings.results)}/{readings.count} records"]
    for reading in readings.results:
        lines.append(f"{reading.interval_start}-{reading.interval_end}: {reading.consumption}")
    lines.append(f"Previous: {readings.previous}")
    lines.append(f"Next: {readings.next}")
    return lines


def format_unit_rates(meter_type: str, rates: StandingUnitRates) -> List[str]:
    lines = [f"{meter_type} unit rates: {len(rates.results)}/{rates.count} records"]
    for rate in rates.results:
        valid_to = rate.valid_to if rate.valid_to is not None else "open"
        lines.append(f"{rate.valid_from}-{valid_to}: {rate.value_inc_vat}")
    lines.append(f"Previous: {rates.previous}")
    lines.append(f"Next: {rates.next}")
    return lines


def emit_lines(lines: Iterable[str], *, payload: Optional[dict] = None, as_json: bool = False) -> None:
    if as_json:
        print(json.dumps(to_jsonable(payload or {})))
        return
    for line in lines:
        print(line)
