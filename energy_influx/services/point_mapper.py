# energy_influx/services/point_mapper.py
"""Turn polled records into time-series points.

Envoy readings map to three measurements:

* ``eim``        one per metering device, tagged ``measurement_type``
* ``inverters``  the fleet summary, untagged
* ``inverter``   one per microinverter, tagged ``serial_number``

Octopus consumption records map to a configurable measurement tagged with
the meter type, MPAN/MPRN and meter serial.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from energy_influx.models.consumption import Consumption
from energy_influx.models.inverter import Inverter
from energy_influx.models.point import Point
from energy_influx.models.production import Device, DeviceType, MeasurementType, Production
from energy_influx.models.timestamps import to_epoch_seconds

log = logging.getLogger(__name__)

MEASUREMENT_TYPE_TAGS = {
    MeasurementType.PRODUCTION: "producing",
    MeasurementType.TOTAL_CONSUMPTION: "consuming",
    MeasurementType.NET_CONSUMPTION: "net",
}

MEASUREMENT_TYPE_LABELS = {
    MeasurementType.PRODUCTION: "Producing",
    MeasurementType.TOTAL_CONSUMPTION: "Consuming",
    MeasurementType.NET_CONSUMPTION: "Net",
}


def production_to_points(production: Production) -> List[Point]:
    points: List[Point] = []
    for device in production.devices():
        point = device_production_to_point(device)
        if point is not None:
            points.append(point)
    return points


def device_production_to_point(device: Device) -> Optional[Point]:
    if device.type is DeviceType.EIM:
        if device.measurement_type is None:
            log.warning("EIM device missing measurement type: %s", device)
            return None
        if device.details is None:
            log.warning(
                "EIM device (%s) missing details: %s",
                device.measurement_type.value,
                device,
            )
            return None
        log.debug(
            "%s: %-9s %7.3f W, %s Wh so far today, %s Wh total",
            device.reading_time,
            MEASUREMENT_TYPE_LABELS[device.measurement_type],
            device.w_now,
            device.details.wh_today,
            device.details.wh_lifetime,
        )
        return Point(
            measurement="eim",
            timestamp=to_epoch_seconds(device.reading_time),
            tags={"measurement_type": MEASUREMENT_TYPE_TAGS[device.measurement_type]},
            fields={"w_now": device.w_now, "wh_lifetime": device.details.wh_lifetime},
        )

    if device.type is DeviceType.INVERTERS:
        log.debug("%s inverters producing %s W", device.active_count, device.w_now)
        return Point(
            measurement="inverters",
            timestamp=to_epoch_seconds(device.reading_time),
            fields={"w_now": device.w_now},
        )

    log.info("Ignoring unsupported device type %s", device.type.value)
    return None


def inverter_to_point(inverter: Inverter) -> Point:
    log.debug(
        "%s Inverter %s producing %s W (max %s W)",
        inverter.last_report_date,
        inverter.serial_number,
        inverter.last_report_watts,
        inverter.max_report_watts,
    )
    return Point(
        measurement="inverter",
        timestamp=to_epoch_seconds(inverter.last_report_date),
        tags={"serial_number": inverter.serial_number},
        fields={
            "last_watts": int(inverter.last_report_watts),
            "max_watts": int(inverter.max_report_watts),
        },
    )


def consumption_to_point(
    measurement: str,
    meter_type: str,
    mpxn: str,
    serial: str,
    reading: Consumption,
) -> Point:
    return Point(
        measurement=measurement,
        timestamp=to_epoch_seconds(reading.interval_end),
        tags={"type": meter_type, "mpxn": mpxn, "serial": serial},
        fields={"consumption": float(reading.consumption)},
    )
