# energy_influx/services/octopus_import.py
from __future__ import annotations

from typing import Iterator, Tuple

from energy_influx.models.account import Account, Property
from energy_influx.services.octopus_client import AuthToken, MeterType, OctopusClient
from energy_influx.services.point_mapper import consumption_to_point


def iter_meters(prop: Property) -> Iterator[Tuple[MeterType, str, str]]:
    """Yield ``(meter_type, mpxn, serial)`` for every meter, electricity first."""
    for point in prop.electricity_meter_points:
        for meter in point.meters:
            yield MeterType.ELECTRICITY, point.mpan, meter.serial_number
    for point in prop.gas_meter_points:
        for meter in point.meters:
            yield MeterType.GAS, point.mprn, meter.serial_number


def import_meter_readings(
    client: OctopusClient,
    token: AuthToken,
    meter_type: MeterType,
    mpxn: str,
    serial: str,
    sink,
    measurement: str,
    num_readings: int,
    log,
) -> int:
    readings = client.get_consumption(token, meter_type, mpxn, serial, 0, num_readings)
    log.info(
        "%s consumption: %d/%d records",
        meter_type.value,
        len(readings.results),
        readings.count,
    )
    points = [
        consumption_to_point(measurement, meter_type.value, mpxn, serial, reading)
        for reading in readings.results
    ]
    if points:
        sink.write(points)
    return len(points)


def import_account_readings(
    client: OctopusClient,
    token: AuthToken,
    account: Account,
    sink,
    measurement: str,
    num_readings: int,
    log,
) -> int:
    written = 0
    for prop in account.properties:
        log.info("Property %s", prop.address_line_1)
        for meter_type, mpxn, serial in iter_meters(prop):
            log.info("%s meter %s serial %s", meter_type.value.capitalize(), mpxn, serial)
            written += import_meter_readings(
                client, token, meter_type, mpxn, serial, sink, measurement, num_readings, log
            )
    return written
