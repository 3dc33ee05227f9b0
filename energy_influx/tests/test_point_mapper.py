# energy_influx/tests/test_point_mapper.py

import copy
import logging
from datetime import datetime, timezone

from energy_influx.models.consumption import Consumption
from energy_influx.models.inverter import Inverter
from energy_influx.models.point import Point
from energy_influx.models.production import (
    AcBatteryState,
    Details,
    Device,
    DeviceType,
    MeasurementType,
    Production,
)
from energy_influx.services.point_mapper import (
    consumption_to_point,
    device_production_to_point,
    inverter_to_point,
    production_to_points,
)
from energy_influx.tests.payloads import PRODUCTION, eim

READING_TIME = datetime(2025, 1, 1, 10, 30, tzinfo=timezone.utc)
TS = int(READING_TIME.timestamp())


def _eim(measurement_type, w_now, wh_lifetime, details=True):
    return Device(
        type=DeviceType.EIM,
        active_count=0,
        reading_time=READING_TIME,
        w_now=w_now,
        measurement_type=measurement_type,
        details=Details(wh_lifetime=wh_lifetime) if details else None,
    )


def _snapshot():
    return Production(
        production=(
            Device(type=DeviceType.INVERTERS, active_count=6, reading_time=READING_TIME, w_now=123.0),
            _eim(MeasurementType.PRODUCTION, 66.0, 4242.0),
        ),
        consumption=(
            _eim(MeasurementType.TOTAL_CONSUMPTION, 61.0, 1371.0),
            _eim(MeasurementType.NET_CONSUMPTION, -1.0, 0.001),
        ),
        storage=(
            Device(
                type=DeviceType.ACB,
                active_count=0,
                reading_time=datetime.fromtimestamp(0, tz=timezone.utc),
                w_now=0.0,
                wh_now=0.0,
                state=AcBatteryState.IDLE,
            ),
        ),
    )


def test_production_to_points_example_snapshot():
    points = production_to_points(_snapshot())

    assert points == [
        Point("inverters", TS, {}, {"w_now": 123.0}),
        Point("eim", TS, {"measurement_type": "producing"}, {"w_now": 66.0, "wh_lifetime": 4242.0}),
        Point("eim", TS, {"measurement_type": "consuming"}, {"w_now": 61.0, "wh_lifetime": 1371.0}),
        Point("eim", TS, {"measurement_type": "net"}, {"w_now": -1.0, "wh_lifetime": 0.001}),
    ]


def test_production_decoded_from_json_matches_example():
    points = production_to_points(Production.from_dict(PRODUCTION))

    assert [p.measurement for p in points] == ["inverters", "eim", "eim", "eim"]
    assert [p.tags.get("measurement_type") for p in points] == [None, "producing", "consuming", "net"]
    assert points[0].fields == {"w_now": 123.0}
    assert points[3].fields == {"w_now": -1.0, "wh_lifetime": 0.001}


def test_eim_without_measurement_type_is_skipped(caplog):
    device = _eim(None, 10.0, 1.0)

    with caplog.at_level(logging.WARNING):
        assert device_production_to_point(device) is None
    assert "missing measurement type" in caplog.text


def test_eim_without_details_is_skipped(caplog):
    device = _eim(MeasurementType.PRODUCTION, 10.0, 1.0, details=False)

    with caplog.at_level(logging.WARNING):
        assert device_production_to_point(device) is None
    assert "missing details" in caplog.text


def test_partial_details_from_json_count_as_missing():
    raw = eim("production", 5.0, 10.0)
    del raw["whToday"]

    device = Device.from_dict(raw)

    assert device.details is None
    assert device_production_to_point(device) is None


def test_null_detail_metric_skips_reading_instead_of_failing(caplog):
    payload = copy.deepcopy(PRODUCTION)
    payload["consumption"][1]["whToday"] = None

    with caplog.at_level(logging.WARNING):
        points = production_to_points(Production.from_dict(payload))

    assert [p.measurement for p in points] == ["inverters", "eim", "eim"]
    assert [p.tags.get("measurement_type") for p in points[1:]] == ["producing", "consuming"]
    assert "missing details" in caplog.text


def test_unsupported_kinds_are_skipped_and_counted(caplog):
    snapshot = Production(
        production=(
            Device(type=DeviceType.RGMS, active_count=1, reading_time=READING_TIME, w_now=1.0),
            _eim(MeasurementType.PRODUCTION, 66.0, 4242.0),
            Device(type=DeviceType.PMUS, active_count=1, reading_time=READING_TIME, w_now=1.0),
        ),
        consumption=(_eim(MeasurementType.NET_CONSUMPTION, 1.0, 1.0, details=False),),
    )

    with caplog.at_level(logging.INFO):
        points = production_to_points(snapshot)

    assert len(points) == len(snapshot.devices()) - 3
    assert "unsupported device type rgms" in caplog.text


def test_inverter_to_point_uses_integer_fields():
    inverter = Inverter("482312345678", READING_TIME, 1, 42, 66)

    point = inverter_to_point(inverter)

    assert point == Point(
        "inverter",
        TS,
        {"serial_number": "482312345678"},
        {"last_watts": 42, "max_watts": 66},
    )
    assert all(isinstance(v, int) for v in point.fields.values())


def test_consumption_to_point_uses_interval_end():
    reading = Consumption(
        consumption=0.25,
        interval_start=datetime(2025, 1, 1, 0, 0, tzinfo=timezone.utc),
        interval_end=datetime(2025, 1, 1, 0, 30, tzinfo=timezone.utc),
    )

    point = consumption_to_point("octopower", "gas", "9876543210", "G4A12345", reading)

    assert point.measurement == "octopower"
    assert point.timestamp == int(reading.interval_end.timestamp())
    assert point.tags == {"type": "gas", "mpxn": "9876543210", "serial": "G4A12345"}
    assert point.fields == {"consumption": 0.25}
