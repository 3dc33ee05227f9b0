# energy_influx/tests/test_output_formatter.py

import json
from datetime import datetime, timedelta, timezone

from energy_influx.models.consumption import Readings, StandingUnitRates
from energy_influx.models.inverter import Inverter
from energy_influx.models.production import Production
from energy_influx.services.output_formatter import (
    emit_envoy_stats,
    format_device_stats,
    format_readings,
    format_unit_rates,
    recent_inverters,
    to_jsonable,
)
from energy_influx.tests.payloads import PRODUCTION, UNIT_RATES, readings

NOW = datetime(2025, 1, 1, 10, 32, tzinfo=timezone.utc)


def test_device_stats_lines():
    production = Production.from_dict(PRODUCTION)

    fleet, producing = (format_device_stats(d) for d in production.production)
    storage = format_device_stats(production.storage[0])

    assert fleet == "6 inverters producing 123.0 W"
    assert "Producing" in producing
    assert " 66.000 W, 321.0 Wh so far today, 4242.0 Wh total" in producing
    assert storage == "Unsupported device type acb"


def test_recent_inverters_window():
    fresh = Inverter("1", NOW - timedelta(minutes=2), 1, 10, 20)
    stale = Inverter("2", NOW - timedelta(minutes=6), 1, 10, 20)

    assert recent_inverters([fresh, stale], NOW) == [fresh]


def test_emit_envoy_stats_human(capsys):
    fresh = Inverter("482312345678", NOW - timedelta(minutes=1), 1, 42, 66)

    emit_envoy_stats(Production.from_dict(PRODUCTION), [fresh], NOW)

    out = capsys.readouterr().out.splitlines()
    assert len(out) == 5
    assert out[-1].endswith("Inverter 482312345678 producing 42 W (max 66 W)")


def test_emit_envoy_stats_json(capsys):
    emit_envoy_stats(Production.from_dict(PRODUCTION), [], NOW, as_json=True)

    payload = json.loads(capsys.readouterr().out)
    assert payload["timestamp"] == NOW.isoformat()
    assert [d["type"] for d in payload["devices"]] == ["inverters", "eim", "eim", "eim"]
    assert payload["devices"][1]["measurement_type"] == "production"
    assert payload["recent_inverters"] == []


def test_format_readings_and_rates():
    lines = format_readings("electricity", Readings.from_dict(readings(0.5, count=48)))
    assert lines[0] == "electricity consumption: 1/48 records"
    assert lines[1].endswith(": 0.5")
    assert lines[-1] == "Next: None"

    rate_lines = format_unit_rates("electricity", StandingUnitRates.from_dict(UNIT_RATES))
    assert rate_lines[0] == "electricity unit rates: 1/1 records"
    assert rate_lines[1].endswith("-open: 21.0")


def test_to_jsonable_handles_nested_records():
    inverter = Inverter("1", NOW, 1, 42, 66)

    assert to_jsonable({"inv": (inverter,)}) == {
        "inv": [
            {
                "serial_number": "1",
                "last_report_date": NOW.isoformat(),
                "dev_type": 1,
                "last_report_watts": 42,
                "max_report_watts": 66,
            }
        ]
    }
