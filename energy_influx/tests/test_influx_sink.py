# energy_influx/tests/test_influx_sink.py

import io

import pytest
from influxdb_client import WritePrecision

from energy_influx.config import InfluxConfig
from energy_influx.models.point import Point
from energy_influx.services.influx_sink import ConsoleSink, InfluxSink, to_influx_point
from energy_influx.util.logging import get_logger, setup_logging


setup_logging(debug=False)
LOG = get_logger("sink-test")

TS = 1735727400


class FakeWriteApi:
    def __init__(self, fail_with=None):
        self.writes = []
        self.closed = False
        self.fail_with = fail_with

    def write(self, bucket, org=None, record=None, write_precision=None):
        if self.fail_with is not None:
            raise self.fail_with
        self.writes.append({"bucket": bucket, "org": org, "record": record, "precision": write_precision})

    def close(self):
        self.closed = True


class FakeInfluxClient:
    def __init__(self, write_api):
        self._write_api = write_api
        self.closed = False

    def write_api(self, write_options=None):
        return self._write_api

    def close(self):
        self.closed = True


def test_to_influx_point_line_protocol():
    point = Point("eim", TS, {"measurement_type": "producing"}, {"w_now": 66.0, "wh_lifetime": 4242.0})

    line = to_influx_point(point).to_line_protocol()

    assert line.startswith("eim,measurement_type=producing ")
    assert "w_now=66" in line
    assert "wh_lifetime=4242" in line
    assert line.endswith(f" {TS}")


def test_integer_fields_keep_integer_type():
    point = Point("inverter", TS, {"serial_number": "1"}, {"last_watts": 42, "max_watts": 66})

    line = to_influx_point(point).to_line_protocol()

    assert "last_watts=42i" in line
    assert "max_watts=66i" in line


def test_influx_sink_writes_to_database_bucket():
    write_api = FakeWriteApi()
    client = FakeInfluxClient(write_api)
    sink = InfluxSink(InfluxConfig(database="enphase"), LOG, client=client)

    sink.write([Point("inverters", TS, {}, {"w_now": 123.0})])
    sink.close()

    (write,) = write_api.writes
    assert write["bucket"] == "enphase"
    assert write["org"] == "-"
    assert write["precision"] == WritePrecision.S
    assert write["record"][0].to_line_protocol().startswith("inverters w_now=123")
    assert write_api.closed and client.closed


def test_influx_write_errors_propagate():
    client = FakeInfluxClient(FakeWriteApi(fail_with=ConnectionError("refused")))
    sink = InfluxSink(InfluxConfig(), LOG, client=client)

    with pytest.raises(ConnectionError):
        sink.write([Point("inverters", TS, {}, {"w_now": 1.0})])


def test_console_sink_prints_one_line_per_point():
    out = io.StringIO()
    sink = ConsoleSink(stream=out)

    sink.write([
        Point("octopower", TS, {"type": "gas", "mpxn": "1", "serial": "S"}, {"consumption": 0.5}),
        Point("octopower", TS + 1800, {"type": "gas", "mpxn": "1", "serial": "S"}, {"consumption": 0.25}),
    ])

    lines = out.getvalue().splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("octopower,mpxn=1,serial=S,type=gas consumption=0.5 ")
    assert lines[1].endswith(str(TS + 1800))
