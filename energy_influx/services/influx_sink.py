# energy_influx/services/influx_sink.py
from __future__ import annotations

import sys
from typing import Sequence, TextIO

from influxdb_client import InfluxDBClient, Point as InfluxPoint, WritePrecision
from influxdb_client.client.write_api import SYNCHRONOUS

from energy_influx.config import InfluxConfig
from energy_influx.models.point import Point

# InfluxDB 1.8+ accepts the v2 write API with a placeholder org.
INFLUX_V1_ORG = "-"


def to_influx_point(point: Point) -> InfluxPoint:
    record = InfluxPoint(point.measurement).time(point.timestamp, WritePrecision.S)
    for key, value in point.tags.items():
        record = record.tag(key, value)
    for key, value in point.fields.items():
        record = record.field(key, value)
    return record


class InfluxSink:
    """Synchronous batch writer against an InfluxDB 1.x database."""

    def __init__(self, cfg: InfluxConfig, log, client: InfluxDBClient | None = None):
        self.cfg = cfg
        self.log = log
        if client is None:
            token = f"{cfg.username}:{cfg.password}" if cfg.username and cfg.password else ""
            client = InfluxDBClient(
                url=cfg.url,
                token=token,
                org=INFLUX_V1_ORG,
                timeout=cfg.timeout_ms,
            )
        self.client = client
        self.write_api = client.write_api(write_options=SYNCHRONOUS)

    def write(self, points: Sequence[Point]) -> None:
        records = [to_influx_point(p) for p in points]
        self.log.debug("Writing %d point(s) to %s/%s", len(records), self.cfg.url, self.cfg.database)
        self.write_api.write(
            bucket=self.cfg.database,
            org=INFLUX_V1_ORG,
            record=records,
            write_precision=WritePrecision.S,
        )

    def close(self) -> None:
        self.write_api.close()
        self.client.close()


class ConsoleSink:
    """Prints points as line protocol instead of writing them."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream

    def write(self, points: Sequence[Point]) -> None:
        out = self.stream or sys.stdout
        for point in points:
            print(to_influx_point(point).to_line_protocol(), file=out)

    def close(self) -> None:
        pass
