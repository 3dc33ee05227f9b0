# energy_influx/models/consumption.py
"""Paged Octopus consumption records and standard unit rates."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from energy_influx.models.timestamps import parse_iso


@dataclass(frozen=True)
class Consumption:
    # kWh for electricity and SMETS1 gas meters, m^3 for SMETS2 gas meters.
    consumption: float
    interval_start: datetime
    interval_end: datetime

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Consumption:
        return cls(
            consumption=float(data["consumption"]),
            interval_start=parse_iso(data["interval_start"]),
            interval_end=parse_iso(data["interval_end"]),
        )


@dataclass(frozen=True)
class Readings:
    count: int   # total available, may exceed len(results)
    next: str | None
    previous: str | None
    results: tuple[Consumption, ...]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Readings:
        return cls(
            count=int(data["count"]),
            next=data.get("next"),
            previous=data.get("previous"),
            results=tuple(Consumption.from_dict(r) for r in data["results"]),
        )


@dataclass(frozen=True)
class StandingUnitRate:
    value_exc_vat: float   # pence
    value_inc_vat: float   # pence
    valid_from: datetime
    valid_to: datetime | None
    payment_method: str | None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StandingUnitRate:
        valid_to = data.get("valid_to")
        return cls(
            value_exc_vat=float(data["value_exc_vat"]),
            value_inc_vat=float(data["value_inc_vat"]),
            valid_from=parse_iso(data["valid_from"]),
            valid_to=parse_iso(valid_to) if valid_to else None,
            payment_method=data.get("payment_method"),
        )


@dataclass(frozen=True)
class StandingUnitRates:
    count: int
    next: str | None
    previous: str | None
    results: tuple[StandingUnitRate, ...]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StandingUnitRates:
        return cls(
            count=int(data["count"]),
            next=data.get("next"),
            previous=data.get("previous"),
            results=tuple(StandingUnitRate.from_dict(r) for r in data["results"]),
        )
