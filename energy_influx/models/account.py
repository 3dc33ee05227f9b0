# energy_influx/models/account.py
"""Octopus account information (``accounts/<id>/``)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from energy_influx.models.timestamps import parse_iso, parse_optional_iso


@dataclass(frozen=True)
class Register:
    identifier: str
    rate: str
    is_settlement_register: bool


@dataclass(frozen=True)
class Meter:
    serial_number: str
    registers: tuple[Register, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Meter:
        return cls(
            serial_number=data["serial_number"],
            registers=tuple(
                Register(
                    identifier=r["identifier"],
                    rate=r["rate"],
                    is_settlement_register=bool(r["is_settlement_register"]),
                )
                for r in data.get("registers") or []
            ),
        )


@dataclass(frozen=True)
class Agreement:
    tariff_code: str
    valid_from: datetime
    valid_to: datetime | None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Agreement:
        return cls(
            tariff_code=data["tariff_code"],
            valid_from=parse_iso(data["valid_from"]),
            valid_to=parse_optional_iso(data.get("valid_to")),
        )


@dataclass(frozen=True)
class ElectricityMeterPoint:
    mpan: str
    profile_class: int
    consumption_standard: int
    meters: tuple[Meter, ...]
    agreements: tuple[Agreement, ...]
    is_export: bool

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ElectricityMeterPoint:
        return cls(
            mpan=data["mpan"],
            profile_class=int(data["profile_class"]),
            consumption_standard=int(data["consumption_standard"]),
            meters=tuple(Meter.from_dict(m) for m in data["meters"]),
            agreements=tuple(Agreement.from_dict(a) for a in data["agreements"]),
            is_export=bool(data["is_export"]),
        )


@dataclass(frozen=True)
class GasMeterPoint:
    mprn: str
    consumption_standard: int
    meters: tuple[Meter, ...]
    agreements: tuple[Agreement, ...]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GasMeterPoint:
        return cls(
            mprn=data["mprn"],
            consumption_standard=int(data["consumption_standard"]),
            meters=tuple(Meter.from_dict(m) for m in data["meters"]),
            agreements=tuple(Agreement.from_dict(a) for a in data["agreements"]),
        )


@dataclass(frozen=True)
class Property:
    id: int
    moved_in_at: datetime
    moved_out_at: datetime | None
    address_line_1: str
    address_line_2: str
    address_line_3: str
    town: str
    county: str
    postcode: str
    electricity_meter_points: tuple[ElectricityMeterPoint, ...]
    gas_meter_points: tuple[GasMeterPoint, ...]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Property:
        return cls(
            id=int(data["id"]),
            moved_in_at=parse_iso(data["moved_in_at"]),
            moved_out_at=parse_optional_iso(data.get("moved_out_at")),
            address_line_1=data["address_line_1"],
            address_line_2=data["address_line_2"],
            address_line_3=data["address_line_3"],
            town=data["town"],
            county=data["county"],
            postcode=data["postcode"],
            electricity_meter_points=tuple(
                ElectricityMeterPoint.from_dict(p) for p in data["electricity_meter_points"]
            ),
            gas_meter_points=tuple(GasMeterPoint.from_dict(p) for p in data["gas_meter_points"]),
        )


@dataclass(frozen=True)
class Account:
    number: str   # usually "A-1234ABCD"
    properties: tuple[Property, ...]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Account:
        return cls(
            number=data["number"],
            properties=tuple(Property.from_dict(p) for p in data["properties"]),
        )
