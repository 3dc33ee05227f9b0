# energy_influx/models/home.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Any

from energy_influx.models.timestamps import from_epoch_seconds


@dataclass(frozen=True)
class Interface:
    type: str            # "ethernet" / "wifi"
    mac: str
    dhcp: bool
    ip: str
    signal_strength: int
    signal_strength_max: int
    carrier: bool
    supported: bool | None = None
    present: bool | None = None
    configured: bool | None = None
    status: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Interface:
        return cls(
            type=data["type"],
            mac=data["mac"],
            dhcp=bool(data["dhcp"]),
            ip=data["ip"],
            signal_strength=int(data["signal_strength"]),
            signal_strength_max=int(data["signal_strength_max"]),
            carrier=bool(data["carrier"]),
            supported=data.get("supported"),
            present=data.get("present"),
            configured=data.get("configured"),
            status=data.get("status"),
        )


@dataclass(frozen=True)
class Network:
    web_comm: bool
    ever_reported_to_enlighten: bool
    last_enlighten_report_time: datetime
    primary_interface: str
    interfaces: tuple[Interface, ...]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Network:
        return cls(
            web_comm=bool(data["web_comm"]),
            ever_reported_to_enlighten=bool(data["ever_reported_to_enlighten"]),
            last_enlighten_report_time=from_epoch_seconds(data["last_enlighten_report_time"]),
            primary_interface=data["primary_interface"],
            interfaces=tuple(Interface.from_dict(i) for i in data["interfaces"]),
        )


@dataclass(frozen=True)
class CommunicationStatus:
    num: int
    level: int


@dataclass(frozen=True)
class CommunicationSummary:
    num: int
    level: int
    pcu: CommunicationStatus
    acb: CommunicationStatus
    nsrb: CommunicationStatus
    esub: CommunicationStatus
    encharge: tuple[dict[str, int], ...]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CommunicationSummary:
        def _status(key: str) -> CommunicationStatus:
            return CommunicationStatus(num=int(data[key]["num"]), level=int(data[key]["level"]))

        return cls(
            num=int(data["num"]),
            level=int(data["level"]),
            pcu=_status("pcu"),
            acb=_status("acb"),
            nsrb=_status("nsrb"),
            esub=_status("esub"),
            encharge=tuple(dict(e) for e in data.get("encharge", [])),
        )


@dataclass(frozen=True)
class Home:
    """Gateway status from ``home.json``."""

    software_build_epoch: datetime
    timezone: str
    current_date: str
    current_time: time
    network: Network
    tariff: str
    comm: CommunicationSummary
    wireless_connection: tuple[dict[str, Any], ...]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Home:
        return cls(
            software_build_epoch=from_epoch_seconds(data["software_build_epoch"]),
            timezone=data["timezone"],
            current_date=data["current_date"],
            current_time=time.fromisoformat(data["current_time"]),
            network=Network.from_dict(data["network"]),
            tariff=data["tariff"],
            comm=CommunicationSummary.from_dict(data["comm"]),
            wireless_connection=tuple(dict(w) for w in data.get("wireless_connection", [])),
        )
