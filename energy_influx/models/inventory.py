# energy_influx/models/inventory.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any

from energy_influx.models.timestamps import from_epoch_seconds


class InventoryDeviceType(str, Enum):
    PCU = "PCU"     # microinverter
    ACB = "ACB"     # AC battery
    NSRB = "NSRB"   # IQ relay
    ESUB = "ESUB"   # IQ system controller


class AdminState(IntEnum):
    DISCOVERED = 1
    VERIFIED = 2
    DELETED = 3


# Known device_status flags; the gateway may report others.
STATUS_OK = "envoy.global.ok"
STATUS_DC_VOLTAGE_TOO_LOW = "envoy.cond_flags.pcu_chan.dcvoltagetoolow"
STATUS_DC_POWER_LOW = "envoy.cond_flags.pcu_ctrl.dc-pwr-low"
STATUS_FAILURE = "envoy.cond_flags.obs_strs.failure"


@dataclass(frozen=True)
class InventoryDevice:
    part_num: str
    installed: datetime
    serial_num: str
    device_status: tuple[str, ...]
    last_rpt_date: datetime
    admin_state: AdminState
    dev_type: int
    created_date: datetime
    img_load_date: datetime
    img_pnum_running: str
    ptpn: str
    chaneid: int
    gfi_clear_set: tuple[bool, ...]
    producing: bool
    communicating: bool
    provisioned: bool
    operating: bool
    phase: str

    @property
    def ok(self) -> bool:
        return STATUS_OK in self.device_status

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InventoryDevice:
        return cls(
            part_num=data["part_num"],
            installed=from_epoch_seconds(data["installed"]),
            serial_num=data["serial_num"],
            device_status=tuple(data["device_status"]),
            last_rpt_date=from_epoch_seconds(data["last_rpt_date"]),
            admin_state=AdminState(int(data["admin_state"])),
            dev_type=int(data["dev_type"]),
            created_date=from_epoch_seconds(data["created_date"]),
            img_load_date=from_epoch_seconds(data["img_load_date"]),
            img_pnum_running=data["img_pnum_running"],
            ptpn=data["ptpn"],
            chaneid=int(data["chaneid"]),
            gfi_clear_set=tuple(bool(c["gficlearset"]) for c in data["device_control"]),
            producing=bool(data["producing"]),
            communicating=bool(data["communicating"]),
            provisioned=bool(data["provisioned"]),
            operating=bool(data["operating"]),
            phase=data["phase"],
        )


@dataclass(frozen=True)
class InventoryGroup:
    type: InventoryDeviceType
    devices: tuple[InventoryDevice, ...]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InventoryGroup:
        return cls(
            type=InventoryDeviceType(data["type"]),
            devices=tuple(InventoryDevice.from_dict(d) for d in data["devices"]),
        )
