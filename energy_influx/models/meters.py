# energy_influx/models/meters.py
"""IVP meter readings and reports (``ivp/meters/readings``, ``ivp/meters/reports``)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from energy_influx.models.production import MeasurementType
from energy_influx.models.timestamps import from_epoch_seconds


@dataclass(frozen=True)
class MeterChannel:
    eid: int
    timestamp: datetime
    act_energy_dlvd: float
    act_energy_rcvd: float
    apparent_energy: float
    react_energy_lagg: float
    react_energy_lead: float
    instantaneous_demand: float
    active_power: float
    apparent_power: float
    reactive_power: float
    pwr_factor: float
    voltage: float
    current: float
    freq: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MeterChannel:
        return cls(
            eid=int(data["eid"]),
            timestamp=from_epoch_seconds(data["timestamp"]),
            act_energy_dlvd=float(data["actEnergyDlvd"]),
            act_energy_rcvd=float(data["actEnergyRcvd"]),
            apparent_energy=float(data["apparentEnergy"]),
            react_energy_lagg=float(data["reactEnergyLagg"]),
            react_energy_lead=float(data["reactEnergyLead"]),
            instantaneous_demand=float(data["instantaneousDemand"]),
            active_power=float(data["activePower"]),
            apparent_power=float(data["apparentPower"]),
            reactive_power=float(data["reactivePower"]),
            pwr_factor=float(data["pwrFactor"]),
            voltage=float(data["voltage"]),
            current=float(data["current"]),
            freq=float(data["freq"]),
        )


@dataclass(frozen=True)
class MeterReading:
    """Summary of all channels plus the individual (per-phase) channels."""

    summary: MeterChannel
    channels: tuple[MeterChannel, ...]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MeterReading:
        return cls(
            summary=MeterChannel.from_dict(data),
            channels=tuple(MeterChannel.from_dict(c) for c in data["channels"]),
        )


@dataclass(frozen=True)
class MeterReportValues:
    curr_w: float
    act_power: float
    apprnt_pwr: float
    react_pwr: float
    wh_dlvd_cum: float
    wh_rcvd_cum: float
    varh_lag_cum: float
    varh_lead_cum: float
    vah_cum: float
    rms_voltage: float
    rms_current: float
    pwr_factor: float
    freq_hz: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MeterReportValues:
        return cls(
            curr_w=float(data["currW"]),
            act_power=float(data["actPower"]),
            apprnt_pwr=float(data["apprntPwr"]),
            react_pwr=float(data["reactPwr"]),
            wh_dlvd_cum=float(data["whDlvdCum"]),
            wh_rcvd_cum=float(data["whRcvdCum"]),
            varh_lag_cum=float(data["varhLagCum"]),
            varh_lead_cum=float(data["varhLeadCum"]),
            vah_cum=float(data["vahCum"]),
            rms_voltage=float(data["rmsVoltage"]),
            rms_current=float(data["rmsCurrent"]),
            pwr_factor=float(data["pwrFactor"]),
            freq_hz=float(data["freqHz"]),
        )


@dataclass(frozen=True)
class MeterReport:
    created_at: datetime
    report_type: MeasurementType
    cumulative: MeterReportValues
    lines: tuple[MeterReportValues, ...]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MeterReport:
        return cls(
            created_at=from_epoch_seconds(data["createdAt"]),
            report_type=MeasurementType(data["reportType"]),
            cumulative=MeterReportValues.from_dict(data["cumulative"]),
            lines=tuple(MeterReportValues.from_dict(line) for line in data["lines"]),
        )
