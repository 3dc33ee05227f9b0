# energy_influx/services/change_filter.py

from __future__ import annotations

from typing import Iterable, List, Sequence

from energy_influx.models.inverter import Inverter
from energy_influx.models.point import Point
from energy_influx.services.point_mapper import inverter_to_point


def _previous_for(serial: str, previous: Sequence[Inverter]) -> Inverter | None:
    for candidate in previous:
        if candidate.serial_number == serial:
            return candidate
    return None


def changed_inverters(current: Iterable[Inverter], previous: Sequence[Inverter]) -> List[Inverter]:
    """Readings that are new or differ in any field from the last poll.

    A re-report of the same watts with a newer date still counts as changed.
    """
    return [
        inverter
        for inverter in current
        if _previous_for(inverter.serial_number, previous) != inverter
    ]


def inverters_to_points(current: Iterable[Inverter], previous: Sequence[Inverter]) -> List[Point]:
    return [inverter_to_point(inverter) for inverter in changed_inverters(current, previous)]
