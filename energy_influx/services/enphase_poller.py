from __future__ import annotations

import time
from typing import Callable, List, Optional

from energy_influx.models.inverter import Inverter
from energy_influx.services.change_filter import inverters_to_points
from energy_influx.services.point_mapper import production_to_points


class EnphasePoller:
    """Poll the Envoy on a fixed period and hand the points to a sink.

    Any fetch or write error escapes ``run()``; there is no retry.
    """

    def __init__(
        self,
        envoy,
        sink,
        poll_period: float,
        log,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.envoy = envoy
        self.sink = sink
        self.poll_period = poll_period
        self.log = log
        self.sleep = sleep

    # ------------------------------------------------------------------
    def poll_once(self, last_inverters: List[Inverter]) -> List[Inverter]:
        production = self.envoy.production()
        points = production_to_points(production)
        if points:
            self.sink.write(points)
        else:
            self.log.debug("No production points this poll")

        inverters = self.envoy.inverters()
        points = inverters_to_points(inverters, last_inverters)
        if points:
            self.sink.write(points)
        self.log.info(
            "Polled %d production record(s), %d/%d inverter(s) changed",
            len(production.devices()),
            len(points),
            len(inverters),
        )
        return inverters

    def run(self, max_iterations: Optional[int] = None) -> None:
        last_inverters: List[Inverter] = []
        iterations = 0
        while max_iterations is None or iterations < max_iterations:
            last_inverters = self.poll_once(last_inverters)
            iterations += 1
            if max_iterations is None or iterations < max_iterations:
                self.sleep(self.poll_period)
