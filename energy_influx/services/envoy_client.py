from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests
import urllib3

from energy_influx.config import EnphaseConfig
from energy_influx.models.home import Home
from energy_influx.models.inventory import InventoryGroup
from energy_influx.models.inverter import Inverter
from energy_influx.models.meters import MeterReading, MeterReport
from energy_influx.models.production import Production
from energy_influx.services.api_errors import HttpError, RestError, decode, response_json


class EnvoyClient:
    """Local REST API of an Enphase Envoy gateway."""

    def __init__(self, cfg: EnphaseConfig, log, session: Optional[requests.Session] = None):
        self.cfg = cfg
        self.log = log
        self.session = session or requests.Session()
        self.base_url = cfg.base_url.rstrip("/")
        # The gateway only serves a self-signed certificate.
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    # ------------------------------------------------------------------
    def _build_url(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = self._build_url(path)
        headers = {"Authorization": f"Bearer {self.cfg.token}"}
        self.log.debug("GET %s params=%s", url, params)

        try:
            resp = self.session.get(
                url,
                params=params,
                headers=headers,
                timeout=self.cfg.timeout,
                verify=False,
            )
        except requests.RequestException as exc:
            raise HttpError(f"Envoy request to {url} failed: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            raise RestError(resp.status_code, resp.text, url)

        return response_json(resp, url)

    def _get_list(self, path: str, factory, params: Optional[Dict[str, Any]] = None) -> list:
        payload = self._get(path, params)
        url = self._build_url(path)
        return decode(lambda data: [factory(item) for item in data], payload, url)

    # ------------------------------------------------------------------
    def home(self) -> Home:
        return decode(Home.from_dict, self._get("home.json"), self._build_url("home.json"))

    def inventory(self, include_deleted: bool = False) -> List[InventoryGroup]:
        params = {"deleted": 1} if include_deleted else None
        return self._get_list("inventory.json", InventoryGroup.from_dict, params)

    def production(self) -> Production:
        payload = self._get("production.json", {"details": 1})
        return decode(Production.from_dict, payload, self._build_url("production.json"))

    def meter_readings(self) -> List[MeterReading]:
        return self._get_list("ivp/meters/readings", MeterReading.from_dict)

    def meter_reports(self) -> List[MeterReport]:
        return self._get_list("ivp/meters/reports", MeterReport.from_dict)

    def inverters(self) -> List[Inverter]:
        return self._get_list("api/v1/production/inverters", Inverter.from_dict)
