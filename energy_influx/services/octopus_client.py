from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

import requests

from energy_influx.config import OctopusConfig
from energy_influx.models.account import Account
from energy_influx.models.consumption import Readings, StandingUnitRates
from energy_influx.services.api_errors import (
    GraphQlError,
    HttpError,
    RestError,
    decode,
    response_json,
)

PRODUCT_CODE_RE = re.compile(r"[A-Z]+-[A-Z]+-\d{2}-\d{2}-\d{2}")

OBTAIN_TOKEN_MUTATION = """
mutation ObtainKrakenToken($email: String!, $password: String!) {
  obtainKrakenToken(input: {email: $email, password: $password}) {
    token
  }
}
"""


class MeterType(str, Enum):
    ELECTRICITY = "electricity"
    GAS = "gas"

    @property
    def meter_points_path(self) -> str:
        return f"{self.value}-meter-points"

    @property
    def tariffs_path(self) -> str:
        return f"{self.value}-tariffs"


class Grouping(str, Enum):
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"


@dataclass(frozen=True)
class AuthToken:
    """JWT used as the raw ``Authorization`` header value."""

    value: str

    def __repr__(self) -> str:
        return "AuthToken(<redacted>)"


def product_code_from_tariff(tariff_code: str) -> str | None:
    """Extract the product code from a tariff code.

    ``E-1R-AGILE-FLEX-22-11-25-C`` -> ``AGILE-FLEX-22-11-25``.
    """
    match = PRODUCT_CODE_RE.search(tariff_code or "")
    return match.group(0) if match else None


class OctopusClient:
    """Octopus Energy GraphQL login plus the REST account/consumption endpoints."""

    def __init__(self, cfg: OctopusConfig, log, session: Optional[requests.Session] = None):
        self.cfg = cfg
        self.log = log
        self.session = session or requests.Session()
        self.base_url = cfg.base_url.rstrip("/")

    # ------------------------------------------------------------------
    def _build_url(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    def _get(self, token: AuthToken, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = self._build_url(path)
        self.log.debug("GET %s params=%s", url, params)

        try:
            resp = self.session.get(
                url,
                params=params,
                headers={"Authorization": token.value},
                timeout=self.cfg.timeout,
            )
        except requests.RequestException as exc:
            raise HttpError(f"Octopus request to {url} failed: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            raise RestError(resp.status_code, resp.text, url)

        return response_json(resp, url)

    # ------------------------------------------------------------------
    def authenticate(self, email: str, password: str) -> AuthToken:
        url = self.cfg.graphql_url
        body = {
            "query": OBTAIN_TOKEN_MUTATION,
            "variables": {"email": email, "password": password},
        }
        self.log.debug("POST %s (obtainKrakenToken)", url)

        try:
            resp = self.session.post(url, json=body, timeout=self.cfg.timeout)
        except requests.RequestException as exc:
            raise HttpError(f"Octopus login to {url} failed: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            raise RestError(resp.status_code, resp.text, url)

        payload = response_json(resp, url)
        if not isinstance(payload, dict):
            raise GraphQlError(None)

        data = payload.get("data") or {}
        token = (data.get("obtainKrakenToken") or {}).get("token")
        if not token:
            raise GraphQlError(payload.get("errors"))
        return AuthToken(token)

    def get_account(self, token: AuthToken, account_id: str) -> Account:
        path = f"accounts/{account_id}/"
        return decode(Account.from_dict, self._get(token, path), self._build_url(path))

    def get_consumption(
        self,
        token: AuthToken,
        meter_type: MeterType,
        mpxn: str,
        serial: str,
        page: int,
        page_size: int,
        grouping: Grouping | None = None,
    ) -> Readings:
        """Page 0 holds the most recent ``page_size`` records, later pages are older.

        Without ``grouping`` the records are raw half-hour intervals.
        """
        path = f"{meter_type.meter_points_path}/{mpxn}/meters/{serial}/consumption/"
        params: Dict[str, Any] = {"page": page + 1, "page_size": page_size}
        if grouping is not None:
            params["group_by"] = grouping.value
        return decode(Readings.from_dict, self._get(token, path, params), self._build_url(path))

    def get_standard_unit_rates(
        self,
        token: AuthToken,
        meter_type: MeterType,
        product_code: str,
        tariff_code: str,
        page: int,
        page_size: int,
    ) -> StandingUnitRates:
        path = f"products/{product_code}/{meter_type.tariffs_path}/{tariff_code}/standard-unit-rates/"
        params = {"page": page + 1, "page_size": page_size}
        return decode(
            StandingUnitRates.from_dict,
            self._get(token, path, params),
            self._build_url(path),
        )
