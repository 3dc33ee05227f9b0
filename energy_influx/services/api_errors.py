# energy_influx/services/api_errors.py
"""Errors shared by the Envoy and Octopus clients.

None of these are retried; they propagate to ``main()`` which prints the
chain and exits non-zero.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

T = TypeVar("T")


class ApiError(Exception):
    """Base class for any failure talking to a remote energy API."""


class HttpError(ApiError):
    """The request never produced a response (connection, TLS, timeout)."""


class RestError(ApiError):
    """A REST method answered with a non-2xx status."""

    def __init__(self, status: int, body: str, url: str | None = None):
        self.status = status
        self.body = body
        self.url = url
        where = f" from {url}" if url else ""
        super().__init__(f"REST error {status}{where}: {body}")


class GraphQlError(ApiError):
    def __init__(self, errors: list[Any] | None):
        self.errors = list(errors or [])
        super().__init__(f"GraphQL errors: {self.errors}")


class DecodeError(ApiError):
    """The response body was not JSON or did not match the expected schema."""


def response_json(resp, url: str) -> Any:
    try:
        return resp.json()
    except ValueError as exc:
        raise DecodeError(f"{url} returned non-JSON payload") from exc


def decode(factory: Callable[[Any], T], payload: Any, url: str) -> T:
    try:
        return factory(payload)
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise DecodeError(f"Unexpected payload from {url}: {exc!r}") from exc
