"""HTTP transport for the shift REST API."""

from __future__ import annotations

from typing import Any

import requests

from shiftboard.errors import TransportFailure


class ShiftApiTransport:
    """Talks to ``/api/shifts`` and raises ``TransportFailure`` on anything but success."""

    def __init__(self, base_url: str, timeout: float | None = None, session: requests.Session | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def list_shifts(self) -> list[dict[str, Any]]:
        data = self._request("GET", self.base_url)
        if not isinstance(data, list):
            raise TransportFailure("Expected a list of shifts.")
        return data

    def create_shift(self, payload: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", self.base_url, json={"shift": payload})

    def update_shift(self, shift_id: int, payload: dict[str, Any]) -> dict[str, Any]:
        return self._request("PUT", f"{self.base_url}/{shift_id}", json={"shift": payload})

    def delete_shift(self, shift_id: int) -> None:
        self._request("DELETE", f"{self.base_url}/{shift_id}", expect_body=False)

    def _request(self, method: str, url: str, expect_body: bool = True, **kwargs: Any) -> Any:
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise TransportFailure(f"{method} {url} failed: {exc}") from exc

        if not response.ok:
            raise TransportFailure(f"{method} {url} returned {response.status_code}.", status_code=response.status_code)
        if not expect_body:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise TransportFailure(f"{method} {url} returned a non-JSON body.", status_code=response.status_code) from exc
