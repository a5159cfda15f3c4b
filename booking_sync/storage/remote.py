"""
Remote HTTP API backend.

Collections map to REST-style endpoints under a configurable base URL.
The endpoint names differ from the local storage keys, so the two
backends are not wire-compatible with each other.

Every failure (transport error, timeout, non-2xx status, undecodable
body) degrades to an absent result and is logged; nothing is raised.
"""

import logging
from typing import Any, Optional

import httpx

from booking_sync.storage.base import Collection, StorageAdapter

logger = logging.getLogger(__name__)

ENDPOINTS: dict[Collection, str] = {
    Collection.CASES: "cases",
    Collection.APPOINTMENTS: "appointments",
    Collection.BOOKED_SLOTS: "bookedSlots",
}

ALLOWED_METHODS = ("GET", "POST", "PUT", "DELETE")


class RemoteStorageAdapter(StorageAdapter):
    """Storage adapter backed by a JSON REST API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        token: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout)
        self._headers = headers

    def _send(
        self,
        endpoint: str,
        method: str = "GET",
        *,
        json: Any = None,
        content: Optional[str] = None,
    ) -> Optional[httpx.Response]:
        method = method.upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(f"Unsupported method {method!r}, expected one of {ALLOWED_METHODS}")
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        try:
            response = self._client.request(
                method, url, headers=self._headers, json=json, content=content
            )
        except httpx.HTTPError as exc:
            logger.error("API request error [%s %s]: %s", method, endpoint, exc)
            return None
        if not response.is_success:
            logger.error("API request failed [%s %s]: %d", method, endpoint, response.status_code)
            return None
        return response

    def request(self, endpoint: str, method: str = "GET", body: Any = None) -> Optional[Any]:
        """Send a JSON request and return the decoded body, or None on failure."""
        payload = body if method.upper() != "GET" else None
        response = self._send(endpoint, method, json=payload)
        if response is None:
            return None
        try:
            return response.json()
        except ValueError:
            logger.error("API response for %s was not valid JSON", endpoint)
            return None

    def read(self, collection: Collection) -> Optional[str]:
        response = self._send(ENDPOINTS[Collection(collection)])
        return response.text if response is not None else None

    def write(self, collection: Collection, payload: str) -> bool:
        response = self._send(ENDPOINTS[Collection(collection)], "POST", content=payload)
        return response is not None

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "RemoteStorageAdapter":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
