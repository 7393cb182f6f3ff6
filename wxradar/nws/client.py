"""Minimal JSON client for the National Weather Service API."""

from __future__ import annotations

import json
from typing import Any, Optional

import requests

BASE_URL = "https://api.weather.gov"
USER_AGENT = "wxradar/1.0"
ACCEPT = "application/geo+json"
DEFAULT_TIMEOUT = 15.0
# Only this much of an error body is inspected for a problem description.
ERROR_BODY_LIMIT = 4096


class NWSError(Exception):
    """Raised when a request to the NWS API fails.

    ``status`` holds the HTTP status code when the server answered.
    """

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


def _problem_detail(body: bytes) -> str:
    try:
        problem = json.loads(body)
    except ValueError:
        return ""
    if not isinstance(problem, dict):
        return ""
    detail = problem.get("detail")
    return detail if isinstance(detail, str) else ""


class NWSClient:
    """Sends identified GET requests to the NWS API and decodes JSON replies."""

    def __init__(
        self,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def get(self, url: str) -> Any:
        """GET ``url`` and return the decoded JSON body.

        Raises NWSError on transport failures, non-200 replies (with the
        server's problem detail when it gives one) and undecodable bodies.
        """
        headers = {"User-Agent": USER_AGENT, "Accept": ACCEPT}
        try:
            response = self.session.get(url, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise NWSError(f"request: {exc}") from exc

        with response:
            if response.status_code != 200:
                detail = _problem_detail(response.content[:ERROR_BODY_LIMIT])
                message = f"HTTP {response.status_code}"
                if detail:
                    message += f": {detail}"
                raise NWSError(message, status=response.status_code)
            try:
                return response.json()
            except ValueError as exc:
                raise NWSError(f"decode: {exc}", status=response.status_code) from exc