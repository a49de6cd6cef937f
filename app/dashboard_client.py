from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from .utils import setup_logging

logger = setup_logging()

DEFAULT_BASE_URL = "http://127.0.0.1:8000"


class DashboardApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DashboardApiClient:
    """
    Client for the dashboard's own /api routes.

    Never holds a FRED credential; all upstream access happens inside the
    API server.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _get(self, path: str) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            resp = requests.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise DashboardApiError(f"Dashboard API unreachable: {exc}") from exc

        try:
            body = resp.json()
        except ValueError as exc:
            raise DashboardApiError(
                f"Dashboard API returned non-JSON response ({resp.status_code})",
                status_code=resp.status_code,
            ) from exc

        if resp.status_code >= 400 or not body.get("success", False):
            error = body.get("error") or body.get("detail") or "Unknown error"
            raise DashboardApiError(str(error), status_code=resp.status_code)
        return body

    def get_indicators(self) -> List[Dict[str, Any]]:
        return self._get("/api/indicators")["data"]

    def get_indicator(self, indicator_id: str) -> Dict[str, Any]:
        return self._get(f"/api/indicators/{indicator_id.lower()}")["data"]

    def get_alert(self) -> Dict[str, Any]:
        return self._get("/api/alerts")["data"]
