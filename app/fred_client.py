from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from .config import FredSettings
from .risk.indicators import IndicatorReading
from .utils import setup_logging

logger = setup_logging()

MISSING_VALUE = "."


class FredClientError(Exception):
    pass


class MissingCredentialError(FredClientError):
    """The FRED API key is not available in this process."""


class UpstreamUnavailableError(FredClientError):
    """FRED returned an error status or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def parse_observation_value(raw: Any) -> Optional[float]:
    """FRED encodes values as strings; "." marks a missing observation."""
    if raw is None:
        return None
    text = str(raw).strip()
    if text == MISSING_VALUE or text == "":
        return None
    try:
        return float(text)
    except ValueError:
        logger.warning("Unparseable FRED observation value: %r", raw)
        return None


class FredClient:
    """
    Server-side client for the FRED observations API.

    Holds the API key, so it can only be built from settings that carry one.
    Browser-facing code talks to our own /api routes instead (see
    DashboardApiClient).
    """

    def __init__(self, settings: FredSettings, session: Optional[requests.Session] = None):
        if not settings.has_credential:
            raise MissingCredentialError(
                "FRED API key is required. Set FRED_API_KEY in the server environment."
            )
        self._api_key = settings.api_key
        self.base_url = settings.base_url.rstrip("/")
        self.timeout = settings.timeout_seconds
        self._session = session or requests.Session()

    def _get(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}/{path.lstrip('/')}"
        query = {**params, "api_key": self._api_key, "file_type": "json"}

        try:
            resp = self._session.get(url, params=query, timeout=self.timeout)
        except requests.Timeout as exc:
            raise UpstreamUnavailableError(
                f"FRED API timed out after {self.timeout}s"
            ) from exc
        except requests.RequestException as exc:
            raise UpstreamUnavailableError(f"FRED API request failed: {exc}") from exc

        if resp.status_code >= 400:
            raise UpstreamUnavailableError(
                f"FRED API error: {resp.status_code} {resp.reason}",
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as exc:
            raise UpstreamUnavailableError("FRED API returned invalid JSON") from exc

    def get_series_observations(
        self,
        series_id: str,
        observation_start: Optional[str] = None,
        observation_end: Optional[str] = None,
        limit: int = 100,
        units: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Fetch observations for a series, most recent first.

        Args:
            series_id: FRED series id (e.g., "UNRATE")
            observation_start: Optional YYYY-MM-DD lower bound
            observation_end: Optional YYYY-MM-DD upper bound
            limit: Maximum number of observations
            units: Optional FRED units transform (lin, chg, ch1, pch, pc1, pca)

        Returns:
            List of raw observation dicts with string-encoded values
        """
        params: Dict[str, Any] = {
            "series_id": series_id,
            "limit": str(limit),
            "sort_order": "desc",
        }
        if observation_start:
            params["observation_start"] = observation_start
        if observation_end:
            params["observation_end"] = observation_end
        if units:
            params["units"] = units

        data = self._get("series/observations", params)
        observations = data.get("observations", [])
        logger.debug("Fetched %d observations for %s", len(observations), series_id)
        return observations

    def get_series_info(self, series_id: str) -> Dict[str, Any]:
        data = self._get("series", {"series_id": series_id})
        series = data.get("seriess") or []
        if not series:
            raise UpstreamUnavailableError(f"FRED returned no metadata for {series_id}")
        return series[0]

    def get_latest_value(self, series_id: str) -> IndicatorReading:
        observations = self.get_series_observations(series_id, limit=1)
        if not observations:
            return IndicatorReading(indicator_key=series_id, value=None, observation_date="")

        latest = observations[0]
        return IndicatorReading(
            indicator_key=series_id,
            value=parse_observation_value(latest.get("value")),
            observation_date=latest.get("date", ""),
        )
