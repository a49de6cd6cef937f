"""
Indicator snapshots for the dashboard.

Fetches the latest value of every tracked series in parallel and
classifies each one. A failed series is reported with value None, NORMAL
risk and an error message; it never blocks the others.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from .fred_client import FredClient, FredClientError
from .risk.constants import RiskTier
from .risk.indicators import (
    IndicatorDefinition,
    classify_risk_level,
    get_indicator,
    list_indicators,
)
from .utils import setup_logging

logger = setup_logging()


@dataclass
class IndicatorSnapshot:
    """Classified latest reading of one indicator."""

    definition: IndicatorDefinition
    value: Optional[float]
    date: str
    risk_level: RiskTier
    error: Optional[str] = None

    @property
    def indicator(self) -> str:
        return self.definition.key


@dataclass
class RiskAlert:
    """Overall alert across all indicators."""

    level: RiskTier
    title: str
    message: str
    critical: List[str] = field(default_factory=list)
    warning: List[str] = field(default_factory=list)
    generated_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


class IndicatorService:
    """
    Builds indicator snapshots from a FRED fetcher.

    Args:
        fetcher: FredClient (or anything with get_latest_value)
        max_workers: Parallel requests per batch
    """

    def __init__(self, fetcher: FredClient, max_workers: int = 5):
        self.fetcher = fetcher
        self.max_workers = max(1, max_workers)

    def get_indicator(self, indicator_key: str) -> IndicatorSnapshot:
        """
        Fetch and classify a single indicator.

        Raises:
            UnknownIndicatorError: If the key is not tracked
            FredClientError: If the upstream fetch fails
        """
        definition = get_indicator(indicator_key)
        reading = self.fetcher.get_latest_value(definition.key)
        return IndicatorSnapshot(
            definition=definition,
            value=reading.value,
            date=reading.observation_date,
            risk_level=classify_risk_level(definition.key, reading.value),
        )

    def _fetch_or_degrade(self, definition: IndicatorDefinition) -> IndicatorSnapshot:
        try:
            return self.get_indicator(definition.key)
        except FredClientError as e:
            logger.error("Error fetching %s: %s", definition.key, e)
            return IndicatorSnapshot(
                definition=definition,
                value=None,
                date="",
                risk_level=RiskTier.NORMAL,
                error=str(e),
            )

    def get_all_indicators(self) -> List[IndicatorSnapshot]:
        """
        Fetch every tracked indicator in parallel.

        Returns:
            One snapshot per indicator, in indicator table order
        """
        definitions = list_indicators()
        results: Dict[str, IndicatorSnapshot] = {}

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_key = {
                executor.submit(self._fetch_or_degrade, definition): definition.key
                for definition in definitions
            }
            for future in as_completed(future_to_key):
                results[future_to_key[future]] = future.result()

        failed = sum(1 for snapshot in results.values() if snapshot.error)
        if failed:
            logger.warning("%d of %d indicators failed to load", failed, len(definitions))
        return [results[definition.key] for definition in definitions]


def build_risk_alert(snapshots: Sequence[IndicatorSnapshot]) -> RiskAlert:
    """Summarize indicator tiers into one dashboard alert."""
    critical = [s.indicator for s in snapshots if s.risk_level is RiskTier.CRITICAL]
    warning = [s.indicator for s in snapshots if s.risk_level is RiskTier.WARNING]

    if critical:
        return RiskAlert(
            level=RiskTier.CRITICAL,
            title="Critical Risk Alert",
            message=(
                f"{len(critical)} indicator(s) at critical levels. "
                "Consider tightening lending criteria immediately."
            ),
            critical=critical,
            warning=warning,
        )
    if warning:
        return RiskAlert(
            level=RiskTier.WARNING,
            title="Warning Alert",
            message=(
                f"{len(warning)} indicator(s) showing elevated risk. "
                "Monitor closely and prepare for potential policy adjustments."
            ),
            critical=critical,
            warning=warning,
        )
    return RiskAlert(
        level=RiskTier.NORMAL,
        title="Normal Risk Level",
        message=(
            "All economic indicators are within normal ranges. "
            "Current lending criteria appear appropriate."
        ),
    )
