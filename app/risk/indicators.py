"""
Economic indicator definitions and threshold classification.

Each tracked FRED series has a fixed warning and critical level and a
direction telling which side of those levels is adverse. Classification is
closed on the adverse side: a value exactly on a threshold falls in the
worse tier.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional, Union

from .constants import IndicatorDirection, IndicatorKey, RiskTier


class UnknownIndicatorError(ValueError):
    """Raised when an indicator key is not one of the tracked series."""

    def __init__(self, indicator_key: str):
        self.indicator_key = indicator_key
        super().__init__(f"Unknown indicator: {indicator_key!r}")


@dataclass(frozen=True)
class IndicatorDefinition:
    """Static description of a tracked indicator."""

    key: str
    name: str
    description: str
    unit: str
    warning_level: float
    critical_level: float
    impact: str
    direction: IndicatorDirection


@dataclass(frozen=True)
class IndicatorReading:
    """Latest observation for one series. value is None when unavailable."""

    indicator_key: str
    value: Optional[float]
    observation_date: str = ""


_DEFINITIONS = (
    IndicatorDefinition(
        key=IndicatorKey.UNRATE.value,
        name="Unemployment Rate",
        description="Civilian Unemployment Rate",
        unit="%",
        warning_level=4.5,
        critical_level=6.0,
        impact="Higher unemployment correlates with increased default risk",
        direction=IndicatorDirection.HIGHER_IS_WORSE,
    ),
    IndicatorDefinition(
        key=IndicatorKey.CPIAUCSL.value,
        name="Inflation Rate",
        description="Consumer Price Index for All Urban Consumers",
        unit="%",
        warning_level=3.0,
        critical_level=5.0,
        impact="High inflation affects borrowers' ability to repay loans",
        direction=IndicatorDirection.HIGHER_IS_WORSE,
    ),
    IndicatorDefinition(
        key=IndicatorKey.GDP.value,
        name="GDP Growth",
        description="Gross Domestic Product",
        unit="%",
        warning_level=1.5,
        critical_level=0.0,
        impact="Economic growth impacts credit demand and risk levels",
        direction=IndicatorDirection.LOWER_IS_WORSE,
    ),
    IndicatorDefinition(
        key=IndicatorKey.DFF.value,
        name="Federal Funds Rate",
        description="Federal Funds Effective Rate",
        unit="%",
        warning_level=5.0,
        critical_level=7.0,
        impact="Interest rate changes affect refinancing and default risk",
        direction=IndicatorDirection.HIGHER_IS_WORSE,
    ),
    IndicatorDefinition(
        key=IndicatorKey.UMCSENT.value,
        name="Consumer Sentiment",
        description="University of Michigan Consumer Sentiment",
        unit="Index",
        warning_level=80.0,
        critical_level=70.0,
        impact="Consumer confidence impacts payment behavior",
        direction=IndicatorDirection.LOWER_IS_WORSE,
    ),
)

ECONOMIC_INDICATORS: Mapping[str, IndicatorDefinition] = MappingProxyType(
    {definition.key: definition for definition in _DEFINITIONS}
)


def normalize_indicator_key(indicator_key: Union[str, IndicatorKey]) -> str:
    """
    Resolve a (case-insensitive) key to its canonical series id.

    Raises:
        UnknownIndicatorError: If the key is not tracked
    """
    if isinstance(indicator_key, IndicatorKey):
        return indicator_key.value
    key = str(indicator_key).strip().upper()
    if key not in ECONOMIC_INDICATORS:
        raise UnknownIndicatorError(str(indicator_key))
    return key


def get_indicator(indicator_key: Union[str, IndicatorKey]) -> IndicatorDefinition:
    return ECONOMIC_INDICATORS[normalize_indicator_key(indicator_key)]


def list_indicators() -> List[IndicatorDefinition]:
    """All tracked indicators in display order."""
    return list(_DEFINITIONS)


def classify_risk_level(
    indicator_key: Union[str, IndicatorKey],
    value: Optional[float],
) -> RiskTier:
    """
    Map an indicator value to a risk tier.

    A missing value (None) is always NORMAL: absent data never raises an
    alarm on its own.

    Args:
        indicator_key: Series id (e.g., "UNRATE"), case-insensitive
        value: Latest observation, or None if unavailable

    Returns:
        RiskTier for the value

    Raises:
        UnknownIndicatorError: If the key is not tracked
    """
    indicator = get_indicator(indicator_key)
    if value is None:
        return RiskTier.NORMAL

    if indicator.direction is IndicatorDirection.HIGHER_IS_WORSE:
        if value >= indicator.critical_level:
            return RiskTier.CRITICAL
        if value >= indicator.warning_level:
            return RiskTier.WARNING
        return RiskTier.NORMAL

    if value <= indicator.critical_level:
        return RiskTier.CRITICAL
    if value <= indicator.warning_level:
        return RiskTier.WARNING
    return RiskTier.NORMAL
