"""
Constants and enums for economic risk classification.
"""

from enum import Enum


class RiskTier(str, Enum):
    """Risk tiers, ordered normal < warning < critical."""
    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _TIER_RANK[self]


_TIER_RANK = {
    RiskTier.NORMAL: 0,
    RiskTier.WARNING: 1,
    RiskTier.CRITICAL: 2,
}


class IndicatorDirection(str, Enum):
    """Which side of the thresholds is the bad side."""
    HIGHER_IS_WORSE = "higher_is_worse"  # unemployment, inflation, rates
    LOWER_IS_WORSE = "lower_is_worse"  # growth, sentiment


class IndicatorKey(str, Enum):
    """FRED series ids tracked by the dashboard."""
    UNRATE = "UNRATE"
    CPIAUCSL = "CPIAUCSL"
    GDP = "GDP"
    DFF = "DFF"
    UMCSENT = "UMCSENT"


class LoanStatus(str, Enum):
    """Delinquency status of a loan."""
    CURRENT = "current"
    PAST_DUE_30 = "past_due_30"
    PAST_DUE_60 = "past_due_60"
    PAST_DUE_90 = "past_due_90"
    DEFAULT = "default"


# Loss given default applied to every loan in expected-loss calculations
LOSS_GIVEN_DEFAULT: float = 0.6

# Segment risk score cut points (closed above)
SEGMENT_CRITICAL_SCORE: float = 3.5
SEGMENT_WARNING_SCORE: float = 2.5

# Segment impact calibration
MAJOR_FACTOR_THRESHOLD: float = 0.05  # strict: weighted impact must exceed this
MAX_LOSS_FRACTION: float = 0.25
