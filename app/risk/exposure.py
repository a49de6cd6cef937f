"""
Portfolio segment exposure to economic conditions.

Segment impact uses its own calibration of each indicator (reference points
3.5 / 2.0 / 2.5 / 4.0 / 85). These are not the warning and critical levels
used for indicator tiers in indicators.py and the two must stay separate.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, FrozenSet, Mapping, Sequence

from .constants import (
    MAJOR_FACTOR_THRESHOLD,
    MAX_LOSS_FRACTION,
    SEGMENT_CRITICAL_SCORE,
    SEGMENT_WARNING_SCORE,
    IndicatorKey,
    RiskTier,
)
from ..utils import setup_logging

logger = setup_logging()


@dataclass(frozen=True)
class PotentialLoss:
    """Dollar loss at warning and critical conditions."""

    warning: float = 0.0
    critical: float = 0.0


@dataclass(frozen=True)
class PortfolioSegment:
    """
    A block of the lending portfolio.

    risk_weights maps indicator keys to independent sensitivities in [0, 1];
    they are not a distribution and need not sum to 1.
    """

    id: str
    name: str
    description: str
    total_value: float
    loan_count: int
    avg_loan_size: float
    risk_weights: Mapping[str, float]
    current_risk_score: float
    potential_loss: PotentialLoss
    sector: str
    geography: str


@dataclass
class RiskImpact:
    impact_score: float
    major_risk_factors: FrozenSet[str]
    projected_loss: float


@dataclass
class PortfolioSummary:
    total_portfolio_value: float
    total_loan_count: int
    avg_risk_score: float
    risk_distribution: Dict[str, float] = field(default_factory=dict)
    total_potential_loss: PotentialLoss = field(default_factory=PotentialLoss)


# Normalized risk contribution per indicator, floored at 0
RISK_CONTRIBUTIONS: Mapping[str, Callable[[float], float]] = MappingProxyType({
    IndicatorKey.UNRATE.value: lambda value: max(0.0, (value - 3.5) / 2.5),
    IndicatorKey.CPIAUCSL.value: lambda value: max(0.0, (value - 2.0) / 3.0),
    IndicatorKey.GDP.value: lambda value: max(0.0, (2.5 - value) / 2.5),
    IndicatorKey.DFF.value: lambda value: max(0.0, (value - 4.0) / 3.0),
    IndicatorKey.UMCSENT.value: lambda value: max(0.0, (85 - value) / 15),
})


def risk_contribution(indicator_key: str, value: float) -> float:
    """Normalized contribution of one indicator; 0 for series without a formula."""
    formula = RISK_CONTRIBUTIONS.get(indicator_key)
    if formula is None:
        return 0.0
    return formula(value)


def calculate_economic_risk_impact(
    segment: PortfolioSegment,
    economic_state: Mapping[str, float],
) -> RiskImpact:
    """
    Score a segment's exposure to the given economic state.

    Each indicator's contribution is scaled by the segment's sensitivity
    weight. Indicators whose weighted impact exceeds MAJOR_FACTOR_THRESHOLD
    are reported as major risk factors. Projected loss is capped at
    MAX_LOSS_FRACTION of the segment value.

    Args:
        segment: Portfolio segment to score
        economic_state: Current indicator values keyed by series id

    Returns:
        RiskImpact with score, major factors and projected loss
    """
    impact_score = 0.0
    major_factors = set()

    for indicator_key, value in economic_state.items():
        weight = segment.risk_weights.get(indicator_key, 0.0)
        weighted_impact = risk_contribution(indicator_key, value) * weight
        impact_score += weighted_impact
        if weighted_impact > MAJOR_FACTOR_THRESHOLD:
            major_factors.add(indicator_key)

    return RiskImpact(
        impact_score=impact_score,
        major_risk_factors=frozenset(major_factors),
        projected_loss=segment.total_value * min(MAX_LOSS_FRACTION, impact_score),
    )


def segment_risk_tier(risk_score: float) -> RiskTier:
    if risk_score >= SEGMENT_CRITICAL_SCORE:
        return RiskTier.CRITICAL
    if risk_score >= SEGMENT_WARNING_SCORE:
        return RiskTier.WARNING
    return RiskTier.NORMAL


def calculate_portfolio_summary(segments: Sequence[PortfolioSegment]) -> PortfolioSummary:
    """
    Roll segment figures up to a portfolio summary.

    The average risk score is weighted by segment value. The distribution
    gives the share of total value in each tier. Potential losses are summed
    directly since they are already dollar amounts.

    An empty segment list yields a zero summary.
    """
    total_value = sum(segment.total_value for segment in segments)
    total_loan_count = sum(segment.loan_count for segment in segments)
    potential_loss = PotentialLoss(
        warning=sum(s.potential_loss.warning for s in segments),
        critical=sum(s.potential_loss.critical for s in segments),
    )
    distribution = {tier.value: 0.0 for tier in RiskTier}

    if total_value <= 0:
        logger.warning("Portfolio summary requested for %d segment(s) with no value", len(segments))
        return PortfolioSummary(
            total_portfolio_value=total_value,
            total_loan_count=total_loan_count,
            avg_risk_score=0.0,
            risk_distribution=distribution,
            total_potential_loss=potential_loss,
        )

    for segment in segments:
        tier = segment_risk_tier(segment.current_risk_score)
        distribution[tier.value] += segment.total_value

    return PortfolioSummary(
        total_portfolio_value=total_value,
        total_loan_count=total_loan_count,
        avg_risk_score=sum(
            segment.current_risk_score * segment.total_value for segment in segments
        ) / total_value,
        risk_distribution={
            tier: value / total_value for tier, value in distribution.items()
        },
        total_potential_loss=potential_loss,
    )
