"""
Economic Risk Module

Classifies macroeconomic indicators into risk tiers and measures how a
lending portfolio responds to stress scenarios and economic conditions.
"""

from app.risk.constants import (
    IndicatorDirection,
    IndicatorKey,
    LoanStatus,
    RiskTier,
    LOSS_GIVEN_DEFAULT,
)
from app.risk.indicators import (
    ECONOMIC_INDICATORS,
    IndicatorDefinition,
    IndicatorReading,
    UnknownIndicatorError,
    classify_risk_level,
    get_indicator,
    list_indicators,
    normalize_indicator_key,
)
from app.risk.portfolio import (
    EconomicFactors,
    GeographicRegion,
    GroupExposure,
    IndustrySegment,
    Loan,
    LoanProduct,
    PortfolioMetrics,
    RiskScenario,
    apply_stress_scenario,
    calculate_portfolio_metrics,
    get_portfolio_by_industry,
    get_portfolio_by_region,
    group_portfolio,
)
from app.risk.exposure import (
    PortfolioSegment,
    PortfolioSummary,
    PotentialLoss,
    RiskImpact,
    calculate_economic_risk_impact,
    calculate_portfolio_summary,
    risk_contribution,
    segment_risk_tier,
)

__all__ = [
    # Constants
    "IndicatorDirection",
    "IndicatorKey",
    "LoanStatus",
    "RiskTier",
    "LOSS_GIVEN_DEFAULT",
    # Indicator classification
    "ECONOMIC_INDICATORS",
    "IndicatorDefinition",
    "IndicatorReading",
    "UnknownIndicatorError",
    "classify_risk_level",
    "get_indicator",
    "list_indicators",
    "normalize_indicator_key",
    # Portfolio aggregation and stress
    "EconomicFactors",
    "GeographicRegion",
    "GroupExposure",
    "IndustrySegment",
    "Loan",
    "LoanProduct",
    "PortfolioMetrics",
    "RiskScenario",
    "apply_stress_scenario",
    "calculate_portfolio_metrics",
    "get_portfolio_by_industry",
    "get_portfolio_by_region",
    "group_portfolio",
    # Segment exposure
    "PortfolioSegment",
    "PortfolioSummary",
    "PotentialLoss",
    "RiskImpact",
    "calculate_economic_risk_impact",
    "calculate_portfolio_summary",
    "risk_contribution",
    "segment_risk_tier",
]
