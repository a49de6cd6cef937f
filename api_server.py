"""
FastAPI backend server for the Economic Risk Dashboard.
This provides REST API endpoints for the Next.js frontend.
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.config import load_settings, validate_settings
from app.fred_client import FredClient, FredClientError
from app.indicator_service import (
    IndicatorService,
    IndicatorSnapshot,
    RiskAlert,
    build_risk_alert,
)
from app.risk import (
    GroupExposure,
    PortfolioMetrics,
    PortfolioSegment,
    PortfolioSummary,
    RiskImpact,
    RiskScenario,
    UnknownIndicatorError,
    apply_stress_scenario,
    calculate_economic_risk_impact,
    calculate_portfolio_metrics,
    calculate_portfolio_summary,
    get_indicator,
    get_portfolio_by_industry,
    get_portfolio_by_region,
    segment_risk_tier,
)
from app.risk.mock_data import (
    get_current_economic_state,
    get_mock_loans,
    get_portfolio_segments,
    get_risk_scenario,
    get_risk_scenarios,
)
from app.utils import setup_logging

settings = load_settings()

# Setup logging
logger = setup_logging(settings.server.log_level)

# Initialize FastAPI app
app = FastAPI(
    title="Economic Risk Dashboard API",
    description="Macroeconomic indicator risk tiers and loan portfolio stress analysis",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.server.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """Report configuration problems on startup."""
    for problem in validate_settings(settings):
        logger.warning("Configuration: %s", problem)


_indicator_service: Optional[IndicatorService] = None
_indicator_service_lock = threading.Lock()


def _get_indicator_service() -> IndicatorService:
    """
    Build the indicator service on first use.

    Raises:
        MissingCredentialError: If FRED_API_KEY is not configured
    """
    global _indicator_service
    with _indicator_service_lock:
        if _indicator_service is None:
            client = FredClient(settings.fred)
            _indicator_service = IndicatorService(client, max_workers=settings.fred.max_workers)
        return _indicator_service


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


# Pydantic models for API responses
class ErrorResponse(BaseModel):
    success: bool = False
    error: str


ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


# =============================================================================
# Serialization
# =============================================================================

def _snapshot_to_dict(snapshot: IndicatorSnapshot, detail: bool = False) -> Dict[str, Any]:
    definition = snapshot.definition
    data = {
        "indicator": definition.key,
        "name": definition.name,
        "value": snapshot.value,
        "date": snapshot.date,
        "riskLevel": snapshot.risk_level.value,
        "unit": definition.unit,
        "impact": definition.impact,
    }
    if detail:
        data["warningLevel"] = definition.warning_level
        data["criticalLevel"] = definition.critical_level
    if snapshot.error:
        data["error"] = snapshot.error
    return data


def _alert_to_dict(alert: RiskAlert) -> Dict[str, Any]:
    return {
        "level": alert.level.value,
        "title": alert.title,
        "message": alert.message,
        "critical": alert.critical,
        "warning": alert.warning,
        "generatedAt": alert.generated_at,
    }


def _scenario_to_dict(scenario: RiskScenario) -> Dict[str, Any]:
    factors = scenario.economic_factors
    return {
        "id": scenario.id,
        "name": scenario.name,
        "description": scenario.description,
        "economicFactors": {
            "unemploymentChange": factors.unemployment_change,
            "inflationChange": factors.inflation_change,
            "gdpGrowthChange": factors.gdp_growth_change,
            "interestRateChange": factors.interest_rate_change,
        },
        "impactMultiplier": scenario.impact_multiplier,
    }


def _metrics_to_dict(metrics: PortfolioMetrics) -> Dict[str, Any]:
    return {
        "totalLoans": metrics.total_loans,
        "totalOutstanding": metrics.total_outstanding,
        "averageInterestRate": round(metrics.average_interest_rate, 4),
        "averageCreditScore": round(metrics.average_credit_score, 1),
        "portfolioPD": round(metrics.portfolio_pd, 6),
        "expectedLoss": round(metrics.expected_loss, 2),
    }


def _groups_to_dict(groups: Dict[str, GroupExposure]) -> Dict[str, Any]:
    return {
        name: {
            "totalAmount": group.total_amount,
            "loanCount": group.loan_count,
            "avgPD": round(group.avg_pd, 6),
            "loanIds": [loan.id for loan in group.loans],
        }
        for name, group in groups.items()
    }


def _segment_to_dict(segment: PortfolioSegment, impact: RiskImpact) -> Dict[str, Any]:
    return {
        "id": segment.id,
        "name": segment.name,
        "description": segment.description,
        "totalValue": segment.total_value,
        "loanCount": segment.loan_count,
        "avgLoanSize": segment.avg_loan_size,
        "riskWeights": dict(segment.risk_weights),
        "currentRiskScore": segment.current_risk_score,
        "riskTier": segment_risk_tier(segment.current_risk_score).value,
        "potentialLoss": {
            "warning": segment.potential_loss.warning,
            "critical": segment.potential_loss.critical,
        },
        "sector": segment.sector,
        "geography": segment.geography,
        "riskImpact": {
            "impactScore": round(impact.impact_score, 6),
            "majorRiskFactors": sorted(impact.major_risk_factors),
            "projectedLoss": round(impact.projected_loss, 2),
        },
    }


def _summary_to_dict(summary: PortfolioSummary) -> Dict[str, Any]:
    return {
        "totalPortfolioValue": summary.total_portfolio_value,
        "totalLoanCount": summary.total_loan_count,
        "avgRiskScore": round(summary.avg_risk_score, 4),
        "riskDistribution": {
            tier: round(share, 6) for tier, share in summary.risk_distribution.items()
        },
        "totalPotentialLoss": {
            "warning": summary.total_potential_loss.warning,
            "critical": summary.total_potential_loss.critical,
        },
    }


# =============================================================================
# Health
# =============================================================================

@app.get("/")
async def root():
    return {"status": "ok", "service": "economic-risk-dashboard"}


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "fredConfigured": settings.fred.has_credential,
        "timestamp": _timestamp(),
    }


# =============================================================================
# Economic Indicators
# =============================================================================

@app.get("/api/indicators", responses={500: {"model": ErrorResponse}})
def list_indicator_values():
    """
    Latest value and risk tier of every tracked indicator.

    A series that fails to load is returned with value null, riskLevel
    "normal" and an error field; the rest of the batch is unaffected.
    """
    try:
        snapshots = _get_indicator_service().get_all_indicators()
        return {
            "success": True,
            "data": [_snapshot_to_dict(s) for s in snapshots],
            "timestamp": _timestamp(),
        }
    except Exception as e:
        logger.error("API Error: %s", e, exc_info=True)
        return _error(500, str(e))


@app.get("/api/indicators/{indicator_id}", responses=ERROR_RESPONSES)
def get_indicator_value(indicator_id: str):
    """Latest value, risk tier and thresholds of one indicator (id is case-insensitive)."""
    try:
        # Reject unknown ids before the FRED client is needed
        get_indicator(indicator_id)
        snapshot = _get_indicator_service().get_indicator(indicator_id)
        return {
            "success": True,
            "data": _snapshot_to_dict(snapshot, detail=True),
            "timestamp": _timestamp(),
        }
    except UnknownIndicatorError:
        return _error(400, "Invalid indicator ID")
    except FredClientError as e:
        logger.error("API Error for %s: %s", indicator_id, e)
        return _error(500, str(e))
    except Exception as e:
        logger.error("API Error for %s: %s", indicator_id, e, exc_info=True)
        return _error(500, str(e))


@app.get("/api/alerts", responses={500: {"model": ErrorResponse}})
def get_risk_alert():
    """Overall dashboard alert derived from the indicator batch."""
    try:
        snapshots = _get_indicator_service().get_all_indicators()
        return {
            "success": True,
            "data": _alert_to_dict(build_risk_alert(snapshots)),
            "timestamp": _timestamp(),
        }
    except Exception as e:
        logger.error("Failed to build risk alert: %s", e, exc_info=True)
        return _error(500, str(e))


# =============================================================================
# Portfolio
# =============================================================================

@app.get("/api/portfolio/scenarios")
async def list_scenarios():
    return {
        "success": True,
        "data": [_scenario_to_dict(s) for s in get_risk_scenarios()],
    }


@app.get("/api/portfolio/metrics", responses={404: {"model": ErrorResponse}})
async def get_portfolio_metrics(scenario: str = Query("BASE")):
    """Portfolio metrics and regional/industry breakdowns under a stress scenario."""
    selected = get_risk_scenario(scenario)
    if selected is None:
        return _error(404, f"Unknown scenario: {scenario}")

    stressed_loans = apply_stress_scenario(get_mock_loans(), selected)
    return {
        "success": True,
        "data": {
            "scenario": _scenario_to_dict(selected),
            "metrics": _metrics_to_dict(calculate_portfolio_metrics(stressed_loans)),
            "byRegion": _groups_to_dict(get_portfolio_by_region(stressed_loans)),
            "byIndustry": _groups_to_dict(get_portfolio_by_industry(stressed_loans)),
        },
    }


@app.get("/api/portfolio/segments")
async def list_segments():
    """Portfolio segments with their exposure to current economic conditions."""
    economic_state = get_current_economic_state()
    return {
        "success": True,
        "data": [
            _segment_to_dict(segment, calculate_economic_risk_impact(segment, economic_state))
            for segment in get_portfolio_segments()
        ],
        "economicState": dict(economic_state),
    }


@app.get("/api/portfolio/summary")
async def get_portfolio_summary():
    return {
        "success": True,
        "data": _summary_to_dict(calculate_portfolio_summary(get_portfolio_segments())),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api_server:app", host="0.0.0.0", port=8000, reload=False)
