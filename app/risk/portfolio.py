"""
Loan portfolio aggregation and stress scenarios.

Provides:
- Portfolio metrics (value-weighted PD and expected loss)
- Scenario stress application on default probabilities
- Regional and industry breakdowns
"""

from dataclasses import dataclass, field, replace
from typing import Callable, Dict, List, Sequence

from .constants import LOSS_GIVEN_DEFAULT, LoanStatus
from ..utils import setup_logging

logger = setup_logging()


@dataclass(frozen=True)
class LoanProduct:
    id: str
    name: str
    description: str = ""


@dataclass(frozen=True)
class GeographicRegion:
    id: str
    name: str
    state: str = ""


@dataclass(frozen=True)
class IndustrySegment:
    id: str
    name: str
    sector: str = ""


@dataclass(frozen=True)
class Loan:
    """
    A single loan in the portfolio.

    Loans are immutable; stress scenarios produce new Loan values.
    """

    id: str
    amount: float
    interest_rate: float
    term: int  # months
    product: LoanProduct
    region: GeographicRegion
    industry: IndustrySegment
    credit_score: int
    ltv: float
    probability_of_default: float
    status: LoanStatus = LoanStatus.CURRENT
    origination_date: str = ""
    maturity_date: str = ""


@dataclass(frozen=True)
class EconomicFactors:
    """Percentage-point changes assumed by a scenario."""

    unemployment_change: float = 0.0
    inflation_change: float = 0.0
    gdp_growth_change: float = 0.0
    interest_rate_change: float = 0.0


@dataclass(frozen=True)
class RiskScenario:
    """Stress scenario; impact_multiplier is applied to every loan's PD."""

    id: str
    name: str
    description: str
    economic_factors: EconomicFactors
    impact_multiplier: float


@dataclass
class PortfolioMetrics:
    """Headline metrics for a set of loans."""

    total_loans: int
    total_outstanding: float
    average_interest_rate: float
    average_credit_score: float
    portfolio_pd: float  # amount-weighted average PD
    expected_loss: float


@dataclass
class GroupExposure:
    """Exposure of one region or industry."""

    total_amount: float = 0.0
    loan_count: int = 0
    avg_pd: float = 0.0
    loans: List[Loan] = field(default_factory=list)


def calculate_portfolio_metrics(loans: Sequence[Loan]) -> PortfolioMetrics:
    """
    Compute portfolio-level metrics.

    portfolio_pd is weighted by loan amount. Expected loss assumes a fixed
    loss given default of LOSS_GIVEN_DEFAULT.

    An empty portfolio yields all-zero metrics.

    Args:
        loans: Loans to aggregate

    Returns:
        PortfolioMetrics for the loans
    """
    if not loans:
        logger.warning("Portfolio metrics requested for an empty loan list")
        return PortfolioMetrics(
            total_loans=0,
            total_outstanding=0.0,
            average_interest_rate=0.0,
            average_credit_score=0.0,
            portfolio_pd=0.0,
            expected_loss=0.0,
        )

    total_loans = len(loans)
    total_outstanding = sum(loan.amount for loan in loans)
    weighted_pd = sum(loan.probability_of_default * loan.amount for loan in loans)

    return PortfolioMetrics(
        total_loans=total_loans,
        total_outstanding=total_outstanding,
        average_interest_rate=sum(loan.interest_rate for loan in loans) / total_loans,
        average_credit_score=sum(loan.credit_score for loan in loans) / total_loans,
        portfolio_pd=weighted_pd / total_outstanding,
        expected_loss=sum(
            loan.amount * loan.probability_of_default * LOSS_GIVEN_DEFAULT
            for loan in loans
        ),
    )


def apply_stress_scenario(loans: Sequence[Loan], scenario: RiskScenario) -> List[Loan]:
    """
    Return stressed copies of the loans.

    Each PD is multiplied by the scenario's impact multiplier and capped at 1.0.
    """
    return [
        replace(
            loan,
            probability_of_default=min(
                loan.probability_of_default * scenario.impact_multiplier, 1.0
            ),
        )
        for loan in loans
    ]


def group_portfolio(
    loans: Sequence[Loan],
    key_fn: Callable[[Loan], str],
) -> Dict[str, GroupExposure]:
    """
    Group loans by key and compute exposure per group.

    avg_pd is weighted by loan amount within the group.
    """
    groups: Dict[str, GroupExposure] = {}
    for loan in loans:
        group = groups.setdefault(key_fn(loan), GroupExposure())
        group.total_amount += loan.amount
        group.loan_count += 1
        group.loans.append(loan)

    for group in groups.values():
        if group.total_amount > 0:
            group.avg_pd = sum(
                loan.probability_of_default * loan.amount for loan in group.loans
            ) / group.total_amount

    return groups


def get_portfolio_by_region(loans: Sequence[Loan]) -> Dict[str, GroupExposure]:
    return group_portfolio(loans, lambda loan: loan.region.name)


def get_portfolio_by_industry(loans: Sequence[Loan]) -> Dict[str, GroupExposure]:
    return group_portfolio(loans, lambda loan: loan.industry.name)
