"""
Illustrative portfolio data.

Loans, scenarios and segments are hand-authored examples, not a real book.
Everything here is immutable and built once at import time; use the
accessor functions rather than mutating the tuples.
"""

from types import MappingProxyType
from typing import List, Mapping, Optional

from .constants import IndicatorKey, LoanStatus
from .exposure import PortfolioSegment, PotentialLoss
from .portfolio import (
    EconomicFactors,
    GeographicRegion,
    IndustrySegment,
    Loan,
    LoanProduct,
    RiskScenario,
)


# Products
_MORTGAGE_30 = LoanProduct("MORTGAGE", "Residential Mortgage", "30-year fixed rate mortgage")
_MORTGAGE_25 = LoanProduct("MORTGAGE", "Residential Mortgage", "25-year fixed rate mortgage")
_MORTGAGE_20 = LoanProduct("MORTGAGE", "Residential Mortgage", "20-year fixed rate mortgage")
_CRE = LoanProduct("COMMERCIAL", "Commercial Real Estate", "Commercial property loan")
_CRE_OFFICE = LoanProduct("COMMERCIAL", "Commercial Real Estate", "Office building loan")
_AUTO = LoanProduct("AUTO", "Auto Loan", "Vehicle financing")
_SBA = LoanProduct("SBA", "SBA Business Loan", "Small business administration loan")
_PERSONAL = LoanProduct("PERSONAL", "Personal Loan", "Unsecured personal loan")


MOCK_PORTFOLIO_LOANS = (
    Loan(
        id="LOAN001", amount=250000, interest_rate=4.25, term=360,
        origination_date="2023-03-15", maturity_date="2053-03-15",
        product=_MORTGAGE_30,
        region=GeographicRegion("CA_BAY", "San Francisco Bay Area", "CA"),
        industry=IndustrySegment("TECH", "Technology", "Information Technology"),
        credit_score=750, ltv=0.8, status=LoanStatus.CURRENT,
        probability_of_default=0.02,
    ),
    Loan(
        id="LOAN002", amount=500000, interest_rate=6.75, term=84,
        origination_date="2023-06-20", maturity_date="2030-06-20",
        product=_CRE,
        region=GeographicRegion("TX_DALLAS", "Dallas-Fort Worth", "TX"),
        industry=IndustrySegment("RETAIL", "Retail Trade", "Consumer Discretionary"),
        credit_score=680, ltv=0.75, status=LoanStatus.CURRENT,
        probability_of_default=0.045,
    ),
    Loan(
        id="LOAN003", amount=75000, interest_rate=5.5, term=60,
        origination_date="2023-01-10", maturity_date="2028-01-10",
        product=_AUTO,
        region=GeographicRegion("FL_MIAMI", "Miami-Dade", "FL"),
        industry=IndustrySegment("HEALTHCARE", "Healthcare", "Healthcare"),
        credit_score=720, ltv=0.9, status=LoanStatus.CURRENT,
        probability_of_default=0.03,
    ),
    Loan(
        id="LOAN004", amount=150000, interest_rate=8.25, term=36,
        origination_date="2023-09-05", maturity_date="2026-09-05",
        product=_SBA,
        region=GeographicRegion("NY_NYC", "New York City", "NY"),
        industry=IndustrySegment("HOSPITALITY", "Hospitality", "Consumer Discretionary"),
        credit_score=640, ltv=0.7, status=LoanStatus.PAST_DUE_30,
        probability_of_default=0.12,
    ),
    Loan(
        id="LOAN005", amount=300000, interest_rate=4.75, term=300,
        origination_date="2023-04-18", maturity_date="2048-04-18",
        product=_MORTGAGE_25,
        region=GeographicRegion("WA_SEATTLE", "Seattle Metropolitan", "WA"),
        industry=IndustrySegment("FINANCE", "Financial Services", "Financials"),
        credit_score=780, ltv=0.75, status=LoanStatus.CURRENT,
        probability_of_default=0.015,
    ),
    Loan(
        id="LOAN006", amount=450000, interest_rate=7.5, term=120,
        origination_date="2023-08-12", maturity_date="2033-08-12",
        product=_CRE_OFFICE,
        region=GeographicRegion("IL_CHICAGO", "Chicago Metro", "IL"),
        industry=IndustrySegment("MANUFACTURING", "Manufacturing", "Industrials"),
        credit_score=700, ltv=0.8, status=LoanStatus.CURRENT,
        probability_of_default=0.035,
    ),
    Loan(
        id="LOAN007", amount=85000, interest_rate=9.75, term=48,
        origination_date="2023-07-22", maturity_date="2027-07-22",
        product=_PERSONAL,
        region=GeographicRegion("GA_ATLANTA", "Atlanta Metro", "GA"),
        industry=IndustrySegment("EDUCATION", "Education", "Consumer Discretionary"),
        credit_score=650, ltv=0.0, status=LoanStatus.PAST_DUE_60,
        probability_of_default=0.18,
    ),
    Loan(
        id="LOAN008", amount=200000, interest_rate=5.25, term=240,
        origination_date="2023-05-30", maturity_date="2043-05-30",
        product=_MORTGAGE_20,
        region=GeographicRegion("CO_DENVER", "Denver Metro", "CO"),
        industry=IndustrySegment("ENERGY", "Energy", "Energy"),
        credit_score=740, ltv=0.85, status=LoanStatus.CURRENT,
        probability_of_default=0.025,
    ),
)


RISK_SCENARIOS = (
    RiskScenario(
        id="BASE",
        name="Base Case",
        description="Current economic conditions continue",
        economic_factors=EconomicFactors(0.0, 0.0, 0.0, 0.0),
        impact_multiplier=1.0,
    ),
    RiskScenario(
        id="MILD_RECESSION",
        name="Mild Recession",
        description="Moderate economic downturn with rising unemployment",
        economic_factors=EconomicFactors(2.0, -0.5, -1.5, -1.0),
        impact_multiplier=1.5,
    ),
    RiskScenario(
        id="SEVERE_RECESSION",
        name="Severe Recession",
        description="Major economic contraction similar to 2008 financial crisis",
        economic_factors=EconomicFactors(4.5, -1.0, -3.0, -2.5),
        impact_multiplier=2.5,
    ),
    RiskScenario(
        id="INFLATION_SPIKE",
        name="High Inflation",
        description="Persistent high inflation with aggressive rate hikes",
        economic_factors=EconomicFactors(1.0, 3.0, -0.5, 3.0),
        impact_multiplier=1.8,
    ),
    RiskScenario(
        id="STAGFLATION",
        name="Stagflation",
        description="High inflation combined with economic stagnation",
        economic_factors=EconomicFactors(3.0, 4.0, -2.0, 2.0),
        impact_multiplier=2.2,
    ),
)


def _weights(**weights: float) -> Mapping[str, float]:
    return MappingProxyType(dict(weights))


PORTFOLIO_SEGMENTS = (
    PortfolioSegment(
        id="RESIDENTIAL_MORTGAGE",
        name="Residential Mortgages",
        description="Owner-occupied first-lien mortgages",
        total_value=1_200_000_000,
        loan_count=4_800,
        avg_loan_size=250_000,
        risk_weights=_weights(UNRATE=0.35, CPIAUCSL=0.15, GDP=0.15, DFF=0.25, UMCSENT=0.10),
        current_risk_score=2.1,
        potential_loss=PotentialLoss(warning=24_000_000, critical=60_000_000),
        sector="Consumer",
        geography="National",
    ),
    PortfolioSegment(
        id="COMMERCIAL_REAL_ESTATE",
        name="Commercial Real Estate",
        description="Office, retail and multifamily property loans",
        total_value=850_000_000,
        loan_count=420,
        avg_loan_size=2_023_810,
        risk_weights=_weights(UNRATE=0.20, CPIAUCSL=0.20, GDP=0.30, DFF=0.35, UMCSENT=0.05),
        current_risk_score=3.6,
        potential_loss=PotentialLoss(warning=42_500_000, critical=110_500_000),
        sector="Real Estate",
        geography="Major Metros",
    ),
    PortfolioSegment(
        id="SMALL_BUSINESS",
        name="Small Business Lending",
        description="SBA and working-capital loans to small firms",
        total_value=400_000_000,
        loan_count=3_200,
        avg_loan_size=125_000,
        risk_weights=_weights(UNRATE=0.25, CPIAUCSL=0.20, GDP=0.35, DFF=0.15, UMCSENT=0.20),
        current_risk_score=3.1,
        potential_loss=PotentialLoss(warning=28_000_000, critical=64_000_000),
        sector="Small Business",
        geography="National",
    ),
    PortfolioSegment(
        id="AUTO_LOANS",
        name="Auto Loans",
        description="New and used vehicle financing",
        total_value=300_000_000,
        loan_count=12_000,
        avg_loan_size=25_000,
        risk_weights=_weights(UNRATE=0.40, CPIAUCSL=0.25, GDP=0.10, DFF=0.10, UMCSENT=0.25),
        current_risk_score=2.6,
        potential_loss=PotentialLoss(warning=12_000_000, critical=30_000_000),
        sector="Consumer",
        geography="Sun Belt",
    ),
    PortfolioSegment(
        id="CONSUMER_UNSECURED",
        name="Personal Loans",
        description="Unsecured consumer installment loans",
        total_value=150_000_000,
        loan_count=15_000,
        avg_loan_size=10_000,
        risk_weights=_weights(UNRATE=0.50, CPIAUCSL=0.30, GDP=0.10, DFF=0.10, UMCSENT=0.30),
        current_risk_score=3.8,
        potential_loss=PotentialLoss(warning=13_500_000, critical=33_000_000),
        sector="Consumer",
        geography="National",
    ),
    PortfolioSegment(
        id="CORPORATE_TECH",
        name="Technology Corporate Lending",
        description="Term loans and revolvers to technology companies",
        total_value=500_000_000,
        loan_count=150,
        avg_loan_size=3_333_333,
        risk_weights=_weights(UNRATE=0.10, CPIAUCSL=0.10, GDP=0.25, DFF=0.30, UMCSENT=0.05),
        current_risk_score=1.9,
        potential_loss=PotentialLoss(warning=10_000_000, critical=35_000_000),
        sector="Information Technology",
        geography="West Coast",
    ),
)


CURRENT_ECONOMIC_STATE: Mapping[str, float] = MappingProxyType({
    IndicatorKey.UNRATE.value: 4.1,
    IndicatorKey.CPIAUCSL.value: 3.2,
    IndicatorKey.GDP.value: 2.1,
    IndicatorKey.DFF.value: 5.33,
    IndicatorKey.UMCSENT.value: 68.0,
})


def get_mock_loans() -> List[Loan]:
    return list(MOCK_PORTFOLIO_LOANS)


def get_risk_scenarios() -> List[RiskScenario]:
    return list(RISK_SCENARIOS)


def get_risk_scenario(scenario_id: str) -> Optional[RiskScenario]:
    """Look up a scenario by id (case-insensitive); None if unknown."""
    wanted = scenario_id.strip().upper()
    for scenario in RISK_SCENARIOS:
        if scenario.id == wanted:
            return scenario
    return None


def get_portfolio_segments() -> List[PortfolioSegment]:
    return list(PORTFOLIO_SEGMENTS)


def get_current_economic_state() -> Mapping[str, float]:
    return CURRENT_ECONOMIC_STATE
