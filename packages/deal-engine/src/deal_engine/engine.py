"""
Deal Metrics Engine
===================

This module contains the *pure* acquisition-metrics engine for a small
business purchase:

- No form parsing (see ``inputs_builder``)
- No HTTP / CLI concerns
- No I/O

API surface area (stable):
- `DealInputs` (normalized deal parameters)
- `FinancingPlan` / `MetricsResult` (all computed outputs)
- `compute_metrics(inputs)`
- `compute_deal(inputs)` -> (`MetricsResult`, `DealAnalysis`)
- Helpers: `compute_annual_debt_service`, `compute_npv`, `approximate_irr`
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .evaluator import DealAnalysis, analyze_deal
from .industries import INDUSTRY_PROFILES

logger = logging.getLogger(__name__)


PROJECTION_YEARS: int = 5
GROWTH_SCHEDULE: Tuple[float, ...] = (0.15, 0.12, 0.10, 0.08, 0.06)
DISCOUNT_RATE: float = 0.15
EFFECTIVE_TAX_RATE: float = 0.30

# Risk-score heuristics. Inputs are raw dollars, so most of these saturate.
REVENUE_RISK_THRESHOLD: float = 2_000_000.0
REVENUE_RISK_FACTOR: float = 1.5
EARNINGS_YIELD_RISK_THRESHOLD: float = 0.3
EARNINGS_YIELD_RISK_PENALTY: float = 10.0
CHURN_RISK_FACTOR: float = 0.5
COMPETITION_PENALTY_CAP: float = 20.0

# Input bounds. Larger values overflow float math in the amortization and
# cash-flow formulas.
MAX_CURRENCY_VALUE: int = 10**15
MAX_INTEREST_RATE_PCT: int = 100
MAX_LOAN_TERM_YEARS: int = 100
CURRENCY_FIELDS: Tuple[str, ...] = (
    "asking_price",
    "annual_revenue",
    "ebitda",
    "owner_salary",
    "recurring_revenue",
    "top_customer_revenue",
)

HISTORICAL_WEIGHT: float = 0.4
INDUSTRY_WEIGHT: float = 0.3
MARKET_POSITION_WEIGHT: float = 0.3
RECURRING_POSITION_CAP: float = 30.0


class InputError(ValueError):
    pass


@dataclass(frozen=True)
class DealInputs:
    # Currency fields (whole dollars)
    asking_price: int
    annual_revenue: int
    ebitda: int
    owner_salary: int
    recurring_revenue: int
    top_customer_revenue: int

    # Integer fields
    years_in_business: int
    down_payment_pct: int  # percentage points
    seller_note_pct: int  # percentage points
    interest_rate_pct: int  # annual, percentage points
    loan_term_years: int

    industry: str = "other"


@dataclass(frozen=True)
class FinancingPlan:
    down_payment: float
    seller_note_amount: float
    bank_loan_amount: float
    bank_debt_service: float
    seller_debt_service: float
    annual_debt_service: float  # bank + seller note


@dataclass(frozen=True)
class MetricsResult:
    # Valuation
    ebitda_multiple: float
    revenue_multiple: float
    price_to_earnings: float

    # Financial health
    debt_service_coverage_ratio: float
    return_on_investment: float  # percent
    payback_period: float  # years
    working_capital_ratio: float  # not modelled, always 0.0

    # Growth & risk
    risk_score: float
    growth_potential: float
    market_position_score: float
    competitive_threat: float

    # Cash flow
    projected_cash_flows: Tuple[float, ...]  # year 0..5
    net_present_value: float
    internal_rate_of_return: Optional[float]  # percent, linear approximation

    financing: FinancingPlan
    total_debt_service: float
    bank_loan: float
    seller_note: float

    # Echoed inputs used by the evaluator and display layers
    annual_revenue: int
    recurring_revenue: int
    top_customer_revenue: int
    years_in_business: int
    industry: str


def compute_deal(inputs: DealInputs) -> Tuple[MetricsResult, DealAnalysis]:
    """Run the metrics engine and the deal evaluator for one submission."""
    metrics = compute_metrics(inputs)
    return metrics, analyze_deal(metrics)


def compute_metrics(inputs: DealInputs) -> MetricsResult:
    _validate_inputs(inputs)

    financing = compute_financing_plan(inputs)
    asking_price = float(inputs.asking_price)
    ebitda = float(inputs.ebitda)

    ebitda_multiple = asking_price / ebitda
    revenue_multiple = asking_price / inputs.annual_revenue
    price_to_earnings = asking_price / (ebitda * (1.0 - EFFECTIVE_TAX_RATE))

    if financing.annual_debt_service > 0:
        dscr = ebitda / financing.annual_debt_service
    else:
        # Nothing financed: coverage is unbounded.
        dscr = math.inf

    projected_cash_flows = _compute_projected_cash_flows(
        down_payment=financing.down_payment,
        ebitda=ebitda,
        annual_debt_service=financing.annual_debt_service,
        owner_salary=float(inputs.owner_salary),
    )

    return MetricsResult(
        ebitda_multiple=ebitda_multiple,
        revenue_multiple=revenue_multiple,
        price_to_earnings=price_to_earnings,
        debt_service_coverage_ratio=dscr,
        return_on_investment=ebitda / asking_price * 100.0,
        payback_period=asking_price / ebitda,
        working_capital_ratio=0.0,
        risk_score=_compute_risk_score(inputs),
        growth_potential=_compute_growth_potential(inputs),
        market_position_score=_compute_market_position_score(inputs),
        competitive_threat=_compute_competitive_threat(inputs),
        projected_cash_flows=projected_cash_flows,
        net_present_value=compute_npv(projected_cash_flows, DISCOUNT_RATE),
        internal_rate_of_return=approximate_irr(projected_cash_flows),
        financing=financing,
        total_debt_service=financing.annual_debt_service,
        bank_loan=financing.bank_loan_amount,
        seller_note=financing.seller_note_amount,
        annual_revenue=inputs.annual_revenue,
        recurring_revenue=inputs.recurring_revenue,
        top_customer_revenue=inputs.top_customer_revenue,
        years_in_business=inputs.years_in_business,
        industry=inputs.industry,
    )


def compute_financing_plan(inputs: DealInputs) -> FinancingPlan:
    asking_price = float(inputs.asking_price)
    down_payment = asking_price * inputs.down_payment_pct / 100.0
    seller_note = asking_price * inputs.seller_note_pct / 100.0
    bank_loan = asking_price - down_payment - seller_note

    # Bank loan and seller note are amortized at the same rate and term.
    bank_debt_service = compute_annual_debt_service(bank_loan, inputs.interest_rate_pct, inputs.loan_term_years)
    seller_debt_service = compute_annual_debt_service(seller_note, inputs.interest_rate_pct, inputs.loan_term_years)

    return FinancingPlan(
        down_payment=down_payment,
        seller_note_amount=seller_note,
        bank_loan_amount=bank_loan,
        bank_debt_service=bank_debt_service,
        seller_debt_service=seller_debt_service,
        annual_debt_service=bank_debt_service + seller_debt_service,
    )


def compute_annual_debt_service(principal: float, annual_rate_pct: float, years: int) -> float:
    """
    Annual payment on a fixed-rate loan with monthly amortization.

    payment = P * r(1+r)^n / ((1+r)^n - 1), with r = annual_rate_pct / 1200
    and n = years * 12. Returns twelve monthly payments.

    A zero rate degenerates to straight-line repayment (P / years).
    """
    if principal == 0:
        return 0.0
    if years <= 0:
        raise InputError("loan term must be > 0 years when principal is financed")

    if annual_rate_pct == 0:
        logger.debug(f"Zero interest rate, using straight-line repayment over {years} years")
        return float(principal) / years

    monthly_rate = annual_rate_pct / 1200.0
    number_of_payments = years * 12
    growth = (1.0 + monthly_rate) ** number_of_payments
    monthly_payment = principal * (monthly_rate * growth) / (growth - 1.0)
    return monthly_payment * 12.0


def compute_npv(cash_flows: Sequence[float], discount_rate: float) -> float:
    """Discount cash_flows[t] by (1 + rate)^t; year 0 is undiscounted."""
    return sum(cf / ((1.0 + discount_rate) ** t) for t, cf in enumerate(cash_flows))


def approximate_irr(cash_flows: Sequence[float]) -> Optional[float]:
    """
    Linear IRR approximation in percent: mean of the future cash flows
    divided by the initial outlay. This is not a root of NPV = 0.

    Returns None when there is no initial outlay.
    """
    if len(cash_flows) < 2:
        raise InputError("cash flow series needs an initial outlay and at least one future year")

    total_investment = abs(cash_flows[0])
    if total_investment == 0:
        return None

    future = cash_flows[1:]
    average_return = sum(future) / len(future)
    return average_return / total_investment * 100.0


def _validate_inputs(inputs: DealInputs) -> None:
    for field_name in CURRENCY_FIELDS:
        if getattr(inputs, field_name) > MAX_CURRENCY_VALUE:
            raise InputError(f"{field_name} must be <= {MAX_CURRENCY_VALUE:,}")
    if inputs.asking_price <= 0:
        raise InputError("asking_price must be > 0")
    if inputs.annual_revenue <= 0:
        raise InputError("annual_revenue must be > 0")
    if inputs.ebitda <= 0:
        raise InputError("ebitda must be > 0")
    if inputs.years_in_business < 0:
        raise InputError("years_in_business must be >= 0")
    if inputs.down_payment_pct < 0 or inputs.seller_note_pct < 0:
        raise InputError("down_payment_pct and seller_note_pct must be >= 0")
    if inputs.down_payment_pct + inputs.seller_note_pct > 100:
        raise InputError("down_payment_pct + seller_note_pct must be <= 100")
    if inputs.interest_rate_pct < 0:
        raise InputError("interest_rate_pct must be >= 0")
    if inputs.interest_rate_pct > MAX_INTEREST_RATE_PCT:
        raise InputError(f"interest_rate_pct must be <= {MAX_INTEREST_RATE_PCT}")
    if inputs.loan_term_years > MAX_LOAN_TERM_YEARS:
        raise InputError(f"loan_term_years must be <= {MAX_LOAN_TERM_YEARS}")
    if inputs.down_payment_pct < 100 and inputs.loan_term_years <= 0:
        raise InputError("loan_term_years must be > 0")
    if inputs.industry not in INDUSTRY_PROFILES:
        raise InputError(f"Unknown industry: {inputs.industry!r}")


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def _compute_risk_score(inputs: DealInputs) -> float:
    profile = INDUSTRY_PROFILES[inputs.industry]
    score = 100.0

    if inputs.annual_revenue > REVENUE_RISK_THRESHOLD:
        score -= (inputs.annual_revenue - REVENUE_RISK_THRESHOLD) * REVENUE_RISK_FACTOR

    if inputs.ebitda / inputs.asking_price > EARNINGS_YIELD_RISK_THRESHOLD:
        score -= EARNINGS_YIELD_RISK_PENALTY

    score += profile.risk_adjustment
    score -= inputs.recurring_revenue * CHURN_RISK_FACTOR
    score -= min(inputs.asking_price * 2.0, COMPETITION_PENALTY_CAP)

    return _clamp(score)


def _compute_growth_potential(inputs: DealInputs) -> float:
    profile = INDUSTRY_PROFILES[inputs.industry]
    # The recurring revenue term is weighted twice (historical and industry).
    return (
        inputs.recurring_revenue * HISTORICAL_WEIGHT
        + inputs.recurring_revenue * INDUSTRY_WEIGHT
        + profile.market_score * MARKET_POSITION_WEIGHT
    )


def _compute_market_position_score(inputs: DealInputs) -> float:
    profile = INDUSTRY_PROFILES[inputs.industry]
    score = profile.position_base
    score += min(inputs.recurring_revenue * 2.0, RECURRING_POSITION_CAP)
    score -= min(inputs.asking_price * 2.0, COMPETITION_PENALTY_CAP)
    return _clamp(score)


def _compute_competitive_threat(inputs: DealInputs) -> float:
    profile = INDUSTRY_PROFILES[inputs.industry]
    threat = inputs.asking_price * 5.0 + profile.vulnerability + inputs.recurring_revenue * 2.0
    return min(100.0, threat)


def _compute_projected_cash_flows(
    *,
    down_payment: float,
    ebitda: float,
    annual_debt_service: float,
    owner_salary: float,
) -> Tuple[float, ...]:
    # Loan proceeds fund the purchase directly, so only the down payment flows out.
    cash_flows = [-down_payment]

    current_ebitda = ebitda
    for growth_rate in GROWTH_SCHEDULE[:PROJECTION_YEARS]:
        current_ebitda *= 1.0 + growth_rate
        free_cash_flow = current_ebitda - annual_debt_service - owner_salary
        cash_flows.append(_round_half_up(free_cash_flow))

    return tuple(cash_flows)


def _round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))
