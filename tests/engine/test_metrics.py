"""
Tests for the metrics engine.

Covers: amortization, financing split, NPV / IRR helpers, heuristic scores,
cash-flow projection and input validation.
"""

import math
from dataclasses import replace

import pytest

from deal_engine import (
    DealInputs,
    InputError,
    approximate_irr,
    compute_annual_debt_service,
    compute_metrics,
    compute_npv,
)


def make_inputs(**overrides) -> DealInputs:
    base = DealInputs(
        asking_price=2_500_000,
        annual_revenue=3_000_000,
        ebitda=450_000,
        owner_salary=150_000,
        recurring_revenue=900_000,
        top_customer_revenue=300_000,
        years_in_business=15,
        down_payment_pct=5,
        seller_note_pct=5,
        interest_rate_pct=10,
        loan_term_years=10,
        industry="services",
    )
    return replace(base, **overrides)


# ---------------------------------------------------------------------------
# Debt service
# ---------------------------------------------------------------------------

def test_annual_debt_service_textbook_value():
    """$100k at 12% over one year: monthly payment 8,884.88."""
    annual = compute_annual_debt_service(100_000, 12, 1)
    assert annual / 12 == pytest.approx(8884.8789, abs=1e-4)
    assert annual == pytest.approx(106618.5464, abs=1e-4)


def test_annual_debt_service_zero_rate_is_straight_line():
    assert compute_annual_debt_service(120_000, 0, 10) == 12_000.0


def test_annual_debt_service_zero_principal():
    assert compute_annual_debt_service(0, 10, 10) == 0.0
    assert compute_annual_debt_service(0, 10, 0) == 0.0


def test_annual_debt_service_requires_term():
    with pytest.raises(InputError, match="loan term must be > 0"):
        compute_annual_debt_service(100_000, 10, 0)


def test_debt_service_is_additive_across_notes():
    """Bank loan and seller note share rate and term, so their sum equals one combined loan."""
    metrics = compute_metrics(make_inputs())
    combined = compute_annual_debt_service(2_375_000, 10, 10)
    assert metrics.total_debt_service == pytest.approx(combined)


def test_zero_interest_rate_deal():
    metrics = compute_metrics(make_inputs(interest_rate_pct=0))
    # (2,250,000 + 125,000) / 10 years
    assert metrics.total_debt_service == pytest.approx(237_500.0)
    assert metrics.debt_service_coverage_ratio == pytest.approx(450_000 / 237_500)


# ---------------------------------------------------------------------------
# Financing split
# ---------------------------------------------------------------------------

def test_all_cash_deal_has_unbounded_coverage():
    metrics = compute_metrics(make_inputs(down_payment_pct=100, seller_note_pct=0, loan_term_years=0))

    assert metrics.bank_loan == 0.0
    assert metrics.seller_note == 0.0
    assert metrics.total_debt_service == 0.0
    assert math.isinf(metrics.debt_service_coverage_ratio)
    assert metrics.projected_cash_flows[0] == -2_500_000.0


def test_seller_financed_deal_has_no_bank_loan():
    metrics = compute_metrics(make_inputs(down_payment_pct=20, seller_note_pct=80))
    assert metrics.bank_loan == 0.0
    assert metrics.seller_note == 2_000_000.0
    assert metrics.financing.bank_debt_service == 0.0
    assert metrics.total_debt_service == pytest.approx(metrics.financing.seller_debt_service)


# ---------------------------------------------------------------------------
# NPV / IRR
# ---------------------------------------------------------------------------

def test_npv_at_zero_rate_is_simple_sum():
    cash_flows = [-125_000.0, -9_130.0, 52_970.0, 110_930.0, 161_935.0, 203_249.0]
    assert compute_npv(cash_flows, 0.0) == pytest.approx(sum(cash_flows))


def test_npv_does_not_discount_year_zero():
    assert compute_npv([-100.0], 0.15) == -100.0
    assert compute_npv([0.0, 115.0], 0.15) == pytest.approx(100.0)


def test_irr_is_linear_approximation():
    # mean(10, 20, 30) / 100 * 100
    assert approximate_irr([-100.0, 10.0, 20.0, 30.0]) == pytest.approx(20.0)


def test_irr_without_initial_outlay():
    assert approximate_irr([0.0, 10.0, 20.0]) is None
    metrics = compute_metrics(make_inputs(down_payment_pct=0))
    assert metrics.internal_rate_of_return is None


def test_irr_needs_future_years():
    with pytest.raises(InputError):
        approximate_irr([-100.0])


# ---------------------------------------------------------------------------
# Cash flows
# ---------------------------------------------------------------------------

def test_cash_flow_shape():
    for down in (0, 5, 25, 60):
        metrics = compute_metrics(make_inputs(down_payment_pct=down))
        assert len(metrics.projected_cash_flows) == 6
        assert metrics.projected_cash_flows[0] == -metrics.financing.down_payment


def test_cash_flows_follow_growth_schedule():
    """With no debt and no owner salary, cash flow is the compounded EBITDA."""
    metrics = compute_metrics(
        make_inputs(down_payment_pct=100, seller_note_pct=0, owner_salary=0, ebitda=100_000)
    )
    assert metrics.projected_cash_flows[1:] == (115_000.0, 128_800.0, 141_680.0, 153_014.0, 162_195.0)


def test_cash_flows_round_half_up():
    # 30 * 1.15 = 34.5, which rounds up to 35 rather than to the even 34
    metrics = compute_metrics(
        make_inputs(
            asking_price=100,
            annual_revenue=100,
            ebitda=30,
            owner_salary=0,
            down_payment_pct=100,
            seller_note_pct=0,
        )
    )
    assert metrics.projected_cash_flows[1] == 35.0


# ---------------------------------------------------------------------------
# Heuristic scores
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "industry, expected_risk, expected_position, expected_growth",
    [
        ("tech", 90.0, 40.0, 3.0),
        ("retail", 85.0, 30.0, 2.25),
        ("manufacturing", 70.0, 20.0, 1.5),
        ("services", 80.0, 10.0, 0.0),
        ("food", 80.0, 10.0, 0.0),
    ],
)
def test_industry_constants(industry, expected_risk, expected_position, expected_growth):
    inputs = make_inputs(
        asking_price=1_000_000,
        annual_revenue=1_000_000,
        ebitda=200_000,
        recurring_revenue=0,
        industry=industry,
    )
    metrics = compute_metrics(inputs)

    # 100 + adjustment - competition penalty (capped at 20)
    assert metrics.risk_score == pytest.approx(expected_risk)
    # base + min(0, 30) - 20, floored at zero
    assert metrics.market_position_score == pytest.approx(max(expected_position - 20.0, 0.0))
    assert metrics.growth_potential == pytest.approx(expected_growth)


def test_risk_score_earnings_yield_penalty():
    cheap = compute_metrics(
        make_inputs(asking_price=1_000_000, annual_revenue=1_000_000, ebitda=400_000, recurring_revenue=0, industry="tech")
    )
    assert cheap.risk_score == pytest.approx(80.0)


def test_risk_score_penalizes_recurring_revenue_dollars():
    metrics = compute_metrics(
        make_inputs(asking_price=1_000_000, annual_revenue=1_000_000, ebitda=200_000, recurring_revenue=20, industry="tech")
    )
    # 100 + 10 - 0.5 * 20 - 20
    assert metrics.risk_score == pytest.approx(80.0)


def test_competitive_threat_is_capped():
    metrics = compute_metrics(make_inputs(industry="manufacturing"))
    assert metrics.competitive_threat == 100.0


def test_growth_potential_is_not_clamped():
    metrics = compute_metrics(make_inputs())
    assert metrics.growth_potential == pytest.approx(900_000 * 0.7)


@pytest.mark.parametrize("industry", ["tech", "services", "retail", "manufacturing", "other"])
@pytest.mark.parametrize(
    "asking_price, revenue, ebitda, recurring",
    [
        (1, 1, 1, 0),
        (5, 10, 2, 3),
        (250_000, 1_900_000, 90_000, 0),
        (2_500_000, 3_000_000, 450_000, 900_000),
        (40_000_000, 90_000_000, 9_000_000, 50_000_000),
    ],
)
def test_bounded_scores(industry, asking_price, revenue, ebitda, recurring):
    metrics = compute_metrics(
        make_inputs(
            asking_price=asking_price,
            annual_revenue=revenue,
            ebitda=ebitda,
            recurring_revenue=recurring,
            industry=industry,
        )
    )
    for score in (metrics.risk_score, metrics.market_position_score, metrics.competitive_threat):
        assert 0.0 <= score <= 100.0


def test_working_capital_ratio_placeholder():
    assert compute_metrics(make_inputs()).working_capital_ratio == 0.0


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"asking_price": 0}, "asking_price must be > 0"),
        ({"annual_revenue": 0}, "annual_revenue must be > 0"),
        ({"ebitda": 0}, "ebitda must be > 0"),
        ({"years_in_business": -1}, "years_in_business must be >= 0"),
        ({"down_payment_pct": -5}, "must be >= 0"),
        ({"down_payment_pct": 60, "seller_note_pct": 41}, "must be <= 100"),
        ({"interest_rate_pct": -1}, "interest_rate_pct must be >= 0"),
        ({"loan_term_years": 0}, "loan_term_years must be > 0"),
        ({"industry": "mining"}, "Unknown industry"),
        ({"asking_price": 10**15 + 1}, "asking_price must be <= 1,000,000,000,000,000"),
        ({"owner_salary": 10**400}, "owner_salary must be <= "),
        ({"interest_rate_pct": 101}, "interest_rate_pct must be <= 100"),
        ({"loan_term_years": 101}, "loan_term_years must be <= 100"),
    ],
)
def test_invalid_inputs_rejected(overrides, message):
    with pytest.raises(InputError, match=message):
        compute_metrics(make_inputs(**overrides))


def test_input_error_is_value_error():
    with pytest.raises(ValueError):
        compute_metrics(make_inputs(ebitda=0))


def test_models_reexports():
    from deal_engine import models

    assert models.DealInputs is DealInputs
    assert models.InputError is InputError


def test_largest_accepted_values_compute():
    metrics = compute_metrics(
        make_inputs(asking_price=10**15, annual_revenue=10**15, ebitda=10**15, interest_rate_pct=100, loan_term_years=100)
    )
    assert all(math.isfinite(cf) for cf in metrics.projected_cash_flows)
    assert math.isfinite(metrics.total_debt_service)
