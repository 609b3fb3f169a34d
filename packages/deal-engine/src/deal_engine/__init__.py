"""
Deal Engine
===========

Pure small-business acquisition metrics engine with zero external dependencies.

Public API:
- ``DealInputs`` / ``FinancingPlan`` / ``MetricsResult`` / ``DealAnalysis``: data contracts
- ``build_deal_inputs(data, overrides)``: canonical form-value normalization
- ``compute_metrics(inputs)``: valuation, financing, scores and cash flows
- ``analyze_deal(metrics)``: SWOT lists and recommendation
- ``compute_deal(inputs)``: both of the above
- ``INDUSTRY_PROFILES``: per-industry constants
"""

from deal_engine.engine import (
    DISCOUNT_RATE,
    GROWTH_SCHEDULE,
    PROJECTION_YEARS,
    DealInputs,
    FinancingPlan,
    InputError,
    MetricsResult,
    approximate_irr,
    compute_annual_debt_service,
    compute_deal,
    compute_financing_plan,
    compute_metrics,
    compute_npv,
)
from deal_engine.evaluator import (
    RECOMMENDATIONS,
    DealAnalysis,
    analyze_deal,
    compute_deal_score,
    recommendation_for_score,
)
from deal_engine.industries import INDUSTRIES, INDUSTRY_PROFILES, IndustryProfile
from deal_engine.inputs_builder import build_deal_inputs

__all__ = [
    "DISCOUNT_RATE",
    "GROWTH_SCHEDULE",
    "INDUSTRIES",
    "INDUSTRY_PROFILES",
    "PROJECTION_YEARS",
    "RECOMMENDATIONS",
    "DealAnalysis",
    "DealInputs",
    "FinancingPlan",
    "IndustryProfile",
    "InputError",
    "MetricsResult",
    "analyze_deal",
    "approximate_irr",
    "build_deal_inputs",
    "compute_annual_debt_service",
    "compute_deal",
    "compute_deal_score",
    "compute_financing_plan",
    "compute_metrics",
    "compute_npv",
    "recommendation_for_score",
]
