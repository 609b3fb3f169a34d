"""
Deal Evaluator
==============

Turns a ``MetricsResult`` into a SWOT-style ``DealAnalysis``: independent
rule checks append findings to four ordered lists, then a composite score is
mapped onto a recommendation tier.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Tuple

from .industries import INDUSTRY_PROFILES

if TYPE_CHECKING:
    from .engine import MetricsResult


BASELINE_SCORE: float = 70.0
FINDING_WEIGHT: float = 3.0

LOW_MULTIPLE: float = 4.0
HIGH_MULTIPLE: float = 7.0
STRONG_DSCR: float = 1.5
EXCELLENT_DSCR: float = 2.0
TIGHT_DSCR: float = 1.25
RECURRING_REVENUE_TARGET_PCT: float = 30.0
CONCENTRATION_LIMIT_PCT: float = 20.0
ESTABLISHED_YEARS: int = 10

# Ordered best to worst: (minimum score, recommendation, display color)
RECOMMENDATION_TIERS: Tuple[Tuple[float, str, str], ...] = (
    (85.0, "Strong Buy", "text-green-500"),
    (70.0, "Buy", "text-green-400"),
    (50.0, "Neutral", "text-yellow-500"),
    (30.0, "Caution", "text-orange-500"),
    (float("-inf"), "Pass", "text-red-500"),
)
RECOMMENDATIONS: Tuple[str, ...] = tuple(label for _, label, _ in reversed(RECOMMENDATION_TIERS))

ALWAYS_ON_WEAKNESSES: Tuple[str, ...] = (
    "Technology systems could be modernized",
    "Marketing strategy needs enhancement",
)


@dataclass(frozen=True)
class DealAnalysis:
    recommendation: str
    color: str
    score: float
    strengths: Tuple[str, ...] = ()
    weaknesses: Tuple[str, ...] = ()
    opportunities: Tuple[str, ...] = ()
    threats: Tuple[str, ...] = ()


def analyze_deal(metrics: MetricsResult) -> DealAnalysis:
    strengths: List[str] = []
    weaknesses: List[str] = []
    opportunities: List[str] = []
    threats: List[str] = []

    # Valuation
    if metrics.ebitda_multiple <= LOW_MULTIPLE:
        strengths.append("Below market valuation (EBITDA multiple < 4x)")
    elif metrics.ebitda_multiple >= HIGH_MULTIPLE:
        weaknesses.append("Premium valuation (EBITDA multiple > 7x)")

    weaknesses.extend(ALWAYS_ON_WEAKNESSES)

    # Debt coverage
    dscr = metrics.debt_service_coverage_ratio
    if math.isinf(dscr):
        strengths.append("Strong debt coverage (no debt service)")
    elif dscr >= STRONG_DSCR:
        strengths.append(f"Strong debt coverage ({dscr:.2f}x DSCR)")
    elif dscr < TIGHT_DSCR:
        weaknesses.append(f"Tight debt coverage ({dscr:.2f}x DSCR)")

    # Recurring revenue
    recurring_pct = metrics.recurring_revenue / metrics.annual_revenue * 100.0
    if recurring_pct >= RECURRING_REVENUE_TARGET_PCT:
        strengths.append(f"High recurring revenue ({recurring_pct:.0f}%)")
    else:
        weaknesses.append(f"Low recurring revenue ({recurring_pct:.0f}%)")
        opportunities.append("Opportunity to increase service contracts")

    # Customer concentration
    concentration_pct = metrics.top_customer_revenue / metrics.annual_revenue * 100.0
    if concentration_pct > CONCENTRATION_LIMIT_PCT:
        threats.append(f"High customer concentration ({concentration_pct:.0f}% from top customer)")
        weaknesses.append("Customer diversification needed")
    else:
        strengths.append("Well-diversified customer base")

    # Business maturity
    years = metrics.years_in_business
    if years >= ESTABLISHED_YEARS:
        strengths.append(f"Established business ({years} years operating)")
    else:
        weaknesses.append(f"Limited operating history ({years} years)")
        opportunities.append("Room for operational improvements")

    profile = INDUSTRY_PROFILES.get(metrics.industry)
    if profile is not None:
        opportunities.extend(profile.opportunities)
        threats.extend(profile.threats)
        weaknesses.extend(profile.weaknesses)

    score = compute_deal_score(metrics, len(strengths), len(weaknesses))
    recommendation, color = recommendation_for_score(score)

    return DealAnalysis(
        recommendation=recommendation,
        color=color,
        score=score,
        strengths=tuple(strengths),
        weaknesses=tuple(weaknesses),
        opportunities=tuple(opportunities),
        threats=tuple(threats),
    )


def compute_deal_score(metrics: MetricsResult, strength_count: int, weakness_count: int) -> float:
    score = BASELINE_SCORE

    dscr = metrics.debt_service_coverage_ratio
    if dscr >= EXCELLENT_DSCR:
        score += 10
    elif dscr >= STRONG_DSCR:
        score += 5
    elif dscr < TIGHT_DSCR:
        score -= 10

    if metrics.ebitda_multiple <= LOW_MULTIPLE:
        score += 10
    elif metrics.ebitda_multiple >= HIGH_MULTIPLE:
        score -= 10

    score += strength_count * FINDING_WEIGHT
    score -= weakness_count * FINDING_WEIGHT

    return max(0.0, min(100.0, score))


def recommendation_for_score(score: float) -> Tuple[str, str]:
    for threshold, recommendation, color in RECOMMENDATION_TIERS:
        if score >= threshold:
            return recommendation, color
    # Unreachable for real scores; NaN falls through every comparison.
    return RECOMMENDATION_TIERS[-1][1], RECOMMENDATION_TIERS[-1][2]
