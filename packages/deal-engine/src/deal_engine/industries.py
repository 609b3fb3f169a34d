"""
Industry Table
==============

Every per-industry constant used by the metrics engine and the deal evaluator
lives here, keyed by the industry code submitted with the deal.

Columns:
- ``risk_adjustment``: added to the risk score (higher = lower risk)
- ``market_score``: industry term of the growth-potential weighted sum
- ``position_base``: starting point of the market-position score
- ``vulnerability``: competitive-threat contribution
- ``opportunities`` / ``threats`` / ``weaknesses``: fixed findings the
  evaluator appends for the industry regardless of the numbers
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class IndustryProfile:
    label: str
    risk_adjustment: float = 0.0
    market_score: float = 0.0
    position_base: float = 0.0
    vulnerability: float = 0.0
    opportunities: Tuple[str, ...] = ()
    threats: Tuple[str, ...] = ()
    weaknesses: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for key in ("opportunities", "threats", "weaknesses"):
            data[key] = list(data[key])
        return data


INDUSTRY_PROFILES: Dict[str, IndustryProfile] = {
    "tech": IndustryProfile(
        label="Technology",
        risk_adjustment=10.0,
        market_score=10.0,
        position_base=40.0,
        vulnerability=10.0,
    ),
    "services": IndustryProfile(
        label="Services (HVAC, Plumbing, etc.)",
        opportunities=(
            "Growing demand for HVAC services",
            "Energy efficiency upgrade opportunities",
        ),
        threats=(
            "Labor market challenges",
            "Equipment supply chain risks",
        ),
        weaknesses=("Seasonal revenue fluctuations",),
    ),
    "retail": IndustryProfile(
        label="Retail",
        risk_adjustment=5.0,
        market_score=7.5,
        position_base=30.0,
        vulnerability=20.0,
    ),
    "manufacturing": IndustryProfile(
        label="Manufacturing",
        risk_adjustment=-10.0,
        market_score=5.0,
        position_base=20.0,
        vulnerability=30.0,
    ),
    "construction": IndustryProfile(label="Construction"),
    "healthcare": IndustryProfile(label="Healthcare"),
    "food": IndustryProfile(label="Food & Beverage"),
    "other": IndustryProfile(label="Other"),
}

INDUSTRIES: Tuple[str, ...] = tuple(INDUSTRY_PROFILES)

