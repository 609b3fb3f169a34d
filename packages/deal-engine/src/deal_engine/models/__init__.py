"""
Convenience re-exports of data models.

Models are defined in ``deal_engine.engine`` and ``deal_engine.evaluator`` and
re-exported here for consumers who prefer ``from deal_engine.models import DealInputs``.
"""

from deal_engine.engine import DealInputs, FinancingPlan, InputError, MetricsResult
from deal_engine.evaluator import DealAnalysis
from deal_engine.industries import IndustryProfile

__all__ = [
    "DealAnalysis",
    "DealInputs",
    "FinancingPlan",
    "IndustryProfile",
    "InputError",
    "MetricsResult",
]
