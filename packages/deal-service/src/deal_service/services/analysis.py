"""
Deal Analysis Service
=====================

Thin orchestration layer: take raw form values (from a request or a deal
source), normalize them via the shared ``build_deal_inputs`` builder, run the
engine and the evaluator, and return results.

All parsing and computation logic lives in **deal_engine** so there is exactly
one source of truth.
"""

import logging
from dataclasses import asdict
from typing import Any, Dict, Optional

from deal_engine import build_deal_inputs, compute_deal
from deal_service.sources.base import BaseDealSource

logger = logging.getLogger(__name__)


class DealService:
    def __init__(self, source: Optional[BaseDealSource] = None):
        self.source = source

    def analyze(
        self,
        form_values: Dict[str, Any],
        overrides: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Orchestrates one deal evaluation.

        1. Normalize form values via the shared builder.
        2. Run the metrics engine and the evaluator.
        3. Return inputs, metrics and analysis as a dict (API-friendly).
        """
        # 1. Normalize (raises InputError on bad fields)
        inputs = build_deal_inputs(form_values, overrides)

        # 2. Run engine + evaluator
        metrics, analysis = compute_deal(inputs)
        logger.info(
            f"Deal evaluated: {analysis.recommendation} (score {analysis.score:.0f}, "
            f"{metrics.ebitda_multiple:.2f}x EBITDA, DSCR {metrics.debt_service_coverage_ratio:.2f})"
        )

        # 3. Return results (Dict for API)
        return {
            "inputs": asdict(inputs),
            "metrics": asdict(metrics),
            "analysis": asdict(analysis),
        }

    def get_deal(self, deal_id: str) -> Dict[str, Any]:
        return self._require_source().get_deal(deal_id)

    def analyze_deal(self, deal_id: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Fetch a stored deal from the source and evaluate it."""
        form_values = self._require_source().get_deal(deal_id)
        result = self.analyze(form_values, overrides)
        result["deal_id"] = deal_id
        return result

    def _require_source(self) -> BaseDealSource:
        if self.source is None:
            raise ValueError("No deal source configured.")
        return self.source
