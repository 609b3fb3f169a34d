import json
import math

from deal_engine import DealInputs, compute_metrics
from deal_service.utils import sanitize_for_json


def test_non_finite_floats_become_null():
    data = {"dscr": math.inf, "loss": -math.inf, "nan": float("nan"), "ok": 1.5, "n": 3, "s": "x"}
    assert sanitize_for_json(data) == {"dscr": None, "loss": None, "nan": None, "ok": 1.5, "n": 3, "s": "x"}


def test_nested_containers():
    data = {"flows": [1.0, math.inf], "pair": (math.nan, 2.0)}
    assert sanitize_for_json(data) == {"flows": [1.0, None], "pair": [None, 2.0]}


def test_dataclass_result_is_json_serializable():
    inputs = DealInputs(
        asking_price=1_000_000,
        annual_revenue=2_000_000,
        ebitda=250_000,
        owner_salary=100_000,
        recurring_revenue=0,
        top_customer_revenue=50_000,
        years_in_business=8,
        down_payment_pct=100,
        seller_note_pct=0,
        interest_rate_pct=9,
        loan_term_years=7,
        industry="retail",
    )
    data = sanitize_for_json(compute_metrics(inputs))

    assert data["debt_service_coverage_ratio"] is None
    assert data["financing"]["bank_loan_amount"] == 0.0
    # Strict JSON: no NaN / Infinity tokens
    json.dumps(data, allow_nan=False)
