"""
Inputs Builder
==============

Canonical logic for preparing ``DealInputs`` from raw form values (typically
display-formatted strings such as ``"2,500,000"``) and optional overrides.

This module is the **single source of truth** for:
- Accepting the form's camelCase keys (``revenue``, ``downPayment``...), the
  record-style camelCase names (``annualRevenue``, ``downPaymentPct``...) and
  the snake_case field names
- Stripping currency formatting (every non-digit character is dropped)
- Parsing percentage fields as whole percentage points
- Rejecting missing or non-numeric values with ``InputError``

The HTTP service, the CLI and the tests should all use
``build_deal_inputs()`` so that a deal parses the same way everywhere.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Dict, Tuple

from .engine import CURRENCY_FIELDS, DealInputs, InputError

logger = logging.getLogger(__name__)

INTEGER_FIELDS: Tuple[str, ...] = (
    "years_in_business",
    "down_payment_pct",
    "seller_note_pct",
    "interest_rate_pct",
    "loan_term_years",
)
PERCENT_FIELDS = frozenset({"down_payment_pct", "seller_note_pct", "interest_rate_pct"})

# Form keys as submitted by the deal form, keyed by field name.
FORM_KEYS: Dict[str, str] = {
    "asking_price": "askingPrice",
    "annual_revenue": "revenue",
    "ebitda": "ebitda",
    "owner_salary": "ownerSalary",
    "recurring_revenue": "recurringRevenue",
    "top_customer_revenue": "topCustomerRevenue",
    "years_in_business": "yearsInBusiness",
    "down_payment_pct": "downPayment",
    "seller_note_pct": "sellerNote",
    "interest_rate_pct": "interestRate",
    "loan_term_years": "loanTerm",
    "industry": "industry",
}

# Record-style camelCase names, accepted as aliases where they differ from the form.
DEAL_INPUT_KEYS: Dict[str, str] = {
    "annual_revenue": "annualRevenue",
    "down_payment_pct": "downPaymentPct",
    "seller_note_pct": "sellerNotePct",
    "interest_rate_pct": "interestRatePct",
    "loan_term_years": "loanTermYears",
}

_NON_DIGITS = re.compile(r"[^0-9]")
_LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")


def build_deal_inputs(
    data: Dict[str, Any],
    overrides: Dict[str, Any] | None = None,
) -> DealInputs:
    """
    Normalize raw deal parameters into ``DealInputs``.

    Parameters
    ----------
    data : dict
        Raw form values. Keys may be the form's camelCase names
        (``askingPrice``, ``revenue``, ``downPayment``...), the record-style
        names (``annualRevenue``, ``downPaymentPct``, ``interestRatePct``,
        ``loanTermYears``...) or the field names of ``DealInputs``.
    overrides : dict, optional
        Values that take precedence over *data*, same key conventions.

    Returns
    -------
    DealInputs
        Whole-dollar currency fields and whole-point percentages, with no
        range validation applied (that happens in ``compute_metrics``).

    Raises
    ------
    InputError
        If a field is missing, empty or has no numeric content.
    """
    if overrides is None:
        overrides = {}

    # Helper: pick Override > Data; within each, field name, then form key, then alias
    def get_raw(field_name: str) -> Any:
        keys = [field_name, FORM_KEYS[field_name]]
        if field_name in DEAL_INPUT_KEYS:
            keys.append(DEAL_INPUT_KEYS[field_name])
        for source in (overrides, data):
            for key in keys:
                if key in source:
                    return source[key]
        return None

    values: Dict[str, Any] = {}
    for field_name in CURRENCY_FIELDS:
        values[field_name] = parse_currency(field_name, get_raw(field_name))
    for field_name in INTEGER_FIELDS:
        values[field_name] = parse_integer(field_name, get_raw(field_name))
    values["industry"] = parse_industry(get_raw("industry"))

    return DealInputs(**values)


def parse_currency(field_name: str, value: Any) -> int:
    """``"$2,500,000"`` -> ``2500000``. Every non-digit character is dropped."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _from_number(field_name, value)
    if value is None:
        raise InputError(f"{field_name} is required")

    digits = _NON_DIGITS.sub("", str(value))
    if not digits:
        raise InputError(f"{field_name} must be a number, got {value!r}")
    return int(digits)


def parse_integer(field_name: str, value: Any) -> int:
    """Leading whole number of the value: ``"10.5"`` -> ``10``."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        parsed = _from_number(field_name, value)
    elif value is None:
        raise InputError(f"{field_name} is required")
    else:
        match = _LEADING_INTEGER.match(str(value))
        if match is None:
            raise InputError(f"{field_name} must be a number, got {value!r}")
        parsed = int(match.group(1))

    if field_name in PERCENT_FIELDS and _has_fraction(value):
        logger.warning(f"{field_name}: {value!r} truncated to whole percentage points ({parsed})")
    return parsed


def parse_industry(value: Any) -> str:
    if value is None or not str(value).strip():
        raise InputError("industry is required")
    return str(value).strip().lower()


def _from_number(field_name: str, value: float) -> int:
    if isinstance(value, float) and not math.isfinite(value):
        raise InputError(f"{field_name} must be finite, got {value!r}")
    return int(value)


def _has_fraction(value: Any) -> bool:
    if isinstance(value, float):
        return not value.is_integer()
    if isinstance(value, str):
        return re.match(r"^\s*[+-]?\d+\.\d*[1-9]", value) is not None
    return False
