"""
Known market scenarios for the daily rate sweep.

Each scenario type maps to the base request sent to the pricing executor and
to the pair of columns its result lands in on ``daily_market_updates``.
``SCENARIO_FIELDS`` is the single routing table used by both the aggregator
(write path) and the market-update endpoint (read path).
"""
from __future__ import annotations

from typing import Any

PURCHASE_PRICE = 400_000

_BASE_SCENARIO: dict[str, Any] = {
    "fico_score": 780,
    "zip_code": "33131",
    "num_units": 1,
    "purchase_price": PURCHASE_PRICE,
    "occupancy": "Primary Residence",
    "property_type": "Single Family",
}

_FULL_DOC = "Full Doc - 24M"
_BANK_STATEMENT = "24Mo Business Bank Statements"

# (scenario_type, ltv %, loan_type, income_type, term years, column suffix)
_CATALOG: list[tuple[str, float, str, str, int, str]] = [
    ("30yr_fixed", 80, "Conventional", _FULL_DOC, 30, "30yr_fixed"),
    ("15yr_fixed", 80, "Conventional", _FULL_DOC, 15, "15yr_fixed"),
    ("fha_30yr", 80, "FHA", _FULL_DOC, 30, "30yr_fha"),
    ("bank_statement", 80, "Conventional", _BANK_STATEMENT, 30, "bank_statement"),
    ("dscr", 80, "Conventional", "DSCR", 30, "dscr"),
    ("30yr_fixed_70ltv", 70, "Conventional", _FULL_DOC, 30, "30yr_fixed_70ltv"),
    ("fha_30yr_70ltv", 70, "FHA", _FULL_DOC, 30, "30yr_fha_70ltv"),
    ("bank_statement_70ltv", 70, "Conventional", _BANK_STATEMENT, 30, "bank_statement_70ltv"),
    ("dscr_70ltv", 70, "Conventional", "DSCR", 30, "dscr_70ltv"),
    ("dscr_75ltv", 75, "Conventional", "DSCR", 30, "dscr_75ltv"),
    ("bank_statement_85ltv", 85, "Conventional", _BANK_STATEMENT, 30, "bank_statement_85ltv"),
    ("15yr_fixed_90ltv", 90, "Conventional", _FULL_DOC, 15, "15yr_fixed_90ltv"),
    ("bank_statement_90ltv", 90, "Conventional", _BANK_STATEMENT, 30, "bank_statement_90ltv"),
    ("30yr_fixed_95ltv", 95, "Conventional", _FULL_DOC, 30, "30yr_fixed_95ltv"),
    ("15yr_fixed_95ltv", 95, "Conventional", _FULL_DOC, 15, "15yr_fixed_95ltv"),
    ("fha_30yr_95ltv", 95, "FHA", _FULL_DOC, 30, "30yr_fha_95ltv"),
    ("fha_30yr_965ltv", 96.5, "FHA", _FULL_DOC, 30, "30yr_fha_965ltv"),
    ("30yr_fixed_97ltv", 97, "Conventional", _FULL_DOC, 30, "30yr_fixed_97ltv"),
    ("15yr_fixed_97ltv", 97, "Conventional", _FULL_DOC, 15, "15yr_fixed_97ltv"),
]


def _build_request(ltv: float, loan_type: str, income_type: str, term: int) -> dict[str, Any]:
    request = {
        **_BASE_SCENARIO,
        "loan_amount": int(PURCHASE_PRICE * ltv / 100),
        "ltv": ltv,
        "loan_type": loan_type,
        "income_type": income_type,
        "loan_term": term,
        "dscr_ratio": "",
    }
    if income_type == "DSCR":
        request["dscr_ratio"] = "1.5"
        request["occupancy"] = "Investment"
    return request


SCENARIO_FIELDS: dict[str, tuple[str, str]] = {
    scenario_type: (f"rate_{suffix}", f"points_{suffix}")
    for scenario_type, _, _, _, _, suffix in _CATALOG
}

SCENARIO_REQUESTS: dict[str, dict[str, Any]] = {
    scenario_type: _build_request(ltv, loan_type, income_type, term)
    for scenario_type, ltv, loan_type, income_type, term, _ in _CATALOG
}

SCENARIO_TYPES: list[str] = [row[0] for row in _CATALOG]


def resolve_fields(scenario_type: str | None) -> tuple[str, str] | None:
    """Return ``(rate_field, points_field)`` for a known scenario, else None."""
    if not scenario_type:
        return None
    return SCENARIO_FIELDS.get(scenario_type)


def scenario_request(scenario_type: str) -> dict[str, Any] | None:
    """Copy of the catalog request parameters for a scenario type."""
    request = SCENARIO_REQUESTS.get(scenario_type)
    return dict(request) if request is not None else None
