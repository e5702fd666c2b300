"""Bucketing helpers that turn raw scenario values into LLPA grid keys.

Every function here is total: bad or missing input maps to a fallback bucket
rather than raising, so the aggregator can rely on always getting a key.
"""
from __future__ import annotations

import math
import re
from typing import Callable, Dict, Optional, Sequence

from quickprice.models import LoanScenario
from quickprice.presets import DEFAULT_LTV_BREAKS

LTV_NOT_APPLICABLE = "N/A"
LTV_OUT_OF_BOUNDS = "Out of Bounds"

CREDIT_SCORE_BANDS = [
    (780, "≥780"),
    (760, "760-779"),
    (740, "740-759"),
    (720, "720-739"),
    (700, "700-719"),
    (680, "680-699"),
    (660, "660-679"),
    (640, "640-659"),
    (620, "620-639"),
]
CREDIT_SCORE_FLOOR = "<620"
NO_SCORE_FN = "FN-NoScore"

# Lower bound of each band; a band runs up to the next lower bound.
LOAN_AMOUNT_BANDS = [
    (50000, "$50K-$74K"),
    (75000, "$75K-$99K"),
    (100000, "$100K-$124K"),
    (125000, "$125K-$149K"),
    (150000, "$150K-$249K"),
    (250000, "$250K-$299K"),
    (300000, "$300K-$499K"),
    (500000, "$500K-$999K"),
    (1000000, "$1M-$1.49M"),
    (1500000, "$1.5M-$1.99M"),
    (2000000, "$2M-$2.49M"),
    (2500000, "$2.5M-$2.99M"),
    (3000000, "$3M-$3.49M"),
    (3500000, "$3.5M-$3.99M"),
    (4000000, "$4M-$4.49M"),
    (4500000, "$4.5M-$5M"),
]
LOAN_AMOUNT_MAX = 5000000

DSCR_BANDS = [
    (1.25, "≥1.250"),
    (1.15, "1.150-1.249"),
    (1.00, "1.000-1.149"),
    (0.75, "0.750-0.999"),
    (0.50, "0.500-0.749"),
]
DSCR_FLOOR = "≤0.499"
DSCR_DEFAULT = "1.000-1.149"

_NUMBER = re.compile(r"\d+(?:\.\d+)?")


def nz(x, default=0.0):
    """Return a float for ``x`` or ``default`` when it is missing or not a number."""
    try:
        if x is None or (isinstance(x, float) and math.isnan(x)):
            return default
        return float(x)
    except (TypeError, ValueError):
        return default


def leading_number(value) -> Optional[float]:
    """First number in a value such as ``740``, ``"≥1.25"`` or ``"1.15-1.249"``."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return None if math.isnan(float(value)) else float(value)
    match = _NUMBER.search(str(value))
    return float(match.group()) if match else None


def credit_score_bucket(score, citizenship: Optional[str] = None) -> str:
    """Map a numeric score or a bucket label to a credit score band."""
    if isinstance(score, str):
        label = score.strip().replace(">=", "≥")
        if label.endswith("+"):
            label = "≥" + label[:-1]
        known = {band for _, band in CREDIT_SCORE_BANDS} | {CREDIT_SCORE_FLOOR, NO_SCORE_FN}
        if label in known:
            return label
    s = leading_number(score)
    if s is None:
        return NO_SCORE_FN if citizenship == "Foreign National" else CREDIT_SCORE_FLOOR
    for floor, band in CREDIT_SCORE_BANDS:
        if s >= floor:
            return band
    return CREDIT_SCORE_FLOOR


def loan_amount_bucket(amount) -> str:
    a = nz(amount)
    if a > LOAN_AMOUNT_MAX:
        return ">$5M"
    band = "<$50K"
    for floor, label in LOAN_AMOUNT_BANDS:
        if a >= floor:
            band = label
    return band


def calculate_ltv(loan, value) -> Optional[float]:
    """Loan-to-value percentage rounded to 2 places, ``None`` without a value."""
    v = nz(value)
    if v == 0:
        return None
    return round(100.0 * nz(loan) / v, 2)


def bucket_label(index: int, breaks: Sequence[float]) -> str:
    ceiling = float(breaks[index])
    if index == 0:
        return f"≤{ceiling:.2f}"
    floor = float(breaks[index - 1]) + 0.01
    return f"{floor:.2f}-{ceiling:.2f}"


def bucket_labels(breaks: Optional[Sequence[float]] = None) -> list:
    ordered = sorted(breaks or DEFAULT_LTV_BREAKS)
    return [bucket_label(i, ordered) for i in range(len(ordered))]


def ltv_bucket_for_ltv(ltv: Optional[float], breaks: Optional[Sequence[float]] = None) -> str:
    """Bucket a precomputed LTV: ``> previous ceiling`` and ``<= ceiling``."""
    if ltv is None:
        return LTV_NOT_APPLICABLE
    ordered = sorted(breaks or DEFAULT_LTV_BREAKS)
    for i, ceiling in enumerate(ordered):
        if ltv <= ceiling:
            return bucket_label(i, ordered)
    return LTV_OUT_OF_BOUNDS


def ltv_bucket(loan, value, breaks: Optional[Sequence[float]] = None) -> str:
    v = nz(value)
    if v == 0:
        return LTV_NOT_APPLICABLE
    return ltv_bucket_for_ltv(100.0 * nz(loan) / v, breaks)


def dscr_ratio_value(ratio) -> float:
    """Numeric DSCR from an entry; ``0.0`` when nothing usable was entered."""
    n = leading_number(ratio)
    return 0.0 if n is None else n


def dscr_ratio_bucket(ratio) -> str:
    n = leading_number(ratio)
    if n is None:
        return DSCR_DEFAULT
    for floor, band in DSCR_BANDS:
        if n >= floor:
            return band
    return DSCR_FLOOR


PURPOSE_KEYS = {"Purchase": "purchase", "Rate/Term": "rate-term", "Cash-Out": "cash-out"}
PRODUCT_KEYS = {
    "30yr Fixed": "30yr-fixed",
    "40yr Fixed": "40yr-fixed",
    "15yr Fixed": "15yr-fixed",
    "Interest-Only (30yr)": "io-30yr",
    "Interest-Only (40yr)": "io-40yr",
    "5/6 ARM": "5-6-arm",
    "7/6 ARM": "7-6-arm",
    "10/6 ARM": "10-6-arm",
}
OCCUPANCY_KEYS = {"Primary": "primary", "Second Home": "second-home", "Investment": "investor"}
PROPERTY_KEYS = {
    "SFR/Single Family": "sfr",
    "PUD/Town Home": "pud",
    "Condo": "condo",
    "Condo (Non-Warrantable)": "condo-non-warrant",
    "Condotel": "condotel",
    "2 Unit": "2-unit",
    "2-4 Unit": "2-4-unit",
    "3-4 Unit": "3-4-unit",
    "2-8 Unit Mixed Use": "2-8-mixed",
    "9-10 Unit Mixed Use": "9-10-mixed",
    "5-9 Unit Residential": "5-9-resi",
    "Blanket/Cross Collateral": "blanket",
    "Small Balance Commercial": "commercial",
}
CITIZENSHIP_KEYS = {
    "US Citizen": "us-citizen",
    "Perm-Resident": "perm-resident",
    "Non-Perm Resident": "non-perm",
    "Foreign National": "foreign-national",
    "ITIN": "itin",
}
DOC_TYPE_KEYS = {
    "2yr Full Doc": "2yr-full-doc",
    "1yr Full Doc": "1yr-full-doc",
    "DSCR": "dscr",
    "12m Bank Stmts": "12m-bank",
    "24m Bank Stmts": "24m-bank",
    "Asset Depletion": "asset-depletion",
    "1yr P&L Only": "1yr-pl-only",
    "1yr P&L w/2m Bank Stmts": "1yr-pl-2m-bank",
    "1yr 1099 Only": "1yr-1099",
    "1yr WVOE Only": "1yr-wvoe",
}
PREPAY_PERIOD_KEYS = {
    "0 - No Prepay": "0-no-prepay",
    "1yr": "1yr",
    "2yr": "2yr",
    "3yr": "3yr",
    "4yr": "4yr",
    "5yr": "5yr",
}
PREPAY_FEE_KEYS = {
    "5% (Standard)": "standard-5",
    "6 Month Interest": "6mo-interest",
    "Declining": "declining",
}
CREDIT_EVENT_KEYS = {
    "None": "≥48m-none",
    "36m-47m": "36m-47m",
    "24m-35m": "24m-35m",
    "12m-23m": "12m-23m",
    "≤11m": "≤11m",
}
LOCK_TERM_KEYS = {"15 Day": "15-day", "30 Day": "30-day", "45 Day": "45-day"}


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


OPTION_RESOLVERS: Dict[str, Callable[[LoanScenario], str]] = {
    "credit_score": lambda s: credit_score_bucket(s.credit_score, s.citizenship),
    "loan_amount": lambda s: loan_amount_bucket(s.loan_amount),
    "loan_purpose": lambda s: PURPOSE_KEYS[s.loan_purpose],
    "loan_product": lambda s: PRODUCT_KEYS[s.loan_product],
    "occupancy": lambda s: OCCUPANCY_KEYS[s.occupancy],
    "property_type": lambda s: PROPERTY_KEYS[s.property_type],
    "citizenship": lambda s: CITIZENSHIP_KEYS[s.citizenship],
    "doc_type": lambda s: DOC_TYPE_KEYS[s.doc_type],
    "dti": lambda s: s.dti,
    "fthb": lambda s: _yes_no(s.fthb),
    "fthb_dscr": lambda s: _yes_no(s.fthb),
    "dscr_ratio": lambda s: dscr_ratio_bucket(s.dscr_ratio),
    "short_term_rental": lambda s: _yes_no(s.short_term_rental),
    "credit_event": lambda s: CREDIT_EVENT_KEYS[s.credit_event],
    "mortgage_history": lambda s: s.mortgage_history,
    "prepay_period": lambda s: PREPAY_PERIOD_KEYS[s.prepay_period],
    "prepay_fee": lambda s: PREPAY_FEE_KEYS[s.prepay_fee],
    "escrow_waiver": lambda s: _yes_no(s.escrow_waiver),
    "lock_term": lambda s: LOCK_TERM_KEYS[s.lock_term],
    "state": lambda s: s.state,
}


def option_key(category: str, scenario: LoanScenario) -> str:
    """Grid option key for ``category``; unknown categories map to ``""``."""
    resolver = OPTION_RESOLVERS.get(category)
    return resolver(scenario) if resolver else ""
