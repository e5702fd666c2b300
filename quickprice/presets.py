from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List

from quickprice.models import INELIGIBLE, AdjustmentTable, Program, ProgramSettings, RateTier

DISCLAIMER = (
    "Pricing shown is an estimate for wholesale quoting only. Rates and prices "
    "are subject to investor guidelines, lock confirmation and underwriter "
    "review. Margin and compensation are not displayed."
)

DEFAULT_MARGIN_HOLDBACK = -1.625
PRICE_BAND = (99.0, 101.0)
PAR_PRICE = 100.0

DEFAULT_LTV_BREAKS = [50, 55, 60, 65, 70, 75, 80, 85, 90]
LTV_BUCKETS = [
    "≤50.00",
    "50.01-55.00",
    "55.01-60.00",
    "60.01-65.00",
    "65.01-70.00",
    "70.01-75.00",
    "75.01-80.00",
    "80.01-85.00",
    "85.01-90.00",
]
ABOVE_75 = ["75.01-80.00", "80.01-85.00", "85.01-90.00"]
ABOVE_80 = ["80.01-85.00", "85.01-90.00"]
ABOVE_85 = ["85.01-90.00"]

# Loan amount at or above which the "A" tier of a program class is used.
PROGRAM_TIER_CUTOFFS = {"DSCR": 250000.0, "NonQM": 1000000.0}

DSCR_STATES = [
    "AL", "AR", "CA", "CO", "CT", "DE", "DC", "FL", "GA", "HI",
    "IN", "IA", "KS", "KY", "LA", "ME", "MD", "MA", "MS", "MO",
    "MT", "NE", "NH", "NJ", "NM", "NY", "OH", "OK", "PA", "RI",
    "SC", "TN", "TX", "VA", "WA", "WV", "WI", "WY",
]
NON_DSCR_STATES = ["CA", "CO", "GA", "FL", "TX", "AL", "TN"]


@dataclass(frozen=True)
class CategoryPolicy:
    """How the aggregator treats one adjustment category.

    ``hard_stop``: an ineligible cell fails the whole scenario (otherwise the
    category is skipped). ``record_zero``: zero contributions still appear in
    the adjustment breakdown.
    """

    label: str
    hard_stop: bool = True
    record_zero: bool = True


# Eligibility categories stop pricing on an ineligible cell; price-only
# categories (citizenship, doc type, DTI, DSCR ratio, prepay, escrow, lock,
# state) drop the cell and keep pricing.
CATEGORIES: Dict[str, CategoryPolicy] = {
    "credit_score": CategoryPolicy("Credit Score"),
    "loan_amount": CategoryPolicy("Loan Amount"),
    "loan_purpose": CategoryPolicy("Loan Purpose"),
    "loan_product": CategoryPolicy("Loan Product"),
    "occupancy": CategoryPolicy("Occupancy"),
    "property_type": CategoryPolicy("Property Type"),
    "citizenship": CategoryPolicy("Citizenship", hard_stop=False),
    "doc_type": CategoryPolicy("Doc Type", hard_stop=False),
    "dti": CategoryPolicy("DTI", hard_stop=False),
    "fthb": CategoryPolicy("First Time Home Buyer"),
    "fthb_dscr": CategoryPolicy("FTHB - DSCR"),
    "dscr_ratio": CategoryPolicy("DSCR Ratio", hard_stop=False),
    "short_term_rental": CategoryPolicy("Short Term Rental"),
    "credit_event": CategoryPolicy("Credit Event"),
    "mortgage_history": CategoryPolicy("Mortgage History"),
    "prepay_period": CategoryPolicy("Prepay Period", hard_stop=False),
    "prepay_fee": CategoryPolicy("Prepay Fee", hard_stop=False),
    "escrow_waiver": CategoryPolicy("Escrow Waiver", hard_stop=False),
    "lock_term": CategoryPolicy("Lock Term", hard_stop=False),
    "state": CategoryPolicy("State", hard_stop=False, record_zero=False),
}

CATEGORY_ORDER: Dict[str, List[str]] = {
    "NonQM": [
        "credit_score",
        "loan_amount",
        "loan_purpose",
        "loan_product",
        "occupancy",
        "property_type",
        "citizenship",
        "doc_type",
        "dti",
        "fthb",
        "credit_event",
        "mortgage_history",
        "prepay_period",
        "prepay_fee",
        "escrow_waiver",
        "lock_term",
        "state",
    ],
    "DSCR": [
        "credit_score",
        "dscr_ratio",
        "short_term_rental",
        "loan_product",
        "loan_amount",
        "loan_purpose",
        "property_type",
        "citizenship",
        "fthb_dscr",
        "credit_event",
        "mortgage_history",
        "prepay_period",
        "prepay_fee",
        "escrow_waiver",
        "lock_term",
        "state",
    ],
}


def grid(value: float = 0.0, ineligible: Iterable[str] = ()) -> Dict[str, object]:
    """One option row: ``value`` in every bucket except the ineligible ones."""
    blocked = set(ineligible)
    return {b: (INELIGIBLE if b in blocked else value) for b in LTV_BUCKETS}


def _options(rows: Dict[str, Dict[str, object]]) -> Dict[str, Dict[str, object]]:
    return {k: dict(v) for k, v in rows.items()}


_FTHB_DSCR_YES = {**{b: -0.125 for b in LTV_BUCKETS[:7]}, "80.01-85.00": -0.250, "85.01-90.00": INELIGIBLE}

DEFAULT_LLPA_GRID = {
    "credit_score": _options({
        "≥780": grid(),
        "760-779": grid(),
        "740-759": grid(),
        "720-739": grid(),
        "700-719": grid(),
        "680-699": grid(),
        "660-679": grid(ineligible=ABOVE_85),
        "640-659": grid(ineligible=ABOVE_85),
        "620-639": grid(ineligible=ABOVE_80),
        "<620": grid(ineligible=LTV_BUCKETS),
        "FN-NoScore": grid(ineligible=ABOVE_75),
    }),
    "loan_amount": _options({
        "$50K-$74K": grid(),
        "$75K-$99K": grid(),
        "$100K-$124K": grid(),
        "$125K-$149K": grid(),
        "$150K-$249K": grid(),
        "$250K-$299K": grid(),
        "$300K-$499K": grid(),
        "$500K-$999K": grid(),
        "$1M-$1.49M": grid(),
        "$1.5M-$1.99M": grid(),
        "$2M-$2.49M": grid(),
        "$2.5M-$2.99M": grid(),
        "$3M-$3.49M": grid(),
        "$3.5M-$3.99M": grid(ineligible=ABOVE_80),
        "$4M-$4.49M": grid(ineligible=ABOVE_80),
        "$4.5M-$5M": grid(ineligible=ABOVE_75),
    }),
    "doc_type": _options({
        "2yr-full-doc": grid(),
        "1yr-full-doc": grid(),
        "dscr": grid(ineligible=ABOVE_85),
        "12m-bank": grid(),
        "24m-bank": grid(),
        "asset-depletion": grid(),
        "1yr-pl-only": grid(),
        "1yr-pl-2m-bank": grid(),
        "1yr-1099": grid(),
        "1yr-wvoe": grid(),
    }),
    "dti": _options({
        "≤43%": grid(),
        "43.01-50%": grid(),
        "50.01-55%": grid(ineligible=ABOVE_85),
    }),
    "loan_product": _options({
        "30yr-fixed": grid(),
        "io-30yr": grid(ineligible=ABOVE_85),
        "io-40yr": grid(ineligible=ABOVE_85),
        "40yr-fixed": grid(),
        "15yr-fixed": grid(),
        "5-6-arm": grid(),
        "7-6-arm": grid(),
        "10-6-arm": grid(),
    }),
    "loan_purpose": _options({
        "purchase": grid(),
        "rate-term": grid(),
        "cash-out": grid(ineligible=ABOVE_85),
    }),
    "escrow_waiver": _options({
        "no": grid(),
        "yes": grid(-0.250),
    }),
    "occupancy": _options({
        "primary": grid(),
        "second-home": grid(),
        "investor": grid(ineligible=ABOVE_85),
    }),
    "fthb": _options({
        "no": grid(),
        "yes": grid(),
    }),
    "fthb_dscr": _options({
        "no": grid(),
        "yes": _FTHB_DSCR_YES,
    }),
    "property_type": _options({
        "sfr": grid(),
        "pud": grid(),
        "condo": grid(),
        "condo-non-warrant": grid(ineligible=ABOVE_80),
        "condotel": grid(ineligible=ABOVE_80),
        "2-unit": grid(),
        "2-4-unit": grid(),
        "3-4-unit": grid(),
        "2-8-mixed": grid(ineligible=ABOVE_75),
        "9-10-mixed": grid(ineligible=ABOVE_75),
        "blanket": grid(ineligible=ABOVE_75),
        "5-9-resi": grid(ineligible=ABOVE_75),
        "commercial": grid(ineligible=LTV_BUCKETS),
    }),
    "citizenship": _options({
        "us-citizen": grid(),
        "perm-resident": grid(),
        "non-perm": grid(),
        "foreign-national": grid(ineligible=ABOVE_80),
        "itin": grid(ineligible=ABOVE_80),
    }),
    "dscr_ratio": _options({
        "≥1.250": grid(ineligible=ABOVE_85),
        "1.150-1.249": grid(ineligible=ABOVE_85),
        "1.000-1.149": grid(ineligible=ABOVE_85),
        "0.750-0.999": grid(ineligible=["≤50.00"] + ABOVE_85),
        "0.500-0.749": grid(ineligible=["≤50.00", "50.01-55.00"] + ABOVE_75),
        "≤0.499": grid(ineligible=["≤50.00", "50.01-55.00", "55.01-60.00"] + ABOVE_75),
    }),
    "prepay_period": _options({
        "0-no-prepay": grid(ineligible=ABOVE_85),
        "1yr": grid(ineligible=ABOVE_85),
        "2yr": grid(ineligible=ABOVE_85),
        "3yr": grid(ineligible=ABOVE_85),
        "4yr": grid(ineligible=ABOVE_85),
        "5yr": grid(ineligible=ABOVE_85),
    }),
    "prepay_fee": _options({
        "standard-5": grid(ineligible=ABOVE_85),
        "6mo-interest": grid(ineligible=ABOVE_85),
        "declining": grid(ineligible=ABOVE_85),
    }),
    "short_term_rental": _options({
        "no": grid(ineligible=ABOVE_85),
        "yes": grid(ineligible=ABOVE_80),
    }),
    "credit_event": _options({
        "≥48m-none": grid(),
        "36m-47m": grid(),
        "24m-35m": grid(ineligible=ABOVE_85),
        "12m-23m": grid(ineligible=ABOVE_75),
        "≤11m": grid(ineligible=LTV_BUCKETS),
    }),
    "mortgage_history": _options({
        "0x30x24": grid(),
        "1x30x12": grid(),
        "2x30x12": grid(ineligible=ABOVE_80),
        "3x30x12": grid(),
        "1x60x12": grid(ineligible=["70.01-75.00"] + ABOVE_75),
        "≥2x60x12": grid(ineligible=LTV_BUCKETS),
        "≥1x90x24": grid(ineligible=LTV_BUCKETS),
    }),
    "lock_term": _options({
        "15-day": grid(),
        "30-day": grid(),
        "45-day": grid(-0.250),
    }),
    "state": _options({
        "FL": grid(),
        "GA": grid(),
        "OH": grid(),
        "TX": grid(),
    }),
}


def _tiers(pairs):
    return [RateTier(rate=r, price=p) for r, p in pairs]


def _sheet(id, name, program_type, tier, description, base_rates, settings, breaks=None):
    return Program(
        id=id,
        name=name,
        program_type=program_type,
        tier=tier,
        description=description,
        margin_holdback=DEFAULT_MARGIN_HOLDBACK,
        ltv_breaks=list(breaks or DEFAULT_LTV_BREAKS),
        base_rates=_tiers(base_rates),
        adjustments=AdjustmentTable(base=DEFAULT_LLPA_GRID),
        settings=settings,
    )


DEFAULT_PROGRAMS = [
    _sheet(
        "defy-nonqm-c",
        "Defy NonQM-C",
        "NonQM",
        "C",
        "Non-QM Standard Program",
        [
            (5.999, 99.323), (6.125, 99.686), (6.250, 100.038), (6.375, 100.538),
            (6.499, 101.038), (6.625, 101.538), (6.750, 101.913), (6.875, 102.288),
            (6.999, 102.663), (7.125, 103.038), (7.250, 103.413), (7.375, 103.663),
            (7.499, 103.913), (7.620, 104.163), (7.750, 104.413), (7.875, 104.663),
            (7.999, 104.913), (8.125, 105.163), (8.250, 105.413), (8.375, 105.538),
            (8.499, 105.663), (8.625, 105.788), (8.750, 105.913), (8.875, 106.038),
            (8.990, 106.163),
        ],
        ProgramSettings(
            min_fico=680,
            max_ltv=80,
            min_loan_amount=100000,
            max_loan_amount=3000000,
            allowed_states=["CA", "GA", "FL", "TX", "CO", "AL", "TN"],
            allowed_doc_types=[
                "2yr Full Doc", "1yr Full Doc", "12m Bank Stmts", "24m Bank Stmts",
                "Asset Depletion", "1yr 1099 Only", "1yr WVOE Only",
            ],
            allowed_property_types=[
                "SFR/Single Family", "PUD/Town Home", "Condo", "2 Unit", "2-4 Unit",
            ],
        ),
    ),
    _sheet(
        "defy-nonqm-a",
        "Defy NonQM-A",
        "NonQM",
        "A",
        "Non-QM High Balance Program",
        [
            (6.375, 100.315), (6.500, 101.090), (6.625, 101.690), (6.750, 102.240),
            (6.875, 102.690), (6.990, 103.140), (7.125, 103.515), (7.250, 103.915),
            (7.375, 104.290), (7.500, 104.615), (7.625, 104.865), (7.750, 105.140),
            (7.875, 105.390), (7.990, 105.640), (8.125, 105.890), (8.250, 106.140),
            (8.375, 106.390), (8.500, 106.640), (8.625, 106.890), (8.750, 107.140),
        ],
        ProgramSettings(
            min_fico=660,
            max_ltv=90,
            min_loan_amount=100000,
            max_loan_amount=5000000,
            allowed_states=["CA", "CO", "GA", "FL", "TX", "AL", "TN"],
            allowed_doc_types=[
                "12m Bank Stmts", "Asset Depletion", "1yr P&L w/2m Bank Stmts", "1yr P&L Only",
            ],
            allowed_property_types=[
                "SFR/Single Family", "PUD/Town Home", "Condo", "Condo (Non-Warrantable)",
                "2 Unit", "2-4 Unit", "3-4 Unit",
            ],
        ),
    ),
    _sheet(
        "defy-dscr-c",
        "Defy DSCR-C",
        "DSCR",
        "C",
        "DSCR Investment Program",
        [
            (5.990, 98.073), (6.125, 98.436), (6.250, 98.788), (6.375, 99.128),
            (6.499, 99.456), (6.625, 99.772), (6.750, 100.076), (6.875, 100.378),
            (6.990, 100.678), (7.125, 100.951), (7.250, 101.238), (7.375, 101.532),
            (7.499, 101.844), (7.625, 102.091), (7.750, 102.352), (7.875, 102.627),
            (7.999, 102.876), (8.125, 103.119), (8.250, 103.355), (8.375, 103.586),
            (8.499, 103.810), (8.625, 104.029), (8.750, 104.241), (8.875, 104.448),
            (8.999, 104.648),
        ],
        ProgramSettings(
            min_fico=720,
            max_ltv=80,
            min_loan_amount=150000,
            max_loan_amount=2000000,
            allowed_states=list(DSCR_STATES),
            allowed_doc_types=["DSCR"],
            allowed_property_types=[
                "SFR/Single Family", "PUD/Town Home", "Condo", "2 Unit", "3-4 Unit",
                "2-8 Unit Mixed Use",
            ],
        ),
    ),
    _sheet(
        "defy-dscr-a",
        "Defy DSCR-A",
        "DSCR",
        "A",
        "DSCR Premium Program",
        [
            (6.250, 100.340), (6.375, 101.340), (6.500, 102.015), (6.625, 102.515),
            (6.750, 103.015), (6.875, 103.490), (6.990, 103.940), (7.125, 104.390),
            (7.250, 104.840), (7.375, 105.215), (7.500, 105.590), (7.625, 105.965),
            (7.750, 106.340), (7.875, 106.715), (7.990, 107.090), (8.125, 107.465),
            (8.250, 107.805), (8.375, 108.105), (8.500, 108.405),
        ],
        ProgramSettings(
            min_fico=640,
            max_ltv=80,
            min_loan_amount=150000,
            max_loan_amount=3500000,
            allowed_states=list(DSCR_STATES),
            allowed_doc_types=["DSCR"],
            allowed_property_types=[
                "SFR/Single Family", "PUD/Town Home", "Condo", "Condo (Non-Warrantable)",
                "2 Unit", "3-4 Unit", "5-9 Unit Residential",
            ],
        ),
    ),
]
