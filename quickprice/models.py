from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

Citizenship = Literal[
    "US Citizen", "Perm-Resident", "Non-Perm Resident", "Foreign National", "ITIN"
]
Occupancy = Literal["Primary", "Second Home", "Investment"]
DocType = Literal[
    "2yr Full Doc",
    "1yr Full Doc",
    "DSCR",
    "12m Bank Stmts",
    "24m Bank Stmts",
    "Asset Depletion",
    "1yr P&L Only",
    "1yr P&L w/2m Bank Stmts",
    "1yr 1099 Only",
    "1yr WVOE Only",
]
LienType = Literal["1st", "2nd"]
LoanPurpose = Literal["Purchase", "Rate/Term", "Cash-Out"]
LoanProduct = Literal[
    "30yr Fixed",
    "40yr Fixed",
    "15yr Fixed",
    "Interest-Only (30yr)",
    "Interest-Only (40yr)",
    "5/6 ARM",
    "7/6 ARM",
    "10/6 ARM",
]
PropertyType = Literal[
    "SFR/Single Family",
    "PUD/Town Home",
    "Condo",
    "Condo (Non-Warrantable)",
    "Condotel",
    "2 Unit",
    "2-4 Unit",
    "3-4 Unit",
    "2-8 Unit Mixed Use",
    "9-10 Unit Mixed Use",
    "5-9 Unit Residential",
    "Blanket/Cross Collateral",
    "Small Balance Commercial",
]
DtiBucket = Literal["≤43%", "43.01-50%", "50.01-55%"]
LockTerm = Literal["15 Day", "30 Day", "45 Day"]
PrepayPeriod = Literal["0 - No Prepay", "1yr", "2yr", "3yr", "4yr", "5yr"]
PrepayFee = Literal["5% (Standard)", "6 Month Interest", "Declining"]
CreditEvent = Literal["None", "36m-47m", "24m-35m", "12m-23m", "≤11m"]
MortgageHistory = Literal[
    "0x30x24", "1x30x12", "2x30x12", "3x30x12", "1x60x12", "≥2x60x12", "≥1x90x24"
]
ProgramType = Literal["NonQM", "DSCR"]

# Explicit "lender does not offer this" cell. Never the same as 0 or a
# missing entry.
INELIGIBLE = "ineligible"
Cell = Union[float, Literal["ineligible"]]
Grid = Dict[str, Dict[str, Dict[str, Cell]]]


class LoanScenario(BaseModel):
    """Borrower and loan attributes entered by the loan officer."""

    model_config = ConfigDict(frozen=True)

    citizenship: Citizenship = "US Citizen"
    occupancy: Occupancy = "Primary"
    fthb: bool = False
    credit_score: Union[int, str, None] = "720-739"
    adverse_credit: bool = False
    credit_event: CreditEvent = "None"
    mortgage_history: MortgageHistory = "0x30x24"
    doc_type: DocType = "1yr Full Doc"
    lien_type: LienType = "1st"
    purchase_price: float = 800000.0
    loan_amount: float = 560000.0
    loan_purpose: LoanPurpose = "Purchase"
    loan_product: LoanProduct = "30yr Fixed"
    property_type: PropertyType = "SFR/Single Family"
    dti: DtiBucket = "≤43%"
    escrow_waiver: bool = False
    state: str = "CA"
    lock_term: LockTerm = "30 Day"
    prepay_period: PrepayPeriod = "3yr"
    prepay_fee: PrepayFee = "5% (Standard)"
    dscr_ratio: Union[float, str, None] = None
    short_term_rental: bool = False

    @field_validator("state")
    @classmethod
    def _upper_state(cls, v: str) -> str:
        return v.strip().upper()


class RateTier(BaseModel):
    model_config = ConfigDict(frozen=True)

    rate: float
    price: float


def _mark_ineligible(grid: Any) -> Any:
    if not isinstance(grid, dict):
        return grid
    return {
        cat: {
            opt: {b: (INELIGIBLE if v is None else v) for b, v in (cells or {}).items()}
            for opt, cells in (options or {}).items()
        }
        for cat, options in grid.items()
    }


class AdjustmentTable(BaseModel):
    """Category -> option -> LTV bucket grid with per-program overrides.

    An override replaces the base value of exactly one (option, bucket) cell;
    neighbouring cells keep their base values.
    """

    model_config = ConfigDict(frozen=True)

    base: Grid = Field(default_factory=dict)
    overrides: Grid = Field(default_factory=dict)

    @field_validator("base", "overrides", mode="before")
    @classmethod
    def _null_means_ineligible(cls, v: Any) -> Any:
        return _mark_ineligible(v)

    @field_serializer("base", "overrides")
    def _ineligible_as_null(self, grid: Grid) -> Dict[str, Any]:
        return {
            cat: {
                opt: {b: (None if v == INELIGIBLE else v) for b, v in cells.items()}
                for opt, cells in options.items()
            }
            for cat, options in grid.items()
        }

    def cell(self, category: str, option: str, bucket: str) -> Optional[Cell]:
        """Effective cell value, or ``None`` when neither grid has an entry."""
        for grid in (self.overrides, self.base):
            cells = grid.get(category, {}).get(option, {})
            if bucket in cells:
                return cells[bucket]
        return None


class ProgramSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_fico: int = 620
    max_fico: Optional[int] = None
    max_ltv: float = 90.0
    min_loan_amount: float = 75000.0
    max_loan_amount: float = 5000000.0
    allowed_states: List[str] = Field(default_factory=list)
    allowed_doc_types: List[str] = Field(default_factory=list)
    allowed_property_types: List[str] = Field(default_factory=list)


class Program(BaseModel):
    """A rate sheet: base pricing, LLPA grid, hidden margin and settings."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    program_type: ProgramType = "NonQM"
    tier: Literal["A", "C"] = "C"
    description: str = ""
    is_active: bool = True
    margin_holdback: float = -1.625
    ltv_breaks: List[float] = Field(
        default_factory=lambda: [50, 55, 60, 65, 70, 75, 80, 85, 90], min_length=1
    )
    base_rates: List[RateTier] = Field(default_factory=list)
    adjustments: AdjustmentTable = Field(default_factory=AdjustmentTable)
    settings: ProgramSettings = Field(default_factory=ProgramSettings)

    @field_validator("ltv_breaks")
    @classmethod
    def _sort_breaks(cls, v: List[float]) -> List[float]:
        return sorted(float(b) for b in v)

    @field_validator("base_rates")
    @classmethod
    def _sort_rates(cls, v: List[RateTier]) -> List[RateTier]:
        return sorted(v, key=lambda t: t.rate)


class RuleResult(BaseModel):
    code: str
    severity: Literal["info", "warn", "critical"]
    message: str
    context: Dict[str, Any] = Field(default_factory=dict)


class Adjustment(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str
    label: str
    key: str
    value: float


class SkippedAdjustment(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str
    rule: str
    reason: str


class FieldChange(BaseModel):
    model_config = ConfigDict(frozen=True)

    rule: str
    field: str
    old_value: Any
    new_value: Any


class RateOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    rate: float
    base_price: float
    final_price: float


class PricingResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    program_id: Optional[str] = None
    program_name: Optional[str] = None
    ltv: Optional[float] = None
    ltv_bucket: Optional[str] = None
    llpa_total: Optional[float] = None
    adjustments: List[Adjustment] = Field(default_factory=list)
    rates: List[RateOption] = Field(default_factory=list)
    par_rate: Optional[RateOption] = None
    all_rates: List[RateOption] = Field(default_factory=list)
    error: Optional[RuleResult] = None
    skipped: List[SkippedAdjustment] = Field(default_factory=list)
    warnings: List[RuleResult] = Field(default_factory=list)
    changes: List[FieldChange] = Field(default_factory=list)
    scenario: Optional[LoanScenario] = None

    @property
    def ok(self) -> bool:
        return self.error is None
