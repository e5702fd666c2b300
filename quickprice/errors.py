"""Typed outcomes that stop a pricing run.

Every error is a deterministic function of the scenario and the program
snapshot, so nothing here is ever retried.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional


class PricingError(Exception):
    code = "PRICING_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context


class ValidationError(PricingError):
    """The scenario as entered contradicts itself."""

    code = "VALIDATION"


class IncompatibleSelection(ValidationError):
    pass


class HardStop(ValidationError):
    pass


class NoActiveProgram(PricingError):
    code = "NO_ACTIVE_PROGRAM"


def _over(ltv: float, limit: float) -> str:
    """Fewest decimals (at least 2) that still show ``ltv`` above ``limit``."""
    places = 2
    while places < 6 and round(ltv, places) <= limit:
        places += 1
    return f"{ltv:.{places}f}"


class LtvOutOfBounds(PricingError):
    code = "LTV_OUT_OF_BOUNDS"

    def __init__(self, ltv: float, max_ltv: float, message: Optional[str] = None) -> None:
        super().__init__(
            message or f"LTV {_over(ltv, max_ltv)}% exceeds program maximum of {max_ltv:.2f}%",
            ltv=ltv,
            max_ltv=max_ltv,
        )
        self.ltv = ltv


class IneligibleCombination(PricingError):
    """An explicit ineligible cell was hit while summing adjustments.

    ``adjustments`` holds the entries evaluated before the failing category.
    """

    code = "INELIGIBLE_COMBINATION"

    def __init__(self, category: str, label: str, adjustments: List[Any]) -> None:
        super().__init__(
            f"Ineligible: {label} combination not available at this LTV",
            category=category,
        )
        self.category = category
        self.adjustments = list(adjustments)
