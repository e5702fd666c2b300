"""Borrower trigger cascade.

Cross-field rules that force or reject scenario selections before pricing.
The cascade returns a new scenario and never mutates the one it was given.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from quickprice.audit import ChangeLog
from quickprice.buckets import dscr_ratio_value
from quickprice.errors import HardStop, IncompatibleSelection
from quickprice.models import LoanScenario

logger = logging.getLogger(__name__)

FTHB_MIN_DSCR = 1.150
MAX_PASSES = 5


def _force(
    scenario: LoanScenario, rule: str, updates: Dict[str, Any], log: Optional[ChangeLog]
) -> LoanScenario:
    changed = {k: v for k, v in updates.items() if getattr(scenario, k) != v}
    if not changed:
        return scenario
    for field, value in changed.items():
        logger.debug("%s: %s %r -> %r", rule, field, getattr(scenario, field), value)
        if log is not None:
            log.record(rule, field, getattr(scenario, field), value)
    return scenario.model_copy(update=changed)


def apply_triggers(scenario: LoanScenario, log: Optional[ChangeLog] = None) -> LoanScenario:
    """Run every rule once, in order."""
    s = scenario

    # Foreign Nationals are only offered investor DSCR financing.
    if s.citizenship == "Foreign National":
        s = _force(s, "FOREIGN_NATIONAL", {"occupancy": "Investment", "doc_type": "DSCR"}, log)

    if s.doc_type == "DSCR":
        s = _force(s, "DSCR_INVESTMENT", {"occupancy": "Investment"}, log)

    if s.fthb:
        if s.occupancy == "Second Home":
            raise IncompatibleSelection("FTHB cannot select Second Home.", field="occupancy")
        if s.occupancy == "Investment" and s.doc_type == "DSCR":
            dscr = dscr_ratio_value(s.dscr_ratio)
            if 0 < dscr < FTHB_MIN_DSCR:
                raise HardStop(
                    "Hard Stop: FTHB Investor DSCR must be ≥ 1.150",
                    field="dscr_ratio",
                    dscr_ratio=dscr,
                    minimum=FTHB_MIN_DSCR,
                )
    return s


def normalize(scenario: LoanScenario, log: Optional[ChangeLog] = None) -> LoanScenario:
    """Apply the triggers until nothing changes.

    Raises ``ValidationError`` subclasses for selections that cannot be fixed
    automatically. Normalizing an already normalized scenario is a no-op.
    """
    current = scenario
    for _ in range(MAX_PASSES):
        updated = apply_triggers(current, log)
        if updated == current:
            return updated
        current = updated
    return current
