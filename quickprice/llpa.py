from __future__ import annotations

from typing import Dict, List, NamedTuple, Optional

from quickprice.buckets import option_key
from quickprice.errors import IneligibleCombination
from quickprice.models import INELIGIBLE, Adjustment, LoanScenario, Program
from quickprice.overlays import OverlayRule, should_apply_adjustment
from quickprice.presets import CATEGORIES, CATEGORY_ORDER, CategoryPolicy


class LlpaBreakdown(NamedTuple):
    total: float
    adjustments: List[Adjustment]


def aggregate(
    scenario: LoanScenario,
    program: Program,
    ltv_bucket: str,
    rules: Optional[Dict[str, OverlayRule]] = None,
    policies: Optional[Dict[str, CategoryPolicy]] = None,
) -> LlpaBreakdown:
    """Sum the program's adjustments for a normalized scenario at one LTV bucket.

    Categories are walked in the program type's fixed order. Overlay-suppressed
    categories contribute nothing and leave no entry; a missing cell counts as
    zero. An explicit ineligible cell raises ``IneligibleCombination`` carrying
    the adjustments collected before it, unless the category's policy says to
    skip it instead.
    """
    policies = CATEGORIES if policies is None else policies
    adjustments: List[Adjustment] = []
    total = 0.0
    for category in CATEGORY_ORDER[program.program_type]:
        policy = policies.get(category, CategoryPolicy(category))
        key = option_key(category, scenario)
        if not should_apply_adjustment(category, scenario, rules):
            continue
        cell = program.adjustments.cell(category, key, ltv_bucket)
        if cell == INELIGIBLE:
            if policy.hard_stop:
                raise IneligibleCombination(category, policy.label, adjustments)
            continue
        value = 0.0 if cell is None else float(cell)
        if value == 0 and not policy.record_zero:
            continue
        adjustments.append(Adjustment(category=category, label=policy.label, key=key, value=value))
        total += value
    return LlpaBreakdown(round(total, 3), adjustments)
