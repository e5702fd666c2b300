"""Program overlays: conditions under which LLPA categories are not applied.

Add a rule to ``OVERLAY_RULES`` (or call ``register_overlay``) when an
adjustment should only count for some scenarios. A category governed by
several rules is applied only when every one of their conditions holds.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from quickprice.models import LoanScenario, SkippedAdjustment


@dataclass(frozen=True)
class OverlayRule:
    name: str
    description: str
    categories: Sequence[str]
    condition: Callable[[LoanScenario], bool]


def _is_investment(scenario: LoanScenario) -> bool:
    return "investment" in (scenario.occupancy or "").lower()


OVERLAY_RULES: Dict[str, OverlayRule] = {
    "prepay_investment_only": OverlayRule(
        name="Prepay Period - Investment Only",
        description="Prepay period adjustments only apply to Investment occupancy",
        categories=("prepay_period", "prepay_fee"),
        condition=_is_investment,
    ),
    "adverse_credit_only": OverlayRule(
        name="Credit History - Adverse Credit Only",
        description="Credit event and mortgage history adjustments need the adverse credit flag",
        categories=("credit_event", "mortgage_history"),
        condition=lambda s: s.adverse_credit,
    ),
}


def register_overlay(key: str, rule: OverlayRule) -> None:
    OVERLAY_RULES[key] = rule


def should_apply_adjustment(
    category: str, scenario: LoanScenario, rules: Optional[Dict[str, OverlayRule]] = None
) -> bool:
    """False when any rule naming ``category`` has a failing condition."""
    for rule in (OVERLAY_RULES if rules is None else rules).values():
        if category in rule.categories and not rule.condition(scenario):
            return False
    return True


def skipped_adjustments(
    scenario: LoanScenario, rules: Optional[Dict[str, OverlayRule]] = None
) -> List[SkippedAdjustment]:
    skipped: List[SkippedAdjustment] = []
    for rule in (OVERLAY_RULES if rules is None else rules).values():
        if not rule.condition(scenario):
            for category in rule.categories:
                skipped.append(
                    SkippedAdjustment(category=category, rule=rule.name, reason=rule.description)
                )
    return skipped
