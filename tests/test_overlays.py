from quickprice.models import LoanScenario
from quickprice.overlays import (
    OVERLAY_RULES,
    OverlayRule,
    register_overlay,
    should_apply_adjustment,
    skipped_adjustments,
)


def test_primary_skips_prepay():
    s = LoanScenario(occupancy="Primary")
    assert not should_apply_adjustment("prepay_period", s)
    assert not should_apply_adjustment("prepay_fee", s)
    assert should_apply_adjustment("credit_score", s)


def test_investment_applies_prepay():
    s = LoanScenario(occupancy="Investment")
    assert should_apply_adjustment("prepay_period", s)


def test_credit_history_needs_adverse_flag():
    assert not should_apply_adjustment("credit_event", LoanScenario())
    assert should_apply_adjustment("mortgage_history", LoanScenario(adverse_credit=True))


def test_rules_naming_same_category_are_anded():
    rules = dict(OVERLAY_RULES)
    rules["no_ca_prepay"] = OverlayRule(
        name="No CA prepay",
        description="",
        categories=("prepay_period",),
        condition=lambda s: s.state != "CA",
    )
    s = LoanScenario(occupancy="Investment", state="CA")
    assert not should_apply_adjustment("prepay_period", s, rules)
    assert should_apply_adjustment("prepay_period", s.model_copy(update={"state": "TX"}), rules)


def test_skipped_adjustments_reasons():
    skipped = skipped_adjustments(LoanScenario())
    assert {s.category for s in skipped} == {
        "prepay_period",
        "prepay_fee",
        "credit_event",
        "mortgage_history",
    }
    assert all(s.reason for s in skipped)


def test_register_overlay(monkeypatch):
    monkeypatch.setattr("quickprice.overlays.OVERLAY_RULES", dict(OVERLAY_RULES))
    register_overlay(
        "no_str",
        OverlayRule("No STR", "never", ("short_term_rental",), lambda s: False),
    )
    assert not should_apply_adjustment("short_term_rental", LoanScenario())
