import pytest

from quickprice.audit import ChangeLog
from quickprice.errors import HardStop, IncompatibleSelection, ValidationError
from quickprice.models import LoanScenario
from quickprice.triggers import normalize


def test_foreign_national_cascade():
    s = normalize(LoanScenario(citizenship="Foreign National", occupancy="Primary"))
    assert s.occupancy == "Investment"
    assert s.doc_type == "DSCR"


def test_dscr_forces_investment():
    s = normalize(LoanScenario(doc_type="DSCR", occupancy="Second Home"))
    assert s.occupancy == "Investment"


def test_normalize_is_idempotent():
    once = normalize(LoanScenario(citizenship="Foreign National"))
    assert normalize(once) == once


def test_input_scenario_not_mutated():
    original = LoanScenario(doc_type="DSCR")
    normalize(original)
    assert original.occupancy == "Primary"


def test_fthb_second_home_rejected():
    with pytest.raises(IncompatibleSelection) as exc:
        normalize(LoanScenario(fthb=True, occupancy="Second Home"))
    assert exc.value.message == "FTHB cannot select Second Home."
    assert exc.value.code == "VALIDATION"


def test_fthb_dscr_below_minimum_is_hard_stop():
    with pytest.raises(HardStop) as exc:
        normalize(LoanScenario(fthb=True, doc_type="DSCR", dscr_ratio="0.900"))
    assert isinstance(exc.value, ValidationError)
    assert "1.150" in exc.value.message


def test_fthb_dscr_at_minimum_passes():
    s = normalize(LoanScenario(fthb=True, doc_type="DSCR", dscr_ratio=1.15))
    assert s.occupancy == "Investment"


def test_fthb_dscr_missing_ratio_passes():
    s = normalize(LoanScenario(fthb=True, doc_type="DSCR", dscr_ratio=None))
    assert s.doc_type == "DSCR"


def test_change_log_records_forced_fields():
    log = ChangeLog()
    normalize(LoanScenario(citizenship="Foreign National"), log)
    assert log.fields() == ["occupancy", "doc_type"]
    assert log.as_dict()[0] == {
        "rule": "FOREIGN_NATIONAL",
        "field": "occupancy",
        "old": "Primary",
        "new": "Investment",
    }


def test_change_log_empty_when_nothing_forced():
    log = ChangeLog()
    normalize(LoanScenario(), log)
    assert log.entries == []
