import pytest

from quickprice.errors import NoActiveProgram
from quickprice.models import LoanScenario
from quickprice.presets import DEFAULT_PROGRAMS
from quickprice.selector import program_class, select_program


def _pick(**kw):
    return select_program(LoanScenario(**kw), DEFAULT_PROGRAMS).id


def test_nonqm_tier_cutoff():
    assert _pick(loan_amount=999999) == "defy-nonqm-c"
    assert _pick(loan_amount=1000000) == "defy-nonqm-a"


def test_dscr_tier_cutoff():
    assert _pick(doc_type="DSCR", occupancy="Investment", loan_amount=249999) == "defy-dscr-c"
    assert _pick(doc_type="DSCR", occupancy="Investment", loan_amount=250000) == "defy-dscr-a"


def test_program_class():
    assert program_class(LoanScenario(doc_type="DSCR")) == "DSCR"
    assert program_class(LoanScenario(doc_type="12m Bank Stmts")) == "NonQM"


def test_inactive_nominal_tier_falls_back():
    programs = [
        p.model_copy(update={"is_active": False}) if p.id == "defy-nonqm-a" else p
        for p in DEFAULT_PROGRAMS
    ]
    chosen = select_program(LoanScenario(loan_amount=2000000), programs)
    assert chosen.id == "defy-nonqm-c"


def test_custom_cutoffs():
    chosen = select_program(LoanScenario(loan_amount=600000), DEFAULT_PROGRAMS, {"NonQM": 500000})
    assert chosen.id == "defy-nonqm-a"


def test_no_active_program():
    programs = [p for p in DEFAULT_PROGRAMS if p.program_type == "DSCR"]
    with pytest.raises(NoActiveProgram) as exc:
        select_program(LoanScenario(), programs)
    assert exc.value.message == "No active program for this loan type"
    assert exc.value.context["program_class"] == "NonQM"
