from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from quickprice.errors import NoActiveProgram
from quickprice.models import LoanScenario, Program
from quickprice.presets import PROGRAM_TIER_CUTOFFS

logger = logging.getLogger(__name__)


def program_class(scenario: LoanScenario) -> str:
    return "DSCR" if scenario.doc_type == "DSCR" else "NonQM"


def select_program(
    scenario: LoanScenario,
    programs: Iterable[Program],
    cutoffs: Optional[Dict[str, float]] = None,
) -> Program:
    """Route a normalized scenario to one active program.

    The "A" tier of the class is nominal at or above the class cutoff, the "C"
    tier below it. An inactive or missing nominal tier falls back to an
    active program of the other tier in the same class.
    """
    cutoffs = PROGRAM_TIER_CUTOFFS if cutoffs is None else cutoffs
    cls = program_class(scenario)
    candidates: List[Program] = [p for p in programs if p.program_type == cls]
    nominal = "A" if scenario.loan_amount >= cutoffs.get(cls, float("inf")) else "C"
    fallback = "C" if nominal == "A" else "A"

    for tier in (nominal, fallback):
        for program in candidates:
            if program.tier == tier and program.is_active:
                if tier != nominal:
                    logger.debug("%s tier %s inactive, using %s", cls, nominal, program.id)
                return program
    raise NoActiveProgram("No active program for this loan type", program_class=cls)
