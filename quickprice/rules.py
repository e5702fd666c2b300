from __future__ import annotations

from typing import List, Optional

from quickprice.buckets import leading_number
from quickprice.models import LoanScenario, Program, RuleResult
from quickprice.presets import DSCR_STATES, NON_DSCR_STATES


def allowed_states(doc_type: str) -> List[str]:
    """States licensed for a doc type: the wide DSCR list or the limited one."""
    if doc_type == "DSCR":
        return list(DSCR_STATES)
    return list(NON_DSCR_STATES)


def evaluate_program_rules(
    scenario: LoanScenario, program: Program, ltv: Optional[float] = None
) -> List[RuleResult]:
    """Compare a scenario with the selected program's settings.

    Findings are informational; pricing still runs so the loan officer can
    see how far the scenario is from the program box.
    """
    res: List[RuleResult] = []
    cfg = program.settings

    if scenario.state not in allowed_states(scenario.doc_type):
        res.append(
            RuleResult(
                code="STATE_NOT_LICENSED",
                severity="warn",
                message=f"{scenario.state} is not licensed for {scenario.doc_type} loans.",
                context={"state": scenario.state},
            )
        )

    score = leading_number(scenario.credit_score)
    if score is not None:
        if score < cfg.min_fico:
            res.append(
                RuleResult(
                    code="FICO_BELOW_MIN",
                    severity="warn",
                    message="Credit score is below the program minimum.",
                    context={"actual": score, "limit": cfg.min_fico},
                )
            )
        if cfg.max_fico is not None and score > cfg.max_fico:
            res.append(
                RuleResult(
                    code="FICO_ABOVE_MAX",
                    severity="warn",
                    message="Credit score is above the program maximum.",
                    context={"actual": score, "limit": cfg.max_fico},
                )
            )

    if scenario.loan_amount < cfg.min_loan_amount:
        res.append(
            RuleResult(
                code="LOAN_AMOUNT_BELOW_MIN",
                severity="warn",
                message="Loan amount is below the program minimum.",
                context={"actual": scenario.loan_amount, "limit": cfg.min_loan_amount},
            )
        )
    if scenario.loan_amount > cfg.max_loan_amount:
        res.append(
            RuleResult(
                code="LOAN_AMOUNT_ABOVE_MAX",
                severity="warn",
                message="Loan amount exceeds the program maximum.",
                context={"actual": scenario.loan_amount, "limit": cfg.max_loan_amount},
            )
        )

    if ltv is not None and ltv > cfg.max_ltv:
        res.append(
            RuleResult(
                code="LTV_ABOVE_PROGRAM_MAX",
                severity="warn",
                message="LTV exceeds the program maximum.",
                context={"actual": ltv, "limit": cfg.max_ltv},
            )
        )

    if cfg.allowed_states and scenario.state not in cfg.allowed_states:
        res.append(
            RuleResult(
                code="STATE_NOT_ALLOWED",
                severity="warn",
                message=f"{program.name} is not offered in {scenario.state}.",
            )
        )

    if cfg.allowed_doc_types and scenario.doc_type not in cfg.allowed_doc_types:
        res.append(
            RuleResult(
                code="DOC_TYPE_NOT_ALLOWED",
                severity="warn",
                message=f"{scenario.doc_type} is not an allowed doc type for {program.name}.",
            )
        )

    if cfg.allowed_property_types and scenario.property_type not in cfg.allowed_property_types:
        res.append(
            RuleResult(
                code="PROPERTY_TYPE_NOT_ALLOWED",
                severity="warn",
                message=f"{scenario.property_type} is not an allowed property type for {program.name}.",
            )
        )

    return res


def has_blocking(res: List[RuleResult]) -> bool:
    return any(r.severity == "critical" for r in res)
