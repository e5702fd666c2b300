"""Pricing pipeline: scenario in, priced rate options out.

``calculate_rates`` is pure apart from logging. The programs passed in are
copied once on entry so edits made elsewhere during a run are never seen.
"""
from __future__ import annotations

import logging
from typing import Iterable, List

from quickprice.audit import ChangeLog
from quickprice.buckets import LTV_NOT_APPLICABLE, LTV_OUT_OF_BOUNDS, calculate_ltv, ltv_bucket
from quickprice.errors import IneligibleCombination, LtvOutOfBounds, PricingError
from quickprice.llpa import aggregate
from quickprice.models import LoanScenario, PricingResult, Program, RuleResult
from quickprice.overlays import skipped_adjustments
from quickprice.rates import select_rates
from quickprice.rules import evaluate_program_rules
from quickprice.selector import select_program
from quickprice.triggers import normalize

logger = logging.getLogger(__name__)


def snapshot(programs: Iterable[Program]) -> List[Program]:
    return [p.model_copy(deep=True) for p in programs]


def _issue(err: PricingError) -> RuleResult:
    return RuleResult(code=err.code, severity="critical", message=err.message, context=err.context)


def calculate_rates(scenario: LoanScenario, programs: Iterable[Program]) -> PricingResult:
    """Price ``scenario`` against a snapshot of ``programs``.

    Typed pricing errors end the run and come back as ``PricingResult.error``
    with no rates. A scenario that prices but has no tier inside the price
    band comes back with no error and an empty ``rates`` list.
    """
    programs = snapshot(programs)
    log = ChangeLog()
    try:
        normalized = normalize(scenario, log)
    except PricingError as err:
        logger.info("scenario rejected: %s", err.message)
        return PricingResult(error=_issue(err), changes=log.entries, scenario=scenario)

    partial = dict(changes=log.entries, scenario=normalized, skipped=skipped_adjustments(normalized))
    try:
        program = select_program(normalized, programs)
    except PricingError as err:
        logger.info("no program: %s", err.message)
        return PricingResult(error=_issue(err), **partial)

    partial.update(program_id=program.id, program_name=program.name)
    ltv = calculate_ltv(normalized.loan_amount, normalized.purchase_price)
    partial.update(ltv=ltv, warnings=evaluate_program_rules(normalized, program, ltv))
    bucket = ltv_bucket(normalized.loan_amount, normalized.purchase_price, program.ltv_breaks)
    logger.debug("program=%s ltv=%s bucket=%s", program.id, ltv, bucket)

    try:
        if bucket == LTV_NOT_APPLICABLE:
            raise LtvOutOfBounds(0.0, max(program.ltv_breaks), "LTV cannot be computed without a property value")
        if bucket == LTV_OUT_OF_BOUNDS:
            raw = 100.0 * normalized.loan_amount / normalized.purchase_price
            raise LtvOutOfBounds(raw, max(program.ltv_breaks))
        breakdown = aggregate(normalized, program, bucket)
    except IneligibleCombination as err:
        logger.info("ineligible %s at %s", err.category, bucket)
        return PricingResult(error=_issue(err), ltv_bucket=bucket, adjustments=err.adjustments, **partial)
    except PricingError as err:
        logger.info("not priced: %s", err.message)
        return PricingResult(error=_issue(err), ltv_bucket=bucket, **partial)

    selection = select_rates(program, bucket, breakdown.total)
    if not selection.rates:
        logger.info("no rates inside the price band for %s", program.id)
    return PricingResult(
        ltv_bucket=bucket,
        llpa_total=breakdown.total,
        adjustments=breakdown.adjustments,
        rates=selection.rates,
        par_rate=selection.par_rate,
        all_rates=selection.all_rates,
        **partial,
    )
