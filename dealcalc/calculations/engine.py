"""
Calculator entry point.

``calculate_all`` is a pure function of an input snapshot and the evaluation
date: loans, then totals, then strategy stats, then the checklist.
"""

import logging
from datetime import date
from typing import Optional

from dealcalc.calculations.checklist import calculate_deal_checklist
from dealcalc.calculations.loans import calculate_loan_calcs
from dealcalc.calculations.strategies import calculate_quick_stats
from dealcalc.calculations.totals import calculate_totals
from dealcalc.models.inputs import CalculatorInputs
from dealcalc.models.outputs import CalculatorOutputs

logger = logging.getLogger(__name__)


def calculate_all(
    inputs: CalculatorInputs, as_of: Optional[date] = None
) -> CalculatorOutputs:
    """
    Compute every output from the given inputs.

    Args:
        inputs: Calculator inputs
        as_of: Evaluation date for subject-to balances (defaults to today)

    Returns:
        A newly built CalculatorOutputs
    """
    if as_of is None:
        as_of = date.today()

    loan_calcs = calculate_loan_calcs(inputs, as_of)
    totals = calculate_totals(inputs, loan_calcs)
    quick_stats = calculate_quick_stats(inputs, loan_calcs, totals)
    deal_checklist = calculate_deal_checklist(inputs, quick_stats, loan_calcs)

    logger.debug(
        f"Calculated '{inputs.name}' as of {as_of.isoformat()}: "
        f"{deal_checklist.deal_decision.value}"
    )

    return CalculatorOutputs(
        loan_calcs=loan_calcs,
        totals=totals,
        quick_stats=quick_stats,
        deal_checklist=deal_checklist,
    )
