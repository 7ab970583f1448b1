"""
Deal Checklist

Four pass/fail thresholds and the decision they imply.
"""

from dealcalc.calculations.loans import financed_amount
from dealcalc.calculations.strategies import safe_ratio
from dealcalc.models.inputs import CalculatorInputs
from dealcalc.models.outputs import (
    DealChecklistOutputs,
    DealDecision,
    LoanCalcsOutputs,
    QuickStatsOutputs,
)

MAX_ENTRY_FEE = 25000
MIN_MONTHLY_CASHFLOW = 400
MAX_LTV = 0.75
MIN_EQUITY = 15000


def deal_decision(
    entry_fee_under25k: bool,
    cashflow_over400: bool,
    ltv_under75: bool,
    equity_over15k: bool,
) -> DealDecision:
    """DEAL when all four pass, NEEDS REVIEW for two or three, else NO DEAL."""
    passed = sum([entry_fee_under25k, cashflow_over400, ltv_under75, equity_over15k])
    if passed == 4:
        return DealDecision.deal
    if passed >= 2:
        return DealDecision.needs_review
    return DealDecision.no_deal


def calculate_deal_checklist(
    inputs: CalculatorInputs,
    quick_stats: QuickStatsOutputs,
    loan_calcs: LoanCalcsOutputs,
) -> DealChecklistOutputs:
    """Evaluate the deal criteria against computed outputs."""
    basics = inputs.property_basics

    ltv = safe_ratio(financed_amount(inputs, loan_calcs), basics.arv)
    equity = basics.arv - inputs.purchase_costs.purchase_price - basics.repairs

    checks = {
        "entry_fee_under25k": quick_stats.total_entry_fee < MAX_ENTRY_FEE,
        "cashflow_over400": quick_stats.monthly_cashflow > MIN_MONTHLY_CASHFLOW,
        "ltv_under75": ltv < MAX_LTV,
        "equity_over15k": equity > MIN_EQUITY,
    }

    return DealChecklistOutputs(
        ltv=ltv,
        pass_count=sum(checks.values()),
        deal_decision=deal_decision(**checks),
        **checks,
    )
