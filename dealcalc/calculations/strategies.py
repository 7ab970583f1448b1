"""
Strategy Calculations

Hold (rental cash flow), wrap (seller-financing spread) and flip (resale
profit), plus the wholesale MAO and the upfront cash figures they share.
"""

from dataclasses import dataclass

from dealcalc.calculations.loans import (
    dscr_upfront_cost,
    financed_amount,
    loan2_upfront_cost,
    wrap_upfront_cost,
)
from dealcalc.models.inputs import CalculatorInputs, PropertyBasicsInputs
from dealcalc.models.outputs import LoanCalcsOutputs, QuickStatsOutputs, TotalsOutputs
from dealcalc.models.types import as_fraction


@dataclass(frozen=True)
class EntryCosts:
    """Upfront cash figures for a deal."""

    total_entry_fee: float
    funding_gap: float


def safe_ratio(numerator: float, denominator: float) -> float:
    """Ratio that resolves to 0 instead of dividing by zero."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def calculate_mao(property_basics: PropertyBasicsInputs) -> float:
    """
    Maximum Allowable Offer.

    MAO = ARV * wholesaleDiscount% - repairs - yourFee - creditToBuyer
    """
    return (
        property_basics.arv * as_fraction(property_basics.wholesale_discount)
        - property_basics.repairs
        - property_basics.your_fee
        - property_basics.credit_to_buyer
    )


def calculate_entry_costs(
    inputs: CalculatorInputs, loan_calcs: LoanCalcsOutputs
) -> EntryCosts:
    """
    Total entry fee and funding gap.

    Entry fee is the purchase cost total (closing, appraisal, LLC, servicing)
    less the seller allowance, plus each enabled loan's upfront cost. For the
    DSCR loan that includes the 20% down payment.

    Funding gap is the cash needed to close: purchase price not covered by
    financing, plus entry fee and repairs. The DSCR down payment is already
    part of the entry fee, so it is taken out of the uncovered price first.
    Credit to buyer is netted against MAO only.
    """
    costs = inputs.purchase_costs

    total_entry_fee = (
        costs.closing_costs
        + costs.appraisal_cost
        + costs.llc_cost
        + costs.servicing_fee
        - costs.seller_allowance
        + dscr_upfront_cost(inputs, loan_calcs)
        + loan2_upfront_cost(inputs)
        + wrap_upfront_cost(inputs, loan_calcs)
    )

    uncovered_price = (
        costs.purchase_price
        - financed_amount(inputs, loan_calcs)
        - loan_calcs.dscr_down_payment
    )
    funding_gap = max(
        0.0, uncovered_price + total_entry_fee + inputs.property_basics.repairs
    )

    return EntryCosts(total_entry_fee=total_entry_fee, funding_gap=funding_gap)


def calculate_wrap_cashflow(
    inputs: CalculatorInputs, loan_calcs: LoanCalcsOutputs, totals: TotalsOutputs
) -> float:
    """
    Monthly spread between the buyer's wrap payment and what the seller pays.

    When a subject-to loan underlies the wrap only its payment is owed on top
    of taxes and insurance; otherwise all debt service is.
    """
    if not inputs.wrap_loan.use_wrap:
        return 0.0
    if inputs.subject_to.use_subject_to:
        return loan_calcs.wrap_monthly_payment - (
            loan_calcs.sub_to_monthly_payment + totals.total_monthly_ti
        )
    return (
        loan_calcs.wrap_monthly_payment
        - totals.total_monthly_pi
        - totals.total_monthly_ti
    )


def calculate_flip_profit(inputs: CalculatorInputs) -> float:
    """Resale profit: ARV less purchase, repairs and resale costs."""
    flip = inputs.flip
    resale_costs = flip.resale_closing_costs + flip.resale_marketing + flip.contingency
    return (
        inputs.property_basics.arv
        - inputs.purchase_costs.purchase_price
        - inputs.property_basics.repairs
        - resale_costs
    )


def calculate_quick_stats(
    inputs: CalculatorInputs, loan_calcs: LoanCalcsOutputs, totals: TotalsOutputs
) -> QuickStatsOutputs:
    """Headline metrics for every exit strategy."""
    entry = calculate_entry_costs(inputs, loan_calcs)

    monthly_cashflow = totals.total_monthly_income - totals.total_monthly_expenses
    wrap_cashflow = calculate_wrap_cashflow(inputs, loan_calcs, totals)
    flip_profit = calculate_flip_profit(inputs)

    return QuickStatsOutputs(
        mao=calculate_mao(inputs.property_basics),
        total_entry_fee=entry.total_entry_fee,
        funding_gap=entry.funding_gap,
        monthly_cashflow=monthly_cashflow,
        wrap_cashflow=wrap_cashflow,
        flip_profit=flip_profit,
        project_months=inputs.flip.project_months,
        cash_on_cash_hold=safe_ratio(monthly_cashflow * 12, entry.total_entry_fee),
        cash_on_cash_wrap=safe_ratio(wrap_cashflow * 12, entry.total_entry_fee),
        cash_on_cash_flip=safe_ratio(flip_profit, entry.total_entry_fee),
    )
