"""
Loan Calculations

Turns the four financing structures (DSCR, subject-to, second loan, wrap)
into concrete payments, balances and balloon figures. A loan whose ``use*``
flag is off reports zeros everywhere.
"""

from datetime import date
from typing import Dict, List

from dealcalc.calculations.amortization import (
    balloon_balance,
    elapsed_months,
    generate_amortization_schedule,
    interest_only_payment,
    monthly_payment,
    remaining_balance,
    term_months,
)
from dealcalc.models.inputs import CalculatorInputs, WrapLoanType
from dealcalc.models.outputs import LoanCalcsOutputs
from dealcalc.models.types import as_fraction

DSCR_LTV = 0.80


def dscr_loan_amount(purchase_price: float) -> float:
    """DSCR loans are sized at a fixed 80% of the purchase price."""
    return purchase_price * DSCR_LTV


def wrap_principal(inputs: CalculatorInputs) -> float:
    """Amount the wrap buyer finances: sales price less down payment."""
    sales = inputs.wrap_sales
    return max(0.0, sales.wrap_sales_price - sales.buyer_down_payment)


def calculate_loan_calcs(inputs: CalculatorInputs, as_of: date) -> LoanCalcsOutputs:
    """
    Calculate payment, balance and balloon for every enabled loan.

    Args:
        inputs: Calculator inputs
        as_of: Evaluation date for balances that depend on a loan start date

    Returns:
        LoanCalcsOutputs with zeros for disabled loans
    """
    calcs = LoanCalcsOutputs()

    dscr = inputs.dscr_loan
    if dscr.use_dscr_loan:
        amount = dscr_loan_amount(inputs.purchase_costs.purchase_price)
        calcs.dscr_loan_amount = amount
        calcs.dscr_down_payment = inputs.purchase_costs.purchase_price - amount
        calcs.dscr_monthly_payment = monthly_payment(
            amount, dscr.dscr_interest_rate, dscr.dscr_term_years
        )
        calcs.dscr_balloon_amount = balloon_balance(
            amount, dscr.dscr_interest_rate, dscr.dscr_term_years, dscr.dscr_balloon_years
        )

    sub_to = inputs.subject_to
    if sub_to.use_subject_to:
        # The existing note's required payment, on its original terms
        calcs.sub_to_monthly_payment = monthly_payment(
            sub_to.sub_to_principal, sub_to.sub_to_interest_rate, sub_to.sub_to_term_years
        )
        calcs.sub_to_current_balance = remaining_balance(
            sub_to.sub_to_principal,
            sub_to.sub_to_interest_rate,
            sub_to.sub_to_term_years,
            elapsed_months(sub_to.sub_to_start_date, as_of),
        )
        calcs.sub_to_balloon_amount = balloon_balance(
            sub_to.sub_to_principal,
            sub_to.sub_to_interest_rate,
            sub_to.sub_to_term_years,
            sub_to.sub_to_balloon_years,
        )

    loan2 = inputs.second_loan
    if loan2.use_loan2:
        calcs.loan2_monthly_payment = monthly_payment(
            loan2.loan2_principal, loan2.loan2_interest_rate, loan2.loan2_term_years
        )
        calcs.loan2_balloon_amount = balloon_balance(
            loan2.loan2_principal,
            loan2.loan2_interest_rate,
            loan2.loan2_term_years,
            loan2.loan2_balloon_years,
        )

    wrap = inputs.wrap_loan
    if wrap.use_wrap:
        principal = wrap_principal(inputs)
        calcs.wrap_principal = principal
        if wrap.wrap_loan_type == WrapLoanType.interest_only:
            calcs.wrap_monthly_payment = interest_only_payment(
                principal, wrap.wrap_interest_rate
            )
            # Nothing amortizes, the full principal is due at the balloon
            calcs.wrap_balloon_amount = principal if wrap.wrap_balloon_years > 0 else 0.0
        else:
            calcs.wrap_monthly_payment = monthly_payment(
                principal, wrap.wrap_interest_rate, wrap.wrap_term_years
            )
            calcs.wrap_balloon_amount = balloon_balance(
                principal, wrap.wrap_interest_rate, wrap.wrap_term_years, wrap.wrap_balloon_years
            )
        monthly_taxes = inputs.tax_insurance.annual_taxes / 12
        monthly_insurance = inputs.tax_insurance.annual_insurance / 12
        calcs.buyer_monthly_piti = (
            calcs.wrap_monthly_payment + monthly_taxes + monthly_insurance
        )

    return calcs


def dscr_upfront_cost(inputs: CalculatorInputs, calcs: LoanCalcsOutputs) -> float:
    """Down payment plus points and lender fees on the DSCR loan."""
    dscr = inputs.dscr_loan
    if not dscr.use_dscr_loan:
        return 0.0
    return (
        calcs.dscr_down_payment
        + calcs.dscr_loan_amount * as_fraction(dscr.dscr_points)
        + dscr.dscr_fees
    )


def loan2_upfront_cost(inputs: CalculatorInputs) -> float:
    """Points and fees on the private second loan."""
    loan2 = inputs.second_loan
    if not loan2.use_loan2:
        return 0.0
    return loan2.loan2_principal * as_fraction(loan2.loan2_points) + loan2.loan2_fees


def wrap_upfront_cost(inputs: CalculatorInputs, calcs: LoanCalcsOutputs) -> float:
    """Points and fees for originating the wrap note."""
    wrap = inputs.wrap_loan
    if not wrap.use_wrap:
        return 0.0
    return calcs.wrap_principal * as_fraction(wrap.wrap_points) + wrap.wrap_fees


def financed_amount(inputs: CalculatorInputs, calcs: LoanCalcsOutputs) -> float:
    """
    Debt secured by the property: DSCR amount, subject-to balance and second
    loan principal. The wrap is a receivable and is not included.
    """
    loan2 = inputs.second_loan.loan2_principal if inputs.second_loan.use_loan2 else 0.0
    return calcs.dscr_loan_amount + calcs.sub_to_current_balance + loan2


def build_loan_schedules(
    inputs: CalculatorInputs, as_of: date
) -> Dict[str, List[Dict]]:
    """Amortization schedules for every enabled loan, keyed by loan name."""
    schedules: Dict[str, List[Dict]] = {}

    dscr = inputs.dscr_loan
    if dscr.use_dscr_loan:
        schedules["dscrLoan"] = generate_amortization_schedule(
            principal=dscr_loan_amount(inputs.purchase_costs.purchase_price),
            annual_rate_pct=dscr.dscr_interest_rate,
            term_years=dscr.dscr_term_years,
            start_date=dscr.dscr_start_date or as_of,
        )

    sub_to = inputs.subject_to
    if sub_to.use_subject_to:
        schedules["subjectTo"] = generate_amortization_schedule(
            principal=sub_to.sub_to_principal,
            annual_rate_pct=sub_to.sub_to_interest_rate,
            term_years=sub_to.sub_to_term_years,
            start_date=sub_to.sub_to_start_date or as_of,
        )

    loan2 = inputs.second_loan
    if loan2.use_loan2:
        schedules["secondLoan"] = generate_amortization_schedule(
            principal=loan2.loan2_principal,
            annual_rate_pct=loan2.loan2_interest_rate,
            term_years=loan2.loan2_term_years,
            start_date=loan2.loan2_start_date or as_of,
        )

    wrap = inputs.wrap_loan
    if wrap.use_wrap:
        io_months = 0
        total_months = None
        if wrap.wrap_loan_type == WrapLoanType.interest_only:
            io_months = term_months(wrap.wrap_term_years)
            total_months = io_months
        schedules["wrapLoan"] = generate_amortization_schedule(
            principal=wrap_principal(inputs),
            annual_rate_pct=wrap.wrap_interest_rate,
            term_years=wrap.wrap_term_years,
            io_months=io_months,
            total_months=total_months,
            start_date=wrap.wrap_start_date or as_of,
        )

    return schedules
