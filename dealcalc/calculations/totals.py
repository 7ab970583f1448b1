"""
Income and Expense Totals

Monthly roll-up of rent, other income, taxes, insurance, operating costs and
debt service.
"""

from dealcalc.models.inputs import CalculatorInputs
from dealcalc.models.outputs import LoanCalcsOutputs, TotalsOutputs
from dealcalc.models.types import as_fraction


def calculate_totals(inputs: CalculatorInputs, loan_calcs: LoanCalcsOutputs) -> TotalsOutputs:
    """
    Aggregate monthly income and expenses.

    Maintenance and property management are percentages of rent, not of total
    income. The wrap payment is income to the seller and is left out of P&I.
    """
    income = inputs.income
    operating = inputs.operating
    tax_insurance = inputs.tax_insurance

    total_monthly_income = income.monthly_rent + income.other_income

    total_monthly_pi = (
        loan_calcs.dscr_monthly_payment
        + loan_calcs.sub_to_monthly_payment
        + loan_calcs.loan2_monthly_payment
    )

    total_monthly_ti = (tax_insurance.annual_taxes + tax_insurance.annual_insurance) / 12

    maintenance = income.monthly_rent * as_fraction(operating.maintenance_percent)
    property_mgmt = income.monthly_rent * as_fraction(operating.property_mgmt_percent)

    total_monthly_expenses = (
        total_monthly_pi
        + total_monthly_ti
        + maintenance
        + property_mgmt
        + operating.hoa
        + operating.utilities
    )

    return TotalsOutputs(
        total_monthly_income=total_monthly_income,
        total_monthly_pi=total_monthly_pi,
        total_monthly_ti=total_monthly_ti,
        total_monthly_maintenance=maintenance,
        total_monthly_property_mgmt=property_mgmt,
        total_monthly_expenses=total_monthly_expenses,
    )
