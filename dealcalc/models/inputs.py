"""
Calculator input sections.

Each section is a flat record. Field names are snake_case in Python and
camelCase on the wire (``askingPrice``, ``useDSCRLoan``); both are accepted
when validating. A disabled loan section keeps its values so it can be
re-enabled, but contributes nothing to any computation.
"""

import enum
from typing import Optional

from pydantic import BaseModel, Field

from dealcalc.models.defaults import SYSTEM_DEFAULTS as _SYSTEM
from dealcalc.models.types import (
    WIRE_MODEL_CONFIG,
    Money,
    Months,
    OptionalDate,
    Percent,
    Years,
)


class SubToLoanType(str, enum.Enum):
    """Program of the existing mortgage taken subject-to."""

    conventional = "Conventional"
    fha = "FHA"
    va = "VA"
    usda = "USDA"
    other = "Other"


class WrapLoanType(str, enum.Enum):
    """Repayment structure of the wrap note."""

    amortized = "Amortized"
    interest_only = "Interest Only"


class InputSection(BaseModel):
    """Base class for one flat section of calculator inputs."""

    model_config = WIRE_MODEL_CONFIG


class PropertyBasicsInputs(InputSection):
    asking_price: Money = 0.0
    arv: Money = 0.0  # After Repair Value
    repairs: Money = 0.0
    your_fee: Money = _SYSTEM.your_fee
    credit_to_buyer: Money = _SYSTEM.credit_to_buyer
    wholesale_discount: Percent = _SYSTEM.wholesale_discount


class PurchaseCostsInputs(InputSection):
    purchase_price: Money = 0.0
    closing_costs: Money = _SYSTEM.closing_costs
    appraisal_cost: Money = _SYSTEM.appraisal_cost
    llc_cost: Money = _SYSTEM.llc_cost
    servicing_fee: Money = _SYSTEM.servicing_fee
    seller_allowance: Money = 0.0


class TaxInsuranceInputs(InputSection):
    annual_taxes: Money = 0.0
    annual_insurance: Money = 0.0


class IncomeInputs(InputSection):
    monthly_rent: Money = 0.0
    other_income: Money = 0.0


class OperatingInputs(InputSection):
    maintenance_percent: Percent = _SYSTEM.maintenance_percent  # of rent
    property_mgmt_percent: Percent = _SYSTEM.property_mgmt_percent  # of rent
    hoa: Money = 0.0
    utilities: Money = 0.0


class SubjectToInputs(InputSection):
    """Existing mortgage left in place."""

    use_subject_to: bool = False
    sub_to_loan_type: SubToLoanType = SubToLoanType.conventional
    sub_to_start_date: OptionalDate = None
    sub_to_principal: Money = 0.0
    sub_to_interest_rate: Percent = 0.0
    sub_to_term_years: Years = 30
    sub_to_balloon_years: Years = 0


class DSCRLoanInputs(InputSection):
    """Investor loan at a fixed 80% LTV; amount and down payment are derived."""

    use_dscr_loan: bool = Field(default=False, alias="useDSCRLoan")
    dscr_interest_rate: Percent = _SYSTEM.dscr_interest_rate
    dscr_term_years: Years = _SYSTEM.dscr_term_years
    dscr_start_date: OptionalDate = None
    dscr_balloon_years: Years = _SYSTEM.dscr_balloon_years
    dscr_points: Percent = _SYSTEM.dscr_points
    dscr_fees: Money = _SYSTEM.dscr_fees


class SecondLoanInputs(InputSection):
    use_loan2: bool = False
    loan2_principal: Money = 0.0
    loan2_interest_rate: Percent = 10.0
    loan2_term_years: Years = 5
    loan2_start_date: OptionalDate = None
    loan2_balloon_years: Years = 5
    loan2_points: Percent = 0.0
    loan2_fees: Money = 0.0


class WrapLoanInputs(InputSection):
    """Seller financing to the end buyer; principal comes from the sales terms."""

    use_wrap: bool = False
    wrap_loan_type: WrapLoanType = WrapLoanType.amortized
    wrap_interest_rate: Percent = _SYSTEM.wrap_interest_rate
    wrap_term_years: Years = _SYSTEM.wrap_term_years
    wrap_start_date: OptionalDate = None
    wrap_balloon_years: Years = _SYSTEM.wrap_balloon_years
    wrap_points: Percent = 0.0
    wrap_fees: Money = 0.0


class WrapSalesInputs(InputSection):
    wrap_sales_price: Money = 0.0
    buyer_down_payment: Money = 0.0
    buyer_closing_costs: Money = 0.0


class FlipInputs(InputSection):
    project_months: Months = 6
    resale_closing_costs: Money = 0.0
    resale_marketing: Money = 0.0
    contingency: Money = 0.0


class CalculatorInputs(InputSection):
    """All input sections of one calculation."""

    # Metadata
    name: str = "New Calculation"
    property_record_id: Optional[str] = None
    buyer_record_id: Optional[str] = None
    property_code: Optional[str] = None
    contact_id: Optional[str] = None

    property_basics: PropertyBasicsInputs = Field(default_factory=PropertyBasicsInputs)
    purchase_costs: PurchaseCostsInputs = Field(default_factory=PurchaseCostsInputs)
    tax_insurance: TaxInsuranceInputs = Field(default_factory=TaxInsuranceInputs)
    income: IncomeInputs = Field(default_factory=IncomeInputs)
    operating: OperatingInputs = Field(default_factory=OperatingInputs)
    subject_to: SubjectToInputs = Field(default_factory=SubjectToInputs)
    dscr_loan: DSCRLoanInputs = Field(default_factory=DSCRLoanInputs)
    second_loan: SecondLoanInputs = Field(default_factory=SecondLoanInputs)
    wrap_loan: WrapLoanInputs = Field(default_factory=WrapLoanInputs)
    wrap_sales: WrapSalesInputs = Field(default_factory=WrapSalesInputs)
    flip: FlipInputs = Field(default_factory=FlipInputs)
