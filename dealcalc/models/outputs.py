"""
Calculator outputs.

Outputs are derived from inputs by ``calculate_all`` and never edited by hand.
Every recompute builds a new ``CalculatorOutputs``.
"""

import enum

from pydantic import BaseModel, Field

from dealcalc.models.types import WIRE_MODEL_CONFIG


class OutputRecord(BaseModel):
    model_config = WIRE_MODEL_CONFIG


class LoanCalcsOutputs(OutputRecord):
    """Per-loan figures; disabled loans report zeros."""

    dscr_loan_amount: float = 0.0
    dscr_down_payment: float = 0.0
    dscr_monthly_payment: float = 0.0
    dscr_balloon_amount: float = 0.0
    sub_to_monthly_payment: float = 0.0
    sub_to_current_balance: float = 0.0
    sub_to_balloon_amount: float = 0.0
    loan2_monthly_payment: float = 0.0
    loan2_balloon_amount: float = 0.0
    wrap_principal: float = 0.0
    wrap_monthly_payment: float = 0.0
    wrap_balloon_amount: float = 0.0
    buyer_monthly_piti: float = Field(default=0.0, alias="buyerMonthlyPITI")


class TotalsOutputs(OutputRecord):
    """Monthly income and expense roll-up."""

    total_monthly_income: float = 0.0
    total_monthly_pi: float = Field(default=0.0, alias="totalMonthlyPI")
    total_monthly_ti: float = Field(default=0.0, alias="totalMonthlyTI")
    total_monthly_maintenance: float = 0.0
    total_monthly_property_mgmt: float = 0.0
    total_monthly_expenses: float = 0.0


class QuickStatsOutputs(OutputRecord):
    """Headline metrics for the hold, wrap and flip exits."""

    mao: float = 0.0
    total_entry_fee: float = 0.0
    funding_gap: float = 0.0
    monthly_cashflow: float = 0.0
    wrap_cashflow: float = 0.0
    flip_profit: float = 0.0
    project_months: float = 0.0
    # Cash-on-cash figures are ratios (0.12 == 12%)
    cash_on_cash_hold: float = 0.0
    cash_on_cash_wrap: float = 0.0
    cash_on_cash_flip: float = 0.0


class DealDecision(str, enum.Enum):
    deal = "DEAL"
    needs_review = "NEEDS REVIEW"
    no_deal = "NO DEAL"


class DealChecklistOutputs(OutputRecord):
    entry_fee_under25k: bool = False
    cashflow_over400: bool = False
    ltv_under75: bool = False
    equity_over15k: bool = False
    ltv: float = 0.0
    pass_count: int = 0
    deal_decision: DealDecision = DealDecision.no_deal


class CalculatorOutputs(OutputRecord):
    loan_calcs: LoanCalcsOutputs
    totals: TotalsOutputs
    quick_stats: QuickStatsOutputs
    deal_checklist: DealChecklistOutputs
