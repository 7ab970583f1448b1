"""
User-level calculator defaults.

A ``CalculatorDefaults`` record is merged into newly created inputs before
any property seed values are applied.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from dealcalc.models.types import WIRE_MODEL_CONFIG, Money, Percent, Years


class CalculatorDefaults(BaseModel):
    """Defaults applied to every new calculation."""

    model_config = WIRE_MODEL_CONFIG

    id: Optional[str] = None

    # Offer
    wholesale_discount: Percent = 70.0
    your_fee: Money = 0.0
    credit_to_buyer: Money = 0.0

    # Operating
    maintenance_percent: Percent = 5.0
    property_mgmt_percent: Percent = 10.0

    # DSCR loan
    dscr_interest_rate: Percent = 8.0
    dscr_term_years: Years = 30
    dscr_balloon_years: Years = 5
    dscr_points: Percent = 2.0
    dscr_fees: Money = 1500.0

    # Wrap loan
    wrap_interest_rate: Percent = 9.0
    wrap_term_years: Years = 30
    wrap_balloon_years: Years = 5

    # Purchase costs
    closing_costs: Money = 3000.0
    appraisal_cost: Money = 500.0
    llc_cost: Money = 200.0
    servicing_fee: Money = 100.0

    updated_at: Optional[datetime] = None


SYSTEM_DEFAULTS = CalculatorDefaults()
