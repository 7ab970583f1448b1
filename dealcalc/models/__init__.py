"""
Typed calculator records: inputs, outputs, scenarios and update commands.
"""

from dealcalc.models.defaults import CalculatorDefaults, SYSTEM_DEFAULTS
from dealcalc.models.inputs import (
    CalculatorInputs,
    DSCRLoanInputs,
    FlipInputs,
    IncomeInputs,
    OperatingInputs,
    PropertyBasicsInputs,
    PurchaseCostsInputs,
    SecondLoanInputs,
    SubjectToInputs,
    SubToLoanType,
    TaxInsuranceInputs,
    WrapLoanInputs,
    WrapLoanType,
    WrapSalesInputs,
)
from dealcalc.models.outputs import (
    CalculatorOutputs,
    DealChecklistOutputs,
    DealDecision,
    LoanCalcsOutputs,
    QuickStatsOutputs,
    TotalsOutputs,
)
from dealcalc.models.records import CalculatorScenario, PropertySeed, SavedCalculation
from dealcalc.models.types import as_fraction
from dealcalc.models.updates import FieldUpdate, SectionUpdate, field_update

__all__ = [
    "CalculatorDefaults",
    "SYSTEM_DEFAULTS",
    "CalculatorInputs",
    "DSCRLoanInputs",
    "FlipInputs",
    "IncomeInputs",
    "OperatingInputs",
    "PropertyBasicsInputs",
    "PurchaseCostsInputs",
    "SecondLoanInputs",
    "SubjectToInputs",
    "SubToLoanType",
    "TaxInsuranceInputs",
    "WrapLoanInputs",
    "WrapLoanType",
    "WrapSalesInputs",
    "CalculatorOutputs",
    "DealChecklistOutputs",
    "DealDecision",
    "LoanCalcsOutputs",
    "QuickStatsOutputs",
    "TotalsOutputs",
    "CalculatorScenario",
    "PropertySeed",
    "SavedCalculation",
    "as_fraction",
    "FieldUpdate",
    "SectionUpdate",
    "field_update",
]
