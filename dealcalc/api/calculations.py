"""
Deal calculation API endpoints.

These endpoints accept calculator inputs and return calculated results.
Nothing is stored; saved calculations go through the persistence store.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from dealcalc.calculations import calculate_all
from dealcalc.calculations.amortization import (
    calculate_total_interest,
    calculate_total_principal,
    generate_amortization_schedule,
)
from dealcalc.calculations.loans import build_loan_schedules
from dealcalc.models import CalculatorInputs, CalculatorOutputs, CalculatorScenario
from dealcalc.models.types import WIRE_MODEL_CONFIG
from dealcalc.services.comparison import ScenarioComparison, compare_scenarios
from dealcalc.services.scenarios import MAX_SCENARIOS

router = APIRouter()


@router.post("", response_model=CalculatorOutputs)
async def calculate(inputs: CalculatorInputs, as_of: Optional[date] = None):
    """Calculate every output for one set of inputs."""
    return calculate_all(inputs, as_of=as_of)


class AmortizationInput(BaseModel):
    """Input for amortization calculation."""

    model_config = WIRE_MODEL_CONFIG

    principal: float
    annual_rate: float  # percent, e.g. 6 for 6%
    term_years: float
    io_months: int = 0
    total_months: Optional[int] = None
    start_date: Optional[date] = None


@router.post("/amortization")
async def calculate_amortization(inputs: AmortizationInput):
    """Generate loan amortization schedule."""
    schedule = generate_amortization_schedule(
        principal=inputs.principal,
        annual_rate_pct=inputs.annual_rate,
        term_years=inputs.term_years,
        io_months=inputs.io_months,
        total_months=inputs.total_months,
        start_date=inputs.start_date,
    )

    return {
        "schedule": schedule,
        "total_interest": calculate_total_interest(schedule),
        "total_principal": calculate_total_principal(schedule),
    }


@router.post("/schedules")
async def calculate_schedules(inputs: CalculatorInputs, as_of: Optional[date] = None):
    """Amortization schedules for every enabled loan in the inputs."""
    return build_loan_schedules(inputs, as_of or date.today())


class ScenarioInput(BaseModel):
    """One named input set to compare."""

    name: str
    inputs: CalculatorInputs


class CompareRequest(BaseModel):
    scenarios: List[ScenarioInput]


class CompareResponse(BaseModel):
    """Computed scenarios and the comparison view across them."""

    model_config = WIRE_MODEL_CONFIG

    scenarios: List[CalculatorScenario]
    comparison: ScenarioComparison


@router.post("/compare", response_model=CompareResponse)
async def compare(request: CompareRequest, as_of: Optional[date] = None):
    """Calculate two or three scenarios and compare them side by side."""
    count = len(request.scenarios)
    if count < 2 or count > MAX_SCENARIOS:
        raise HTTPException(
            status_code=400,
            detail=f"Comparison requires 2 to {MAX_SCENARIOS} scenarios, got {count}",
        )

    as_of = as_of or date.today()
    scenarios = [
        CalculatorScenario(
            id=f"scenario_{index + 1}",
            name=item.name,
            inputs=item.inputs,
            outputs=calculate_all(item.inputs, as_of=as_of),
            is_default=index == 0,
        )
        for index, item in enumerate(request.scenarios)
    ]

    return CompareResponse(scenarios=scenarios, comparison=compare_scenarios(scenarios))
