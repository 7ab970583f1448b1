"""
Scenario, property seed and saved calculation records.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from dealcalc.models.inputs import CalculatorInputs
from dealcalc.models.outputs import CalculatorOutputs
from dealcalc.models.types import WIRE_MODEL_CONFIG


class PropertySeed(BaseModel):
    """Optional listing data used to initialize a new calculation."""

    model_config = WIRE_MODEL_CONFIG

    price: Optional[float] = None
    beds: Optional[float] = None
    baths: Optional[float] = None
    sqft: Optional[float] = None
    address: Optional[str] = None
    property_code: Optional[str] = None
    record_id: Optional[str] = None


class CalculatorScenario(BaseModel):
    """One what-if input set and the outputs computed from it."""

    model_config = WIRE_MODEL_CONFIG

    id: str
    name: str
    inputs: CalculatorInputs
    outputs: CalculatorOutputs
    is_default: bool = False


class SavedCalculation(BaseModel):
    """A calculation as returned by the persistence store."""

    model_config = WIRE_MODEL_CONFIG

    id: str
    name: str
    property_code: Optional[str] = None
    contact_id: Optional[str] = None
    inputs: CalculatorInputs
    outputs: Optional[CalculatorOutputs] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
