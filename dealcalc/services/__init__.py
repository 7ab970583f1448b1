"""
Scenario sessions, comparison and persistence.
"""

from dealcalc.services.comparison import (
    COMPARISON_METRICS,
    ComparisonMetric,
    ScenarioComparison,
    compare_scenarios,
)
from dealcalc.services.persistence import (
    CalculationStore,
    DefaultsStore,
    PersistenceError,
    SqlCalculationStore,
    SqlDefaultsStore,
)
from dealcalc.services.scenarios import (
    MAX_SCENARIOS,
    ActionResult,
    CalculationSession,
    Refusal,
    create_default_inputs,
)

__all__ = [
    "COMPARISON_METRICS",
    "ComparisonMetric",
    "ScenarioComparison",
    "compare_scenarios",
    "CalculationStore",
    "DefaultsStore",
    "PersistenceError",
    "SqlCalculationStore",
    "SqlDefaultsStore",
    "MAX_SCENARIOS",
    "ActionResult",
    "CalculationSession",
    "Refusal",
    "create_default_inputs",
]
