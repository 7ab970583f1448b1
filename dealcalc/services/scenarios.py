"""
Scenario session management.

A ``CalculationSession`` owns one to three what-if scenarios for a single
calculation. Every field update recomputes that scenario's outputs before
returning; other scenarios are never touched. Limit violations are returned
as refusals rather than raised.
"""

import enum
import logging
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, List, Optional, Tuple

from dealcalc.calculations.engine import calculate_all
from dealcalc.models.defaults import SYSTEM_DEFAULTS, CalculatorDefaults
from dealcalc.models.inputs import (
    CalculatorInputs,
    DSCRLoanInputs,
    OperatingInputs,
    PropertyBasicsInputs,
    PurchaseCostsInputs,
    WrapLoanInputs,
)
from dealcalc.models.records import CalculatorScenario, PropertySeed
from dealcalc.models.updates import SectionUpdate, field_update
from dealcalc.services.comparison import ScenarioComparison, compare_scenarios
from dealcalc.services.persistence import CalculationStore

logger = logging.getLogger(__name__)

MAX_SCENARIOS = 3
BASE_SCENARIO_NAME = "Base Case"


class Refusal(str, enum.Enum):
    """Why a scenario operation was rejected."""

    scenario_limit_exceeded = "scenario_limit_exceeded"
    last_scenario_deletion = "last_scenario_deletion"
    scenario_not_found = "scenario_not_found"


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a scenario operation."""

    accepted: bool
    scenario_id: Optional[str] = None
    refusal: Optional[Refusal] = None

    @classmethod
    def ok(cls, scenario_id: str) -> "ActionResult":
        return cls(accepted=True, scenario_id=scenario_id)

    @classmethod
    def refused(cls, refusal: Refusal, scenario_id: Optional[str] = None) -> "ActionResult":
        return cls(accepted=False, scenario_id=scenario_id, refusal=refusal)


def generate_scenario_id() -> str:
    return f"scenario_{uuid.uuid4().hex[:12]}"


def create_default_inputs(
    property_seed: Optional[PropertySeed] = None,
    defaults: Optional[CalculatorDefaults] = None,
) -> CalculatorInputs:
    """
    Build inputs for a new calculation.

    User defaults are applied first, then the property seed: its price fills
    asking price, ARV and purchase price, and its address names the calculation.
    """
    d = defaults or SYSTEM_DEFAULTS
    seed = property_seed or PropertySeed()
    price = seed.price or 0.0

    return CalculatorInputs(
        name=seed.address or "New Calculation",
        property_record_id=seed.record_id,
        property_code=seed.property_code,
        property_basics=PropertyBasicsInputs(
            asking_price=price,
            arv=price,
            your_fee=d.your_fee,
            credit_to_buyer=d.credit_to_buyer,
            wholesale_discount=d.wholesale_discount,
        ),
        purchase_costs=PurchaseCostsInputs(
            purchase_price=price,
            closing_costs=d.closing_costs,
            appraisal_cost=d.appraisal_cost,
            llc_cost=d.llc_cost,
            servicing_fee=d.servicing_fee,
        ),
        operating=OperatingInputs(
            maintenance_percent=d.maintenance_percent,
            property_mgmt_percent=d.property_mgmt_percent,
        ),
        dscr_loan=DSCRLoanInputs(
            dscr_interest_rate=d.dscr_interest_rate,
            dscr_term_years=d.dscr_term_years,
            dscr_balloon_years=d.dscr_balloon_years,
            dscr_points=d.dscr_points,
            dscr_fees=d.dscr_fees,
        ),
        wrap_loan=WrapLoanInputs(
            wrap_interest_rate=d.wrap_interest_rate,
            wrap_term_years=d.wrap_term_years,
            wrap_balloon_years=d.wrap_balloon_years,
        ),
    )


class CalculationSession:
    """
    Editing session for one calculation and its scenarios.

    Args:
        inputs: Inputs of the base scenario
        name: Calculation name used when saving
        store: Persistence collaborator used by ``save``
        clock: Returns the evaluation date for subject-to balances
        record_id: Id of the saved calculation this session edits, if any
        property_code: CRM property code to link on first save
        contact_id: CRM contact to link on first save
    """

    def __init__(
        self,
        inputs: CalculatorInputs,
        name: str = "New Calculation",
        store: Optional[CalculationStore] = None,
        clock: Optional[Callable[[], date]] = None,
        record_id: Optional[str] = None,
        property_code: Optional[str] = None,
        contact_id: Optional[str] = None,
    ):
        self._store = store
        self._clock = clock or date.today
        self.name = name
        self.record_id = record_id
        self.property_code = property_code
        self.contact_id = contact_id
        self.dirty = False
        self._closed = False

        base = self._build_scenario(
            BASE_SCENARIO_NAME, inputs.model_copy(deep=True), is_default=True
        )
        self._scenarios: List[CalculatorScenario] = [base]
        self.active_scenario_id = base.id

    @classmethod
    def start(
        cls,
        property_seed: Optional[PropertySeed] = None,
        defaults: Optional[CalculatorDefaults] = None,
        store: Optional[CalculationStore] = None,
        clock: Optional[Callable[[], date]] = None,
        contact_id: Optional[str] = None,
    ) -> "CalculationSession":
        """Open a session for a new calculation."""
        inputs = create_default_inputs(property_seed, defaults)
        session = cls(
            inputs,
            name=inputs.name,
            store=store,
            clock=clock,
            property_code=inputs.property_code,
            contact_id=contact_id,
        )
        logger.info(f"Started calculation session '{session.name}'")
        return session

    @classmethod
    def load(
        cls,
        record_id: str,
        store: CalculationStore,
        clock: Optional[Callable[[], date]] = None,
    ) -> "CalculationSession":
        """Open a session on a saved calculation. Store failures propagate."""
        saved = store.get(record_id)
        session = cls(
            saved.inputs,
            name=saved.name,
            store=store,
            clock=clock,
            record_id=saved.id,
            property_code=saved.property_code,
            contact_id=saved.contact_id,
        )
        logger.info(f"Loaded calculation {record_id} into session")
        return session

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def scenarios(self) -> Tuple[CalculatorScenario, ...]:
        self._ensure_open()
        return tuple(self._scenarios)

    @property
    def scenario_count(self) -> int:
        self._ensure_open()
        return len(self._scenarios)

    @property
    def active_scenario(self) -> CalculatorScenario:
        self._ensure_open()
        return self._scenarios[self._index(self.active_scenario_id)]

    @property
    def closed(self) -> bool:
        return self._closed

    def get_scenario(self, scenario_id: str) -> Optional[CalculatorScenario]:
        self._ensure_open()
        index = self._index(scenario_id)
        return self._scenarios[index] if index is not None else None

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def update_field(
        self, update: SectionUpdate, scenario_id: Optional[str] = None
    ) -> ActionResult:
        """
        Apply a single-field update and recompute that scenario.

        Raises:
            pydantic.ValidationError: If the value cannot be coerced; the
                scenario is left unchanged
        """
        self._ensure_open()
        target_id = scenario_id or self.active_scenario_id
        index = self._index(target_id)
        if index is None:
            return self._refuse(Refusal.scenario_not_found, target_id)

        scenario = self._scenarios[index]
        inputs = update.apply(scenario.inputs)
        self._scenarios[index] = self._build_scenario(
            scenario.name, inputs, scenario.is_default, scenario.id
        )
        self.dirty = True
        return ActionResult.ok(target_id)

    def set_field(
        self, section: str, field: str, value: Any, scenario_id: Optional[str] = None
    ) -> ActionResult:
        """Shorthand for ``update_field(field_update(section, field, value))``."""
        return self.update_field(field_update(section, field, value), scenario_id)

    def recompute(self, scenario_id: Optional[str] = None) -> ActionResult:
        """Recompute a scenario's outputs from its current inputs."""
        self._ensure_open()
        target_id = scenario_id or self.active_scenario_id
        index = self._index(target_id)
        if index is None:
            return self._refuse(Refusal.scenario_not_found, target_id)

        scenario = self._scenarios[index]
        self._scenarios[index] = self._build_scenario(
            scenario.name, scenario.inputs, scenario.is_default, scenario.id
        )
        return ActionResult.ok(target_id)

    def rename(self, name: str) -> None:
        """Rename the calculation itself."""
        self._ensure_open()
        self.name = name
        self.dirty = True

    # ------------------------------------------------------------------
    # Scenario lifecycle
    # ------------------------------------------------------------------

    def add_scenario(self) -> ActionResult:
        """Clone the active scenario into a new one and make it active."""
        self._ensure_open()
        if len(self._scenarios) >= MAX_SCENARIOS:
            return self._refuse(Refusal.scenario_limit_exceeded)

        base = self.active_scenario
        scenario = self._build_scenario(
            f"Scenario {len(self._scenarios) + 1}",
            base.inputs.model_copy(deep=True),
        )
        self._scenarios.append(scenario)
        self.active_scenario_id = scenario.id
        self.dirty = True
        logger.info(f"Added scenario {scenario.id} cloned from {base.id}")
        return ActionResult.ok(scenario.id)

    def delete_scenario(self, scenario_id: str) -> ActionResult:
        """Remove a scenario. The last remaining scenario cannot be removed."""
        self._ensure_open()
        index = self._index(scenario_id)
        if index is None:
            return self._refuse(Refusal.scenario_not_found, scenario_id)
        if len(self._scenarios) <= 1:
            return self._refuse(Refusal.last_scenario_deletion, scenario_id)

        del self._scenarios[index]
        if self.active_scenario_id == scenario_id:
            self.active_scenario_id = self._scenarios[0].id
        self.dirty = True
        logger.info(f"Deleted scenario {scenario_id}")
        return ActionResult.ok(scenario_id)

    def rename_scenario(self, scenario_id: str, name: str) -> ActionResult:
        self._ensure_open()
        index = self._index(scenario_id)
        if index is None:
            return self._refuse(Refusal.scenario_not_found, scenario_id)

        self._scenarios[index] = self._scenarios[index].model_copy(update={"name": name})
        self.dirty = True
        return ActionResult.ok(scenario_id)

    def set_active(self, scenario_id: str) -> ActionResult:
        self._ensure_open()
        if self._index(scenario_id) is None:
            return self._refuse(Refusal.scenario_not_found, scenario_id)
        self.active_scenario_id = scenario_id
        return ActionResult.ok(scenario_id)

    def compare(self) -> Optional[ScenarioComparison]:
        """Comparison view, or None while there is only one scenario."""
        self._ensure_open()
        if len(self._scenarios) < 2:
            return None
        return compare_scenarios(self._scenarios)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, notes: Optional[str] = None) -> str:
        """
        Save the active scenario through the persistence store.

        Creates a record on first save and updates it afterwards. Store errors
        propagate unchanged and leave the session dirty.

        Returns:
            The record id
        """
        self._ensure_open()
        if self._store is None:
            raise RuntimeError("No calculation store configured for this session")

        active = self.active_scenario
        try:
            if self.record_id:
                self._store.update(
                    self.record_id,
                    active.inputs,
                    active.outputs,
                    name=self.name,
                    notes=notes,
                )
                record_id = self.record_id
            else:
                record_id = self._store.create(
                    self.name,
                    active.inputs,
                    active.outputs,
                    property_code=self.property_code,
                    contact_id=self.contact_id,
                    notes=notes,
                )
        except Exception as e:
            logger.error(f"Failed to save calculation '{self.name}': {str(e)}")
            raise

        self.record_id = record_id
        self.dirty = False
        return record_id

    def close(self) -> None:
        """Discard all scenarios. The session cannot be used afterwards."""
        self._scenarios = []
        self.active_scenario_id = ""
        self._closed = True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _build_scenario(
        self,
        name: str,
        inputs: CalculatorInputs,
        is_default: bool = False,
        scenario_id: Optional[str] = None,
    ) -> CalculatorScenario:
        return CalculatorScenario(
            id=scenario_id or generate_scenario_id(),
            name=name,
            inputs=inputs,
            outputs=calculate_all(inputs, as_of=self._clock()),
            is_default=is_default,
        )

    def _index(self, scenario_id: str) -> Optional[int]:
        for index, scenario in enumerate(self._scenarios):
            if scenario.id == scenario_id:
                return index
        return None

    def _refuse(self, refusal: Refusal, scenario_id: Optional[str] = None) -> ActionResult:
        logger.info(f"Refused scenario operation: {refusal.value}")
        return ActionResult.refused(refusal, scenario_id)

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("Calculation session is closed")
