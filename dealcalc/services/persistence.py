"""
Persistence of saved calculations and user defaults.

The scenario session talks to storage only through the ``CalculationStore``
and ``DefaultsStore`` protocols. The SQLAlchemy implementations below store
inputs and outputs as JSON documents keyed by an opaque record id.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Protocol, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dealcalc.db.database import SessionLocal, session_scope
from dealcalc.db.models import Calculation, CalculatorDefaultsRecord
from dealcalc.models.defaults import SYSTEM_DEFAULTS, CalculatorDefaults
from dealcalc.models.inputs import CalculatorInputs
from dealcalc.models.outputs import CalculatorOutputs
from dealcalc.models.records import SavedCalculation

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """Raised when a store cannot complete a request."""


class CalculationStore(Protocol):
    """Remote store for saved calculations."""

    def create(
        self,
        name: str,
        inputs: CalculatorInputs,
        outputs: CalculatorOutputs,
        property_code: Optional[str] = None,
        contact_id: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> str:
        ...

    def update(
        self,
        record_id: str,
        inputs: CalculatorInputs,
        outputs: CalculatorOutputs,
        name: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> bool:
        ...

    def get(self, record_id: str) -> SavedCalculation:
        ...


class DefaultsStore(Protocol):
    """Store for the user-level calculator defaults record."""

    def get_defaults(self) -> CalculatorDefaults:
        ...

    def update_defaults(
        self, values: Union[CalculatorDefaults, Dict[str, Any]]
    ) -> CalculatorDefaults:
        ...


def _to_document(model) -> Dict[str, Any]:
    return model.model_dump(by_alias=True, mode="json")


def _to_saved(record: Calculation) -> SavedCalculation:
    return SavedCalculation(
        id=record.id,
        name=record.name,
        property_code=record.property_code,
        contact_id=record.contact_id,
        inputs=CalculatorInputs.model_validate(record.inputs or {}),
        outputs=(
            CalculatorOutputs.model_validate(record.outputs) if record.outputs else None
        ),
        notes=record.notes,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


class SqlCalculationStore:
    """CalculationStore backed by the ``calculations`` table."""

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None):
        self._session_factory = session_factory or SessionLocal

    def _find(self, db: Session, record_id: str) -> Calculation:
        record = (
            db.query(Calculation)
            .filter(Calculation.id == record_id, Calculation.is_deleted == False)
            .first()
        )
        if record is None:
            raise PersistenceError(f"Calculation not found: {record_id}")
        return record

    def create(
        self,
        name: str,
        inputs: CalculatorInputs,
        outputs: CalculatorOutputs,
        property_code: Optional[str] = None,
        contact_id: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> str:
        """Insert a calculation and return its record id."""
        try:
            with session_scope(self._session_factory) as db:
                record = Calculation(
                    name=name or "New Calculation",
                    property_code=property_code,
                    contact_id=contact_id,
                    inputs=_to_document(inputs),
                    outputs=_to_document(outputs) if outputs is not None else None,
                    notes=notes,
                )
                db.add(record)
                db.flush()
                record_id = record.id
        except SQLAlchemyError as e:
            logger.error(f"Failed to create calculation: {str(e)}")
            raise PersistenceError("Failed to create calculation") from e

        logger.info(f"Created calculation {record_id}")
        return record_id

    def update(
        self,
        record_id: str,
        inputs: CalculatorInputs,
        outputs: CalculatorOutputs,
        name: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> bool:
        """Replace the inputs and outputs of an existing calculation."""
        try:
            with session_scope(self._session_factory) as db:
                record = self._find(db, record_id)
                record.inputs = _to_document(inputs)
                record.outputs = _to_document(outputs) if outputs is not None else None
                if name is not None:
                    record.name = name
                if notes is not None:
                    record.notes = notes
        except SQLAlchemyError as e:
            logger.error(f"Failed to update calculation {record_id}: {str(e)}")
            raise PersistenceError(f"Failed to update calculation {record_id}") from e

        logger.info(f"Updated calculation {record_id}")
        return True

    def get(self, record_id: str) -> SavedCalculation:
        """Fetch one calculation."""
        try:
            with session_scope(self._session_factory) as db:
                return _to_saved(self._find(db, record_id))
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch calculation {record_id}: {str(e)}")
            raise PersistenceError(f"Failed to fetch calculation {record_id}") from e

    def list(
        self,
        property_code: Optional[str] = None,
        contact_id: Optional[str] = None,
        limit: int = 50,
    ) -> List[SavedCalculation]:
        """Most recently updated calculations, optionally filtered."""
        try:
            with session_scope(self._session_factory) as db:
                query = db.query(Calculation).filter(Calculation.is_deleted == False)
                if property_code:
                    query = query.filter(Calculation.property_code == property_code)
                if contact_id:
                    query = query.filter(Calculation.contact_id == contact_id)
                records = (
                    query.order_by(Calculation.updated_at.desc()).limit(limit).all()
                )
                return [_to_saved(r) for r in records]
        except SQLAlchemyError as e:
            logger.error(f"Failed to list calculations: {str(e)}")
            raise PersistenceError("Failed to list calculations") from e

    def delete(self, record_id: str) -> bool:
        """Soft delete a calculation."""
        try:
            with session_scope(self._session_factory) as db:
                record = self._find(db, record_id)
                record.is_deleted = True
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete calculation {record_id}: {str(e)}")
            raise PersistenceError(f"Failed to delete calculation {record_id}") from e

        logger.info(f"Deleted calculation {record_id}")
        return True


class SqlDefaultsStore:
    """DefaultsStore backed by the single ``calculator_defaults`` record."""

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None):
        self._session_factory = session_factory or SessionLocal

    def _current(self, db: Session) -> Optional[CalculatorDefaultsRecord]:
        return (
            db.query(CalculatorDefaultsRecord)
            .filter(CalculatorDefaultsRecord.is_deleted == False)
            .order_by(CalculatorDefaultsRecord.created_at)
            .first()
        )

    def get_defaults(self) -> CalculatorDefaults:
        """Saved defaults, or the system defaults when none are stored."""
        try:
            with session_scope(self._session_factory) as db:
                record = self._current(db)
                if record is None:
                    return SYSTEM_DEFAULTS.model_copy()
                return CalculatorDefaults.model_validate(
                    {**record.payload, "id": record.id, "updatedAt": record.updated_at}
                )
        except SQLAlchemyError as e:
            logger.warning(f"Defaults unavailable, using system defaults: {str(e)}")
            return SYSTEM_DEFAULTS.model_copy()

    def update_defaults(
        self, values: Union[CalculatorDefaults, Dict[str, Any]]
    ) -> CalculatorDefaults:
        """Merge ``values`` into the stored defaults and return the result."""
        if not isinstance(values, CalculatorDefaults):
            values = CalculatorDefaults.model_validate(values)
        changes = values.model_dump(
            by_alias=True, mode="json", exclude_unset=True, exclude={"id", "updated_at"}
        )

        try:
            with session_scope(self._session_factory) as db:
                record = self._current(db)
                current = record.payload if record is not None else {}
                merged = CalculatorDefaults.model_validate({**current, **changes})
                payload = merged.model_dump(
                    by_alias=True, mode="json", exclude={"id", "updated_at"}
                )
                if record is None:
                    record = CalculatorDefaultsRecord(payload=payload)
                    db.add(record)
                else:
                    record.payload = payload
                db.flush()
                return merged.model_copy(
                    update={"id": record.id, "updated_at": record.updated_at}
                )
        except SQLAlchemyError as e:
            logger.error(f"Failed to update calculator defaults: {str(e)}")
            raise PersistenceError("Failed to update calculator defaults") from e
