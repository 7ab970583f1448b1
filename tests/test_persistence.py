"""
Tests for the SQL calculation and defaults stores.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from dealcalc.calculations import calculate_all
from dealcalc.db.models import Calculation
from dealcalc.models import SYSTEM_DEFAULTS, CalculatorDefaults, IncomeInputs
from dealcalc.services.persistence import (
    PersistenceError,
    SqlCalculationStore,
    SqlDefaultsStore,
)


@pytest.fixture
def store(session_factory):
    return SqlCalculationStore(session_factory)


@pytest.fixture
def defaults_store(session_factory):
    return SqlDefaultsStore(session_factory)


@pytest.fixture
def broken_session_factory():
    """Sessions on a database with no tables, so every query fails."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


class TestCalculationStore:
    """Test saved calculation CRUD."""

    def test_create_and_get(self, store, rental_inputs, as_of):
        outputs = calculate_all(rental_inputs, as_of=as_of)
        record_id = store.create(
            "Main St", rental_inputs, outputs, property_code="P-1", contact_id="C-1"
        )

        saved = store.get(record_id)
        assert saved.id == record_id
        assert saved.name == "Main St"
        assert saved.property_code == "P-1"
        assert saved.contact_id == "C-1"
        assert saved.inputs == rental_inputs
        assert saved.outputs == outputs
        assert saved.created_at is not None

    def test_documents_use_wire_names(self, store, session_factory, rental_inputs, as_of):
        record_id = store.create(
            "Main St", rental_inputs, calculate_all(rental_inputs, as_of=as_of)
        )
        db = session_factory()
        try:
            record = db.query(Calculation).filter(Calculation.id == record_id).first()
            assert record.inputs["income"]["monthlyRent"] == 2000
            assert "dealChecklist" in record.outputs
        finally:
            db.close()

    def test_update(self, store, rental_inputs, as_of):
        record_id = store.create(
            "Main St", rental_inputs, calculate_all(rental_inputs, as_of=as_of)
        )
        changed = rental_inputs.model_copy(update={"income": IncomeInputs(monthly_rent=2500)})
        assert store.update(
            record_id, changed, calculate_all(changed, as_of=as_of), name="Main St v2",
            notes="raised rent",
        )

        saved = store.get(record_id)
        assert saved.name == "Main St v2"
        assert saved.notes == "raised rent"
        assert saved.inputs.income.monthly_rent == 2500
        assert saved.outputs.totals.total_monthly_income == pytest.approx(2500)

    def test_update_missing(self, store, rental_inputs, as_of):
        with pytest.raises(PersistenceError):
            store.update("missing", rental_inputs, calculate_all(rental_inputs, as_of=as_of))

    def test_list_filters(self, store, rental_inputs, as_of):
        outputs = calculate_all(rental_inputs, as_of=as_of)
        store.create("A", rental_inputs, outputs, property_code="P-1")
        store.create("B", rental_inputs, outputs, property_code="P-2")
        store.create("C", rental_inputs, outputs, property_code="P-1")

        assert sorted(c.name for c in store.list(property_code="P-1")) == ["A", "C"]
        assert len(store.list()) == 3
        assert len(store.list(limit=2)) == 2

    def test_soft_delete(self, store, session_factory, rental_inputs, as_of):
        record_id = store.create(
            "Main St", rental_inputs, calculate_all(rental_inputs, as_of=as_of)
        )
        assert store.delete(record_id)

        with pytest.raises(PersistenceError):
            store.get(record_id)
        assert store.list() == []

        db = session_factory()
        try:
            record = db.query(Calculation).filter(Calculation.id == record_id).first()
            assert record.is_deleted
        finally:
            db.close()

    def test_storage_failure_is_wrapped(self, broken_session_factory, rental_inputs, as_of):
        store = SqlCalculationStore(broken_session_factory)
        with pytest.raises(PersistenceError):
            store.create(
                "Main St", rental_inputs, calculate_all(rental_inputs, as_of=as_of)
            )


class TestDefaultsStore:
    """Test the user defaults record."""

    def test_system_defaults_when_empty(self, defaults_store):
        defaults = defaults_store.get_defaults()
        assert defaults.id is None
        assert defaults.wholesale_discount == SYSTEM_DEFAULTS.wholesale_discount
        assert defaults.closing_costs == SYSTEM_DEFAULTS.closing_costs

    def test_system_defaults_when_store_fails(self, broken_session_factory):
        defaults = SqlDefaultsStore(broken_session_factory).get_defaults()
        assert defaults.dscr_interest_rate == SYSTEM_DEFAULTS.dscr_interest_rate

    def test_update_creates_record(self, defaults_store):
        updated = defaults_store.update_defaults({"wholesaleDiscount": 65})
        assert updated.id is not None
        assert updated.wholesale_discount == 65
        assert updated.dscr_interest_rate == SYSTEM_DEFAULTS.dscr_interest_rate

        assert defaults_store.get_defaults().wholesale_discount == 65

    def test_updates_merge(self, defaults_store):
        first = defaults_store.update_defaults({"wholesaleDiscount": 65})
        second = defaults_store.update_defaults(CalculatorDefaults(dscr_interest_rate=7.25))
        assert second.id == first.id
        assert second.wholesale_discount == 65
        assert second.dscr_interest_rate == 7.25

        stored = defaults_store.get_defaults()
        assert stored.wholesale_discount == 65
        assert stored.dscr_interest_rate == 7.25

    def test_negative_defaults_clamped(self, defaults_store):
        updated = defaults_store.update_defaults({"closingCosts": -100})
        assert updated.closing_costs == 0

    def test_update_failure(self, broken_session_factory):
        with pytest.raises(PersistenceError):
            SqlDefaultsStore(broken_session_factory).update_defaults({"yourFee": 5000})
