"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os
from datetime import date

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from dealcalc.main import app
from dealcalc.db.models import Base
from dealcalc.models import (
    CalculatorInputs,
    IncomeInputs,
    PropertyBasicsInputs,
    PurchaseCostsInputs,
    SubjectToInputs,
    TaxInsuranceInputs,
)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "integration: marks integration tests")


# Create a shared test database engine
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and drop after."""
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def session_factory():
    """Session factory bound to the in-memory test database."""
    return TestingSessionLocal


@pytest.fixture
def as_of():
    """Pinned evaluation date so elapsed-month figures are reproducible."""
    return date(2025, 1, 1)


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def rental_inputs():
    """
    A buy-and-hold deal financed subject-to that passes every checklist item.

    Purchase 150k, ARV 220k, repairs 20k, rent 2000/mo, taxes and insurance
    300/mo, existing 120k note at 0% with no start date.
    """
    return CalculatorInputs(
        name="123 Main St",
        property_basics=PropertyBasicsInputs(
            asking_price=160000, arv=220000, repairs=20000
        ),
        purchase_costs=PurchaseCostsInputs(purchase_price=150000),
        tax_insurance=TaxInsuranceInputs(annual_taxes=2400, annual_insurance=1200),
        income=IncomeInputs(monthly_rent=2000),
        subject_to=SubjectToInputs(
            use_subject_to=True,
            sub_to_principal=120000,
            sub_to_interest_rate=0,
            sub_to_term_years=30,
        ),
    )
