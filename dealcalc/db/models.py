"""
SQLAlchemy ORM models for saved calculations and user defaults.
"""

from datetime import datetime
from sqlalchemy import (
    Column,
    String,
    Boolean,
    DateTime,
    JSON,
    Text,
)
from sqlalchemy.orm import declarative_base
import uuid

Base = declarative_base()


def generate_uuid():
    return str(uuid.uuid4())


class AuditMixin:
    """Mixin for audit fields on all models."""

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )
    is_deleted = Column(Boolean, default=False, nullable=False)


class Calculation(AuditMixin, Base):
    """A saved deal calculation. Inputs and outputs are opaque JSON documents."""

    __tablename__ = "calculations"

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False, default="New Calculation")

    # Links to CRM records
    property_code = Column(String(100), nullable=True, index=True)
    contact_id = Column(String(100), nullable=True, index=True)

    inputs = Column(JSON, nullable=False, default=dict)
    outputs = Column(JSON, nullable=True)
    notes = Column(Text, nullable=True)


class CalculatorDefaultsRecord(AuditMixin, Base):
    """User-level calculator defaults (single record)."""

    __tablename__ = "calculator_defaults"

    id = Column(String, primary_key=True, default=generate_uuid)
    payload = Column(JSON, nullable=False, default=dict)
