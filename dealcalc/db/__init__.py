"""
Database configuration and models.
"""

from dealcalc.db.database import engine, SessionLocal, init_db, session_scope
from dealcalc.db.models import Base, Calculation, CalculatorDefaultsRecord

__all__ = [
    "engine",
    "SessionLocal",
    "init_db",
    "session_scope",
    "Base",
    "Calculation",
    "CalculatorDefaultsRecord",
]
