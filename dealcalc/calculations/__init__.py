"""
Deal Calculation Engine

Loan math, income/expense roll-up, exit strategies and the deal checklist.
"""

from dealcalc.calculations import amortization, loans, totals, strategies, checklist
from dealcalc.calculations.engine import calculate_all

__all__ = ["amortization", "loans", "totals", "strategies", "checklist", "calculate_all"]
