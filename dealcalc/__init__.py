"""
Deal Calculator Engine

Amortization, cash flow and deal qualification for real estate acquisitions
financed with DSCR, subject-to, private second and wrap loans.
"""

__version__ = "0.1.0"
