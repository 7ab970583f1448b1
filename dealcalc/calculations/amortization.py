"""
Loan Amortization Calculations

Fixed-rate payment, remaining balance, balloon balance and amortization
schedules. Rates are annual percentages as users enter them (``6`` for 6%),
terms are in years.
"""

from typing import List, Dict, Optional
from datetime import date
from dateutil.relativedelta import relativedelta


def term_months(term_years: float) -> int:
    """Number of monthly payments in a term expressed in years."""
    if term_years <= 0:
        return 0
    return int(round(term_years * 12))


def monthly_payment(
    principal: float, annual_rate_pct: float, term_years: float
) -> float:
    """
    Calculate the fully amortizing monthly payment.

    PMT = P * r * (1+r)^n / ((1+r)^n - 1), with r = rate/100/12 and
    n = term_years*12.

    Args:
        principal: Loan principal amount
        annual_rate_pct: Annual interest rate as a percentage (e.g., 6 for 6%)
        term_years: Amortization period in years

    Returns:
        Monthly payment, 0 when there is no loan (no principal or no term)
    """
    n = term_months(term_years)
    if principal <= 0 or n <= 0:
        return 0.0

    if annual_rate_pct <= 0:
        return principal / n

    monthly_rate = annual_rate_pct / 100 / 12
    factor = (1 + monthly_rate) ** n

    return principal * monthly_rate * factor / (factor - 1)


def interest_only_payment(principal: float, annual_rate_pct: float) -> float:
    """Monthly interest-only payment."""
    if principal <= 0 or annual_rate_pct <= 0:
        return 0.0
    return principal * annual_rate_pct / 100 / 12


def remaining_balance(
    principal: float,
    annual_rate_pct: float,
    term_years: float,
    elapsed_months: float,
) -> float:
    """
    Balance left after ``elapsed_months`` scheduled payments.

    B(k) = P * ((1+r)^n - (1+r)^k) / ((1+r)^n - 1), with k clamped to [0, n].
    Returns P at k=0 and 0 at k=n.
    """
    n = term_months(term_years)
    if principal <= 0 or n <= 0:
        return 0.0

    k = min(max(elapsed_months, 0), n)

    if annual_rate_pct <= 0:
        return max(0.0, principal * (1 - k / n))

    monthly_rate = annual_rate_pct / 100 / 12
    growth_n = (1 + monthly_rate) ** n
    growth_k = (1 + monthly_rate) ** k

    balance = principal * (growth_n - growth_k) / (growth_n - 1)

    return max(0.0, balance)


def balloon_balance(
    principal: float,
    annual_rate_pct: float,
    term_years: float,
    balloon_years: float,
) -> float:
    """
    Lump sum due at the balloon date.

    Zero when the balloon is disabled (``balloon_years`` of 0) or falls on or
    after the end of the term.
    """
    if balloon_years <= 0 or balloon_years >= term_years:
        return 0.0
    return remaining_balance(
        principal, annual_rate_pct, term_years, term_months(balloon_years)
    )


def elapsed_months(start_date: Optional[date], as_of: date) -> int:
    """Whole months from ``start_date`` to ``as_of``; future starts count as 0."""
    if start_date is None:
        return 0
    delta = relativedelta(as_of, start_date)
    return max(0, delta.years * 12 + delta.months)


def generate_amortization_schedule(
    principal: float,
    annual_rate_pct: float,
    term_years: float,
    io_months: int = 0,
    total_months: Optional[int] = None,
    start_date: Optional[date] = None,
) -> List[Dict]:
    """
    Generate a full amortization schedule.

    Args:
        principal: Loan principal amount
        annual_rate_pct: Annual interest rate as a percentage
        term_years: Amortization period in years (after any interest-only period)
        io_months: Interest-only period in months
        total_months: Number of periods to project (defaults to io + amortization)
        start_date: Date of first payment

    Returns:
        List of amortization rows
    """
    schedule = []
    balance = principal
    monthly_rate = max(annual_rate_pct, 0) / 100 / 12
    amortization_months = term_months(term_years)

    if principal <= 0:
        return schedule

    if total_months is None:
        total_months = io_months + amortization_months

    if start_date is None:
        start_date = date.today()

    for period in range(1, total_months + 1):
        period_date = start_date + relativedelta(months=period - 1)

        interest = balance * monthly_rate

        if period <= io_months:
            principal_pmt = 0.0
            payment = interest
        else:
            remaining_amort_periods = amortization_months - (period - io_months - 1)
            if remaining_amort_periods > 0:
                payment = monthly_payment(
                    balance, annual_rate_pct, remaining_amort_periods / 12
                )
                principal_pmt = min(payment - interest, balance)
                payment = principal_pmt + interest
            else:
                # Pay off remaining balance
                principal_pmt = balance
                payment = balance + interest

        ending_balance = balance - principal_pmt

        schedule.append(
            {
                "period": period,
                "date": period_date.isoformat(),
                "beginning_balance": round(balance, 2),
                "payment": round(payment, 2),
                "interest": round(interest, 2),
                "principal": round(principal_pmt, 2),
                "ending_balance": round(max(0, ending_balance), 2),
            }
        )

        balance = max(0.0, ending_balance)

        if balance == 0:
            break

    return schedule


def calculate_total_interest(schedule: List[Dict]) -> float:
    """Calculate total interest paid over the schedule."""
    return sum(row["interest"] for row in schedule)


def calculate_total_principal(schedule: List[Dict]) -> float:
    """Calculate total principal repaid over the schedule."""
    return sum(row["principal"] for row in schedule)
