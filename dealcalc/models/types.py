"""
Semantic numeric types shared by the calculator input and output records.

Percentages are stored the way users type them (``70`` means 70%). The only
place a percentage becomes a fraction is :func:`as_fraction`.
"""

import math
from datetime import date
from typing import Annotated, Any, Optional

from pydantic import BeforeValidator, ConfigDict


def _to_number(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    try:
        number = float(value)
    except TypeError:
        raise ValueError(f"expected a number, got {type(value).__name__}")
    # NaN and infinity are treated as a blank entry
    return number if math.isfinite(number) else 0.0


def _clamp_non_negative(value: Any) -> float:
    number = _to_number(value)
    return number if number > 0 else 0.0


def _blank_to_none(value: Any) -> Any:
    if value == "":
        return None
    return value


# Dollar amounts, clamped at zero
Money = Annotated[float, BeforeValidator(_clamp_non_negative)]

# Loan terms and balloon horizons in years, clamped at zero
Years = Annotated[float, BeforeValidator(_clamp_non_negative)]

# Project durations in months, clamped at zero
Months = Annotated[float, BeforeValidator(_clamp_non_negative)]

# Raw 0-100 percentage, accepted as entered
Percent = Annotated[float, BeforeValidator(_to_number)]

# ISO date; an empty string means "not set"
OptionalDate = Annotated[Optional[date], BeforeValidator(_blank_to_none)]


def as_fraction(percent: float) -> float:
    """Convert a stored percentage (``8`` for 8%) to a fraction (``0.08``)."""
    return percent / 100


def to_wire_name(name: str) -> str:
    """Translate a snake_case field name to its camelCase wire alias."""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


WIRE_MODEL_CONFIG = ConfigDict(
    alias_generator=to_wire_name,
    populate_by_name=True,
)
