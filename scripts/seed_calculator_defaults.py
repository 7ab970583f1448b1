#!/usr/bin/env python3
"""
Seed the calculator defaults record.

Run once per deployment to store the defaults applied to every new
calculation. Values already stored are kept unless overridden on the
command line.

Usage:
    python scripts/seed_calculator_defaults.py
    python scripts/seed_calculator_defaults.py wholesaleDiscount=65 dscrInterestRate=7.5
"""

import sys
import os

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pydantic import ValidationError

from dealcalc.db.database import init_db
from dealcalc.services.persistence import PersistenceError, SqlDefaultsStore


def parse_overrides(args):
    """Parse ``name=value`` pairs into a dict."""
    overrides = {}
    for arg in args:
        if "=" not in arg:
            print(f"Error: expected name=value, got '{arg}'")
            sys.exit(1)
        name, value = arg.split("=", 1)
        overrides[name.strip()] = value.strip()
    return overrides


def seed_calculator_defaults(args):
    """Create or update the calculator defaults record."""
    overrides = parse_overrides(args)

    # Initialize database tables
    init_db()

    store = SqlDefaultsStore()
    try:
        defaults = store.update_defaults(overrides)
    except ValidationError as e:
        print(f"Error: invalid default value\n{e}")
        sys.exit(1)
    except PersistenceError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Calculator defaults saved (id {defaults.id})")
    for name, value in defaults.model_dump(
        by_alias=True, exclude={"id", "updated_at"}
    ).items():
        print(f"  {name}: {value}")


if __name__ == "__main__":
    seed_calculator_defaults(sys.argv[1:])
