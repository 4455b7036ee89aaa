#!/usr/bin/env python3
"""Rental income statement generator.

Wraps the package CLI for running from a source checkout.

Usage:
    python income_statement.py --bookings bookings.csv --expenses expenses.csv --year 2024

For full documentation and options:
    python income_statement.py --help
"""

import sys
from pathlib import Path

# Add src to path for development installs
src_path = Path(__file__).parent / "src"
if src_path.exists():
    sys.path.insert(0, str(src_path))

from rental_finance.cli import main

if __name__ == "__main__":
    sys.exit(main())
