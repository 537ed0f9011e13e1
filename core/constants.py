"""
Core Module - Constants.

============================================================
RESPONSIBILITY
============================================================
Defines all system-wide constants.

- Single source of truth for magic values
- No business logic here

============================================================
"""

from decimal import Decimal


# ============================================================
# CASH INSTRUMENT
# ============================================================

CASH_TICKER = "ARS"
"""Ticker of the synthetic instrument used by CASH_IN / CASH_OUT orders."""

CASH_UNIT_PRICE = Decimal("1.00")
"""Price per unit of a cash movement."""


# ============================================================
# DECIMAL SCALES
# ============================================================

PRICE_QUANTUM = Decimal("0.01")
"""Order prices are stored with 2 fractional digits (half-up)."""

AVERAGE_PRICE_QUANTUM = Decimal("0.00000001")
"""Average buy price and P&L ratios use 8 fractional digits (half-up)."""

HUNDRED = Decimal("100")


# ============================================================
# INSTRUMENT SEARCH
# ============================================================

MIN_SEARCH_QUERY_LENGTH = 3
"""Trimmed queries shorter than this return no results."""


# ============================================================
# HTTP
# ============================================================

API_PREFIX = "/challenge/v1"
