"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_TAX_RATE_PERCENT = Decimal("10")
DEFAULT_INSURANCE_RATE_PERCENT = Decimal("5")
DEFAULT_BONUS_PER_DAY = Decimal("50")

# Minimum hours for an attendance record to count as a full (bonus) day.
QUALIFYING_HOURS = 8

MONEY_QUANT = Decimal("0.01")
