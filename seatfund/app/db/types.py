"""
Column types and value helpers shared by the models.

All monetary amounts are fixed-point with two decimal places. No floats.
"""

from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy import Numeric

MONEY_DECIMAL_PLACES = 2
CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def Money() -> Numeric:
    """Column type for every monetary attribute."""
    return Numeric(14, MONEY_DECIMAL_PLACES, asdecimal=True)


def to_money(value) -> Decimal:
    """
    Convert an int, str, float or Decimal to a 2-place Decimal.

    Floats go through ``str`` so 0.1 stays 0.10 instead of its binary expansion.
    Raises decimal.InvalidOperation for values that are not numbers.
    """
    if isinstance(value, float):
        value = str(value)
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def utcnow() -> datetime:
    """Timezone-aware current time, used for created/updated/deleted stamps."""
    return datetime.now(timezone.utc)
