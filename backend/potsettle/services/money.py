"""Pure helpers for currency amounts.

All amounts are ``decimal.Decimal``. Parsing never falls back to zero:
anything that is not a finite number yields None.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable, Optional

CENT = Decimal("0.01")
ZERO = Decimal("0")

# Largest accepted amount is just under 10**16. Keeps every cent value
# well inside the default 28-digit decimal context.
MAX_ADJUSTED_EXPONENT = 15


def parse_amount(value: Any) -> Optional[Decimal]:
    """Parse user input into a Decimal amount.

    Args:
        value: A string (surrounding whitespace allowed), int or Decimal.

    Returns:
        The parsed Decimal, or None if the value is empty, not numeric,
        or not finite (NaN, Infinity).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        value = str(value)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not amount.is_finite():
        return None
    return amount


def is_currency_amount(amount: Decimal) -> bool:
    """Return True for a finite, non-negative, whole-cent amount below 10**16.

    Trailing zeros are fine ("1.500"); a non-zero third decimal is not.
    """
    if not amount.is_finite() or amount < ZERO:
        return False
    if amount.adjusted() > MAX_ADJUSTED_EXPONENT:
        return False
    return amount == round_currency(amount)


def round_currency(amount: Decimal) -> Decimal:
    """Round to exactly 2 fractional digits, halves away from zero."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def total(amounts: Iterable[Decimal]) -> Decimal:
    """Sum amounts starting from a Decimal zero."""
    return sum(amounts, ZERO)
