"""Currency helpers.

All money in the SDK is ``Decimal``. Values are rounded half-up to whole
cents, which is how the amounts print on a stub or statement.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

CENT = Decimal("0.01")
ZERO = Decimal("0")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without binary float noise.

    Floats go through ``str()`` so 0.062 becomes Decimal("0.062"),
    not 0.06199999999999999983...
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def to_cents(amount: Number) -> Decimal:
    """Round to 2 decimal places (half-up).

    Example: 2884.615384 -> 2884.62
    """
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
