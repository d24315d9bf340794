from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def percent(numerator: int, denominator: int) -> int:
    """Integer percentage of numerator/denominator, rounded half up."""
    if denominator <= 0:
        raise ValueError("denominator must be positive")
    value = Decimal(numerator) * 100 / Decimal(denominator)
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))
