from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (not banker's rounding)."""
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def round_to(value: float, precision: int) -> float:
    """Round half-up to a fixed number of decimal places."""
    if math.isnan(value) or math.isinf(value):
        return 0.0
    step = Decimal(1).scaleb(-precision)
    return float(Decimal(str(value)).quantize(step, rounding=ROUND_HALF_UP))
