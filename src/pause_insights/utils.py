"""Small numeric helpers shared by the scorers."""

import math
from typing import Iterable, Optional


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return min(high, max(low, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity.

    Unlike round(), 84.5 becomes 85 and -15.5 becomes -15.
    """
    return int(math.floor(value + 0.5))


def mean(values: Iterable[float]) -> Optional[float]:
    """Arithmetic mean, or None for an empty iterable."""
    items = list(values)
    if not items:
        return None
    return sum(items) / len(items)


def to_number(value) -> Optional[float]:
    """Best-effort numeric conversion; None for anything non-numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number
