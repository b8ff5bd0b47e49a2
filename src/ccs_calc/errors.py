"""
Error types raised by the CCS calculators.
"""

import math


class InvalidInput(ValueError):
    """An argument is out of range or of the wrong type."""


def require_number(value, message: str) -> float:
    """Return value if it is a real, finite number, else raise InvalidInput."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInput(message)
    if not math.isfinite(value):
        raise InvalidInput(message)
    return value


def require_range(value, low: float, high: float, message: str) -> float:
    """Return value if it is a number within [low, high], else raise InvalidInput."""
    require_number(value, message)
    if value < low or value > high:
        raise InvalidInput(message)
    return value


def require_non_negative(value, message: str) -> float:
    require_number(value, message)
    if value < 0:
        raise InvalidInput(message)
    return value
