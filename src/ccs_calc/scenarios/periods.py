"""
Display periods for weekly amounts.
"""

from ..errors import InvalidInput, require_number

PERIOD_MULTIPLIERS = {
    "weekly": 1,
    "fortnightly": 2,
    "monthly": 52 / 12,
    "annual": 52,
}

PERIOD_LABELS = {
    "weekly": "Weekly",
    "fortnightly": "Fortnightly",
    "monthly": "Monthly",
    "annual": "Annual",
}

PERIOD_SUFFIXES = {
    "weekly": "/week",
    "fortnightly": "/fortnight",
    "monthly": "/month",
    "annual": "/year",
}


def _check_period(period: str) -> str:
    if period not in PERIOD_MULTIPLIERS:
        raise InvalidInput(f"Invalid period: {period}. Expected one of {list(PERIOD_MULTIPLIERS)}")
    return period


def convert_to_period(weekly_value: float, period: str = "weekly") -> float:
    """Convert a weekly amount to the given period."""
    require_number(weekly_value, "Weekly value must be a number")
    return weekly_value * PERIOD_MULTIPLIERS[_check_period(period)]


def period_suffix(period: str) -> str:
    return PERIOD_SUFFIXES[_check_period(period)]
