"""
Income calculator.

Adjusts a parent's full-time base income for the days and hours they
actually work, and combines two parents into household income.
"""

from typing import Optional

from ..config import DEFAULT_SCHEDULE, RateSchedule
from ..errors import InvalidInput, require_non_negative, require_number, require_range


def adjusted_income(
    base_income: float,
    days_per_week: float,
    hours_per_day: float,
    full_time_days: Optional[float] = None,
    full_time_hours: Optional[float] = None,
    schedule: RateSchedule = DEFAULT_SCHEDULE,
) -> float:
    """
    Scale a full-time base income to the days and hours actually worked.

    adjusted = base_income * (days / full_time_days) * (hours / full_time_hours)

    Args:
        base_income: Full-time equivalent annual income (AUD)
        days_per_week: Days worked per week
        hours_per_day: Hours worked per day
        full_time_days: Full-time days per week (default: 5)
        full_time_hours: Full-time hours per day (default: 7.6)
        schedule: Rate schedule supplying defaults and validation limits

    Returns:
        Adjusted annual income

    Raises:
        InvalidInput: negative inputs or days/hours above validation limits
    """
    limits = schedule.validation_limits
    work = schedule.work_defaults
    full_time_days = work.full_time_days_per_week if full_time_days is None else full_time_days
    full_time_hours = work.full_time_hours_per_day if full_time_hours is None else full_time_hours

    require_non_negative(base_income, "Annual income must be a non-negative number")
    require_range(
        days_per_week,
        limits.min_days_per_week,
        limits.max_days_per_week,
        f"Work days per week must be between {limits.min_days_per_week} "
        f"and {limits.max_days_per_week}",
    )
    require_range(
        hours_per_day,
        limits.min_hours_per_day,
        limits.max_hours_per_day,
        f"Work hours per day must be between {limits.min_hours_per_day} "
        f"and {limits.max_hours_per_day}",
    )
    require_number(full_time_days, "Full-time days must be a positive number")
    require_number(full_time_hours, "Full-time hours must be a positive number")
    if full_time_days <= 0:
        raise InvalidInput("Full-time days must be a positive number")
    if full_time_hours <= 0:
        raise InvalidInput("Full-time hours must be a positive number")

    if base_income == 0 or days_per_week == 0:
        return 0.0

    return base_income * (days_per_week / full_time_days) * (hours_per_day / full_time_hours)


def household_income(parent1_income: float, parent2_income: float = 0) -> float:
    """Combine two parents' adjusted incomes."""
    require_non_negative(parent1_income, "Parent 1 adjusted income must be a non-negative number")
    require_non_negative(parent2_income, "Parent 2 adjusted income must be a non-negative number")
    return parent1_income + parent2_income


def split_household_income(combined_income: float, parent1_ratio: float = 0.5) -> dict:
    """
    Split a combined income between two parents.

    Returns:
        Dict with parent1_income and parent2_income
    """
    require_non_negative(combined_income, "Combined income must be a non-negative number")
    require_range(parent1_ratio, 0, 1, "Parent 1 ratio must be between 0 and 1")
    return {
        "parent1_income": combined_income * parent1_ratio,
        "parent2_income": combined_income * (1 - parent1_ratio),
    }


def validate_income(
    income: float,
    min_income: Optional[float] = None,
    max_income: Optional[float] = None,
    schedule: RateSchedule = DEFAULT_SCHEDULE,
) -> bool:
    """Check an income against validation limits, raising InvalidInput if outside."""
    limits = schedule.validation_limits
    min_income = limits.min_income if min_income is None else min_income
    max_income = limits.max_income if max_income is None else max_income

    require_number(income, "Income must be a valid number")
    if income < min_income:
        raise InvalidInput(f"Income must be at least {min_income}")
    if income > max_income:
        raise InvalidInput(f"Income must not exceed {max_income}")
    return True
