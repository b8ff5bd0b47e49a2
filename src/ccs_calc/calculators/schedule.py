"""
Parent work schedules and the childcare they require.
"""

from typing import Sequence

from ..config import DEFAULT_SCHEDULE, RateSchedule
from ..errors import InvalidInput, require_non_negative, require_range

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday")
WEEKDAY_LABELS = {
    "monday": "Monday",
    "tuesday": "Tuesday",
    "wednesday": "Wednesday",
    "thursday": "Thursday",
    "friday": "Friday",
}


def childcare_hours_needed(
    parent1_days: float,
    parent1_hours_per_day: float,
    parent2_days: float = 0,
    parent2_hours_per_day: float = 0,
) -> float:
    """
    Weekly childcare hours a work-day combination calls for.

    A parent who is not working is available for care, so only the working
    parent's hours count. When both work, their days are assumed to line up
    from Monday: overlapping days need the longer of the two working days
    and the remaining days need the shorter one.
    """
    for days in (parent1_days, parent2_days):
        require_range(days, 0, 7, "Days per week must be between 0 and 7")
    for hours in (parent1_hours_per_day, parent2_hours_per_day):
        require_range(hours, 0, 24, "Hours per day must be between 0 and 24")

    if parent2_days == 0:
        return parent1_days * parent1_hours_per_day
    if parent1_days == 0:
        return parent2_days * parent2_hours_per_day

    overlap = min(parent1_days, parent2_days)
    remaining = abs(parent1_days - parent2_days)
    longer = max(parent1_hours_per_day, parent2_hours_per_day)
    shorter = min(parent1_hours_per_day, parent2_hours_per_day)
    return overlap * longer + remaining * shorter


def _format_days(days: Sequence[str]) -> str:
    if not days:
        return "None"
    return ", ".join(WEEKDAY_LABELS[d] for d in days)


def _check_days(days, label: str) -> list:
    if not isinstance(days, (list, tuple)):
        raise InvalidInput(f"{label} days must be a list")
    unknown = [d for d in days if d not in WEEKDAYS]
    if unknown:
        raise InvalidInput(f"{label} days contain unknown weekdays: {unknown}")
    return list(days)


def minimum_childcare_days(parent1_days: Sequence[str] = (), parent2_days: Sequence[str] = ()) -> dict:
    """
    Weekdays on which childcare is needed.

    A single parent (or a couple where parent 2 does not work) needs care
    on every work day. A couple needs care only on days both parents work.

    Args:
        parent1_days: Weekday names parent 1 works, e.g. ["monday", "tuesday"]
        parent2_days: Weekday names parent 2 works (empty if not working)

    Returns:
        Dict with childcare_days, days_count, overlapping_days,
        parent1_only_days, parent2_only_days, days_without_care and explanation
    """
    p1 = _check_days(parent1_days, "Parent 1")
    p2 = _check_days(parent2_days, "Parent 2")

    if not p2:
        childcare = [d for d in WEEKDAYS if d in p1]
        explanation = f"Single parent working {_format_days(childcare)}. Childcare needed on all work days."
        overlapping, p1_only, p2_only = [], childcare, []
    else:
        childcare = [d for d in WEEKDAYS if d in p1 and d in p2]
        overlapping = list(childcare)
        p1_only = [d for d in p1 if d not in p2]
        p2_only = [d for d in p2 if d not in p1]
        explanation = (
            f"Parent 1: {_format_days(p1)}. Parent 2: {_format_days(p2)}. "
            f"Childcare needed: {_format_days(childcare)}."
        )

    return {
        "childcare_days": childcare,
        "days_count": len(childcare),
        "parent1_work_days": p1,
        "parent2_work_days": p2,
        "overlapping_days": overlapping,
        "parent1_only_days": p1_only,
        "parent2_only_days": p2_only,
        "days_without_care": [d for d in WEEKDAYS if d not in childcare],
        "explanation": explanation,
    }


def days_from_count(days_count: int) -> list:
    """Consecutive weekdays starting Monday."""
    if isinstance(days_count, bool) or not isinstance(days_count, int) or not 0 <= days_count <= 5:
        raise InvalidInput("Days count must be between 0 and 5")
    return list(WEEKDAYS[:days_count])


def cost_savings(
    total_days: float,
    childcare_days: float,
    daily_rate: float,
    schedule: RateSchedule = DEFAULT_SCHEDULE,
) -> dict:
    """Weekly and annual savings from days a parent is home."""
    require_non_negative(total_days, "Total days must be a non-negative number")
    require_non_negative(childcare_days, "Childcare days must be a non-negative number")
    require_non_negative(daily_rate, "Daily rate must be a non-negative number")

    days_without_care = total_days - childcare_days
    weekly = days_without_care * daily_rate
    return {
        "days_without_care": days_without_care,
        "weekly_savings": round(weekly, 2),
        "annual_savings": round(weekly * schedule.work_defaults.weeks_per_year, 2),
        "percentage_saved": round(days_without_care / total_days * 100) if total_days > 0 else 0,
    }
