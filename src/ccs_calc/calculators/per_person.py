"""
Per-person view of childcare costs and the higher-rate income cliff.
"""

from ..config import DEFAULT_SCHEDULE, RateSchedule
from ..errors import require_non_negative

WARNING_RANGE = 10000


def _parent_view(income: float, annual: float, weeks: float, days: float) -> dict:
    working = income > 0
    weekly = annual / weeks
    return {
        "daily_rate": weekly / days if working else 0,
        "weekly_rate": weekly if working else 0,
        "monthly_rate": annual / 12 if working else 0,
        "annual_rate": annual if working else 0,
        "percentage": annual / income * 100 if working else 0,
        "net_income": income - annual if working else 0,
        "income": income,
    }


def per_person_rates(
    parent1_income: float,
    parent2_income: float,
    annual_out_of_pocket: float,
    schedule: RateSchedule = DEFAULT_SCHEDULE,
) -> dict:
    """
    Childcare cost as if each parent paid it from their own salary.

    Returns:
        Dict with parent1, parent2 and shared breakdowns (daily, weekly,
        monthly and annual rates)
    """
    require_non_negative(parent1_income, "Parent 1 income must be a non-negative number")
    require_non_negative(parent2_income, "Parent 2 income must be a non-negative number")
    require_non_negative(annual_out_of_pocket, "Annual out-of-pocket must be a non-negative number")

    weeks = schedule.work_defaults.weeks_per_year
    days = schedule.work_defaults.full_time_days_per_week
    weekly = annual_out_of_pocket / weeks
    return {
        "parent1": _parent_view(parent1_income, annual_out_of_pocket, weeks, days),
        "parent2": _parent_view(parent2_income, annual_out_of_pocket, weeks, days),
        "shared": {
            "daily_rate": weekly / days,
            "weekly_rate": weekly,
            "monthly_rate": annual_out_of_pocket / 12,
            "annual_rate": annual_out_of_pocket,
        },
    }


def threshold_risk(
    household_income: float,
    has_multiple_children_under_6: bool,
    schedule: RateSchedule = DEFAULT_SCHEDULE,
) -> dict:
    """
    Warn when income sits near the higher-rate reversion cliff.

    Only families with two or more children aged 5 or under are affected.
    Risk levels: low (within $10,000 below the flat 50% band), medium
    (inside the 50% band), high (within $10,000 above the reversion point).
    """
    require_non_negative(household_income, "Household income must be a non-negative number")
    lower = schedule.higher_rate.band4_start
    upper = schedule.higher_rate.revert_to_standard

    result = {
        "risk_level": "none",
        "message": "",
        "threshold_amount": 0,
        "distance_from_threshold": 0,
        "show_warning": False,
    }
    if not has_multiple_children_under_6:
        return result

    if lower - WARNING_RANGE <= household_income < lower:
        result.update(
            risk_level="low",
            threshold_amount=lower,
            distance_from_threshold=lower - household_income,
            message=f"Approaching ${lower:,.0f} threshold",
        )
    elif lower <= household_income < upper:
        result.update(
            risk_level="medium",
            threshold_amount=upper,
            distance_from_threshold=upper - household_income,
            message="In the 50% subsidy zone",
        )
    elif upper <= household_income < upper + WARNING_RANGE:
        result.update(
            risk_level="high",
            threshold_amount=upper,
            distance_from_threshold=household_income - upper,
            message=f"Just crossed the ${upper:,.0f} threshold",
        )

    result["show_warning"] = result["risk_level"] != "none"
    return result
