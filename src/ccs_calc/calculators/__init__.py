"""
CCS calculators: income, subsidy rate, activity test, rate caps and costs.

Each function is pure and takes an optional ``schedule`` keyword; without
it the 2025-26 rate schedule applies.
"""

from .activity_test import SubsidisedHours, applicable_hours, hours_per_fortnight, subsidised_hours
from .costs import (
    CostSummary,
    WeeklyCosts,
    WithholdingResult,
    annual_cost,
    apply_withholding,
    complete_cost_breakdown,
    cost_percentage,
    net_income,
    subsidy_per_day,
    subsidy_per_hour,
    weekly_costs,
    weekly_costs_from_daily_rate,
)
from .income import adjusted_income, household_income, split_household_income, validate_income
from .rate_caps import (
    age_category,
    daily_rate_cap,
    effective_daily_rate,
    effective_hourly_rate,
    hourly_rate_cap,
    shared_hourly_rates,
)
from .schedule import childcare_hours_needed, minimum_childcare_days
from .subsidy_rate import (
    child_subsidy_rate,
    higher_rate,
    multiple_children_rates,
    rate_table,
    rate_tracks,
    standard_rate,
)

__all__ = [
    "adjusted_income",
    "household_income",
    "split_household_income",
    "validate_income",
    "standard_rate",
    "higher_rate",
    "child_subsidy_rate",
    "multiple_children_rates",
    "rate_tracks",
    "rate_table",
    "SubsidisedHours",
    "subsidised_hours",
    "hours_per_fortnight",
    "applicable_hours",
    "age_category",
    "hourly_rate_cap",
    "effective_hourly_rate",
    "shared_hourly_rates",
    "daily_rate_cap",
    "effective_daily_rate",
    "WithholdingResult",
    "WeeklyCosts",
    "CostSummary",
    "subsidy_per_hour",
    "subsidy_per_day",
    "apply_withholding",
    "weekly_costs",
    "weekly_costs_from_daily_rate",
    "annual_cost",
    "net_income",
    "cost_percentage",
    "complete_cost_breakdown",
    "childcare_hours_needed",
    "minimum_childcare_days",
]
