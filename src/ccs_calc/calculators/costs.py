"""
Cost calculator.

Turns a subsidy rate, an effective rate and hours into weekly and annual
subsidy, withholding and out-of-pocket figures.
"""

from dataclasses import dataclass
from typing import Optional, Union

from ..config import DEFAULT_SCHEDULE, CareType, RateSchedule
from ..errors import InvalidInput, require_non_negative, require_number, require_range
from .rate_caps import effective_hourly_rate


def round2(value: float) -> float:
    """Round a currency amount to cents."""
    return round(value, 2)


@dataclass(frozen=True)
class WithholdingResult:
    """Subsidy split into the withheld and paid portions."""

    gross_subsidy: float
    withheld_amount: float
    paid_subsidy: float
    withholding_rate: float


@dataclass(frozen=True)
class WeeklyCosts:
    """Weekly subsidy and cost breakdown for one child."""

    weekly_subsidy: float
    weekly_gross_subsidy: float
    weekly_withheld: float
    weekly_full_cost: float
    weekly_out_of_pocket: float
    hours_with_subsidy: float
    hours_without_subsidy: float
    withholding_rate: float


@dataclass(frozen=True)
class AnnualCosts:
    subsidy: float
    gross_subsidy: float
    withheld: float
    full_cost: float
    out_of_pocket: float


@dataclass(frozen=True)
class CostSummary:
    """Full per-child cost chain from rate to net income."""

    effective_hourly_rate: float
    subsidy_per_hour: float
    weekly: WeeklyCosts
    annual: AnnualCosts
    net_income: float
    cost_percentage: float
    withholding_rate: float


def _check_withholding(withholding_rate: Optional[float], schedule: RateSchedule) -> float:
    w = schedule.withholding
    if withholding_rate is None:
        return w.default_rate
    return require_range(
        withholding_rate,
        w.min_rate,
        w.max_rate,
        f"Withholding rate must be between {w.min_rate} and {w.max_rate}",
    )


def subsidy_per_hour(subsidy_rate: float, effective_rate: float) -> float:
    """(rate / 100) * effective hourly rate."""
    require_range(subsidy_rate, 0, 100, "Subsidy rate must be between 0 and 100")
    require_non_negative(effective_rate, "Effective hourly rate must be a non-negative number")
    return (subsidy_rate / 100) * effective_rate


def subsidy_per_day(subsidy_rate: float, effective_daily_rate: float) -> float:
    require_range(subsidy_rate, 0, 100, "Subsidy rate must be between 0 and 100")
    require_non_negative(effective_daily_rate, "Effective daily rate must be a non-negative number")
    return (subsidy_rate / 100) * effective_daily_rate


def apply_withholding(
    subsidy_amount: float,
    withholding_rate: Optional[float] = None,
    schedule: RateSchedule = DEFAULT_SCHEDULE,
) -> WithholdingResult:
    """
    Withhold a percentage of the subsidy.

    withheld = gross * rate / 100 and paid = gross - withheld, both in cents,
    so withheld + paid equals the rounded gross.

    Raises:
        InvalidInput: negative subsidy or withholding rate outside [0, 100]
    """
    require_non_negative(subsidy_amount, "Subsidy amount must be a non-negative number")
    withholding_rate = _check_withholding(withholding_rate, schedule)

    gross = round2(subsidy_amount)
    withheld = round2(subsidy_amount * withholding_rate / 100)
    paid = round2(gross - withheld)
    return WithholdingResult(
        gross_subsidy=gross,
        withheld_amount=withheld,
        paid_subsidy=paid,
        withholding_rate=withholding_rate,
    )


def weekly_costs(
    subsidy_per_hour: float,
    provider_fee: float,
    subsidised_hours: float,
    actual_hours: float,
    withholding_rate: Optional[float] = None,
    schedule: RateSchedule = DEFAULT_SCHEDULE,
) -> WeeklyCosts:
    """
    Weekly subsidy, full cost and out-of-pocket for one child.

    Args:
        subsidy_per_hour: Subsidy per hour of care
        provider_fee: Provider's hourly fee
        subsidised_hours: Subsidised hours available per week
        actual_hours: Hours of care attended per week
        withholding_rate: Withholding percentage (default: 5)
    """
    require_non_negative(subsidy_per_hour, "Subsidy per hour must be a non-negative number")
    require_non_negative(provider_fee, "Provider fee must be a non-negative number")
    require_non_negative(subsidised_hours, "Subsidised hours must be a non-negative number")
    require_non_negative(actual_hours, "Actual hours must be a non-negative number")

    hours_with_subsidy = min(actual_hours, subsidised_hours)
    hours_without_subsidy = max(0, actual_hours - subsidised_hours)

    withholding = apply_withholding(subsidy_per_hour * hours_with_subsidy, withholding_rate, schedule)
    full_cost = round2(provider_fee * actual_hours)

    return WeeklyCosts(
        weekly_subsidy=withholding.paid_subsidy,
        weekly_gross_subsidy=withholding.gross_subsidy,
        weekly_withheld=withholding.withheld_amount,
        weekly_full_cost=full_cost,
        weekly_out_of_pocket=round2(full_cost - withholding.paid_subsidy),
        hours_with_subsidy=hours_with_subsidy,
        hours_without_subsidy=hours_without_subsidy,
        withholding_rate=withholding.withholding_rate,
    )


def weekly_costs_from_daily_rate(
    subsidy_per_day: float,
    provider_daily_fee: float,
    subsidised_days: float,
    actual_days: float,
    withholding_rate: Optional[float] = None,
    schedule: RateSchedule = DEFAULT_SCHEDULE,
) -> WeeklyCosts:
    """
    Weekly costs for care charged by the day.

    The hours fields of the result hold days for this variant.
    """
    require_non_negative(subsidy_per_day, "Subsidy per day must be a non-negative number")
    require_non_negative(provider_daily_fee, "Provider daily fee must be a non-negative number")
    require_range(subsidised_days, 0, 7, "Subsidised days must be between 0 and 7")
    require_range(actual_days, 0, 7, "Actual days must be between 0 and 7")

    return weekly_costs(
        subsidy_per_day,
        provider_daily_fee,
        subsidised_days,
        actual_days,
        withholding_rate,
        schedule,
    )


def annual_cost(
    weekly_cost: float,
    weeks_per_year: Optional[float] = None,
    schedule: RateSchedule = DEFAULT_SCHEDULE,
) -> float:
    """Annualize a weekly amount, rounded to cents."""
    if weeks_per_year is None:
        weeks_per_year = schedule.work_defaults.weeks_per_year
    require_number(weekly_cost, "Weekly cost must be a number")
    require_number(weeks_per_year, "Weeks per year must be a positive number")
    if weeks_per_year <= 0:
        raise InvalidInput("Weeks per year must be a positive number")
    return round2(weekly_cost * weeks_per_year)


def net_income(household_income: float, annual_out_of_pocket: float) -> float:
    """Household income less childcare costs, floored at zero."""
    require_non_negative(household_income, "Household income must be a non-negative number")
    require_non_negative(annual_out_of_pocket, "Annual childcare cost must be a non-negative number")
    return max(0, household_income - annual_out_of_pocket)


def cost_percentage(annual_out_of_pocket: float, household_income: float) -> float:
    """Childcare cost as a percentage of household income (0 when there is no income)."""
    require_non_negative(annual_out_of_pocket, "Annual childcare cost must be a non-negative number")
    require_non_negative(household_income, "Household income must be a non-negative number")
    if household_income == 0:
        return 0
    return round2(annual_out_of_pocket / household_income * 100)


def complete_cost_breakdown(
    household_income: float,
    subsidy_rate: float,
    provider_fee: float,
    care_type: Union[str, CareType],
    child_age: float,
    subsidised_hours: float,
    actual_hours: float,
    withholding_rate: Optional[float] = None,
    schedule: RateSchedule = DEFAULT_SCHEDULE,
) -> CostSummary:
    """Run the full cost chain for one child."""
    rate = effective_hourly_rate(provider_fee, care_type, child_age, schedule=schedule)
    per_hour = subsidy_per_hour(subsidy_rate, rate)
    weekly = weekly_costs(per_hour, provider_fee, subsidised_hours, actual_hours, withholding_rate, schedule)

    annual = AnnualCosts(
        subsidy=annual_cost(weekly.weekly_subsidy, schedule=schedule),
        gross_subsidy=annual_cost(weekly.weekly_gross_subsidy, schedule=schedule),
        withheld=annual_cost(weekly.weekly_withheld, schedule=schedule),
        full_cost=annual_cost(weekly.weekly_full_cost, schedule=schedule),
        out_of_pocket=annual_cost(weekly.weekly_out_of_pocket, schedule=schedule),
    )

    return CostSummary(
        effective_hourly_rate=rate,
        subsidy_per_hour=per_hour,
        weekly=weekly,
        annual=annual,
        net_income=net_income(household_income, annual.out_of_pocket),
        cost_percentage=cost_percentage(annual.out_of_pocket, household_income),
        withholding_rate=weekly.withholding_rate,
    )
