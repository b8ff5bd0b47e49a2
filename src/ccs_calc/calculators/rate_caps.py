"""
Hourly rate caps.

Looks up the government hourly fee cap by care type and age category and
applies it to a provider's fee.
"""

from typing import List, Optional, Sequence, Union

from ..config import DEFAULT_SCHEDULE, CareType, RateSchedule
from ..errors import InvalidInput, require_non_negative, require_range

SCHOOL_AGE = "school_age"
NON_SCHOOL_AGE = "non_school_age"


def _check_age(child_age: float, schedule: RateSchedule) -> None:
    limits = schedule.validation_limits
    require_range(
        child_age,
        limits.min_age,
        limits.max_age,
        f"Child age must be between {limits.min_age} and {limits.max_age}",
    )


def age_category(child_age: float, schedule: RateSchedule = DEFAULT_SCHEDULE) -> str:
    """School age from SCHOOL_AGE_THRESHOLD (6) upwards, otherwise non-school age."""
    _check_age(child_age, schedule)
    if child_age >= schedule.age_categories.school_age_threshold:
        return SCHOOL_AGE
    return NON_SCHOOL_AGE


def hourly_rate_cap(
    care_type: Union[str, CareType],
    child_age: float,
    schedule: RateSchedule = DEFAULT_SCHEDULE,
) -> float:
    """Hourly rate cap (AUD) for a care type and child age."""
    cap = schedule.hourly_cap(care_type)
    return getattr(cap, age_category(child_age, schedule))


def is_per_family(care_type: Union[str, CareType], schedule: RateSchedule = DEFAULT_SCHEDULE) -> bool:
    """True when the care type's cap applies once per family rather than per child."""
    return schedule.hourly_cap(care_type).per_family


def effective_hourly_rate(
    provider_fee: float,
    care_type: Union[str, CareType],
    child_age: float,
    schedule: RateSchedule = DEFAULT_SCHEDULE,
) -> float:
    """
    Effective hourly rate: min(provider fee, cap).

    For a per-family cap (in-home care) this is the rate of a family's only
    child in that care type; use shared_hourly_rates for several children.

    Args:
        provider_fee: Provider's hourly fee
        care_type: Care type (CareType or its string value)
        child_age: Child age in years (0-18)
        schedule: Rate schedule

    Raises:
        InvalidInput: unknown care type, negative fee or age outside [0, 18]
    """
    require_non_negative(provider_fee, "Provider fee must be a non-negative number")
    return min(provider_fee, hourly_rate_cap(care_type, child_age, schedule))


def shared_hourly_rates(
    provider_fees: Sequence[float],
    care_type: Union[str, CareType],
    child_ages: Sequence[float],
    schedule: RateSchedule = DEFAULT_SCHEDULE,
) -> List[float]:
    """
    Effective hourly rates for a family's children in one care type.

    Per-child caps give min(fee, cap) for each child. A per-family cap is
    shared: children are taken from the lowest fee up, each getting
    min(fee, equal share of the cap still unused), so headroom a cheaper
    child leaves passes to the others and the rates never sum past the cap.

    Returns:
        Rates in the order of ``provider_fees``
    """
    if len(provider_fees) != len(child_ages):
        raise InvalidInput("Provider fees and child ages must have the same length")
    for fee in provider_fees:
        require_non_negative(fee, "Provider fee must be a non-negative number")
    care_type = CareType.parse(care_type)
    caps = [hourly_rate_cap(care_type, age, schedule) for age in child_ages]

    if not is_per_family(care_type, schedule):
        return [min(fee, cap) for fee, cap in zip(provider_fees, caps)]
    if not caps:
        return []

    remaining = min(caps)
    rates = [0.0] * len(provider_fees)
    order = sorted(range(len(provider_fees)), key=lambda i: provider_fees[i])
    for done, i in enumerate(order):
        rates[i] = min(provider_fees[i], remaining / (len(order) - done))
        remaining -= rates[i]
    return rates


def daily_rate_cap(
    care_type: Union[str, CareType],
    child_age: float,
    hours_per_day: Optional[float] = None,
    schedule: RateSchedule = DEFAULT_SCHEDULE,
) -> float:
    """Daily cap: the hourly cap times the hours charged per day."""
    if hours_per_day is None:
        hours_per_day = schedule.work_defaults.default_care_hours_per_day
    require_non_negative(hours_per_day, "Hours per day must be a positive number")
    if hours_per_day == 0:
        raise InvalidInput("Hours per day must be a positive number")
    return hourly_rate_cap(care_type, child_age, schedule) * hours_per_day


def effective_daily_rate(
    provider_daily_fee: float,
    care_type: Union[str, CareType],
    child_age: float,
    hours_per_day: Optional[float] = None,
    schedule: RateSchedule = DEFAULT_SCHEDULE,
) -> float:
    """Effective daily rate: min(provider daily fee, daily cap)."""
    require_non_negative(provider_daily_fee, "Provider daily fee must be a non-negative number")
    _check_age(child_age, schedule)
    return min(provider_daily_fee, daily_rate_cap(care_type, child_age, hours_per_day, schedule))
