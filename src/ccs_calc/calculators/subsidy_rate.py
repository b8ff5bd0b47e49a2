"""
Subsidy rate calculator.

Derives the CCS percentage from adjusted household income using the
standard rate schedule (eldest child aged 5 or under, and every child over
5) and the higher rate schedule (younger siblings aged 5 or under).
"""

import math
from typing import Any, List, Sequence

import numpy as np
import pandas as pd

from ..config import DEFAULT_SCHEDULE, RateSchedule
from ..errors import InvalidInput, require_non_negative, require_range

STANDARD = "standard"
HIGHER = "higher"


def standard_rate(household_income: float, schedule: RateSchedule = DEFAULT_SCHEDULE) -> float:
    """
    Standard CCS rate.

    - income <= MAX_90_PERCENT: 90%
    - income >= MIN_ZERO_PERCENT: 0%
    - otherwise 90% less 1% per complete $5,000 above MAX_90_PERCENT

    Args:
        household_income: Adjusted household income
        schedule: Rate schedule

    Returns:
        CCS percentage (0-90)
    """
    require_non_negative(household_income, "Household income must be a non-negative number")
    t = schedule.standard_rate

    if household_income <= t.max_90_percent:
        return t.max_rate
    if household_income >= t.min_zero_percent:
        return 0

    steps = math.floor((household_income - t.max_90_percent) / t.taper_increment)
    rate = t.max_rate - steps * t.taper_decrease
    return min(t.max_rate, max(0, rate))


def _band_taper(income: float, band_start: float, start_rate: float, floor_rate: float, t) -> float:
    # Each started increment above the band start costs one step
    steps = math.floor((income - band_start) / t.taper_increment) + 1
    return max(floor_rate, start_rate - steps * t.taper_decrease)


def higher_rate(household_income: float, schedule: RateSchedule = DEFAULT_SCHEDULE) -> float:
    """
    Higher CCS rate for second and younger children aged 5 or under.

    - income <= MAX_95_PERCENT: 95%
    - band 1: 95% tapering 1% per $3,000 down to 80%
    - band 2: flat 80%
    - band 3: 80% tapering 1% per $3,000 down to 50%
    - band 4: flat 50%
    - income >= REVERT_TO_STANDARD: the standard rate applies

    Args:
        household_income: Adjusted household income
        schedule: Rate schedule

    Returns:
        CCS percentage (0-95)
    """
    require_non_negative(household_income, "Household income must be a non-negative number")
    t = schedule.higher_rate

    if household_income <= t.max_95_percent:
        return t.max_rate
    if household_income <= t.band1_end:
        return _band_taper(household_income, t.band1_start, t.max_rate, t.band2_rate, t)
    if household_income <= t.band2_end:
        return t.band2_rate
    if household_income <= t.band3_end:
        return _band_taper(household_income, t.band3_start, t.band2_rate, t.band4_rate, t)
    if household_income <= t.band4_end:
        return t.band4_rate

    return standard_rate(household_income, schedule)


def child_subsidy_rate(
    household_income: float,
    child_age: float,
    child_position: int = 1,
    schedule: RateSchedule = DEFAULT_SCHEDULE,
) -> float:
    """
    CCS rate for one child given its position among siblings (1 = eldest).

    Children over 5 and the eldest child aged 5 or under get the standard
    rate; younger siblings aged 5 or under get the higher rate.
    """
    limits = schedule.validation_limits
    require_non_negative(household_income, "Household income must be a non-negative number")
    require_range(
        child_age,
        limits.min_age,
        limits.max_age,
        f"Child age must be between {limits.min_age} and {limits.max_age}",
    )
    if isinstance(child_position, bool) or not isinstance(child_position, int) or child_position < 1:
        raise InvalidInput("Child position must be at least 1")

    if child_age > schedule.age_categories.higher_rate_age_threshold or child_position == 1:
        return standard_rate(household_income, schedule)
    return higher_rate(household_income, schedule)


def rate_tracks(ages: Sequence[float], schedule: RateSchedule = DEFAULT_SCHEDULE) -> List[str]:
    """
    Assign each child (in input order) to the standard or higher rate track.

    Exactly one child aged 5 or under - the eldest, first in input order on
    ties - is on the standard track. Other children aged 5 or under are on
    the higher track, and children over 5 are always standard.
    """
    threshold = schedule.age_categories.higher_rate_age_threshold
    young = [i for i, age in enumerate(ages) if age <= threshold]
    eldest = max(young, key=lambda i: (ages[i], -i)) if young else None

    tracks = []
    for i, age in enumerate(ages):
        if age > threshold or i == eldest:
            tracks.append(STANDARD)
        else:
            tracks.append(HIGHER)
    return tracks


def _age_of(child: Any) -> float:
    if isinstance(child, dict):
        return child.get("age")
    return getattr(child, "age", None)


def multiple_children_rates(
    household_income: float,
    children: Sequence[Any],
    schedule: RateSchedule = DEFAULT_SCHEDULE,
) -> List[dict]:
    """
    Subsidy rates for several children, eldest first.

    Without an explicit ``position``, children aged 5 or under are numbered
    among themselves (1 = eldest of them), so the same child gets the
    standard rate as in rate_tracks. Children over 5 keep their overall
    position and always get the standard rate.

    Args:
        household_income: Adjusted household income
        children: Child objects or dicts with an ``age`` (and optional ``position``)

    Returns:
        List of dicts with age, position, subsidy_rate, is_eldest and uses_higher_rate
    """
    require_non_negative(household_income, "Household income must be a non-negative number")
    if not children:
        raise InvalidInput("Children must be a non-empty list")
    limits = schedule.validation_limits
    for child in children:
        require_range(
            _age_of(child),
            limits.min_age,
            limits.max_age,
            f"Child age must be between {limits.min_age} and {limits.max_age}",
        )

    ordered = sorted(children, key=_age_of, reverse=True)
    threshold = schedule.age_categories.higher_rate_age_threshold

    results = []
    young_rank = 0
    for index, child in enumerate(ordered):
        age = _age_of(child)
        if age <= threshold:
            young_rank += 1
        position = child.get("position") if isinstance(child, dict) else None
        if position is None:
            # Rank among children aged 5 or under; rank 1 is the standard-track child
            position = young_rank if age <= threshold else index + 1
        results.append({
            "age": age,
            "position": position,
            "subsidy_rate": child_subsidy_rate(household_income, age, position, schedule),
            "is_eldest": index == 0,
            "uses_higher_rate": age <= threshold and position > 1,
        })
    return results


def standard_rate_array(incomes, schedule: RateSchedule = DEFAULT_SCHEDULE) -> np.ndarray:
    """Vectorized standard_rate over an array of incomes."""
    incomes = np.asarray(incomes, dtype=float)
    if np.any(incomes < 0) or np.any(~np.isfinite(incomes)):
        raise InvalidInput("Household income must be a non-negative number")
    t = schedule.standard_rate

    steps = np.floor((incomes - t.max_90_percent) / t.taper_increment)
    tapered = np.clip(t.max_rate - steps * t.taper_decrease, 0, t.max_rate)
    return np.select(
        [incomes <= t.max_90_percent, incomes >= t.min_zero_percent],
        [t.max_rate, 0.0],
        default=tapered,
    )


def higher_rate_array(incomes, schedule: RateSchedule = DEFAULT_SCHEDULE) -> np.ndarray:
    """Vectorized higher_rate over an array of incomes."""
    incomes = np.asarray(incomes, dtype=float)
    t = schedule.higher_rate
    standard = standard_rate_array(incomes, schedule)

    def band_taper(band_start, start_rate, floor_rate):
        steps = np.floor((incomes - band_start) / t.taper_increment) + 1
        return np.maximum(floor_rate, start_rate - steps * t.taper_decrease)

    return np.select(
        [
            incomes <= t.max_95_percent,
            incomes <= t.band1_end,
            incomes <= t.band2_end,
            incomes <= t.band3_end,
            incomes <= t.band4_end,
        ],
        [
            t.max_rate,
            band_taper(t.band1_start, t.max_rate, t.band2_rate),
            t.band2_rate,
            band_taper(t.band3_start, t.band2_rate, t.band4_rate),
            t.band4_rate,
        ],
        default=standard,
    )


def rate_table(incomes, schedule: RateSchedule = DEFAULT_SCHEDULE) -> pd.DataFrame:
    """
    Tabulate standard and higher rates over a range of incomes.

    Returns:
        DataFrame with income, standard_rate and higher_rate columns
    """
    incomes = np.asarray(incomes, dtype=float)
    return pd.DataFrame({
        "income": incomes,
        "standard_rate": standard_rate_array(incomes, schedule),
        "higher_rate": higher_rate_array(incomes, schedule),
    })
