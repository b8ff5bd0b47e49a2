"""
Scenario generator.

Enumerates combinations of parental work days and computes the full
income, subsidy and cost outcome of each one.

Two entry points share the same per-combination logic:
- generate_exhaustive: every (parent1_days, parent2_days) in 0-5 x 0-5 except 0+0
- generate_common: a curated list of typical arrangements

A combination that fails to compute is dropped from the result and logged;
it never aborts the batch.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from tqdm import tqdm

from ..calculators.activity_test import hours_per_fortnight, subsidised_hours
from ..calculators.costs import annual_cost, cost_percentage, round2, subsidy_per_hour, weekly_costs
from ..calculators.income import adjusted_income, household_income
from ..calculators.rate_caps import age_category, shared_hourly_rates
from ..calculators.schedule import childcare_hours_needed
from ..calculators.subsidy_rate import STANDARD, higher_rate, rate_tracks, standard_rate
from ..config import DEFAULT_SCHEDULE, CareType, RateSchedule
from .models import Child, CostBreakdown, FamilyProfile, GenerationResult, Scenario

logger = logging.getLogger(__name__)

# Hard upper bound on days per parent; keeps enumeration at 36 combinations
MAX_DAYS = 5

COMMON_COMBINATIONS: Tuple[Tuple[int, int], ...] = (
    (5, 5),
    (5, 4),
    (5, 3),
    (5, 2),
    (5, 0),
    (4, 4),
    (4, 3),
    (4, 2),
    (3, 3),
    (3, 2),
    (2, 2),
)

HoursPolicy = Callable[[float, float, float, float], float]


@dataclass(frozen=True)
class ScenarioOutcome:
    """Result of computing one combination: a scenario or the error it raised."""

    parent1_days: int
    parent2_days: int
    scenario: Optional[Scenario] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.scenario is not None


def combination_name(parent1_days: int, parent2_days: int, single_parent: bool = False) -> str:
    """Display name for a work-day combination."""
    if single_parent:
        if parent1_days == MAX_DAYS:
            return f"{parent1_days} days (Full-time)"
        return "1 day" if parent1_days == 1 else f"{parent1_days} days"

    name = f"{parent1_days}+{parent2_days} days"
    if parent1_days == MAX_DAYS and parent2_days == MAX_DAYS:
        return f"{name} (Both full-time)"
    if parent1_days == 0 or parent2_days == 0:
        return f"{name} (One parent working)"
    return name


def _scenario_id(parent1_days: int, parent2_days: int) -> str:
    return f"scenario-{parent1_days}-{parent2_days}-{uuid.uuid4().hex[:8]}"


def _effective_rates(children: Sequence[Child], schedule: RateSchedule) -> List[float]:
    # Children in a per-family care type share one cap
    groups: Dict[CareType, List[int]] = {}
    for i, child in enumerate(children):
        groups.setdefault(CareType.parse(child.care_type), []).append(i)

    rates = [0.0] * len(children)
    for care_type, indices in groups.items():
        shared = shared_hourly_rates(
            [children[i].provider_fee for i in indices],
            care_type,
            [children[i].age for i in indices],
            schedule,
        )
        for i, rate in zip(indices, shared):
            rates[i] = rate
    return rates


def build_scenario(
    family: FamilyProfile,
    children: Sequence[Child],
    parent1_days: int,
    parent2_days: int = 0,
    name: Optional[str] = None,
    withholding_rate: Optional[float] = None,
    hours_policy: HoursPolicy = childcare_hours_needed,
    schedule: RateSchedule = DEFAULT_SCHEDULE,
) -> Scenario:
    """
    Compute one scenario.

    Args:
        family: Parent incomes and daily hours
        children: Children in care
        parent1_days: Days parent 1 works
        parent2_days: Days parent 2 works
        name: Display name (default: derived from the day combination)
        withholding_rate: Withholding percentage override
        hours_policy: Function (p1_days, p1_hours, p2_days, p2_hours) -> weekly
            childcare hours needed
        schedule: Rate schedule

    Raises:
        InvalidInput: if any family or child value is invalid
    """
    p1_hours = family.parent1_hours_per_day
    p2_hours = family.parent2_hours_per_day or 0
    p2_base = family.parent2_base_income or 0

    parent1_income = adjusted_income(family.parent1_base_income, parent1_days, p1_hours, schedule=schedule)
    parent2_income = (
        adjusted_income(p2_base, parent2_days, p2_hours, schedule=schedule) if p2_base > 0 else 0.0
    )
    household = round2(household_income(parent1_income, parent2_income))

    entitlement = subsidised_hours(
        hours_per_fortnight(parent1_days, p1_hours, schedule),
        hours_per_fortnight(parent2_days, p2_hours, schedule),
        schedule,
    )
    hours_needed = hours_policy(parent1_days, p1_hours, parent2_days, p2_hours)
    available_hours = min(hours_needed, entitlement.hours_per_week)

    for child in children:
        age_category(child.age, schedule)
    tracks = rate_tracks([child.age for child in children], schedule)
    effective_rates = _effective_rates(children, schedule)

    child_results = []
    for child, track, effective in zip(children, tracks, effective_rates):
        care_type = CareType.parse(child.care_type)
        if track == STANDARD:
            rate = standard_rate(household, schedule)
        else:
            rate = higher_rate(household, schedule)

        per_hour = subsidy_per_hour(rate, effective)
        weekly = weekly_costs(
            per_hour,
            child.provider_fee,
            available_hours,
            child.hours_per_week,
            withholding_rate,
            schedule,
        )
        child_results.append(CostBreakdown(
            age=child.age,
            care_type=care_type.value,
            rate_track=track,
            subsidy_rate=rate,
            effective_hourly_rate=round2(effective),
            subsidy_per_hour=round2(per_hour),
            hours_needed=hours_needed,
            weekly_subsidy=weekly.weekly_subsidy,
            weekly_gross_subsidy=weekly.weekly_gross_subsidy,
            weekly_withheld=weekly.weekly_withheld,
            weekly_full_cost=weekly.weekly_full_cost,
            weekly_out_of_pocket=weekly.weekly_out_of_pocket,
            hours_with_subsidy=weekly.hours_with_subsidy,
            hours_without_subsidy=weekly.hours_without_subsidy,
            withholding_rate=weekly.withholding_rate,
        ))

    total_weekly_subsidy = round2(sum(c.weekly_subsidy for c in child_results))
    total_weekly_cost = round2(sum(c.weekly_full_cost for c in child_results))
    total_weekly_out_of_pocket = round2(sum(c.weekly_out_of_pocket for c in child_results))

    annual_subsidy = annual_cost(total_weekly_subsidy, schedule=schedule)
    annual_full_cost = annual_cost(total_weekly_cost, schedule=schedule)
    annual_out_of_pocket = annual_cost(total_weekly_out_of_pocket, schedule=schedule)

    single_parent = p2_base <= 0 and parent2_days == 0
    return Scenario(
        id=_scenario_id(parent1_days, parent2_days),
        name=name or combination_name(parent1_days, parent2_days, single_parent),
        parent1_days=parent1_days,
        parent2_days=parent2_days,
        parent1_income=round2(parent1_income),
        parent2_income=round2(parent2_income),
        household_income=household,
        subsidised_hours=entitlement,
        child_results=child_results,
        total_weekly_subsidy=total_weekly_subsidy,
        total_weekly_cost=total_weekly_cost,
        total_weekly_out_of_pocket=total_weekly_out_of_pocket,
        annual_subsidy=annual_subsidy,
        annual_cost=annual_full_cost,
        annual_out_of_pocket=annual_out_of_pocket,
        # Not clamped: costs above income give a negative net income
        net_income_after_childcare=round2(household - annual_out_of_pocket),
        childcare_cost_percentage=cost_percentage(annual_out_of_pocket, household),
    )


def _compute(family, children, parent1_days, parent2_days, name, withholding_rate, hours_policy, schedule):
    try:
        scenario = build_scenario(
            family,
            children,
            parent1_days,
            parent2_days,
            name=name,
            withholding_rate=withholding_rate,
            hours_policy=hours_policy,
            schedule=schedule,
        )
    except Exception as e:
        logger.warning("Dropping scenario %s+%s days: %s", parent1_days, parent2_days, e)
        return ScenarioOutcome(parent1_days, parent2_days, error=str(e))
    return ScenarioOutcome(parent1_days, parent2_days, scenario=scenario)


def enumerate_scenarios(
    family: FamilyProfile,
    children: Sequence[Child],
    combinations: Sequence[Tuple[int, int]],
    withholding_rate: Optional[float] = None,
    hours_policy: HoursPolicy = childcare_hours_needed,
    show_progress: bool = False,
    schedule: RateSchedule = DEFAULT_SCHEDULE,
) -> GenerationResult:
    """
    Compute a scenario for each (parent1_days, parent2_days) combination.

    Returns:
        GenerationResult with the successful scenarios in combination order
        and a record of each dropped combination
    """
    single_parent = not family.has_second_earner
    iterator = (
        tqdm(combinations, total=len(combinations), desc="Scenarios")
        if show_progress
        else combinations
    )

    result = GenerationResult()
    for parent1_days, parent2_days in iterator:
        name = combination_name(parent1_days, parent2_days, single_parent)
        outcome = _compute(
            family, children, parent1_days, parent2_days, name, withholding_rate, hours_policy, schedule
        )
        if outcome.ok:
            result.scenarios.append(outcome.scenario)
        else:
            result.dropped.append({
                "parent1_days": outcome.parent1_days,
                "parent2_days": outcome.parent2_days,
                "error": outcome.error,
            })

    logger.debug(
        "Generated %d scenarios (%d dropped) from %d combinations",
        len(result.scenarios),
        result.dropped_count,
        len(combinations),
    )
    return result


def exhaustive_combinations(two_earners: bool = True) -> List[Tuple[int, int]]:
    """All day combinations except 0+0; parent 2 stays at 0 for a single earner."""
    if not two_earners:
        return [(days, 0) for days in range(MAX_DAYS, 0, -1)]
    return [
        (p1, p2)
        for p1 in range(MAX_DAYS, -1, -1)
        for p2 in range(MAX_DAYS, -1, -1)
        if (p1, p2) != (0, 0)
    ]


def generate_exhaustive(
    family: FamilyProfile,
    children: Sequence[Child],
    withholding_rate: Optional[float] = None,
    hours_policy: HoursPolicy = childcare_hours_needed,
    show_progress: bool = False,
    schedule: RateSchedule = DEFAULT_SCHEDULE,
) -> List[Scenario]:
    """Every work-day combination: 35 for two earners, 5 for a single earner."""
    combinations = exhaustive_combinations(family.has_second_earner)
    return enumerate_scenarios(
        family, children, combinations, withholding_rate, hours_policy, show_progress, schedule
    ).scenarios


def generate_single_parent(
    family: FamilyProfile,
    children: Sequence[Child],
    withholding_rate: Optional[float] = None,
    hours_policy: HoursPolicy = childcare_hours_needed,
    show_progress: bool = False,
    schedule: RateSchedule = DEFAULT_SCHEDULE,
) -> List[Scenario]:
    """Parent 1 working 5 down to 1 days, parent 2 not working."""
    return enumerate_scenarios(
        family,
        children,
        exhaustive_combinations(two_earners=False),
        withholding_rate,
        hours_policy,
        show_progress,
        schedule,
    ).scenarios


def generate_common(
    family: FamilyProfile,
    children: Sequence[Child],
    withholding_rate: Optional[float] = None,
    hours_policy: HoursPolicy = childcare_hours_needed,
    show_progress: bool = False,
    schedule: RateSchedule = DEFAULT_SCHEDULE,
) -> List[Scenario]:
    """
    A curated set of typical arrangements (5+5, 5+4, ... 2+2).

    Falls back to generate_single_parent when parent 2 has no base income.
    """
    if not family.has_second_earner:
        return generate_single_parent(
            family, children, withholding_rate, hours_policy, show_progress, schedule
        )
    return enumerate_scenarios(
        family, children, COMMON_COMBINATIONS, withholding_rate, hours_policy, show_progress, schedule
    ).scenarios


def create_custom_scenario(
    family: FamilyProfile,
    children: Sequence[Child],
    parent1_days: int,
    parent2_days: int = 0,
    name: Optional[str] = None,
    withholding_rate: Optional[float] = None,
    hours_policy: HoursPolicy = childcare_hours_needed,
    schedule: RateSchedule = DEFAULT_SCHEDULE,
) -> Optional[Scenario]:
    """
    Compute a single user-defined scenario.

    Returns:
        The scenario flagged as custom, or None if it could not be computed
    """
    outcome = _compute(
        family, children, parent1_days, parent2_days, name, withholding_rate, hours_policy, schedule
    )
    if not outcome.ok:
        return None
    outcome.scenario.is_custom = True
    return outcome.scenario

