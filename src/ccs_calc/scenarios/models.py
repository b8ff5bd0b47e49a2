"""
Input and result records for scenario generation.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Union

from ..calculators.activity_test import SubsidisedHours
from ..config import CareType
from ..errors import InvalidInput


@dataclass(frozen=True)
class FamilyProfile:
    """Full-time base incomes and daily hours for up to two earners."""

    parent1_base_income: float
    parent1_hours_per_day: float
    parent2_base_income: float = 0
    parent2_hours_per_day: float = 0

    @property
    def has_second_earner(self) -> bool:
        return bool(self.parent2_base_income) and self.parent2_base_income > 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FamilyProfile":
        try:
            return cls(
                parent1_base_income=data["parent1_base_income"],
                parent1_hours_per_day=data["parent1_hours_per_day"],
                parent2_base_income=data.get("parent2_base_income") or 0,
                parent2_hours_per_day=data.get("parent2_hours_per_day") or 0,
            )
        except KeyError as e:
            raise InvalidInput(f"Family profile is missing {e.args[0]}") from e


@dataclass(frozen=True)
class Child:
    """A child in care. Validated when a scenario is computed."""

    age: float
    care_type: Union[str, CareType]
    provider_fee: float
    hours_per_week: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Child":
        try:
            return cls(
                age=data["age"],
                care_type=data["care_type"],
                provider_fee=data["provider_fee"],
                hours_per_week=data["hours_per_week"],
            )
        except KeyError as e:
            raise InvalidInput(f"Child is missing {e.args[0]}") from e


@dataclass(frozen=True)
class CostBreakdown:
    """Per-child result within one scenario."""

    age: float
    care_type: str
    rate_track: str
    subsidy_rate: float
    effective_hourly_rate: float
    subsidy_per_hour: float
    hours_needed: float
    weekly_subsidy: float
    weekly_gross_subsidy: float
    weekly_withheld: float
    weekly_full_cost: float
    weekly_out_of_pocket: float
    hours_with_subsidy: float
    hours_without_subsidy: float
    withholding_rate: float


@dataclass
class Scenario:
    """
    One work-day combination and its computed outcome.

    ``is_favorite`` and ``is_custom`` belong to the caller; nothing in the
    calculators reads them.
    """

    id: str
    name: str
    parent1_days: int
    parent2_days: int
    parent1_income: float
    parent2_income: float
    household_income: float
    subsidised_hours: SubsidisedHours
    child_results: List[CostBreakdown]
    total_weekly_subsidy: float
    total_weekly_cost: float
    total_weekly_out_of_pocket: float
    annual_subsidy: float
    annual_cost: float
    annual_out_of_pocket: float
    net_income_after_childcare: float
    childcare_cost_percentage: float
    is_favorite: bool = False
    is_custom: bool = False

    @property
    def total_work_days(self) -> int:
        return self.parent1_days + self.parent2_days

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class GenerationResult:
    """Scenarios built by one generator call, plus the combinations that failed."""

    scenarios: List[Scenario] = field(default_factory=list)
    dropped: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def dropped_count(self) -> int:
        return len(self.dropped)
