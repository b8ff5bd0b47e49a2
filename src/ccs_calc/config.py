"""
CCS rate schedule - 2025-26 financial year.

Source: Australian Government Department of Education, Child Care Subsidy
rates and thresholds for 2025-26.

All thresholds, caps and defaults used by the calculators live here. The
values are shipped as a plain parameter dict (``CCS_PARAMS_2025_26``) and
turned into an immutable ``RateSchedule`` once at import time. Update the
dict (or load a JSON file with the same shape) when new financial year
rates are published.
"""

import json
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Union

from .errors import InvalidInput


class CareType(str, Enum):
    """Approved care types with distinct hourly rate caps."""

    CENTRE_BASED = "centre-based"
    OSHC = "oshc"
    FAMILY_DAY_CARE = "family-day-care"
    IN_HOME_CARE = "in-home-care"

    @classmethod
    def parse(cls, value: Union[str, "CareType"]) -> "CareType":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidInput(f"Invalid care type: {value}") from None


# Parameters from the 2025-26 CCS rate tables
CCS_PARAMS_2025_26: Dict[str, Dict[str, Any]] = {
    # Standard rate - eldest child aged 5 or under, and all children over 5
    "standard_rate": {
        "max_90_percent": 85279,
        "taper_start": 85280,
        "taper_end": 535278,
        "min_zero_percent": 535279,
        "taper_increment": 5000,
        "taper_decrease": 1,
        "max_rate": 90,
        "source": "Family Assistance Law - CCS standard rate",
    },
    # Higher rate - second and younger children aged 5 or under
    "higher_rate": {
        "max_95_percent": 143273,
        "band1_start": 143274,
        "band1_end": 188272,
        "band2_start": 188273,
        "band2_end": 267562,
        "band3_start": 267563,
        "band3_end": 357562,
        "band4_start": 357563,
        "band4_end": 367562,
        "revert_to_standard": 367563,
        "taper_increment": 3000,
        "taper_decrease": 1,
        "max_rate": 95,
        "band2_rate": 80,
        "band4_rate": 50,
        "source": "Family Assistance Law - CCS higher rate",
    },
    # Hours of subsidised care per fortnight
    "activity_test": {
        "base_hours_per_fortnight": 72,
        "base_hours_per_week": 36,
        "higher_hours_per_fortnight": 100,
        "higher_hours_per_week": 50,
        "higher_activity_threshold": 48,
        "source": "Family Assistance Law - activity test",
    },
    # Hourly rate caps (AUD), school age / non-school age
    "rate_caps": {
        "centre-based": {"school_age": 12.81, "non_school_age": 14.63},
        "oshc": {"school_age": 12.81, "non_school_age": 14.63},
        "family-day-care": {"school_age": 13.56, "non_school_age": 13.56},
        "in-home-care": {
            "school_age": 39.80,
            "non_school_age": 39.80,
            "per_family": True,
        },
    },
    "age_categories": {
        "school_age_threshold": 6,
        "higher_rate_age_threshold": 5,
    },
    "work_defaults": {
        "full_time_hours_per_day": 7.6,
        "full_time_days_per_week": 5,
        "max_work_days_per_week": 5,
        "weeks_per_fortnight": 2,
        "weeks_per_year": 52,
        "default_care_hours_per_day": 10,
    },
    "validation_limits": {
        "min_income": 0,
        "max_income": 10_000_000,
        "min_age": 0,
        "max_age": 18,
        "min_hours_per_day": 0,
        "max_hours_per_day": 24,
        "min_days_per_week": 0,
        "max_days_per_week": 7,
    },
    "withholding": {
        "default_rate": 5,
        "min_rate": 0,
        "max_rate": 100,
    },
    "financial_year": {
        "year": "2025-26",
        "start_date": "2025-07-01",
        "end_date": "2026-06-30",
        "last_updated": "2026-01-31",
    },
}


@dataclass(frozen=True)
class StandardRateThresholds:
    max_90_percent: float
    taper_start: float
    taper_end: float
    min_zero_percent: float
    taper_increment: float
    taper_decrease: float
    max_rate: float
    source: str


@dataclass(frozen=True)
class HigherRateThresholds:
    max_95_percent: float
    band1_start: float
    band1_end: float
    band2_start: float
    band2_end: float
    band3_start: float
    band3_end: float
    band4_start: float
    band4_end: float
    revert_to_standard: float
    taper_increment: float
    taper_decrease: float
    max_rate: float
    band2_rate: float
    band4_rate: float
    source: str


@dataclass(frozen=True)
class ActivityTestThresholds:
    base_hours_per_fortnight: float
    base_hours_per_week: float
    higher_hours_per_fortnight: float
    higher_hours_per_week: float
    higher_activity_threshold: float
    source: str


@dataclass(frozen=True)
class HourlyCap:
    """Hourly fee cap for one care type."""

    school_age: float
    non_school_age: float
    per_family: bool = False


@dataclass(frozen=True)
class AgeCategories:
    school_age_threshold: int
    higher_rate_age_threshold: int


@dataclass(frozen=True)
class WorkDefaults:
    full_time_hours_per_day: float
    full_time_days_per_week: float
    max_work_days_per_week: int
    weeks_per_fortnight: int
    weeks_per_year: int
    default_care_hours_per_day: float


@dataclass(frozen=True)
class ValidationLimits:
    min_income: float
    max_income: float
    min_age: int
    max_age: int
    min_hours_per_day: float
    max_hours_per_day: float
    min_days_per_week: float
    max_days_per_week: float


@dataclass(frozen=True)
class Withholding:
    default_rate: float
    min_rate: float
    max_rate: float


@dataclass(frozen=True)
class FinancialYear:
    year: str
    start_date: str
    end_date: str
    last_updated: str


GROUPS = {
    "standard_rate": StandardRateThresholds,
    "higher_rate": HigherRateThresholds,
    "activity_test": ActivityTestThresholds,
    "age_categories": AgeCategories,
    "work_defaults": WorkDefaults,
    "validation_limits": ValidationLimits,
    "withholding": Withholding,
    "financial_year": FinancialYear,
}


@dataclass(frozen=True)
class RateSchedule:
    """Immutable set of CCS thresholds, caps and defaults."""

    standard_rate: StandardRateThresholds
    higher_rate: HigherRateThresholds
    activity_test: ActivityTestThresholds
    rate_caps: Mapping[CareType, HourlyCap]
    age_categories: AgeCategories
    work_defaults: WorkDefaults
    validation_limits: ValidationLimits
    withholding: Withholding
    financial_year: FinancialYear

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RateSchedule":
        """
        Build a schedule from a nested mapping shaped like CCS_PARAMS_2025_26.

        Keys missing from a group, and groups missing from ``data``, take the
        2025-26 values in CCS_PARAMS_2025_26. A ``rate_caps`` section replaces
        the shipped caps and must cover every care type.

        Raises:
            InvalidInput: on unknown groups, unknown keys or non-numeric values
        """
        unknown = set(data) - set(GROUPS) - {"rate_caps"}
        if unknown:
            raise InvalidInput(f"Unknown rate schedule sections: {sorted(unknown)}")

        kwargs: Dict[str, Any] = {}
        for name, group_cls in GROUPS.items():
            values = dict(CCS_PARAMS_2025_26[name])
            if name in data:
                overrides = data[name]
                if not isinstance(overrides, Mapping):
                    raise InvalidInput(f"Rate schedule section '{name}' must be a mapping")
                values.update(overrides)
            kwargs[name] = _build_group(group_cls, name, values)

        rate_caps = data.get("rate_caps", CCS_PARAMS_2025_26["rate_caps"])
        if not isinstance(rate_caps, Mapping):
            raise InvalidInput("Rate schedule section 'rate_caps' must be a mapping")
        caps = {}
        for care_type, values in rate_caps.items():
            caps[CareType.parse(care_type)] = _build_group(
                HourlyCap, f"rate_caps.{care_type}", values
            )
        missing = set(CareType) - set(caps)
        if missing:
            raise InvalidInput(
                f"Rate caps missing for care types: {sorted(c.value for c in missing)}"
            )
        kwargs["rate_caps"] = MappingProxyType(caps)

        return cls(**kwargs)

    def hourly_cap(self, care_type: Union[str, CareType]) -> HourlyCap:
        return self.rate_caps[CareType.parse(care_type)]


def _build_group(group_cls, name: str, values: Mapping[str, Any]):
    if not isinstance(values, Mapping):
        raise InvalidInput(f"Rate schedule section '{name}' must be a mapping")
    known = {f.name: f for f in fields(group_cls)}
    unknown = set(values) - set(known)
    if unknown:
        raise InvalidInput(f"Unknown keys in '{name}': {sorted(unknown)}")
    for key, value in values.items():
        expected = known[key].type
        if expected in (float, int, "float", "int"):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidInput(f"'{name}.{key}' must be a number, got {value!r}")
    try:
        return group_cls(**values)
    except TypeError as e:
        raise InvalidInput(f"Incomplete rate schedule section '{name}': {e}") from e


def load_schedule(path: Union[str, Path]) -> RateSchedule:
    """Load a rate schedule from a JSON file shaped like CCS_PARAMS_2025_26."""
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise InvalidInput(f"Rate schedule {path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise InvalidInput(f"Rate schedule {path} must contain a JSON object")
    return RateSchedule.from_dict(data)


DEFAULT_SCHEDULE = RateSchedule.from_dict(CCS_PARAMS_2025_26)
