"""
ccs-calc: Australian Child Care Subsidy estimator.

Computes CCS percentages, subsidised hours and out-of-pocket costs for a
family, and compares the outcomes of different parental work-day
arrangements.
"""

from .config import DEFAULT_SCHEDULE, CareType, RateSchedule, load_schedule
from .errors import InvalidInput
from .scenarios import (
    Child,
    FamilyProfile,
    Scenario,
    compare,
    create_custom_scenario,
    filter_scenarios,
    find_best,
    find_optimal,
    generate_common,
    generate_exhaustive,
)

__version__ = "0.1.0"
__all__ = [
    "CareType",
    "RateSchedule",
    "DEFAULT_SCHEDULE",
    "load_schedule",
    "InvalidInput",
    "FamilyProfile",
    "Child",
    "Scenario",
    "generate_exhaustive",
    "generate_common",
    "create_custom_scenario",
    "compare",
    "filter_scenarios",
    "find_best",
    "find_optimal",
]
