"""
Scenario generation and analysis over parental work-day combinations.
"""

from .analyzer import (
    compare,
    comparison_report,
    filter_scenarios,
    find_best,
    find_optimal,
    scenarios_to_frame,
    sort_scenarios,
)
from .generator import (
    COMMON_COMBINATIONS,
    ScenarioOutcome,
    build_scenario,
    create_custom_scenario,
    enumerate_scenarios,
    generate_common,
    generate_exhaustive,
    generate_single_parent,
)
from .models import Child, CostBreakdown, FamilyProfile, GenerationResult, Scenario
from .periods import PERIOD_MULTIPLIERS, convert_to_period

__all__ = [
    "FamilyProfile",
    "Child",
    "CostBreakdown",
    "Scenario",
    "GenerationResult",
    "ScenarioOutcome",
    "COMMON_COMBINATIONS",
    "build_scenario",
    "create_custom_scenario",
    "enumerate_scenarios",
    "generate_common",
    "generate_exhaustive",
    "generate_single_parent",
    "compare",
    "sort_scenarios",
    "find_best",
    "find_optimal",
    "filter_scenarios",
    "scenarios_to_frame",
    "comparison_report",
    "PERIOD_MULTIPLIERS",
    "convert_to_period",
]
