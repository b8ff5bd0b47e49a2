"""
Scenario analyzer: compare, filter and rank scenarios.

Functions accept Scenario objects or plain mappings with the same field
names, and never modify their input.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import pandas as pd

from ..errors import InvalidInput
from .periods import PERIOD_LABELS, convert_to_period

logger = logging.getLogger(__name__)


def _get(scenario: Any, name: str) -> Any:
    if isinstance(scenario, Mapping):
        return scenario[name]
    return getattr(scenario, name)


def _work_days(scenario: Any) -> float:
    return _get(scenario, "parent1_days") + _get(scenario, "parent2_days")


METRICS: Dict[str, Callable[[Any], float]] = {
    "net_income": lambda s: _get(s, "net_income_after_childcare"),
    "out_of_pocket": lambda s: _get(s, "annual_out_of_pocket"),
    "subsidy": lambda s: _get(s, "annual_subsidy"),
    "work_days": _work_days,
    "cost_percentage": lambda s: _get(s, "childcare_cost_percentage"),
}

METRIC_ALIASES = {
    "net_income_after_childcare": "net_income",
    "annual_out_of_pocket": "out_of_pocket",
    "annual_subsidy": "subsidy",
    "total_work_days": "work_days",
    "childcare_cost_percentage": "cost_percentage",
}

DEFAULT_METRIC = "net_income"


def metric_value(scenario: Any, metric: str = DEFAULT_METRIC) -> float:
    """
    Value of a metric for one scenario.

    Unknown metrics fall back to net income after childcare.
    """
    key = METRIC_ALIASES.get(metric, metric)
    if key not in METRICS:
        logger.warning("Unknown metric %r, comparing by %s", metric, DEFAULT_METRIC)
        key = DEFAULT_METRIC
    return METRICS[key](scenario)


def _check_order(order: str) -> str:
    if order not in ("asc", "desc"):
        raise InvalidInput(f"Order must be 'asc' or 'desc', got {order!r}")
    return order


def compare(a: Any, b: Any, metric: str = DEFAULT_METRIC, order: str = "desc") -> float:
    """
    Comparator over a metric.

    Negative when ``a`` sorts first: for ``desc`` that is when a has the
    higher value, for ``asc`` when it has the lower one.
    """
    value_a = metric_value(a, metric)
    value_b = metric_value(b, metric)
    if _check_order(order) == "asc":
        return value_a - value_b
    return value_b - value_a


def sort_scenarios(
    scenarios: Optional[Sequence[Any]],
    metric: str = DEFAULT_METRIC,
    order: str = "desc",
) -> List[Any]:
    """Return a new list sorted by metric; ties keep their input order."""
    if not scenarios:
        return []
    return sorted(
        scenarios,
        key=lambda s: metric_value(s, metric),
        reverse=_check_order(order) == "desc",
    )


def find_best(scenarios: Optional[Sequence[Any]], metric: str = DEFAULT_METRIC) -> Optional[Any]:
    """
    Scenario with the highest value of the metric.

    "Best" always means highest, even for metrics such as out-of-pocket
    where lower is better. Use find_optimal to choose the direction.
    """
    if not scenarios:
        return None
    return sort_scenarios(scenarios, metric, "desc")[0]


def find_optimal(
    scenarios: Optional[Sequence[Any]],
    metric: str = DEFAULT_METRIC,
    direction: str = "max",
) -> Optional[Any]:
    """Scenario with the highest (``max``) or lowest (``min``) value of the metric."""
    if direction not in ("max", "min"):
        raise InvalidInput(f"Direction must be 'max' or 'min', got {direction!r}")
    if not scenarios:
        return None
    return sort_scenarios(scenarios, metric, "desc" if direction == "max" else "asc")[0]


FILTER_KEYS = ("min_net_income", "max_out_of_pocket", "min_work_days", "max_work_days", "favorites_only")


def filter_scenarios(
    scenarios: Optional[Sequence[Any]],
    criteria: Optional[Mapping[str, Any]] = None,
) -> List[Any]:
    """
    Scenarios satisfying every supplied criterion.

    Criteria keys: min_net_income, max_out_of_pocket, min_work_days,
    max_work_days, favorites_only. Missing or None criteria are ignored.
    """
    if not scenarios:
        return []
    criteria = dict(criteria or {})
    unknown = set(criteria) - set(FILTER_KEYS)
    if unknown:
        raise InvalidInput(f"Unknown filter criteria: {sorted(unknown)}")

    min_net = criteria.get("min_net_income")
    max_oop = criteria.get("max_out_of_pocket")
    min_days = criteria.get("min_work_days")
    max_days = criteria.get("max_work_days")
    favorites_only = criteria.get("favorites_only")

    def keep(scenario) -> bool:
        if min_net is not None and _get(scenario, "net_income_after_childcare") < min_net:
            return False
        if max_oop is not None and _get(scenario, "annual_out_of_pocket") > max_oop:
            return False
        if min_days is not None and _work_days(scenario) < min_days:
            return False
        if max_days is not None and _work_days(scenario) > max_days:
            return False
        if favorites_only and not _get(scenario, "is_favorite"):
            return False
        return True

    return [s for s in scenarios if keep(s)]


def scenarios_to_frame(scenarios: Optional[Sequence[Any]], period: str = "annual") -> pd.DataFrame:
    """
    Comparison table with one row per scenario.

    Subsidy, cost and out-of-pocket columns are shown for ``period``;
    income, net income and cost percentage are always annual.
    """
    if period not in PERIOD_LABELS:
        raise InvalidInput(f"Invalid period: {period}. Expected one of {list(PERIOD_LABELS)}")
    columns = [
        "name",
        "parent1_days",
        "parent2_days",
        "work_days",
        "household_income",
        "subsidy",
        "full_cost",
        "out_of_pocket",
        "net_income_after_childcare",
        "childcare_cost_percentage",
        "is_favorite",
    ]
    rows = []
    for s in scenarios or []:
        if period == "annual":
            subsidy = _get(s, "annual_subsidy")
            full_cost = _get(s, "annual_cost")
            out_of_pocket = _get(s, "annual_out_of_pocket")
        else:
            subsidy = round(convert_to_period(_get(s, "total_weekly_subsidy"), period), 2)
            full_cost = round(convert_to_period(_get(s, "total_weekly_cost"), period), 2)
            out_of_pocket = round(convert_to_period(_get(s, "total_weekly_out_of_pocket"), period), 2)
        rows.append({
            "name": _get(s, "name"),
            "parent1_days": _get(s, "parent1_days"),
            "parent2_days": _get(s, "parent2_days"),
            "work_days": _work_days(s),
            "household_income": _get(s, "household_income"),
            "subsidy": subsidy,
            "full_cost": full_cost,
            "out_of_pocket": out_of_pocket,
            "net_income_after_childcare": _get(s, "net_income_after_childcare"),
            "childcare_cost_percentage": _get(s, "childcare_cost_percentage"),
            "is_favorite": _get(s, "is_favorite"),
        })
    return pd.DataFrame(rows, columns=columns)


def comparison_report(
    scenarios: Optional[Sequence[Any]],
    metric: str = DEFAULT_METRIC,
    order: str = "desc",
    period: str = "annual",
) -> str:
    """Text report of scenarios sorted by metric, with the best scenario."""
    ordered = sort_scenarios(scenarios, metric, order)
    lines = [
        "=" * 70,
        "Child Care Subsidy Scenario Comparison",
        "=" * 70,
        f"Scenarios: {len(ordered)}",
        f"Sorted by: {metric} ({order})",
        f"Period:    {PERIOD_LABELS.get(period, period)}",
        "",
    ]

    if not ordered:
        lines.extend(["  No scenarios to compare", "", "=" * 70])
        return "\n".join(lines)

    frame = scenarios_to_frame(ordered, period)
    lines.append(frame.drop(columns=["is_favorite"]).to_string(index=False))
    lines.append("")

    best = find_best(ordered, DEFAULT_METRIC)
    cheapest = find_optimal(ordered, "out_of_pocket", "min")
    lines.extend([
        "Highest net income after childcare:",
        "-" * 40,
        f"  {_get(best, 'name')}: ${_get(best, 'net_income_after_childcare'):,.2f}",
        "",
        "Lowest annual out-of-pocket:",
        "-" * 40,
        f"  {_get(cheapest, 'name')}: ${_get(cheapest, 'annual_out_of_pocket'):,.2f}",
        "",
        "=" * 70,
    ])
    return "\n".join(lines)
