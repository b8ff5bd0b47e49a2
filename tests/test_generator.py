"""Tests for the scenario generator."""

import logging

import pytest

from ccs_calc.calculators.subsidy_rate import HIGHER, STANDARD
from ccs_calc.scenarios.generator import (
    COMMON_COMBINATIONS,
    build_scenario,
    combination_name,
    create_custom_scenario,
    enumerate_scenarios,
    exhaustive_combinations,
    generate_common,
    generate_exhaustive,
    generate_single_parent,
)
from ccs_calc.scenarios.models import Child, FamilyProfile


@pytest.fixture
def family():
    return FamilyProfile(
        parent1_base_income=100000,
        parent1_hours_per_day=7.6,
        parent2_base_income=80000,
        parent2_hours_per_day=7.6,
    )


@pytest.fixture
def single_earner():
    return FamilyProfile(parent1_base_income=90000, parent1_hours_per_day=7.6)


@pytest.fixture
def child():
    return Child(age=3, care_type="centre-based", provider_fee=12.50, hours_per_week=40)


class TestCombinations:
    """Test work-day combinations and their names."""

    def test_exhaustive_two_earners(self):
        combos = exhaustive_combinations(True)
        assert len(combos) == 35
        assert len(set(combos)) == 35
        assert (0, 0) not in combos
        assert combos[0] == (5, 5)

    def test_exhaustive_single_earner(self):
        assert exhaustive_combinations(False) == [(5, 0), (4, 0), (3, 0), (2, 0), (1, 0)]

    def test_common(self):
        assert len(COMMON_COMBINATIONS) == 11
        assert COMMON_COMBINATIONS[0] == (5, 5)
        assert COMMON_COMBINATIONS[-1] == (2, 2)

    def test_names(self):
        assert combination_name(5, 5) == "5+5 days (Both full-time)"
        assert combination_name(5, 0) == "5+0 days (One parent working)"
        assert combination_name(0, 3) == "0+3 days (One parent working)"
        assert combination_name(3, 2) == "3+2 days"

    def test_single_parent_names(self):
        assert combination_name(5, 0, single_parent=True) == "5 days (Full-time)"
        assert combination_name(3, 0, single_parent=True) == "3 days"
        assert combination_name(1, 0, single_parent=True) == "1 day"


class TestBuildScenario:
    """Test a single scenario end to end."""

    def test_end_to_end(self, family, child):
        scenario = build_scenario(family, [child], 5, 5)
        assert scenario.household_income == 180000
        assert scenario.subsidised_hours.hours_per_week == 50

        result = scenario.child_results[0]
        assert result.rate_track == STANDARD
        assert 0 < result.subsidy_rate < 90
        assert result.subsidy_rate == 72
        assert result.effective_hourly_rate == 12.50
        assert result.subsidy_per_hour == 9.0
        assert result.hours_needed == pytest.approx(38)
        assert result.weekly_gross_subsidy == 342.0
        assert result.weekly_subsidy == 324.9
        assert result.weekly_full_cost == 500.0
        assert result.weekly_out_of_pocket == round(12.50 * 40 - result.weekly_subsidy, 2)

        assert scenario.total_weekly_out_of_pocket == 175.1
        assert scenario.annual_out_of_pocket == round(scenario.total_weekly_out_of_pocket * 52, 2)
        assert scenario.annual_subsidy == round(scenario.total_weekly_subsidy * 52, 2)
        assert scenario.annual_cost == 26000.0
        assert scenario.net_income_after_childcare == pytest.approx(
            scenario.household_income - scenario.annual_out_of_pocket, abs=0.005
        )
        assert scenario.childcare_cost_percentage == 5.06

    def test_parent_at_home(self, family, child):
        scenario = build_scenario(family, [child], 0, 5)
        assert scenario.parent1_income == 0
        assert scenario.household_income == 80000
        # Non-working parent keeps the family on the base band
        assert scenario.subsidised_hours.hours_per_week == 36
        assert scenario.child_results[0].hours_with_subsidy == 36
        assert scenario.child_results[0].subsidy_rate == 90

    def test_younger_sibling_on_higher_rate(self, family, child):
        baby = Child(age=1, care_type="centre-based", provider_fee=12.50, hours_per_week=40)
        scenario = build_scenario(family, [child, baby], 5, 5)
        assert [c.rate_track for c in scenario.child_results] == [STANDARD, HIGHER]
        assert scenario.child_results[1].subsidy_rate == 82

    def test_in_home_cap_shared(self, family):
        children = [
            Child(age=2, care_type="in-home-care", provider_fee=50, hours_per_week=30),
            Child(age=4, care_type="in-home-care", provider_fee=50, hours_per_week=30),
        ]
        scenario = build_scenario(family, children, 5, 5)
        assert [c.effective_hourly_rate for c in scenario.child_results] == [19.9, 19.9]

    def test_in_home_headroom_passes_to_sibling(self, family):
        children = [
            Child(age=2, care_type="in-home-care", provider_fee=10, hours_per_week=30),
            Child(age=4, care_type="in-home-care", provider_fee=50, hours_per_week=30),
        ]
        scenario = build_scenario(family, children, 5, 5)
        rates = [c.effective_hourly_rate for c in scenario.child_results]
        assert rates == [10, 29.8]
        assert sum(rates) == pytest.approx(39.80)

    def test_in_home_cap_separate_from_other_care(self, family, child):
        nanny = Child(age=1, care_type="in-home-care", provider_fee=50, hours_per_week=30)
        scenario = build_scenario(family, [child, nanny], 5, 5)
        assert [c.effective_hourly_rate for c in scenario.child_results] == [12.5, 39.8]

    def test_net_income_can_go_negative(self):
        family = FamilyProfile(parent1_base_income=20000, parent1_hours_per_day=7.6)
        expensive = Child(age=3, care_type="centre-based", provider_fee=30, hours_per_week=50)
        scenario = build_scenario(family, [expensive], 1)
        assert scenario.household_income == 4000
        assert scenario.annual_out_of_pocket == 73056.36
        assert scenario.net_income_after_childcare < 0
        assert scenario.net_income_after_childcare == pytest.approx(-69056.36, abs=0.005)

    def test_withholding_override(self, family, child):
        scenario = build_scenario(family, [child], 5, 5, withholding_rate=0)
        assert scenario.total_weekly_subsidy == 342.0

    def test_hours_policy_override(self, family, child):
        scenario = build_scenario(family, [child], 5, 5, hours_policy=lambda *args: 10)
        assert scenario.child_results[0].hours_needed == 10
        assert scenario.child_results[0].hours_with_subsidy == 10

    def test_to_dict(self, family, child):
        data = build_scenario(family, [child], 5, 5).to_dict()
        assert data["subsidised_hours"]["hours_per_week"] == 50
        assert data["child_results"][0]["care_type"] == "centre-based"
        assert data["is_favorite"] is False


class TestGenerateExhaustive:
    """Test exhaustive enumeration."""

    def test_two_earners(self, family, child):
        scenarios = generate_exhaustive(family, [child])
        pairs = {(s.parent1_days, s.parent2_days) for s in scenarios}
        assert len(scenarios) == 35
        assert len(pairs) == 35
        assert (0, 0) not in pairs

    def test_single_earner(self, single_earner, child):
        scenarios = generate_exhaustive(single_earner, [child])
        assert len(scenarios) == 5
        assert all(s.parent2_days == 0 for s in scenarios)
        assert scenarios[0].name == "5 days (Full-time)"

    def test_net_income_identity(self, family, child):
        for s in generate_exhaustive(family, [child]):
            assert s.net_income_after_childcare == pytest.approx(s.household_income - s.annual_out_of_pocket, abs=0.005)
            assert s.net_income_after_childcare == round(s.net_income_after_childcare, 2)
            assert s.annual_out_of_pocket == round(s.total_weekly_out_of_pocket * 52, 2)

    def test_unique_ids(self, family, child):
        scenarios = generate_exhaustive(family, [child])
        assert len({s.id for s in scenarios}) == 35
        assert scenarios[0].id.startswith("scenario-5-5-")

    def test_ui_flags_default_off(self, family, child):
        for s in generate_exhaustive(family, [child]):
            assert s.is_favorite is False
            assert s.is_custom is False

    def test_progress_bar(self, family, child):
        assert len(generate_exhaustive(family, [child], show_progress=True)) == 35


class TestDroppedScenarios:
    """Failures are dropped, never raised."""

    def test_invalid_child_age(self, family):
        bad = Child(age=25, care_type="centre-based", provider_fee=12.50, hours_per_week=40)
        assert generate_exhaustive(family, [bad]) == []

    def test_unknown_care_type(self, family):
        bad = Child(age=3, care_type="nanny", provider_fee=12.50, hours_per_week=40)
        assert generate_common(family, [bad]) == []

    def test_dropped_records(self, family):
        bad = Child(age=25, care_type="centre-based", provider_fee=12.50, hours_per_week=40)
        result = enumerate_scenarios(family, [bad], exhaustive_combinations(True))
        assert result.scenarios == []
        assert result.dropped_count == 35
        assert result.dropped[0]["parent1_days"] == 5
        assert "Child age" in result.dropped[0]["error"]

    def test_drop_is_logged(self, family, caplog):
        bad = Child(age=3, care_type="nanny", provider_fee=12.50, hours_per_week=40)
        with caplog.at_level(logging.WARNING, logger="ccs_calc.scenarios.generator"):
            generate_single_parent(family, [bad])
        assert "Dropping scenario" in caplog.text

    def test_invalid_withholding(self, family, child):
        assert generate_exhaustive(family, [child], withholding_rate=150) == []


class TestGenerateCommon:
    """Test the curated subset."""

    def test_two_earners(self, family, child):
        scenarios = generate_common(family, [child])
        assert len(scenarios) == 11
        assert scenarios[0].name == "5+5 days (Both full-time)"

    def test_falls_back_to_single_parent(self, single_earner, child):
        scenarios = generate_common(single_earner, [child])
        assert [s.parent1_days for s in scenarios] == [5, 4, 3, 2, 1]


class TestCustomScenario:
    """Test user-defined scenarios."""

    def test_custom(self, family, child):
        scenario = create_custom_scenario(family, [child], 4, 3, name="Compressed week")
        assert scenario.is_custom is True
        assert scenario.name == "Compressed week"
        assert scenario.parent1_days == 4

    def test_default_name(self, family, child):
        assert create_custom_scenario(family, [child], 4, 3).name == "4+3 days"

    def test_invalid_returns_none(self, family):
        bad = Child(age=-2, care_type="centre-based", provider_fee=12.50, hours_per_week=40)
        assert create_custom_scenario(family, [bad], 4, 3) is None

    def test_invalid_days_returns_none(self, family, child):
        assert create_custom_scenario(family, [child], 9, 3) is None
