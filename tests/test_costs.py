"""Tests for the cost calculator."""

import pytest

from ccs_calc.calculators.costs import (
    annual_cost,
    apply_withholding,
    complete_cost_breakdown,
    cost_percentage,
    net_income,
    subsidy_per_day,
    subsidy_per_hour,
    weekly_costs,
    weekly_costs_from_daily_rate,
)
from ccs_calc.config import RateSchedule
from ccs_calc.errors import InvalidInput


class TestSubsidyPerHour:
    """Test the subsidy per hour of care."""

    def test_basic(self):
        assert subsidy_per_hour(72, 12.5) == pytest.approx(9.0)

    def test_zero_rate(self):
        assert subsidy_per_hour(0, 12.5) == 0

    def test_rate_out_of_range(self):
        with pytest.raises(InvalidInput, match="Subsidy rate"):
            subsidy_per_hour(101, 12.5)

    def test_per_day(self):
        assert subsidy_per_day(50, 120) == pytest.approx(60)


class TestApplyWithholding:
    """Test splitting subsidy into withheld and paid portions."""

    def test_default_rate(self):
        result = apply_withholding(342.0)
        assert result.gross_subsidy == 342.0
        assert result.withheld_amount == 17.1
        assert result.paid_subsidy == 324.9
        assert result.withholding_rate == 5

    def test_zero_rate(self):
        result = apply_withholding(100, 0)
        assert result.withheld_amount == 0
        assert result.paid_subsidy == 100

    def test_full_rate(self):
        result = apply_withholding(100, 100)
        assert result.paid_subsidy == 0

    def test_parts_sum_to_gross(self):
        for gross in [0, 0.01, 1.23, 99.99, 342.0, 1234.56, 1000.005]:
            for rate in [0, 5, 12.5, 33.3, 100]:
                result = apply_withholding(gross, rate)
                assert abs(result.withheld_amount + result.paid_subsidy - gross) <= 0.01 + 1e-9

    def test_schedule_default(self):
        schedule = RateSchedule.from_dict({"withholding": {"default_rate": 10}})
        assert apply_withholding(100, schedule=schedule).withheld_amount == 10

    def test_rate_out_of_range(self):
        with pytest.raises(InvalidInput, match="Withholding rate"):
            apply_withholding(100, 150)

    def test_negative_amount(self):
        with pytest.raises(InvalidInput, match="Subsidy amount"):
            apply_withholding(-1)


class TestWeeklyCosts:
    """Test weekly cost breakdown."""

    def test_hours_within_entitlement(self):
        result = weekly_costs(9.0, 12.5, 38, 40)
        assert result.hours_with_subsidy == 38
        assert result.hours_without_subsidy == 2
        assert result.weekly_gross_subsidy == 342.0
        assert result.weekly_withheld == 17.1
        assert result.weekly_subsidy == 324.9
        assert result.weekly_full_cost == 500.0
        assert result.weekly_out_of_pocket == 175.1

    def test_out_of_pocket_is_full_cost_less_paid(self):
        result = weekly_costs(7.3, 13.0, 36, 45, withholding_rate=5)
        assert result.weekly_out_of_pocket == round(result.weekly_full_cost - result.weekly_subsidy, 2)

    def test_actual_below_entitlement(self):
        result = weekly_costs(9.0, 12.5, 50, 20)
        assert result.hours_with_subsidy == 20
        assert result.hours_without_subsidy == 0

    def test_negative_hours(self):
        with pytest.raises(InvalidInput, match="Actual hours"):
            weekly_costs(9.0, 12.5, 38, -1)

    def test_daily_variant(self):
        result = weekly_costs_from_daily_rate(50, 120, 3, 5)
        assert result.weekly_gross_subsidy == 150
        assert result.weekly_subsidy == 142.5
        assert result.weekly_full_cost == 600
        assert result.weekly_out_of_pocket == 457.5

    def test_daily_variant_days_limit(self):
        with pytest.raises(InvalidInput, match="Actual days"):
            weekly_costs_from_daily_rate(50, 120, 3, 8)


class TestAnnualCost:
    """Test annualization."""

    def test_default_weeks(self):
        assert annual_cost(175.1) == 9105.2

    def test_custom_weeks(self):
        assert annual_cost(100, weeks_per_year=48) == 4800

    def test_zero_weeks(self):
        with pytest.raises(InvalidInput, match="Weeks per year"):
            annual_cost(100, weeks_per_year=0)


class TestNetIncomeAndPercentage:
    """Test net income and cost percentage."""

    def test_net_income(self):
        assert net_income(180000, 9105.2) == pytest.approx(170894.8)

    def test_net_income_floored_at_zero(self):
        assert net_income(50000, 60000) == 0

    def test_cost_percentage(self):
        assert cost_percentage(9105.2, 180000) == 5.06

    def test_cost_percentage_no_income(self):
        assert cost_percentage(100, 0) == 0


class TestCompleteCostBreakdown:
    """Test the full per-child cost chain."""

    def test_end_to_end(self):
        result = complete_cost_breakdown(180000, 72, 12.5, "centre-based", 3, 38, 40)
        assert result.effective_hourly_rate == 12.5
        assert result.subsidy_per_hour == pytest.approx(9.0)
        assert result.weekly.weekly_out_of_pocket == 175.1
        assert result.annual.out_of_pocket == 9105.2
        assert result.annual.subsidy == round(324.9 * 52, 2)
        assert result.net_income == pytest.approx(170894.8)
        assert result.cost_percentage == 5.06
        assert result.withholding_rate == 5

    def test_fee_above_cap(self):
        result = complete_cost_breakdown(180000, 72, 20, "centre-based", 3, 38, 40)
        assert result.effective_hourly_rate == 14.63
        assert result.weekly.weekly_full_cost == 800.0
