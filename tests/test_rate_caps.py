"""Tests for hourly and daily rate caps."""

import pytest

from ccs_calc.calculators.rate_caps import (
    NON_SCHOOL_AGE,
    SCHOOL_AGE,
    age_category,
    daily_rate_cap,
    effective_daily_rate,
    effective_hourly_rate,
    hourly_rate_cap,
    is_per_family,
    shared_hourly_rates,
)
from ccs_calc.config import CareType
from ccs_calc.errors import InvalidInput


class TestAgeCategory:
    """Test school-age classification."""

    def test_non_school_age(self):
        assert age_category(0) == NON_SCHOOL_AGE
        assert age_category(5.9) == NON_SCHOOL_AGE

    def test_school_age(self):
        assert age_category(6) == SCHOOL_AGE
        assert age_category(18) == SCHOOL_AGE

    def test_out_of_range(self):
        with pytest.raises(InvalidInput, match="Child age"):
            age_category(19)
        with pytest.raises(InvalidInput):
            age_category(-1)


class TestHourlyRateCap:
    """Test cap lookups by care type and age."""

    def test_centre_based(self):
        assert hourly_rate_cap("centre-based", 3) == 14.63
        assert hourly_rate_cap("centre-based", 8) == 12.81

    def test_oshc(self):
        assert hourly_rate_cap(CareType.OSHC, 8) == 12.81

    def test_family_day_care_single_cap(self):
        assert hourly_rate_cap("family-day-care", 3) == 13.56
        assert hourly_rate_cap("family-day-care", 8) == 13.56

    def test_in_home_care(self):
        assert hourly_rate_cap("in-home-care", 3) == 39.80
        assert is_per_family("in-home-care")
        assert not is_per_family("centre-based")

    def test_unknown_care_type(self):
        with pytest.raises(InvalidInput, match="Invalid care type"):
            hourly_rate_cap("nanny", 3)


class TestEffectiveHourlyRate:
    """Test min(fee, cap)."""

    def test_fee_below_cap(self):
        assert effective_hourly_rate(12.50, "centre-based", 3) == 12.50

    def test_fee_above_cap(self):
        assert effective_hourly_rate(20, "centre-based", 3) == 14.63

    def test_never_above_fee_or_cap(self):
        for care_type in CareType:
            for age in [0, 3, 6, 12]:
                cap = hourly_rate_cap(care_type, age)
                for fee in [0, 5, 12.5, 14.63, 20, 50]:
                    rate = effective_hourly_rate(fee, care_type, age)
                    assert rate <= cap
                    assert rate <= fee
                    if fee <= cap:
                        assert rate == fee

    def test_in_home_single_child_gets_full_cap(self):
        assert effective_hourly_rate(50, "in-home-care", 2) == 39.80

    def test_negative_fee(self):
        with pytest.raises(InvalidInput, match="Provider fee"):
            effective_hourly_rate(-1, "centre-based", 3)

    def test_age_out_of_range(self):
        with pytest.raises(InvalidInput):
            effective_hourly_rate(12.5, "centre-based", 25)


class TestSharedHourlyRates:
    """Test a per-family cap shared between children."""

    def test_equal_fees_split_evenly(self):
        rates = shared_hourly_rates([50, 50], "in-home-care", [2, 4])
        assert rates == pytest.approx([19.90, 19.90])

    def test_unused_headroom_passes_on(self):
        rates = shared_hourly_rates([10, 50], "in-home-care", [2, 4])
        assert rates == pytest.approx([10, 29.80])

    def test_order_follows_input(self):
        rates = shared_hourly_rates([50, 10, 15], "in-home-care", [1, 3, 5])
        assert rates == pytest.approx([14.90, 10, 14.90])

    def test_never_exceeds_family_cap(self):
        for fees in ([5, 5], [20, 30, 40], [100], [0, 39.8], [12, 13, 14, 15]):
            rates = shared_hourly_rates(fees, "in-home-care", [3] * len(fees))
            assert sum(rates) <= 39.80 + 1e-9
            assert all(rate <= fee for rate, fee in zip(rates, fees))

    def test_all_fees_under_cap(self):
        assert shared_hourly_rates([10, 12], "in-home-care", [2, 4]) == [10, 12]

    def test_per_child_caps_not_shared(self):
        assert shared_hourly_rates([20, 20], "centre-based", [3, 8]) == [14.63, 12.81]

    def test_empty(self):
        assert shared_hourly_rates([], "in-home-care", []) == []

    def test_length_mismatch(self):
        with pytest.raises(InvalidInput, match="same length"):
            shared_hourly_rates([10, 20], "in-home-care", [3])


class TestDailyRates:
    """Test daily caps for care charged by the day."""

    def test_default_hours(self):
        assert daily_rate_cap("centre-based", 3) == pytest.approx(146.3)

    def test_custom_hours(self):
        assert daily_rate_cap("centre-based", 3, hours_per_day=11) == pytest.approx(160.93)

    def test_zero_hours(self):
        with pytest.raises(InvalidInput, match="Hours per day"):
            daily_rate_cap("centre-based", 3, hours_per_day=0)

    def test_effective_daily_below_cap(self):
        assert effective_daily_rate(120, "centre-based", 3) == 120

    def test_effective_daily_above_cap(self):
        assert effective_daily_rate(200, "centre-based", 3) == pytest.approx(146.3)
