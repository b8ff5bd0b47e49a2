"""Tests for display periods."""

import pytest

from ccs_calc.errors import InvalidInput
from ccs_calc.scenarios.periods import convert_to_period, period_suffix


class TestConvertToPeriod:
    """Test weekly amount conversion."""

    def test_weekly(self):
        assert convert_to_period(100) == 100

    def test_fortnightly(self):
        assert convert_to_period(100, "fortnightly") == 200

    def test_monthly(self):
        assert convert_to_period(100, "monthly") == pytest.approx(433.333, abs=0.001)

    def test_annual(self):
        assert convert_to_period(100, "annual") == 5200

    def test_unknown_period(self):
        with pytest.raises(InvalidInput, match="Invalid period"):
            convert_to_period(100, "daily")

    def test_non_numeric(self):
        with pytest.raises(InvalidInput):
            convert_to_period("100", "weekly")


class TestPeriodSuffix:
    def test_suffix(self):
        assert period_suffix("monthly") == "/month"
        assert period_suffix("annual") == "/year"

    def test_unknown(self):
        with pytest.raises(InvalidInput):
            period_suffix("daily")
