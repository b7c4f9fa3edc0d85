# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for the tiered growth curve and period compounding."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from propladder.core.primitives import GrowthCurve, annual_to_period_rate, compound


class TestGrowthCurve:
    """Tier selection and per-period rates."""

    def test_defaults(self):
        curve = GrowthCurve()
        assert curve.year1 == 0.125
        assert curve.years2to3 == 0.10
        assert curve.year4 == 0.075
        assert curve.year5plus == 0.06

    @pytest.mark.parametrize(
        "period,expected",
        [(1, 0.125), (2, 0.125), (3, 0.10), (6, 0.10), (7, 0.075), (8, 0.075), (9, 0.06), (30, 0.06)],
    )
    def test_half_year_tier_boundaries(self, period, expected):
        """With two periods per year the tiers switch after periods 2, 6 and 8."""
        assert GrowthCurve().annual_rate_for_period(period) == expected

    def test_quarterly_tier_boundaries_scale(self):
        curve = GrowthCurve()
        assert curve.annual_rate_for_period(4, periods_per_year=4) == 0.125
        assert curve.annual_rate_for_period(5, periods_per_year=4) == 0.10
        assert curve.annual_rate_for_period(17, periods_per_year=4) == 0.06

    def test_period_rate_compounds_to_annual(self):
        rate = GrowthCurve().period_rate(1)
        assert (1 + rate) ** 2 == pytest.approx(1.125)

    def test_flat_curve(self):
        curve = GrowthCurve.flat(0.05)
        assert {curve.year1, curve.years2to3, curve.year4, curve.year5plus} == {0.05}

    def test_rejects_out_of_range_rate(self):
        with pytest.raises(ValidationError):
            GrowthCurve(year1=1.5)

    def test_rejects_nan(self):
        with pytest.raises(ValidationError):
            GrowthCurve(year1=float("nan"))


class TestCompound:
    """Compounding a value over elapsed periods."""

    def test_two_half_years_equal_first_year_rate(self):
        curve = GrowthCurve()
        assert compound(400_000, 2, curve) == pytest.approx(400_000 * (1 + curve.year1))

    def test_zero_or_negative_elapsed_returns_value(self):
        curve = GrowthCurve()
        assert compound(350_000, 0, curve) == 350_000
        assert compound(350_000, -3, curve) == 350_000

    def test_crosses_tier_boundary(self):
        """Four half-years: one year at year1, one year at years2to3."""
        curve = GrowthCurve()
        assert compound(100_000, 4, curve) == pytest.approx(100_000 * 1.125 * 1.10)

    def test_full_schedule_five_years(self):
        curve = GrowthCurve()
        expected = 100_000 * 1.125 * 1.10 * 1.10 * 1.075 * 1.06
        assert compound(100_000, 10, curve) == pytest.approx(expected)

    def test_annual_periods(self):
        curve = GrowthCurve.flat(0.05)
        assert compound(100_000, 3, curve, periods_per_year=1) == pytest.approx(100_000 * 1.05**3)

    def test_annual_to_period_rate(self):
        assert annual_to_period_rate(0.21, 2) == pytest.approx(0.1)
