# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Tiered capital growth curve and the period compounding used to revalue
property over a simulation horizon.
"""

from __future__ import annotations

from pydantic import Field

from .model import Model
from .types import GrowthRateFloat

DEFAULT_PERIODS_PER_YEAR = 2


def annual_to_period_rate(annual_rate: float, periods_per_year: int) -> float:
    """Convert an annual rate to the equivalent compounding per-period rate."""
    return (1 + annual_rate) ** (1 / periods_per_year) - 1


class GrowthCurve(Model):
    """
    Four-tier annual growth schedule for property values.

    Young holdings typically grow faster than mature ones, so the annual rate
    steps down with the number of years a property has been held.

    Attributes:
        year1: Annual rate applied during the first year held
        years2to3: Annual rate applied during years two and three
        year4: Annual rate applied during year four
        year5plus: Annual rate applied from year five onwards

    Example:
        >>> curve = GrowthCurve()
        >>> round(compound(100_000, 2, curve), 2)
        112500.0
    """

    year1: GrowthRateFloat = Field(default=0.125, description="Annual growth in year 1")
    years2to3: GrowthRateFloat = Field(default=0.10, description="Annual growth in years 2-3")
    year4: GrowthRateFloat = Field(default=0.075, description="Annual growth in year 4")
    year5plus: GrowthRateFloat = Field(default=0.06, description="Annual growth from year 5")

    @classmethod
    def flat(cls, rate: float) -> "GrowthCurve":
        """Create a curve with the same annual rate in every tier."""
        return cls(year1=rate, years2to3=rate, year4=rate, year5plus=rate)

    def annual_rate_for_period(
        self, period: int, periods_per_year: int = DEFAULT_PERIODS_PER_YEAR
    ) -> float:
        """
        Annual rate in force for the given elapsed period (1-based).

        With two periods per year: periods 1-2 use year1, 3-6 use years2to3,
        7-8 use year4 and 9+ use year5plus.
        """
        if period <= periods_per_year:
            return self.year1
        if period <= 3 * periods_per_year:
            return self.years2to3
        if period <= 4 * periods_per_year:
            return self.year4
        return self.year5plus

    def period_rate(
        self, period: int, periods_per_year: int = DEFAULT_PERIODS_PER_YEAR
    ) -> float:
        """Per-period compounding rate for the given elapsed period (1-based)."""
        return annual_to_period_rate(
            self.annual_rate_for_period(period, periods_per_year), periods_per_year
        )


def compound(
    value: float,
    periods_elapsed: int,
    growth_curve: GrowthCurve,
    periods_per_year: int = DEFAULT_PERIODS_PER_YEAR,
) -> float:
    """
    Compound `value` forward over `periods_elapsed` periods on a tiered curve.

    Each elapsed period applies its own tier's per-period rate, so a holding
    that crosses a tier boundary mid-horizon compounds correctly on both sides
    of it. Non-positive elapsed periods return the value unchanged.
    """
    result = float(value)
    for period in range(1, periods_elapsed + 1):
        result *= 1 + growth_curve.period_rate(period, periods_per_year)
    return result
