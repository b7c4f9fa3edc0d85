# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Helpers mapping simulation periods onto calendar years and labels."""

from __future__ import annotations

from typing import List

from .settings import EngineSettings


def total_periods(timeline_years: int, settings: EngineSettings) -> int:
    """Number of simulated periods in a horizon of `timeline_years` years."""
    return max(0, timeline_years) * settings.periods_per_year


def period_to_year(period: int, settings: EngineSettings) -> float:
    """
    Fractional calendar year of a 1-based period.

    With half-year periods and base year 2025: 1 -> 2025.0, 2 -> 2025.5,
    3 -> 2026.0.
    """
    return settings.base_year + (period - 1) / settings.periods_per_year


def period_label(period: int, settings: EngineSettings) -> str:
    """
    Display label for a 1-based period, e.g. "2025 H1".

    Half-year periods are labelled H1/H2, quarterly periods Q1-Q4 and any
    other frequency P1..Pn.
    """
    year = settings.base_year + (period - 1) // settings.periods_per_year
    index = (period - 1) % settings.periods_per_year + 1
    prefix = {1: "", 2: "H", 4: "Q"}.get(settings.periods_per_year, "P")
    if not prefix:
        return str(year)
    return f"{year} {prefix}{index}"


def period_labels(timeline_years: int, settings: EngineSettings) -> List[str]:
    """Labels for every period of a horizon."""
    return [
        period_label(period, settings)
        for period in range(1, total_periods(timeline_years, settings) + 1)
    ]
