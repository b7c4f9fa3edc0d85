# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Portfolio Metrics - Leverage and Cashflow Ratios

Stateless per-period ratios derived from a simulation's PeriodBreakdown rows,
plus an end-of-horizon portfolio summary. Every ratio substitutes 0 for a
zero denominator so an empty portfolio never produces NaN or infinity.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Sequence

import pandas as pd

from ..core.primitives import Model, PositiveFloat, PositiveInt
from .results import PeriodBreakdown

if TYPE_CHECKING:
    from .results import SimulationResult


class PeriodMetrics(Model):
    """
    Ratios for one simulated period, all in percent.

    Attributes:
        period: Period number
        display_period: Period label, e.g. "2026 H1"
        lvr: Loan-to-value ratio (debt / portfolio value)
        dsr: Debt service ratio (interest / gross rental)
        self_funding_efficiency: Net cashflow as a share of the property bought
            in the period; 0 in periods without a purchase
        equity_recycling_impact: Equity as a share of portfolio value
    """

    period: PositiveInt
    display_period: str
    lvr: float
    dsr: float
    self_funding_efficiency: float
    equity_recycling_impact: float


def _ratio(numerator: float, denominator: float) -> float:
    """Percentage ratio with 0 for a zero denominator."""
    if denominator == 0:
        return 0.0
    return numerator / denominator * 100


def calculate_period_metrics(row: PeriodBreakdown) -> PeriodMetrics:
    """
    Calculate the ratios for a single period.

    Args:
        row: Period breakdown from a simulation

    Returns:
        PeriodMetrics for the period

    Example:
        >>> metrics = calculate_period_metrics(result.periods[9])
        >>> metrics.lvr  # doctest: +SKIP
        78.4
    """
    return PeriodMetrics(
        period=row.period,
        display_period=row.display_period,
        lvr=_ratio(row.total_debt, row.portfolio_value),
        dsr=_ratio(row.loan_interest, row.gross_rental),
        self_funding_efficiency=(
            _ratio(row.net_cashflow, row.property_cost) if row.is_purchase_period else 0.0
        ),
        equity_recycling_impact=_ratio(row.equity, row.portfolio_value),
    )


def aggregate_metrics(periods: Sequence[PeriodBreakdown]) -> List[PeriodMetrics]:
    """Per-period metrics in period order."""
    return [calculate_period_metrics(row) for row in periods]


def metrics_frame(periods: Sequence[PeriodBreakdown]) -> pd.DataFrame:
    """Per-period metrics as a DataFrame indexed by period."""
    columns = [
        "display_period",
        "lvr",
        "dsr",
        "self_funding_efficiency",
        "equity_recycling_impact",
    ]
    records = [m.model_dump() for m in aggregate_metrics(periods)]
    if not records:
        return pd.DataFrame(columns=columns, index=pd.Index([], name="period"))
    return pd.DataFrame(records).set_index("period")[columns]


class PortfolioSummary(Model):
    """
    End-of-horizon snapshot of a simulated portfolio.

    Attributes:
        portfolio_value: Final portfolio value
        total_equity: Final equity (value - debt)
        total_debt: Final debt
        property_count: Acquisitions purchased within the horizon
        unresolved_count: Acquisitions not purchased within the horizon
        annual_cashflow: Final period's net cashflow, annualised
        total_deposits: Sum of deposits on purchased properties
        average_lvr: Loan-to-cost ratio across purchased properties, in percent
    """

    portfolio_value: PositiveFloat
    total_equity: float
    total_debt: PositiveFloat
    property_count: PositiveInt
    unresolved_count: PositiveInt
    annual_cashflow: float
    total_deposits: PositiveFloat
    average_lvr: PositiveFloat


def summarize_portfolio(result: "SimulationResult") -> PortfolioSummary:
    """
    Summarise a simulation's final position.

    With a zero-period horizon the starting position from the profile is
    reported.
    """
    purchased = result.purchased
    total_cost = sum(r.property_cost for r in purchased)
    total_loans = sum(r.loan_amount for r in purchased)

    if result.periods:
        final = result.periods[-1]
        portfolio_value = final.portfolio_value
        total_debt = final.total_debt
        total_equity = final.equity
        annual_cashflow = final.net_cashflow * result.settings.periods_per_year
    else:
        portfolio_value = result.profile.current_portfolio_value
        total_debt = result.profile.current_debt
        total_equity = portfolio_value - total_debt
        annual_cashflow = 0.0

    return PortfolioSummary(
        portfolio_value=portfolio_value,
        total_equity=total_equity,
        total_debt=total_debt,
        property_count=len(purchased),
        unresolved_count=len(result.timeline) - len(purchased),
        annual_cashflow=round(annual_cashflow, 2),
        total_deposits=round(sum(r.required_deposit for r in purchased), 2),
        average_lvr=_ratio(total_loans, total_cost),
    )
