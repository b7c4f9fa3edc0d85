# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Side-by-side comparison of two simulated strategies.

Each result is reduced to a small set of headline metrics; a weighted score
over equity, cashflow, portfolio size, leverage and goal timing picks a
winner, and plain-language insights describe the material differences.
"""

from __future__ import annotations

import logging
from typing import List, Literal, Optional, Tuple

from ..core.primitives import Model, PositiveFloat, PositiveInt, RiskLevelEnum
from ..portfolio.profile import InvestmentProfile
from .metrics import summarize_portfolio
from .results import SimulationResult

logger = logging.getLogger(__name__)

Winner = Literal["A", "B", "tie"]

# Thresholds for a difference to count as material
EQUITY_MARGIN = 0.05
CASHFLOW_MARGIN = 5_000
LVR_MARGIN = 5
EQUITY_INSIGHT_THRESHOLD = 50_000
MAX_INSIGHTS = 4


class ScenarioMetrics(Model):
    """
    Headline metrics of one simulated strategy.

    Attributes:
        total_properties: Acquisitions purchased within the horizon
        timeline_years: Years from the first purchase to the end of the last
            purchase period
        final_equity: Equity at the end of the horizon
        final_cashflow: Annualised net cashflow in the final period
        total_debt: Debt at the end of the horizon
        portfolio_value: Portfolio value at the end of the horizon
        average_lvr: Loan-to-cost ratio across purchases, in percent
        risk_level: Low below 70% LVR, High at 85% or more
        equity_goal_year: First year equity reaches the profile's goal
        cashflow_goal_year: First year annualised cashflow reaches the goal
        total_deposits: Sum of deposits on purchased properties
    """

    total_properties: PositiveInt
    timeline_years: float
    final_equity: float
    final_cashflow: float
    total_debt: PositiveFloat
    portfolio_value: PositiveFloat
    average_lvr: PositiveFloat
    risk_level: RiskLevelEnum
    equity_goal_year: Optional[float] = None
    cashflow_goal_year: Optional[float] = None
    total_deposits: PositiveFloat


class MetricDifferences(Model):
    """Scenario A minus scenario B for each headline metric."""

    equity_diff: float
    equity_diff_percent: float
    cashflow_diff: float
    cashflow_diff_percent: float
    properties_diff: int
    timeline_diff: float
    debt_diff: float
    portfolio_value_diff: float


class ScenarioComparison(Model):
    """Result of comparing two strategies."""

    scenario_a: ScenarioMetrics
    scenario_b: ScenarioMetrics
    differences: MetricDifferences
    winner: Winner
    winner_reason: str
    insights: List[str]


def risk_level_for(average_lvr: float) -> RiskLevelEnum:
    if average_lvr < 70:
        return RiskLevelEnum.LOW
    if average_lvr >= 85:
        return RiskLevelEnum.HIGH
    return RiskLevelEnum.MEDIUM


def calculate_scenario_metrics(result: SimulationResult) -> ScenarioMetrics:
    """Reduce a simulation result to its headline metrics."""
    summary = summarize_portfolio(result)
    profile = result.profile
    ppy = result.settings.periods_per_year

    years = [r.year for r in result.purchased if r.year is not None]
    span = (max(years) - min(years) + 1 / ppy) if years else 0.0

    equity_goal_year = None
    if profile.equity_goal > 0:
        equity_goal_year = next(
            (row.year for row in result.periods if row.equity >= profile.equity_goal),
            None,
        )

    cashflow_goal_year = None
    if profile.cashflow_goal > 0:
        cashflow_goal_year = next(
            (
                row.year
                for row in result.periods
                if row.net_cashflow * ppy >= profile.cashflow_goal
            ),
            None,
        )

    return ScenarioMetrics(
        total_properties=summary.property_count,
        timeline_years=span,
        final_equity=summary.total_equity,
        final_cashflow=summary.annual_cashflow,
        total_debt=summary.total_debt,
        portfolio_value=summary.portfolio_value,
        average_lvr=summary.average_lvr,
        risk_level=risk_level_for(summary.average_lvr),
        equity_goal_year=equity_goal_year,
        cashflow_goal_year=cashflow_goal_year,
        total_deposits=summary.total_deposits,
    )


def calculate_differences(a: ScenarioMetrics, b: ScenarioMetrics) -> MetricDifferences:
    equity_diff = a.final_equity - b.final_equity
    cashflow_diff = a.final_cashflow - b.final_cashflow
    return MetricDifferences(
        equity_diff=equity_diff,
        equity_diff_percent=equity_diff / b.final_equity * 100 if b.final_equity else 0.0,
        cashflow_diff=cashflow_diff,
        cashflow_diff_percent=(
            cashflow_diff / abs(b.final_cashflow) * 100 if b.final_cashflow else 0.0
        ),
        properties_diff=a.total_properties - b.total_properties,
        timeline_diff=a.timeline_years - b.timeline_years,
        debt_diff=a.total_debt - b.total_debt,
        portfolio_value_diff=a.portfolio_value - b.portfolio_value,
    )


def _winning_reasons(
    reasons: List[str], leader: ScenarioMetrics, other: ScenarioMetrics
) -> List[str]:
    """Reasons that actually favour `leader`."""
    favoured = []
    for reason in reasons:
        if "equity" in reason and leader.final_equity > other.final_equity:
            favoured.append(reason)
        elif "cashflow" in reason and leader.final_cashflow > other.final_cashflow:
            favoured.append(reason)
        elif "properties" in reason and leader.total_properties > other.total_properties:
            favoured.append(reason)
        elif "risk" in reason and leader.average_lvr < other.average_lvr:
            favoured.append(reason)
    return favoured


def determine_winner(
    a: ScenarioMetrics, b: ScenarioMetrics, profile: InvestmentProfile
) -> Tuple[Winner, str]:
    """
    Weighted score over the headline metrics.

    Equity and cashflow weigh 3 when the profile sets a goal for them (2
    otherwise); portfolio size and lower leverage weigh 1; reaching the equity
    goal sooner weighs 2. A scenario must lead by more than one point to win.
    """
    score_a = score_b = 0
    reasons: List[str] = []

    equity_weight = 3 if profile.equity_goal > 0 else 2
    if a.final_equity > b.final_equity * (1 + EQUITY_MARGIN):
        score_a += equity_weight
        reasons.append("higher equity")
    elif b.final_equity > a.final_equity * (1 + EQUITY_MARGIN):
        score_b += equity_weight
        reasons.append("higher equity")

    cashflow_weight = 3 if profile.cashflow_goal > 0 else 2
    if a.final_cashflow > b.final_cashflow + CASHFLOW_MARGIN:
        score_a += cashflow_weight
        reasons.append("better cashflow")
    elif b.final_cashflow > a.final_cashflow + CASHFLOW_MARGIN:
        score_b += cashflow_weight
        reasons.append("better cashflow")

    if a.total_properties > b.total_properties:
        score_a += 1
        reasons.append("more properties")
    elif b.total_properties > a.total_properties:
        score_b += 1
        reasons.append("more properties")

    if a.average_lvr < b.average_lvr - LVR_MARGIN:
        score_a += 1
        reasons.append("lower risk")
    elif b.average_lvr < a.average_lvr - LVR_MARGIN:
        score_b += 1
        reasons.append("lower risk")

    if a.equity_goal_year is not None and b.equity_goal_year is not None:
        if a.equity_goal_year < b.equity_goal_year:
            score_a += 2
            reasons.append("faster equity goal")
        elif b.equity_goal_year < a.equity_goal_year:
            score_b += 2
            reasons.append("faster equity goal")

    if score_a > score_b + 1:
        favoured = _winning_reasons(reasons, a, b)
        return "A", " and ".join(favoured[:2]) or "overall performance"
    if score_b > score_a + 1:
        favoured = _winning_reasons(reasons, b, a)
        return "B", " and ".join(favoured[:2]) or "overall performance"
    return "tie", "both strategies perform similarly"


def _format_amount(value: float) -> str:
    """Compact dollar amount for insight text, e.g. $1.2M or $85K."""
    magnitude = abs(value)
    sign = "-" if value < 0 else ""
    if magnitude >= 1_000_000:
        return f"{sign}${magnitude / 1_000_000:.1f}M"
    if magnitude >= 1_000:
        return f"{sign}${magnitude / 1_000:.0f}K"
    return f"{sign}${magnitude:.0f}"


def generate_insights(
    a: ScenarioMetrics,
    b: ScenarioMetrics,
    differences: MetricDifferences,
    profile: InvestmentProfile,
) -> List[str]:
    """Plain-language statements about the material differences (at most four)."""
    insights: List[str] = []

    if abs(differences.equity_diff) > EQUITY_INSIGHT_THRESHOLD:
        higher = "A" if differences.equity_diff > 0 else "B"
        insights.append(
            f"Scenario {higher} builds {_format_amount(abs(differences.equity_diff))} "
            "more equity over the timeline."
        )

    if abs(differences.cashflow_diff) > CASHFLOW_MARGIN:
        better = "A" if differences.cashflow_diff > 0 else "B"
        insights.append(
            f"Scenario {better} generates {_format_amount(abs(differences.cashflow_diff))}"
            "/year more in cashflow."
        )

    if differences.properties_diff != 0:
        more = "A" if differences.properties_diff > 0 else "B"
        count = abs(differences.properties_diff)
        insights.append(
            f"Scenario {more} includes {count} more {'property' if count == 1 else 'properties'}."
        )

    if abs(a.average_lvr - b.average_lvr) > LVR_MARGIN:
        low, high = ("A", "B") if a.average_lvr < b.average_lvr else ("B", "A")
        low_lvr, high_lvr = sorted((a.average_lvr, b.average_lvr))
        insights.append(
            f"Scenario {low} has lower leverage ({low_lvr:.0f}% LVR) vs {high} ({high_lvr:.0f}% LVR)."
        )

    if profile.equity_goal > 0:
        goal = _format_amount(profile.equity_goal)
        if a.equity_goal_year is not None and b.equity_goal_year is None:
            insights.append(
                f"Only Scenario A achieves your {goal} equity goal (in {a.equity_goal_year:g})."
            )
        elif a.equity_goal_year is None and b.equity_goal_year is not None:
            insights.append(
                f"Only Scenario B achieves your {goal} equity goal (in {b.equity_goal_year:g})."
            )
        elif (
            a.equity_goal_year is not None
            and b.equity_goal_year is not None
            and a.equity_goal_year != b.equity_goal_year
        ):
            faster = "A" if a.equity_goal_year < b.equity_goal_year else "B"
            gap = abs(a.equity_goal_year - b.equity_goal_year)
            insights.append(
                f"Scenario {faster} reaches your equity goal {gap:g} "
                f"{'year' if gap == 1 else 'years'} faster."
            )

    if profile.cashflow_goal > 0:
        goal = _format_amount(profile.cashflow_goal)
        if a.cashflow_goal_year is not None and b.cashflow_goal_year is None:
            insights.append(f"Only Scenario A achieves your {goal}/year cashflow goal.")
        elif a.cashflow_goal_year is None and b.cashflow_goal_year is not None:
            insights.append(f"Only Scenario B achieves your {goal}/year cashflow goal.")

    if not insights:
        insights.append(
            "Both scenarios show similar performance. Consider your risk tolerance "
            "and property preferences."
        )
    return insights[:MAX_INSIGHTS]


def compare_scenarios(
    a: SimulationResult,
    b: SimulationResult,
    profile: Optional[InvestmentProfile] = None,
) -> ScenarioComparison:
    """
    Compare two simulated strategies.

    Args:
        a: Result of scenario A
        b: Result of scenario B
        profile: Profile whose goals weight the comparison; defaults to A's

    Returns:
        ScenarioComparison with metrics, differences, winner and insights
    """
    profile = profile or a.profile
    metrics_a = calculate_scenario_metrics(a)
    metrics_b = calculate_scenario_metrics(b)
    differences = calculate_differences(metrics_a, metrics_b)
    winner, reason = determine_winner(metrics_a, metrics_b, profile)
    insights = generate_insights(metrics_a, metrics_b, differences, profile)

    logger.debug(f"Scenario comparison winner: {winner} ({reason})")
    return ScenarioComparison(
        scenario_a=metrics_a,
        scenario_b=metrics_b,
        differences=differences,
        winner=winner,
        winner_reason=reason,
        insights=insights,
    )
