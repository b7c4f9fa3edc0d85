# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for side-by-side scenario comparison."""

from __future__ import annotations

import pytest

from propladder.analysis import (
    ScenarioMetrics,
    calculate_scenario_metrics,
    compare_scenarios,
    simulate,
)
from propladder.analysis.comparison import (
    calculate_differences,
    determine_winner,
    generate_insights,
    risk_level_for,
)
from propladder.core.primitives import EngineSettings, RiskLevelEnum
from propladder.portfolio import InvestmentProfile


def _metrics(**overrides) -> ScenarioMetrics:
    values = dict(
        total_properties=3,
        timeline_years=5.0,
        final_equity=1_000_000.0,
        final_cashflow=20_000.0,
        total_debt=1_500_000.0,
        portfolio_value=2_500_000.0,
        average_lvr=80.0,
        risk_level=RiskLevelEnum.MEDIUM,
        equity_goal_year=None,
        cashflow_goal_year=None,
        total_deposits=200_000.0,
    )
    values.update(overrides)
    return ScenarioMetrics(**values)


@pytest.mark.parametrize(
    "lvr,level",
    [(0, RiskLevelEnum.LOW), (69.9, RiskLevelEnum.LOW), (70, RiskLevelEnum.MEDIUM), (85, RiskLevelEnum.HIGH)],
)
def test_risk_level(lvr, level):
    assert risk_level_for(lvr) == level


class TestDetermineWinner:
    def test_higher_equity_wins(self):
        winner, reason = determine_winner(
            _metrics(final_equity=1_200_000), _metrics(), InvestmentProfile()
        )
        assert winner == "A"
        assert reason == "higher equity"

    def test_small_cashflow_gap_is_a_tie(self):
        winner, reason = determine_winner(
            _metrics(final_cashflow=23_000), _metrics(), InvestmentProfile()
        )
        assert winner == "tie"
        assert reason == "both strategies perform similarly"

    def test_one_point_lead_is_a_tie(self):
        winner, _ = determine_winner(_metrics(total_properties=4), _metrics(), InvestmentProfile())
        assert winner == "tie"

    def test_b_wins_on_cashflow_and_risk(self):
        winner, reason = determine_winner(
            _metrics(),
            _metrics(final_cashflow=40_000, average_lvr=60.0),
            InvestmentProfile(),
        )
        assert winner == "B"
        assert reason == "better cashflow and lower risk"

    def test_faster_equity_goal_counts(self):
        winner, _ = determine_winner(
            _metrics(equity_goal_year=2030.0),
            _metrics(equity_goal_year=2033.0),
            InvestmentProfile(),
        )
        assert winner == "A"


class TestInsights:
    def test_material_differences(self):
        a = _metrics(final_equity=1_200_000, total_properties=4)
        b = _metrics()
        insights = generate_insights(a, b, calculate_differences(a, b), InvestmentProfile())
        assert insights == [
            "Scenario A builds $200K more equity over the timeline.",
            "Scenario A includes 1 more property.",
        ]

    def test_leverage_and_goal_insights(self):
        a = _metrics(average_lvr=60.0, equity_goal_year=2031.0)
        b = _metrics(average_lvr=80.0)
        insights = generate_insights(a, b, calculate_differences(a, b), InvestmentProfile())
        assert "Scenario A has lower leverage (60% LVR) vs B (80% LVR)." in insights
        assert "Only Scenario A achieves your $1.0M equity goal (in 2031)." in insights

    def test_default_insight(self):
        a = b = _metrics()
        insights = generate_insights(a, b, calculate_differences(a, b), InvestmentProfile())
        assert insights == [
            "Both scenarios show similar performance. Consider your risk tolerance "
            "and property preferences."
        ]

    def test_at_most_four(self):
        a = _metrics(
            final_equity=2_000_000,
            final_cashflow=60_000,
            total_properties=6,
            average_lvr=60.0,
            equity_goal_year=2030.0,
            cashflow_goal_year=2032.0,
        )
        b = _metrics()
        insights = generate_insights(a, b, calculate_differences(a, b), InvestmentProfile())
        assert len(insights) == 4


class TestCompareScenarios:
    def test_identical_results_tie(self, profile, catalog):
        result = simulate(profile, {"units": 2}, catalog=catalog)
        comparison = compare_scenarios(result, result)
        assert comparison.winner == "tie"
        assert comparison.differences.equity_diff == 0
        assert comparison.scenario_a == comparison.scenario_b

    def test_more_capital_builds_more(self, profile, rich_profile, catalog):
        modest = simulate(profile, {"units": 3}, catalog=catalog)
        rich = simulate(rich_profile, {"units": 3}, catalog=catalog)
        comparison = compare_scenarios(rich, modest)

        assert comparison.scenario_a.total_properties == 3
        assert comparison.scenario_a.total_properties >= comparison.scenario_b.total_properties
        assert comparison.differences.equity_diff > 0
        assert comparison.winner in ("A", "tie")

    def test_scenario_metrics_from_result(self, rich_profile, catalog):
        result = simulate(rich_profile, {"units": 2}, catalog=catalog)
        metrics = calculate_scenario_metrics(result)
        assert metrics.total_properties == 2
        assert metrics.total_deposits == pytest.approx(105_000)
        assert metrics.average_lvr == pytest.approx(85.0)
        # Purchases in 2025 H1 and 2025 H2 span one calendar year
        assert metrics.timeline_years == pytest.approx(1.0)

    def test_single_purchase_spans_one_period(self, rich_profile, catalog):
        result = simulate(rich_profile, {"units": 1}, catalog=catalog)
        assert calculate_scenario_metrics(result).timeline_years == pytest.approx(0.5)

    def test_span_counts_quarterly_periods(self, rich_profile, catalog):
        result = simulate(
            rich_profile,
            {"units": 2},
            catalog=catalog,
            settings=EngineSettings(periods_per_year=4),
        )
        # 2025 Q1 and 2025 Q2
        assert calculate_scenario_metrics(result).timeline_years == pytest.approx(0.5)
