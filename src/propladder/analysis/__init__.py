# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
propladder Analysis Engine

The affordability tests, the period-by-period timeline simulator and
everything derived from its results: metrics, feasibility analysis, scenario
snapshots and scenario comparison.
"""

from .affordability import (
    AffordabilityEvaluation,
    TestOutcome,
    calculate_extractable_equity,
    evaluate_affordability,
)
from .api import simulate
from .comparison import (
    MetricDifferences,
    ScenarioComparison,
    ScenarioMetrics,
    calculate_scenario_metrics,
    compare_scenarios,
)
from .feasibility import Bottleneck, FeasibilityAnalysis, Suggestion, analyze_feasibility
from .metrics import (
    PeriodMetrics,
    PortfolioSummary,
    aggregate_metrics,
    calculate_period_metrics,
    metrics_frame,
    summarize_portfolio,
)
from .results import PeriodBreakdown, SimulationResult, TimelineResult
from .scenario import Scenario
from .simulator import TimelineSimulator

__all__ = [
    # Main API functions
    "simulate",
    "TimelineSimulator",
    # Affordability
    "AffordabilityEvaluation",
    "TestOutcome",
    "calculate_extractable_equity",
    "evaluate_affordability",
    # Results
    "PeriodBreakdown",
    "SimulationResult",
    "TimelineResult",
    # Metrics
    "PeriodMetrics",
    "PortfolioSummary",
    "aggregate_metrics",
    "calculate_period_metrics",
    "metrics_frame",
    "summarize_portfolio",
    # Feasibility
    "Bottleneck",
    "FeasibilityAnalysis",
    "Suggestion",
    "analyze_feasibility",
    # Scenarios
    "MetricDifferences",
    "Scenario",
    "ScenarioComparison",
    "ScenarioMetrics",
    "calculate_scenario_metrics",
    "compare_scenarios",
]
