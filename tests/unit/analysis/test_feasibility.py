# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the feasibility and bottleneck analysis.

Each scenario pins one binding constraint so the severity, the reported
shortfall and the sized suggestion can be checked directly.
"""

from __future__ import annotations

import pytest

from propladder.analysis import analyze_feasibility, simulate
from propladder.core.primitives import BottleneckTypeEnum, PriorityEnum, SeverityEnum
from propladder.portfolio import InvestmentProfile
from tests.conftest import REGRESSION_TYPE_ID


class TestAchievablePlans:
    def test_all_resolved_is_achievable(self, profile, regression_catalog):
        result = simulate(profile, {REGRESSION_TYPE_ID: 1}, catalog=regression_catalog)
        analysis = analyze_feasibility(result)

        assert analysis.is_achievable
        assert analysis.severity == SeverityEnum.NONE
        assert analysis.bottlenecks == []
        assert analysis.suggestions == []
        assert analysis.message == "Your goals look achievable!"
        assert analysis.dominant_bottleneck is None

    def test_empty_selection_is_achievable(self, profile):
        assert simulate(profile, {}).feasibility().is_achievable


class TestTimelineBottleneck:
    def test_short_horizon_is_minor(self, regression_catalog):
        """Two years leaves a 12k deposit gap, half a year of savings."""
        profile = InvestmentProfile(timeline_years=2)
        analysis = simulate(profile, {REGRESSION_TYPE_ID: 1}, catalog=regression_catalog).feasibility()

        assert not analysis.is_achievable
        assert analysis.severity == SeverityEnum.MINOR
        assert [b.type for b in analysis.bottlenecks] == [BottleneckTypeEnum.TIMELINE]
        assert analysis.message.startswith("Your goals are close!")

        timeline, savings = analysis.suggestions
        assert timeline.priority == PriorityEnum.HIGH
        assert timeline.target_value == 3
        assert timeline.action == "Extend timeline to 3 years"
        assert savings.priority == PriorityEnum.LOW
        assert savings.target_value == 30_000

    def test_zero_horizon_with_affordable_plan(self, rich_profile, catalog):
        profile = rich_profile.model_copy(update={"timeline_years": 0})
        analysis = simulate(profile, {"units": 1}, catalog=catalog).feasibility()
        assert analysis.severity == SeverityEnum.MINOR
        assert analysis.bottlenecks[0].type == BottleneckTypeEnum.TIMELINE
        assert analysis.suggestions[0].target_value == 1


class TestResourceBottlenecks:
    def test_borrowing_shortfall_is_major(self, catalog):
        profile = InvestmentProfile(borrowing_capacity=100_000)
        analysis = simulate(profile, {"units": 3}, catalog=catalog).feasibility()

        assert analysis.severity == SeverityEnum.MAJOR
        (bottleneck,) = analysis.bottlenecks
        assert bottleneck.type == BottleneckTypeEnum.BORROWING
        # All three 297.5k loans against a 100k capacity
        assert bottleneck.shortfall == pytest.approx(792_500)
        assert bottleneck.relative_shortfall == pytest.approx(7.925)
        # Three unresolved slots plus thirty blocked periods
        assert bottleneck.occurrences == 33

        capacity, reduce_plan = analysis.suggestions
        assert capacity.priority == PriorityEnum.HIGH
        assert capacity.target_value == 900_000
        assert capacity.action == "Increase borrowing capacity to $900k"
        assert capacity.impact == "Allows the loans for the 3 remaining acquisitions"
        assert reduce_plan.priority == PriorityEnum.MEDIUM
        assert reduce_plan.action == "Start with 1 property instead of 3"

    def test_borrowing_shortfall_is_moderate(self, catalog):
        profile = InvestmentProfile(borrowing_capacity=250_000)
        analysis = simulate(profile, {"units": 1}, catalog=catalog).feasibility()
        assert analysis.severity == SeverityEnum.MODERATE
        assert analysis.bottlenecks[0].shortfall == pytest.approx(47_500)
        assert analysis.suggestions[0].target_value == 300_000
        assert analysis.message.startswith("Your goals are ambitious!")

    def test_serviceability_suggests_salary(self, catalog):
        profile = InvestmentProfile(base_salary=2_000)
        analysis = simulate(profile, {"units": 1}, catalog=catalog).feasibility()

        assert analysis.severity == SeverityEnum.MAJOR
        (bottleneck,) = analysis.bottlenecks
        assert bottleneck.type == BottleneckTypeEnum.SERVICEABILITY
        assert bottleneck.shortfall == pytest.approx(297_500 * 0.065 - 9_600)
        assert analysis.suggestions[0].target_value == 5_000

    def test_deposit_without_savings_is_not_a_timing_issue(self, catalog):
        profile = InvestmentProfile(annual_savings=0, timeline_years=5)
        analysis = simulate(profile, {"units": 1}, catalog=catalog).feasibility()

        assert analysis.severity == SeverityEnum.MAJOR
        (bottleneck,) = analysis.bottlenecks
        assert bottleneck.type == BottleneckTypeEnum.DEPOSIT
        assert bottleneck.shortfall == pytest.approx(42_500)
        assert bottleneck.occurrences == 11

        deposit, savings = analysis.suggestions
        assert deposit.target_value == 95_000
        assert deposit.action == "Increase deposit pool to $95k"
        assert savings.priority == PriorityEnum.LOW
        assert savings.target_value == 22_000


class TestPlanWideShortfalls:
    """Shortfalls cover every unresolved slot, not just the next one in the queue."""

    @pytest.fixture
    def blocked_plan(self, catalog):
        profile = InvestmentProfile(
            deposit_pool=500_000, borrowing_capacity=300_000, timeline_years=10
        )
        return simulate(profile, {"units": 4}, catalog=catalog)

    def test_borrowing_shortfall_includes_every_remaining_loan(self, blocked_plan):
        unresolved = blocked_plan.unresolved
        assert len(unresolved) >= 2

        next_slot_shortfall = unresolved[0].evaluation.borrowing.shortfall
        assert next_slot_shortfall > 0

        analysis = blocked_plan.feasibility()
        borrowing = next(
            b for b in analysis.bottlenecks if b.type == BottleneckTypeEnum.BORROWING
        )
        assert borrowing.shortfall == pytest.approx(
            next_slot_shortfall + 297_500 * (len(unresolved) - 1), abs=1
        )

    def test_suggested_capacity_resolves_more_of_the_plan(self, blocked_plan, catalog):
        analysis = blocked_plan.feasibility()
        top = analysis.suggestions[0]
        assert top.priority == PriorityEnum.HIGH
        assert top.action.startswith("Increase borrowing capacity")

        revised = blocked_plan.profile.model_copy(
            update={"borrowing_capacity": top.target_value}
        )
        rerun = simulate(revised, {"units": 4}, catalog=catalog)

        assert len(rerun.purchased) >= len(blocked_plan.purchased) + 2


def test_suggestions_capped_and_ranked(catalog):
    profile = InvestmentProfile(
        deposit_pool=10_000, annual_savings=0, borrowing_capacity=100_000, base_salary=2_000
    )
    analysis = simulate(profile, {"units": 3}, catalog=catalog).feasibility()

    assert len(analysis.bottlenecks) == 3
    assert analysis.dominant_bottleneck.type == BottleneckTypeEnum.DEPOSIT
    assert len(analysis.suggestions) == 4
    ranks = [s.priority.rank for s in analysis.suggestions]
    assert ranks == sorted(ranks)
    assert analysis.suggestions[0].priority == PriorityEnum.HIGH
    assert all(s.priority != PriorityEnum.LOW for s in analysis.suggestions)


def test_analysis_does_not_modify_result(catalog):
    profile = InvestmentProfile(borrowing_capacity=100_000)
    result = simulate(profile, {"units": 1}, catalog=catalog)
    before = [r.model_dump() for r in result.timeline]
    analyze_feasibility(result)
    assert [r.model_dump() for r in result.timeline] == before
    assert result.profile == profile
