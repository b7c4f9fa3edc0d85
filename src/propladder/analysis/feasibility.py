# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Feasibility and bottleneck analysis of a simulation result.

When a plan cannot be completed within the horizon, the first unresolved
slot is the binding one: the FIFO queue guarantees every later slot waits
behind it. The final-state evaluations of the unresolved slots name the
binding constraints. Each shortfall is sized for the whole remaining plan
(every unresolved deposit, loan and its interest added to the final
portfolio), so a suggested target clears the queue rather than one slot.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from pydantic import Field

from ..core.primitives import (
    AffordabilityTestEnum,
    BottleneckTypeEnum,
    Model,
    PositiveFloat,
    PositiveInt,
    PriorityEnum,
    SeverityEnum,
)

if TYPE_CHECKING:
    from ..portfolio.profile import InvestmentProfile
    from .results import SimulationResult, TimelineResult

logger = logging.getLogger(__name__)

# Share of a resource beyond which a shortfall makes the plan a major rework
MAJOR_SHORTFALL_SHARE = 0.5
MAX_SUGGESTIONS = 4

SEVERITY_MESSAGES: Dict[SeverityEnum, str] = {
    SeverityEnum.NONE: "Your goals look achievable!",
    SeverityEnum.MINOR: "Your goals are close! Here's a small adjustment to consider:",
    SeverityEnum.MODERATE: "Your goals are ambitious! Here are some adjustments that would help:",
    SeverityEnum.MAJOR: "Let's optimize your strategy to make these goals more achievable:",
}


class Bottleneck(Model):
    """
    A binding constraint on the plan.

    Attributes:
        type: Which constraint binds
        message: Short description
        shortfall: Amount missing to complete every unresolved acquisition
            (dollars, or years for the timeline)
        relative_shortfall: Shortfall as a share of the profile resource it draws on
        occurrences: Failing evaluations of this test across the run
    """

    type: BottleneckTypeEnum
    message: str
    shortfall: PositiveFloat
    relative_shortfall: PositiveFloat = 0.0
    occurrences: PositiveInt = 0


class Suggestion(Model):
    """A remediation step with the profile value that would close a gap."""

    action: str
    impact: str
    priority: PriorityEnum
    target_value: Optional[float] = None


class FeasibilityAnalysis(Model):
    """Overall verdict on whether a plan completes within its horizon."""

    is_achievable: bool
    severity: SeverityEnum
    bottlenecks: List[Bottleneck] = Field(default_factory=list)
    suggestions: List[Suggestion] = Field(default_factory=list)
    message: str

    @property
    def dominant_bottleneck(self) -> Optional[Bottleneck]:
        if not self.bottlenecks:
            return None
        return max(self.bottlenecks, key=lambda b: b.relative_shortfall)


def _round_up(value: float, step: float) -> float:
    return math.ceil(value / step) * step


def _share(shortfall: float, resource: float) -> float:
    """Shortfall relative to its resource; a missing resource counts as fully short."""
    if resource <= 0:
        return 1.0 if shortfall > 0 else 0.0
    return shortfall / resource


def _resource_for(test: AffordabilityTestEnum, profile: "InvestmentProfile") -> float:
    return {
        AffordabilityTestEnum.DEPOSIT: profile.deposit_pool,
        AffordabilityTestEnum.BORROWING: profile.borrowing_capacity,
        AffordabilityTestEnum.SERVICEABILITY: profile.serviceability_base_capacity,
    }[test]


def _count_failures(result: "SimulationResult", test: AffordabilityTestEnum) -> int:
    """Unresolved slots plus period rows whose evaluation failed `test`."""
    slot_failures = sum(
        1 for r in result.unresolved if not r.evaluation.outcome(test).passed
    )
    period_failures = sum(
        1
        for row in result.periods
        if row.evaluation is not None and not row.evaluation.outcome(test).passed
    )
    return slot_failures + period_failures


def _plan_shortfalls(result: "SimulationResult") -> Dict[AffordabilityTestEnum, float]:
    """
    Shortfall per test for buying every unresolved slot on the final portfolio.

    Every unresolved slot was evaluated against the same final snapshot, so
    the first one's outcomes give the resources available at the horizon.
    """
    unresolved = result.unresolved
    evaluation = unresolved[0].evaluation
    final_debt = evaluation.borrowing.required - evaluation.loan_amount

    loans = sum(r.evaluation.loan_amount for r in unresolved)
    cash_needed = sum(
        r.evaluation.required_deposit + r.evaluation.acquisition_costs for r in unresolved
    )
    debt_after = final_debt + loans

    return {
        AffordabilityTestEnum.DEPOSIT: max(
            0.0, cash_needed + result.profile.deposit_buffer - evaluation.deposit.available
        ),
        AffordabilityTestEnum.BORROWING: max(
            0.0, debt_after - evaluation.borrowing.available
        ),
        AffordabilityTestEnum.SERVICEABILITY: max(
            0.0,
            debt_after * result.settings.interest_rate - evaluation.serviceability.available,
        ),
    }


def _failed_tests(unresolved: List["TimelineResult"]) -> List[AffordabilityTestEnum]:
    """Tests failed by any unresolved slot's final evaluation, in test order."""
    failed = {test for r in unresolved for test in r.evaluation.failed_tests}
    return [test for test in AffordabilityTestEnum if test in failed]


def _horizon_binds(first: "TimelineResult", profile: "InvestmentProfile") -> bool:
    """True when one more year of savings (or just more periods) would resolve the slot."""
    evaluation = first.evaluation
    if evaluation.passed:
        return True
    return (
        evaluation.is_timing_failure
        and evaluation.deposit.shortfall <= profile.annual_savings
    )


def _extra_years(result: "SimulationResult", deposit_shortfall: float) -> int:
    """Additional whole years needed to clear the remaining queue."""
    profile = result.profile
    settings = result.settings
    per_year = settings.max_purchases_per_period * settings.periods_per_year
    queue_years = math.ceil(len(result.unresolved) / per_year)

    savings_years = 0
    if deposit_shortfall > 0 and profile.annual_savings > 0:
        savings_years = math.ceil(deposit_shortfall / profile.annual_savings)
    return max(1, queue_years, savings_years)


def _describe_remaining(unresolved: List["TimelineResult"]) -> str:
    if len(unresolved) == 1:
        return unresolved[0].slot.instance_id
    return f"the {len(unresolved)} remaining acquisitions"


def _bottleneck_message(test: AffordabilityTestEnum, shortfall: float) -> str:
    label = {
        AffordabilityTestEnum.DEPOSIT: "Deposit shortfall",
        AffordabilityTestEnum.BORROWING: "Borrowing capacity shortfall",
        AffordabilityTestEnum.SERVICEABILITY: "Serviceability shortfall",
    }[test]
    return f"{label}: ${shortfall / 1000:,.0f}k"


def _suggestion_for(
    bottleneck: Bottleneck,
    priority: PriorityEnum,
    result: "SimulationResult",
    extra_years: int,
) -> Optional[Suggestion]:
    """Targeted fix for one bottleneck, sized from its plan-wide shortfall."""
    profile = result.profile
    remaining = _describe_remaining(result.unresolved)

    if bottleneck.type == BottleneckTypeEnum.DEPOSIT:
        target = _round_up(profile.deposit_pool + bottleneck.shortfall, 5_000)
        return Suggestion(
            action=f"Increase deposit pool to ${target / 1000:,.0f}k",
            impact=f"Covers the deposits and buffer for {remaining}",
            priority=priority,
            target_value=target,
        )

    if bottleneck.type == BottleneckTypeEnum.BORROWING:
        target = _round_up(profile.borrowing_capacity + bottleneck.shortfall, 10_000)
        return Suggestion(
            action=f"Increase borrowing capacity to ${target / 1000:,.0f}k",
            impact=f"Allows the loans for {remaining}",
            priority=priority,
            target_value=target,
        )

    if bottleneck.type == BottleneckTypeEnum.SERVICEABILITY:
        salary_factor = profile.salary_serviceability_multiplier * profile.serviceability_ratio
        if salary_factor <= 0:
            return None
        target = _round_up(profile.base_salary + bottleneck.shortfall / salary_factor, 1_000)
        return Suggestion(
            action=f"Increase base salary to ${target / 1000:,.0f}k",
            impact=f"Services the interest on total debt after {remaining}",
            priority=priority,
            target_value=target,
        )

    target_years = profile.timeline_years + extra_years
    return Suggestion(
        action=f"Extend timeline to {target_years} years",
        impact=f"Leaves time to complete all {len(result.timeline)} acquisitions",
        priority=priority,
        target_value=float(target_years),
    )


def analyze_feasibility(result: "SimulationResult") -> FeasibilityAnalysis:
    """
    Identify binding constraints and suggest profile changes.

    Reads the result and its profile only; nothing is re-simulated.

    Args:
        result: Simulation result to analyse

    Returns:
        FeasibilityAnalysis with severity, bottlenecks and at most four
        suggestions ordered by priority then relative shortfall
    """
    unresolved = result.unresolved
    if not unresolved:
        return FeasibilityAnalysis(
            is_achievable=True,
            severity=SeverityEnum.NONE,
            message=SEVERITY_MESSAGES[SeverityEnum.NONE],
        )

    profile = result.profile
    first = unresolved[0]
    shortfalls = _plan_shortfalls(result)
    deposit_shortfall = shortfalls[AffordabilityTestEnum.DEPOSIT]
    extra_years = _extra_years(result, deposit_shortfall)

    # === BOTTLENECKS ===
    bottlenecks: List[Bottleneck] = []
    if _horizon_binds(first, profile):
        bottlenecks.append(
            Bottleneck(
                type=BottleneckTypeEnum.TIMELINE,
                message=(
                    f"Timeline too short: {len(unresolved)} of {len(result.timeline)} "
                    f"acquisitions unresolved after {profile.timeline_years} years"
                ),
                shortfall=float(extra_years),
                relative_shortfall=_share(extra_years, profile.timeline_years),
                occurrences=len(unresolved),
            )
        )
        severity = SeverityEnum.MINOR
    else:
        for test in _failed_tests(unresolved):
            shortfall = shortfalls[test]
            bottlenecks.append(
                Bottleneck(
                    type=BottleneckTypeEnum(test.value),
                    message=_bottleneck_message(test, shortfall),
                    shortfall=shortfall,
                    relative_shortfall=_share(shortfall, _resource_for(test, profile)),
                    occurrences=_count_failures(result, test),
                )
            )
        if any(b.relative_shortfall > MAJOR_SHORTFALL_SHARE for b in bottlenecks):
            severity = SeverityEnum.MAJOR
        else:
            severity = SeverityEnum.MODERATE

    # === SUGGESTIONS ===
    dominant = max(bottlenecks, key=lambda b: b.relative_shortfall)
    ranked: List[Tuple[Suggestion, float]] = []
    for bottleneck in bottlenecks:
        priority = PriorityEnum.HIGH if bottleneck is dominant else PriorityEnum.MEDIUM
        suggestion = _suggestion_for(bottleneck, priority, result, extra_years)
        if suggestion is not None:
            ranked.append((suggestion, bottleneck.relative_shortfall))

    if deposit_shortfall > 0:
        # Spread the gap over two years of extra savings
        additional = _round_up(deposit_shortfall / 2, 1_000)
        ranked.append(
            (
                Suggestion(
                    action=f"Increase annual savings by ${additional / 1000:,.0f}k",
                    impact="Reaches the deposit target about two years sooner",
                    priority=PriorityEnum.LOW,
                    target_value=profile.annual_savings + additional,
                ),
                _share(deposit_shortfall, profile.deposit_pool),
            )
        )

    total = len(result.timeline)
    if severity in (SeverityEnum.MODERATE, SeverityEnum.MAJOR):
        achievable = len(result.purchased) or max(1, math.floor(total * 0.6))
        if achievable < total:
            ranked.append(
                (
                    Suggestion(
                        action=(
                            f"Start with {achievable} "
                            f"{'property' if achievable == 1 else 'properties'} instead of {total}"
                        ),
                        impact=(
                            "Build momentum with achievable targets, then reassess after "
                            f"year {math.ceil(profile.timeline_years / 2)}"
                        ),
                        priority=PriorityEnum.MEDIUM,
                        target_value=float(achievable),
                    ),
                    dominant.relative_shortfall,
                )
            )

    ranked.sort(key=lambda item: (item[0].priority.rank, -item[1]))
    suggestions = [suggestion for suggestion, _ in ranked[:MAX_SUGGESTIONS]]

    logger.debug(
        f"Feasibility: {severity.value}, bottlenecks="
        f"{[b.type.value for b in bottlenecks]}, {len(suggestions)} suggestions"
    )
    return FeasibilityAnalysis(
        is_achievable=False,
        severity=severity,
        bottlenecks=bottlenecks,
        suggestions=suggestions,
        message=SEVERITY_MESSAGES[severity],
    )
