# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Timeline Simulator

This module provides the TimelineSimulator service that folds an investor
profile and an ordered purchase queue over the planning horizon, one period
at a time, to find when each acquisition becomes affordable.

Each period proceeds in a fixed order:
1. **Accrual** - savings for the period are added and every holding (plus the
   pre-existing portfolio) is revalued on its growth curve
2. **Cashflow** - recognised rent, interest and expenses for the properties
   owned before the period give the period's net cashflow
3. **Evaluation** - the head of the queue is tested for deposit, borrowing
   capacity and serviceability against the updated state
4. **Commit** - a passing slot is bought (deposit paid, loan taken on) and the
   next head is re-evaluated, up to the per-period purchase limit
5. **Breakdown** - a PeriodBreakdown row records the period's position

The queue is strictly FIFO: a slot that cannot be bought blocks every slot
behind it, so resolved periods never decrease along the queue.

Example:
    ```python
    from propladder.analysis.simulator import TimelineSimulator

    simulator = TimelineSimulator(settings)
    result = simulator.run(profile, slots, catalog)

    for row in result.timeline:
        print(row.slot.instance_id, row.display_period or "not within horizon")
    ```

Architecture:
    - Uses dataclass pattern for the runtime service (not a data model)
    - Owns one private PortfolioState per run; nothing mutable escapes
    - Returns an immutable SimulationResult
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional, Tuple

from ..core.primitives import (
    ConfigurationError,
    EngineSettings,
    GrowthCurve,
    Money,
    PurchaseStatusEnum,
    SimulatorStatusEnum,
    period_label,
    period_to_year,
    total_periods,
    validate_amounts,
    validate_horizon,
)
from ..portfolio.catalog import PropertyAssumption, PropertyCatalog
from ..portfolio.profile import MONETARY_FIELDS, InvestmentProfile
from ..portfolio.queue import AcquisitionSlot
from ..portfolio.state import OwnedProperty, PortfolioState
from .affordability import (
    AffordabilityEvaluation,
    calculate_extractable_equity,
    evaluate_affordability,
)
from .results import PeriodBreakdown, SimulationResult, TimelineResult

logger = logging.getLogger(__name__)


@dataclass
class _PeriodCashflow:
    """Cashflow components for one period (not annualised)."""

    gross_rental: Money
    loan_interest: Money
    expenses: Money
    recognition_rate: float

    @property
    def net(self) -> Money:
        return self.gross_rental - self.loan_interest - self.expenses


@dataclass
class TimelineSimulator:
    """
    Service that simulates a purchase queue over the planning horizon.

    The simulator itself holds only configuration and its lifecycle status;
    all portfolio state lives in a PortfolioState created inside `run()`, so
    one simulator may be reused for any number of runs.

    Example:
        ```python
        simulator = TimelineSimulator(EngineSettings(max_purchases_per_period=2))
        result = simulator.run(profile, slots, PropertyCatalog.default())
        assert simulator.status == SimulatorStatusEnum.COMPLETED
        ```
    """

    settings: EngineSettings = field(default_factory=EngineSettings)
    status: SimulatorStatusEnum = SimulatorStatusEnum.IDLE

    def run(
        self,
        profile: InvestmentProfile,
        slots: List[AcquisitionSlot],
        catalog: PropertyCatalog,
    ) -> SimulationResult:
        """
        Simulate the queue period by period.

        Args:
            profile: Investor starting position (read only)
            slots: FIFO purchase queue, typically from `build_purchase_queue`
            catalog: Catalog every slot's type id is resolved against

        Returns:
            SimulationResult with one TimelineResult per slot and one
            PeriodBreakdown per period

        Raises:
            ConfigurationError: If the horizon is negative, a monetary input is
                negative or non-finite, or a slot references an unknown type.
                Raised before any period is simulated.
        """
        self.status = SimulatorStatusEnum.IDLE
        assumptions = self._validate(profile, slots, catalog)

        self.status = SimulatorStatusEnum.RUNNING
        settings = self.settings
        ppy = settings.periods_per_year
        n_periods = total_periods(profile.timeline_years, settings)
        savings_per_period = Money(profile.annual_savings) / ppy

        state = PortfolioState.from_profile(profile)
        queue: Deque[AcquisitionSlot] = deque(slots)
        resolved: Dict[int, TimelineResult] = {}
        periods: List[PeriodBreakdown] = []

        logger.debug(
            f"Simulating {len(slots)} slots over {n_periods} periods "
            f"({profile.timeline_years} years at {ppy} periods/year)"
        )

        for period in range(1, n_periods + 1):
            # === ACCRUAL ===
            state.advance_to(period, profile.growth_curve, ppy)
            state.accrue_savings(savings_per_period)

            # === CASHFLOW ===
            cashflow = self._period_cashflow(state)
            state.accrue_cashflow(cashflow.net)
            state.annual_gross_rental = cashflow.gross_rental * ppy

            # === EVALUATION / COMMIT ===
            committed, evaluation = self._process_queue(
                state, queue, assumptions, profile, period
            )
            for result in committed:
                resolved[result.slot.sequence_index] = result

            if committed:
                row_status = PurchaseStatusEnum.PURCHASED
            elif evaluation is None:
                row_status = PurchaseStatusEnum.WAITING
            else:
                row_status = evaluation.status

            periods.append(
                self._breakdown(state, profile, period, row_status, committed, evaluation, cashflow)
            )
            logger.debug(
                f"Period {period} ({period_label(period, settings)}): {row_status.value}, "
                f"value={float(state.portfolio_value):,.0f} debt={float(state.cumulative_debt):,.0f} "
                f"liquid={float(state.liquid_funds):,.0f} queue={len(queue)}"
            )

        # === TERMINAL ===
        final_snapshot = state.snapshot()
        timeline: List[TimelineResult] = []
        for slot in slots:
            if slot.sequence_index in resolved:
                timeline.append(resolved[slot.sequence_index])
                continue
            assumption = assumptions[slot.property_type_id]
            final_evaluation = evaluate_affordability(
                assumption, final_snapshot, profile, settings
            )
            # A passing final evaluation means only the horizon (or the
            # per-period limit) kept the slot from resolving.
            status = (
                PurchaseStatusEnum.BLOCKED
                if final_evaluation.status == PurchaseStatusEnum.BLOCKED
                else PurchaseStatusEnum.WAITING
            )
            timeline.append(
                TimelineResult(
                    slot=slot,
                    property_name=assumption.display_name,
                    property_cost=assumption.average_cost,
                    required_deposit=assumption.required_deposit,
                    loan_amount=assumption.loan_amount,
                    acquisition_costs=final_evaluation.acquisition_costs,
                    status=status,
                    evaluation=final_evaluation,
                )
            )

        self.status = SimulatorStatusEnum.COMPLETED
        purchased = sum(1 for r in timeline if r.is_feasible)
        logger.info(
            f"Simulation complete: {purchased}/{len(timeline)} acquisitions within "
            f"{profile.timeline_years} years, {len(timeline) - purchased} infeasible"
        )
        return SimulationResult(
            timeline=timeline, periods=periods, profile=profile, settings=settings
        )

    def _validate(
        self,
        profile: InvestmentProfile,
        slots: List[AcquisitionSlot],
        catalog: PropertyCatalog,
    ) -> Dict[str, PropertyAssumption]:
        """Re-check inputs at the engine boundary and resolve every slot's type."""
        validate_horizon(profile.timeline_years)
        validate_amounts(profile, MONETARY_FIELDS, prefix="profile")

        assumptions: Dict[str, PropertyAssumption] = {}
        for slot in slots:
            if slot.property_type_id in assumptions:
                continue
            assumption = catalog.get(slot.property_type_id)
            validate_amounts(assumption, ("average_cost",), prefix=assumption.type_id)
            if assumption.average_cost == 0:
                logger.warning(f"Rejected zero-cost property type '{assumption.type_id}'")
                raise ConfigurationError(
                    f"{assumption.type_id}.average_cost must be positive"
                )
            assumptions[slot.property_type_id] = assumption
        return assumptions

    def _growth_curve_for(
        self, assumption: PropertyAssumption, profile: InvestmentProfile
    ) -> GrowthCurve:
        if self.settings.use_type_growth:
            return assumption.flat_growth_curve()
        return profile.growth_curve

    def _period_cashflow(self, state: PortfolioState) -> _PeriodCashflow:
        """Rent, interest and expenses for properties owned before this period."""
        settings = self.settings
        ppy = settings.periods_per_year
        recognition_rate = settings.rental_recognition.rate_for(state.owned_count)

        annual_rent = sum(
            float(value) * owned.yield_percent
            for owned, value in zip(state.owned_properties, state.property_values)
        )
        gross_rental = Money(annual_rent * recognition_rate / ppy)
        loan_interest = state.cumulative_debt * settings.interest_rate / ppy
        expenses = gross_rental * settings.expense_ratio

        return _PeriodCashflow(
            gross_rental=gross_rental,
            loan_interest=loan_interest,
            expenses=expenses,
            recognition_rate=recognition_rate,
        )

    def _process_queue(
        self,
        state: PortfolioState,
        queue: Deque[AcquisitionSlot],
        assumptions: Dict[str, PropertyAssumption],
        profile: InvestmentProfile,
        period: int,
    ) -> Tuple[List[TimelineResult], Optional[AffordabilityEvaluation]]:
        """
        Evaluate the head of the queue and commit while it passes.

        Returns the committed results and the evaluation that describes the
        period: the first purchase's evaluation, or the blocking head's.
        """
        committed: List[TimelineResult] = []
        period_evaluation: Optional[AffordabilityEvaluation] = None

        while queue and len(committed) < self.settings.max_purchases_per_period:
            slot = queue[0]
            assumption = assumptions[slot.property_type_id]
            evaluation = evaluate_affordability(
                assumption, state.snapshot(), profile, self.settings
            )
            if period_evaluation is None:
                period_evaluation = evaluation
            if not evaluation.passed:
                logger.debug(
                    f"Period {period}: {slot.instance_id} not affordable "
                    f"(failed: {', '.join(t.value for t in evaluation.failed_tests)})"
                )
                break

            queue.popleft()
            owned = self._commit(
                state, slot, assumption, profile, period, evaluation.acquisition_costs
            )
            committed.append(
                TimelineResult(
                    slot=slot,
                    property_name=assumption.display_name,
                    property_cost=assumption.average_cost,
                    required_deposit=assumption.required_deposit,
                    loan_amount=assumption.loan_amount,
                    acquisition_costs=evaluation.acquisition_costs,
                    period=period,
                    year=period_to_year(period, self.settings),
                    display_period=period_label(period, self.settings),
                    status=PurchaseStatusEnum.PURCHASED,
                    snapshot=state.snapshot(),
                    evaluation=evaluation,
                )
            )
            logger.debug(
                f"Period {period}: purchased {slot.instance_id} for "
                f"{assumption.average_cost:,.0f} (cash {owned.deposit_paid:,.0f}, "
                f"equity {owned.equity_used:,.0f}, costs {owned.acquisition_costs:,.0f})"
            )

        return committed, period_evaluation

    def _commit(
        self,
        state: PortfolioState,
        slot: AcquisitionSlot,
        assumption: PropertyAssumption,
        profile: InvestmentProfile,
        period: int,
        acquisition_costs: float = 0.0,
    ) -> OwnedProperty:
        """Pay deposit and acquisition costs from liquid funds first, the remainder from equity."""
        outlay = Money(assumption.required_deposit) + Money(acquisition_costs)
        liquid = max(Money.zero(), state.liquid_funds)
        cash_part = min(outlay, liquid)
        equity_part = outlay - cash_part

        owned = OwnedProperty(
            slot=slot,
            purchase_period=period,
            original_cost=assumption.average_cost,
            loan_amount=assumption.loan_amount,
            deposit_paid=cash_part.to_dollars(),
            equity_used=equity_part.to_dollars(),
            acquisition_costs=acquisition_costs,
            yield_percent=assumption.yield_percent,
            growth_curve=self._growth_curve_for(assumption, profile),
        )
        state.commit(owned)
        return owned

    def _breakdown(
        self,
        state: PortfolioState,
        profile: InvestmentProfile,
        period: int,
        status: PurchaseStatusEnum,
        committed: List[TimelineResult],
        evaluation: Optional[AffordabilityEvaluation],
        cashflow: _PeriodCashflow,
    ) -> PeriodBreakdown:
        snapshot = state.snapshot()
        extractable = calculate_extractable_equity(snapshot, profile, self.settings)
        return PeriodBreakdown(
            period=period,
            year=period_to_year(period, self.settings),
            display_period=period_label(period, self.settings),
            status=status,
            purchased_slot=committed[0].slot if committed else None,
            property_cost=sum(r.property_cost for r in committed),
            portfolio_value=snapshot.portfolio_value,
            total_debt=snapshot.cumulative_debt,
            equity=snapshot.equity,
            extractable_equity=round(extractable, 2),
            cash_on_hand=snapshot.cash_on_hand,
            cumulative_savings=snapshot.cumulative_savings,
            cumulative_net_cashflow=snapshot.cumulative_net_cashflow,
            available_funds=round(snapshot.liquid_funds + extractable, 2),
            gross_rental=cashflow.gross_rental.to_dollars(),
            loan_interest=cashflow.loan_interest.to_dollars(),
            expenses=cashflow.expenses.to_dollars(),
            net_cashflow=cashflow.net.to_dollars(),
            rental_recognition_rate=cashflow.recognition_rate,
            owned_count=snapshot.owned_count,
            evaluation=evaluation,
        )
