# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Simulation result models.

`SimulationResult` is the single source of truth for everything derived
downstream: metrics, feasibility analysis, summaries and tabular exports all
read from it and never re-derive portfolio state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

import pandas as pd

from ..core.primitives import EngineSettings, Model, PositiveFloat, PositiveInt, PurchaseStatusEnum
from ..portfolio.profile import InvestmentProfile
from ..portfolio.queue import AcquisitionSlot
from ..portfolio.state import PortfolioSnapshot
from .affordability import AffordabilityEvaluation

if TYPE_CHECKING:
    from .feasibility import FeasibilityAnalysis
    from .metrics import PeriodMetrics, PortfolioSummary


class TimelineResult(Model):
    """
    Resolution of one acquisition slot.

    Attributes:
        slot: The queue slot
        property_name: Display name of the property type
        property_cost: Purchase price
        required_deposit: Deposit required at purchase
        loan_amount: Loan taken at purchase
        acquisition_costs: Duty, insurance and fees paid in cash at purchase
        period: Period the slot resolved in, or None if infeasible within the horizon
        year: Fractional calendar year of the resolving period
        display_period: Label of the resolving period, e.g. "2026 H2"
        status: purchased, blocked or waiting
        snapshot: Portfolio state right after the purchase
        evaluation: The passing evaluation, or for unresolved slots the
            evaluation against the final portfolio state
    """

    slot: AcquisitionSlot
    property_name: str
    property_cost: PositiveFloat
    required_deposit: PositiveFloat
    loan_amount: PositiveFloat
    acquisition_costs: PositiveFloat = 0.0
    period: Optional[PositiveInt] = None
    year: Optional[float] = None
    display_period: Optional[str] = None
    status: PurchaseStatusEnum
    snapshot: Optional[PortfolioSnapshot] = None
    evaluation: AffordabilityEvaluation

    @property
    def is_feasible(self) -> bool:
        return self.period is not None


class PeriodBreakdown(Model):
    """
    Portfolio position and cashflow for one simulated period.

    Cashflow components are for the period itself (not annualised). For
    periods without a purchase, `evaluation` explains why the pending slot
    was not bought.
    """

    period: PositiveInt
    year: float
    display_period: str
    status: PurchaseStatusEnum
    purchased_slot: Optional[AcquisitionSlot] = None
    property_cost: PositiveFloat = 0.0
    portfolio_value: PositiveFloat
    total_debt: PositiveFloat
    equity: float
    extractable_equity: PositiveFloat
    cash_on_hand: float
    cumulative_savings: float
    cumulative_net_cashflow: float
    available_funds: float
    gross_rental: PositiveFloat
    loan_interest: PositiveFloat
    expenses: PositiveFloat
    net_cashflow: float
    rental_recognition_rate: float
    owned_count: PositiveInt
    evaluation: Optional[AffordabilityEvaluation] = None

    @property
    def is_purchase_period(self) -> bool:
        return self.status == PurchaseStatusEnum.PURCHASED


@dataclass
class SimulationResult:
    """
    Output of one simulation run.

    Attributes:
        timeline: One TimelineResult per slot, in queue order
        periods: One PeriodBreakdown per simulated period
        profile: Profile the run used (read-only)
        settings: Engine settings the run used
    """

    timeline: List[TimelineResult] = field(default_factory=list)
    periods: List[PeriodBreakdown] = field(default_factory=list)
    profile: InvestmentProfile = field(default_factory=InvestmentProfile)
    settings: EngineSettings = field(default_factory=EngineSettings)

    @property
    def purchased(self) -> List[TimelineResult]:
        return [r for r in self.timeline if r.is_feasible]

    @property
    def unresolved(self) -> List[TimelineResult]:
        return [r for r in self.timeline if not r.is_feasible]

    @property
    def all_resolved(self) -> bool:
        return all(r.is_feasible for r in self.timeline)

    def metrics(self) -> List["PeriodMetrics"]:
        """Per-period LVR, DSR, self-funding and equity-recycling metrics."""
        from .metrics import aggregate_metrics

        return aggregate_metrics(self.periods)

    def feasibility(self) -> "FeasibilityAnalysis":
        """Bottleneck analysis and remediation suggestions for this run."""
        from .feasibility import analyze_feasibility

        return analyze_feasibility(self)

    def summary(self) -> "PortfolioSummary":
        """End-of-horizon portfolio summary."""
        from .metrics import summarize_portfolio

        return summarize_portfolio(self)

    def to_dataframe(self) -> pd.DataFrame:
        """
        Period breakdown as a DataFrame indexed by period.

        Nested evaluation details are flattened to per-test pass flags and
        surpluses; periods with no pending slot carry NaN/None there.
        """
        rows = []
        for row in self.periods:
            record = row.model_dump(exclude={"evaluation", "purchased_slot"})
            record["status"] = row.status.value
            record["purchased_type_id"] = (
                row.purchased_slot.property_type_id if row.purchased_slot else None
            )
            evaluation = row.evaluation
            for outcome_name in ("deposit", "borrowing", "serviceability"):
                outcome = getattr(evaluation, outcome_name) if evaluation else None
                record[f"{outcome_name}_passed"] = outcome.passed if outcome else None
                record[f"{outcome_name}_surplus"] = (
                    outcome.surplus if outcome else float("nan")
                )
            rows.append(record)

        if not rows:
            return pd.DataFrame(index=pd.Index([], name="period"))
        return pd.DataFrame(rows).set_index("period")

    def timeline_dataframe(self) -> pd.DataFrame:
        """One row per slot with resolution period and status."""
        return pd.DataFrame(
            [
                {
                    "sequence_index": r.slot.sequence_index,
                    "property_type_id": r.slot.property_type_id,
                    "instance_id": r.slot.instance_id,
                    "property_cost": r.property_cost,
                    "acquisition_costs": r.acquisition_costs,
                    "period": r.period,
                    "display_period": r.display_period,
                    "status": r.status.value,
                    "deposit_surplus": r.evaluation.deposit.surplus,
                    "borrowing_surplus": r.evaluation.borrowing.surplus,
                    "serviceability_surplus": r.evaluation.serviceability.surplus,
                }
                for r in self.timeline
            ],
            columns=[
                "sequence_index",
                "property_type_id",
                "instance_id",
                "property_cost",
                "acquisition_costs",
                "period",
                "display_period",
                "status",
                "deposit_surplus",
                "borrowing_surplus",
                "serviceability_surplus",
            ],
        )
