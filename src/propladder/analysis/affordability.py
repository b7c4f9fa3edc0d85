# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Affordability tests for a candidate acquisition.

A candidate is purchasable only when all three lender-style tests pass:

1. **Deposit**: liquid funds plus usable equity cover the deposit and buffer
   (plus acquisition costs when they are enabled)
2. **Borrowing capacity**: total debt after the new loan fits within the
   base capacity, boosted by usable equity
3. **Serviceability**: salary and recognised rent cover annual interest on
   total debt after the new loan

The three resources interact: paying a deposit reduces cash while the new
loan raises debt, which tightens the borrowing and serviceability tests for
the next candidate.
"""

from __future__ import annotations

from typing import List, Optional

from ..core.primitives import (
    AffordabilityTestEnum,
    EngineSettings,
    Model,
    PurchaseStatusEnum,
)
from ..portfolio.catalog import PropertyAssumption
from ..portfolio.costs import calculate_acquisition_costs
from ..portfolio.profile import InvestmentProfile
from ..portfolio.state import PortfolioSnapshot


class TestOutcome(Model):
    """
    Result of one affordability test.

    Attributes:
        test: Which test this is
        passed: Whether the test passed
        available: Resource available (funds, capacity or serviceable interest)
        required: Resource the purchase needs
        surplus: available - required; negative values are a shortfall
    """

    __test__ = False  # not a pytest test class

    test: AffordabilityTestEnum
    passed: bool
    available: float
    required: float
    surplus: float

    @property
    def shortfall(self) -> float:
        return max(0.0, -self.surplus)


class AffordabilityEvaluation(Model):
    """All three test outcomes for one candidate against one portfolio snapshot."""

    property_type_id: str
    property_cost: float
    required_deposit: float
    loan_amount: float
    acquisition_costs: float = 0.0
    extractable_equity: float
    deposit: TestOutcome
    borrowing: TestOutcome
    serviceability: TestOutcome

    @property
    def outcomes(self) -> List[TestOutcome]:
        return [self.deposit, self.borrowing, self.serviceability]

    @property
    def passed(self) -> bool:
        return all(outcome.passed for outcome in self.outcomes)

    @property
    def failed_tests(self) -> List[AffordabilityTestEnum]:
        return [outcome.test for outcome in self.outcomes if not outcome.passed]

    @property
    def is_timing_failure(self) -> bool:
        """Only the deposit test failed, so accruing savings can still unlock it."""
        return self.failed_tests == [AffordabilityTestEnum.DEPOSIT]

    @property
    def status(self) -> PurchaseStatusEnum:
        """Status a slot would carry if this were its latest evaluation."""
        if self.passed:
            return PurchaseStatusEnum.PURCHASED
        if self.is_timing_failure:
            return PurchaseStatusEnum.WAITING
        return PurchaseStatusEnum.BLOCKED

    def outcome(self, test: AffordabilityTestEnum) -> TestOutcome:
        return {
            AffordabilityTestEnum.DEPOSIT: self.deposit,
            AffordabilityTestEnum.BORROWING: self.borrowing,
            AffordabilityTestEnum.SERVICEABILITY: self.serviceability,
        }[test]


def calculate_extractable_equity(
    snapshot: PortfolioSnapshot,
    profile: InvestmentProfile,
    settings: EngineSettings,
) -> float:
    """
    Equity that can be drawn toward a further deposit.

    Value above debt up to the extraction LVR ceiling, scaled by the
    profile's equity factor, less equity already drawn for earlier deposits.
    """
    headroom = max(
        0.0,
        snapshot.portfolio_value * settings.max_extractable_lvr - snapshot.cumulative_debt,
    )
    return max(0.0, headroom * profile.equity_factor - snapshot.equity_drawn)


def _outcome(
    test: AffordabilityTestEnum, available: float, required: float
) -> TestOutcome:
    return TestOutcome(
        test=test,
        passed=available >= required,
        available=round(available, 2),
        required=round(required, 2),
        surplus=round(available - required, 2),
    )


def evaluate_affordability(
    assumption: PropertyAssumption,
    snapshot: PortfolioSnapshot,
    profile: InvestmentProfile,
    settings: Optional[EngineSettings] = None,
) -> AffordabilityEvaluation:
    """
    Run the deposit, borrowing-capacity and serviceability tests.

    Pure function of its inputs: the snapshot and profile are only read.

    Args:
        assumption: Property type being considered
        snapshot: Portfolio state the candidate is tested against
        profile: Investor profile supplying buffers, capacity and income
        settings: Engine settings (interest rate, extraction LVR)

    Returns:
        AffordabilityEvaluation with a signed surplus for every test
    """
    settings = settings or EngineSettings()
    required_deposit = assumption.required_deposit
    new_loan = assumption.loan_amount
    acquisition_costs = calculate_acquisition_costs(
        assumption.average_cost, new_loan, settings.acquisition_costs
    ).total
    extractable_equity = calculate_extractable_equity(snapshot, profile, settings)

    # Deposit test
    available_funds = snapshot.liquid_funds + extractable_equity
    deposit = _outcome(
        AffordabilityTestEnum.DEPOSIT,
        available_funds,
        required_deposit + acquisition_costs + profile.deposit_buffer,
    )

    # Borrowing capacity test
    debt_after = snapshot.cumulative_debt + new_loan
    effective_capacity = (
        profile.borrowing_capacity + extractable_equity * profile.equity_factor
    )
    borrowing = _outcome(AffordabilityTestEnum.BORROWING, effective_capacity, debt_after)

    # Serviceability test
    serviceability_capacity = (
        profile.serviceability_base_capacity
        + snapshot.annual_gross_rental * profile.rent_factor
    )
    serviceability = _outcome(
        AffordabilityTestEnum.SERVICEABILITY,
        serviceability_capacity,
        debt_after * settings.interest_rate,
    )

    return AffordabilityEvaluation(
        property_type_id=assumption.type_id,
        property_cost=assumption.average_cost,
        required_deposit=round(required_deposit, 2),
        loan_amount=round(new_loan, 2),
        acquisition_costs=round(acquisition_costs, 2),
        extractable_equity=round(extractable_equity, 2),
        deposit=deposit,
        borrowing=borrowing,
        serviceability=serviceability,
    )
