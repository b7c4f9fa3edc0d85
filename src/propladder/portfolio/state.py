# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Portfolio state owned by a single simulation run.

`PortfolioState` is the only mutable object in the engine. It is created
fresh from the profile at the start of a run, mutated once per period by the
simulator, and discarded when the run ends. Everything handed back to
callers is an immutable `PortfolioSnapshot`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ..core.primitives import GrowthCurve, Model, Money, PositiveFloat, PositiveInt, compound
from .profile import InvestmentProfile
from .queue import AcquisitionSlot


class OwnedProperty(Model):
    """
    A committed acquisition.

    Created once at commit time and never mutated: the property's value in a
    later period is recomputed from `original_cost` by compounding, never
    stored back.

    Attributes:
        slot: The queue slot this purchase resolved
        purchase_period: Period in which the purchase was committed
        original_cost: Purchase price
        loan_amount: Interest-only loan taken on
        deposit_paid: Part of the deposit and acquisition costs paid from cash
        equity_used: Part funded by a notional equity draw
        acquisition_costs: Duty, insurance and fees paid on top of the deposit
        yield_percent: Gross annual rental yield
        growth_curve: Curve this property's value compounds on
    """

    slot: AcquisitionSlot
    purchase_period: PositiveInt
    original_cost: PositiveFloat
    loan_amount: PositiveFloat
    deposit_paid: PositiveFloat
    equity_used: PositiveFloat = 0.0
    acquisition_costs: PositiveFloat = 0.0
    yield_percent: PositiveFloat
    growth_curve: GrowthCurve

    @property
    def cash_outlay(self) -> float:
        return self.deposit_paid + self.equity_used

    @property
    def required_deposit(self) -> float:
        return self.cash_outlay - self.acquisition_costs

    def value_at(self, period: int, periods_per_year: int) -> float:
        """Value of the property at the end of `period`."""
        return compound(
            self.original_cost,
            period - self.purchase_period,
            self.growth_curve,
            periods_per_year,
        )


class PortfolioSnapshot(Model):
    """
    Immutable view of the portfolio at one point of a run.

    Used both as the input to the affordability tests and as the per-purchase
    snapshot reported in results.
    """

    period: PositiveInt
    cash_on_hand: float
    cumulative_savings: float
    cumulative_net_cashflow: float
    cumulative_debt: PositiveFloat
    portfolio_value: PositiveFloat
    equity_drawn: PositiveFloat = 0.0
    annual_gross_rental: PositiveFloat = 0.0
    owned_count: PositiveInt = 0

    @property
    def equity(self) -> float:
        return self.portfolio_value - self.cumulative_debt

    @property
    def liquid_funds(self) -> float:
        """Cash, accrued savings and positive reinvested cashflow."""
        return (
            self.cash_on_hand
            + self.cumulative_savings
            + max(0.0, self.cumulative_net_cashflow)
        )


@dataclass
class PortfolioState:
    """
    Mutable portfolio state for the duration of one simulation run.

    Monetary balances are kept as integer-cent `Money` so that accumulation
    across many periods is exact.
    """

    starting_portfolio_value: float
    cash_on_hand: Money
    cumulative_debt: Money
    current_period: int = 0
    cumulative_savings_accrued: Money = field(default_factory=Money.zero)
    cumulative_net_cashflow: Money = field(default_factory=Money.zero)
    equity_drawn: Money = field(default_factory=Money.zero)
    existing_portfolio_value: Money = field(default_factory=Money.zero)
    annual_gross_rental: Money = field(default_factory=Money.zero)
    owned_properties: List[OwnedProperty] = field(default_factory=list)
    property_values: List[Money] = field(default_factory=list)

    @classmethod
    def from_profile(cls, profile: InvestmentProfile) -> "PortfolioState":
        """Fresh state at period 0 from the profile's starting position."""
        return cls(
            starting_portfolio_value=profile.current_portfolio_value,
            cash_on_hand=Money(profile.deposit_pool),
            cumulative_debt=Money(profile.current_debt),
            existing_portfolio_value=Money(profile.current_portfolio_value),
        )

    @property
    def portfolio_value(self) -> Money:
        return self.existing_portfolio_value + sum(self.property_values, Money.zero())

    @property
    def liquid_funds(self) -> Money:
        return (
            self.cash_on_hand
            + self.cumulative_savings_accrued
            + max(Money.zero(), self.cumulative_net_cashflow)
        )

    @property
    def owned_count(self) -> int:
        return len(self.owned_properties)

    def advance_to(self, period: int, growth_curve: GrowthCurve, periods_per_year: int) -> None:
        """Move to `period` and revalue the existing portfolio and every owned property."""
        self.current_period = period
        self.existing_portfolio_value = Money(
            compound(self.starting_portfolio_value, period, growth_curve, periods_per_year)
        )
        self.property_values = [
            Money(p.value_at(period, periods_per_year)) for p in self.owned_properties
        ]

    def accrue_savings(self, amount: Money) -> None:
        self.cumulative_savings_accrued += amount

    def accrue_cashflow(self, amount: Money) -> None:
        self.cumulative_net_cashflow += amount

    def commit(self, owned: OwnedProperty) -> None:
        """Record a purchase: pay the cash deposit, draw equity, take on the loan."""
        self.cash_on_hand -= Money(owned.deposit_paid)
        self.equity_drawn += Money(owned.equity_used)
        self.cumulative_debt += Money(owned.loan_amount)
        self.owned_properties.append(owned)
        self.property_values.append(Money(owned.original_cost))

    def snapshot(self) -> PortfolioSnapshot:
        return PortfolioSnapshot(
            period=self.current_period,
            cash_on_hand=self.cash_on_hand.to_dollars(),
            cumulative_savings=self.cumulative_savings_accrued.to_dollars(),
            cumulative_net_cashflow=self.cumulative_net_cashflow.to_dollars(),
            cumulative_debt=self.cumulative_debt.to_dollars(),
            portfolio_value=self.portfolio_value.to_dollars(),
            equity_drawn=self.equity_drawn.to_dollars(),
            annual_gross_rental=self.annual_gross_rental.to_dollars(),
            owned_count=self.owned_count,
        )
