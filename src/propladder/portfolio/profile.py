# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Investor profile: the immutable financial position a simulation starts from."""

from __future__ import annotations

from pydantic import Field

from ..core.primitives import FloatBetween0And1, GrowthCurve, Model, PositiveFloat, PositiveInt

# Monetary fields re-checked at the engine boundary
MONETARY_FIELDS = (
    "deposit_pool",
    "borrowing_capacity",
    "current_portfolio_value",
    "current_debt",
    "annual_savings",
    "deposit_buffer",
    "base_salary",
)


class InvestmentProfile(Model):
    """
    An investor's starting position and lending parameters.

    One profile is passed by value to each simulation run; scenario variants
    are produced with `model_copy(update=...)` rather than by mutation.

    Attributes:
        deposit_pool: Cash available for deposits at the start of the horizon
        borrowing_capacity: Lender's base borrowing cap
        current_portfolio_value: Value of property already owned
        current_debt: Debt secured against property already owned
        annual_savings: Savings added each year, spread evenly across periods
        timeline_years: Planning horizon in years
        growth_curve: Tiered annual growth applied to property values
        equity_factor: Share of extractable equity that may be used
        deposit_buffer: Cash buffer required on top of every deposit
        serviceability_ratio: Lender serviceability multiplier
        base_salary: Annual base salary
        salary_serviceability_multiplier: Salary lending multiple
        rent_factor: Share of gross rent credited to serviceability
        equity_goal: Target equity used when comparing scenarios
        cashflow_goal: Target annual cashflow used when comparing scenarios
    """

    deposit_pool: PositiveFloat = 50_000.0
    borrowing_capacity: PositiveFloat = 500_000.0
    current_portfolio_value: PositiveFloat = 0.0
    current_debt: PositiveFloat = 0.0
    annual_savings: PositiveFloat = 24_000.0
    timeline_years: PositiveInt = 15
    growth_curve: GrowthCurve = Field(default_factory=GrowthCurve)
    equity_factor: FloatBetween0And1 = 0.75
    deposit_buffer: PositiveFloat = 40_000.0
    serviceability_ratio: PositiveFloat = 1.2
    base_salary: PositiveFloat = 60_000.0
    salary_serviceability_multiplier: PositiveFloat = 4.0
    rent_factor: FloatBetween0And1 = 0.75
    equity_goal: PositiveFloat = 1_000_000.0
    cashflow_goal: PositiveFloat = 50_000.0

    @property
    def serviceability_base_capacity(self) -> float:
        """Annual serviceability capacity from salary alone."""
        return (
            self.base_salary
            * self.salary_serviceability_multiplier
            * self.serviceability_ratio
        )

    @property
    def current_usable_equity(self) -> float:
        """Equity in the existing portfolio up to an 80% LVR, floored at zero."""
        return max(0.0, self.current_portfolio_value * 0.8 - self.current_debt)
