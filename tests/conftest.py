# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Test utilities and fixtures for propladder testing.

Provides ready-made profiles, catalogs and snapshots so tests can focus on
the behaviour under test instead of constructing inputs.
"""

from __future__ import annotations

import pytest

from propladder.analysis import PeriodBreakdown
from propladder.core.primitives import EngineSettings, PurchaseStatusEnum
from propladder.portfolio import (
    InvestmentProfile,
    PortfolioSnapshot,
    PropertyAssumption,
    PropertyCatalog,
)

# Tolerance for currency accumulated over many periods
MONEY_TOLERANCE = 1.0

# Cost 350k with a 20% deposit: needs 70k deposit + 40k buffer = 110k
REGRESSION_TYPE_ID = "standard-house"


# Builders
def regression_assumption() -> PropertyAssumption:
    """The 350k / 20% deposit property used by the regression scenario."""
    return PropertyAssumption(
        type_id=REGRESSION_TYPE_ID,
        name="Standard House",
        average_cost=350_000,
        yield_percent=0.07,
        growth_percent=0.05,
        deposit_percent=0.20,
    )


def make_snapshot(**overrides) -> PortfolioSnapshot:
    """PortfolioSnapshot at period 1 with a plain 50k cash position."""
    values = dict(
        period=1,
        cash_on_hand=50_000.0,
        cumulative_savings=0.0,
        cumulative_net_cashflow=0.0,
        cumulative_debt=0.0,
        portfolio_value=0.0,
    )
    values.update(overrides)
    return PortfolioSnapshot(**values)


def make_period(**overrides) -> PeriodBreakdown:
    """PeriodBreakdown with zeroed cashflow and no holdings."""
    values = dict(
        period=1,
        year=2025.0,
        display_period="2025 H1",
        status=PurchaseStatusEnum.WAITING,
        portfolio_value=0.0,
        total_debt=0.0,
        equity=0.0,
        extractable_equity=0.0,
        cash_on_hand=50_000.0,
        cumulative_savings=0.0,
        cumulative_net_cashflow=0.0,
        available_funds=50_000.0,
        gross_rental=0.0,
        loan_interest=0.0,
        expenses=0.0,
        net_cashflow=0.0,
        rental_recognition_rate=0.75,
        owned_count=0,
    )
    values.update(overrides)
    return PeriodBreakdown(**values)


# Fixtures
@pytest.fixture
def profile() -> InvestmentProfile:
    """Default profile: 50k deposit pool, 500k capacity, 24k savings, 15 years."""
    return InvestmentProfile()


@pytest.fixture
def rich_profile() -> InvestmentProfile:
    """Profile with enough cash and capacity to buy most catalog types at once."""
    return InvestmentProfile(
        deposit_pool=1_000_000,
        borrowing_capacity=5_000_000,
        base_salary=250_000,
    )


@pytest.fixture
def settings() -> EngineSettings:
    return EngineSettings()


@pytest.fixture
def catalog() -> PropertyCatalog:
    return PropertyCatalog.default()


@pytest.fixture
def regression_catalog() -> PropertyCatalog:
    """Default catalog plus the regression property type."""
    default = PropertyCatalog.default()
    return PropertyCatalog(assumptions=[*default.assumptions, regression_assumption()])
