# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for the per-run portfolio state and its snapshots."""

from __future__ import annotations

import pytest

from propladder.core.primitives import GrowthCurve, Money
from propladder.portfolio import (
    AcquisitionSlot,
    InvestmentProfile,
    OwnedProperty,
    PortfolioState,
)
from tests.conftest import make_snapshot


def _owned(purchase_period: int = 1, deposit_paid: float = 70_000, equity_used: float = 0.0):
    return OwnedProperty(
        slot=AcquisitionSlot(property_type_id="units", sequence_index=0),
        purchase_period=purchase_period,
        original_cost=350_000,
        loan_amount=280_000,
        deposit_paid=deposit_paid,
        equity_used=equity_used,
        yield_percent=0.07,
        growth_curve=GrowthCurve(),
    )


class TestOwnedProperty:
    def test_value_at_purchase_period_is_cost(self):
        assert _owned(purchase_period=3).value_at(3, 2) == 350_000

    def test_value_compounds_from_purchase(self):
        owned = _owned(purchase_period=3)
        assert owned.value_at(5, 2) == pytest.approx(350_000 * 1.125)

    def test_required_deposit_sums_cash_and_equity(self):
        assert _owned(deposit_paid=50_000, equity_used=20_000).required_deposit == 70_000

    def test_acquisition_costs_excluded_from_deposit(self):
        owned = _owned(deposit_paid=88_150).model_copy(update={"acquisition_costs": 18_150})
        assert owned.cash_outlay == 88_150
        assert owned.required_deposit == 70_000


class TestPortfolioState:
    def test_from_profile(self):
        profile = InvestmentProfile(
            deposit_pool=80_000, current_portfolio_value=600_000, current_debt=250_000
        )
        state = PortfolioState.from_profile(profile)
        assert state.cash_on_hand == Money(80_000)
        assert state.cumulative_debt == Money(250_000)
        assert state.portfolio_value == Money(600_000)
        assert state.current_period == 0
        assert state.owned_count == 0

    def test_advance_revalues_existing_portfolio(self):
        state = PortfolioState.from_profile(InvestmentProfile(current_portfolio_value=1_000_000))
        state.advance_to(2, GrowthCurve(), 2)
        assert state.current_period == 2
        assert float(state.portfolio_value) == pytest.approx(1_125_000, abs=0.01)

    def test_commit_pays_deposit_and_takes_loan(self):
        state = PortfolioState.from_profile(InvestmentProfile(deposit_pool=50_000))
        state.accrue_savings(Money(60_000))
        state.commit(_owned(deposit_paid=70_000))

        assert state.cash_on_hand == Money(-20_000)
        assert state.cumulative_debt == Money(280_000)
        assert state.owned_count == 1
        assert state.portfolio_value == Money(350_000)
        assert state.liquid_funds == Money(40_000)

    def test_commit_records_equity_draw(self):
        state = PortfolioState.from_profile(InvestmentProfile(deposit_pool=0))
        state.commit(_owned(deposit_paid=0, equity_used=70_000))
        assert state.equity_drawn == Money(70_000)
        assert state.cash_on_hand == Money.zero()

    def test_negative_cashflow_not_counted_as_liquid(self):
        state = PortfolioState.from_profile(InvestmentProfile(deposit_pool=10_000))
        state.accrue_cashflow(Money(-4_000))
        assert state.liquid_funds == Money(10_000)
        state.accrue_cashflow(Money(9_000))
        assert state.liquid_funds == Money(15_000)

    def test_snapshot_is_independent_of_later_mutation(self):
        state = PortfolioState.from_profile(InvestmentProfile())
        snapshot = state.snapshot()
        state.accrue_savings(Money(12_000))
        assert snapshot.cumulative_savings == 0
        assert state.snapshot().cumulative_savings == 12_000


class TestPortfolioSnapshot:
    def test_equity_and_liquid_funds(self):
        snapshot = make_snapshot(
            cash_on_hand=20_000,
            cumulative_savings=12_000,
            cumulative_net_cashflow=-3_000,
            portfolio_value=500_000,
            cumulative_debt=400_000,
        )
        assert snapshot.equity == 100_000
        assert snapshot.liquid_funds == 32_000

    def test_debt_cannot_be_negative(self):
        with pytest.raises(ValueError):
            make_snapshot(cumulative_debt=-1)
