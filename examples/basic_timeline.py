#!/usr/bin/env python3
# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Basic Acquisition Timeline Example

This script simulates a three-property plan for a first-time investor and
prints when each acquisition becomes affordable, how the portfolio evolves,
and what would need to change if part of the plan falls outside the horizon.

## Investor Position

- Deposit pool: $80k, saving $30k a year
- Borrowing capacity: $650k on a $95k salary
- Planning horizon: 15 years of half-year periods

## Plan (in the order the investor added it)

1. Two units at $350k (15% deposit)
2. One duplex at $550k (15% deposit)

Every purchase must pass three tests in the period it is bought: enough
liquid funds and usable equity for the deposit plus a $40k buffer, total debt
within borrowing capacity, and interest on total debt within serviceability.
A purchase that fails holds up everything behind it.
"""

from __future__ import annotations

from propladder import simulate
from propladder.portfolio import InvestmentProfile, PropertyCatalog


def main():
    print("=" * 70)
    print("PROPERTY ACQUISITION TIMELINE")
    print("=" * 70)
    print()

    profile = InvestmentProfile(
        deposit_pool=80_000,
        annual_savings=30_000,
        borrowing_capacity=650_000,
        base_salary=95_000,
        timeline_years=15,
    )
    catalog = PropertyCatalog.default()
    result = simulate(profile, {"units": 2, "duplexes": 1}, catalog=catalog)

    print("Acquisitions:")
    for row in result.timeline:
        when = row.display_period or "not within horizon"
        print(
            f"   {row.slot.instance_id:<14} ${row.property_cost:>11,.0f}   "
            f"{when:<20} {row.status.value}"
        )
    print()

    frame = result.to_dataframe()
    print("Portfolio by period:")
    print(
        frame[["display_period", "portfolio_value", "total_debt", "equity", "net_cashflow"]]
        .round(0)
        .to_string()
    )
    print()

    summary = result.summary()
    print("Summary:")
    print(f"   Properties purchased: {summary.property_count}")
    print(f"   Final portfolio value: ${summary.portfolio_value:,.0f}")
    print(f"   Final equity: ${summary.total_equity:,.0f}")
    print(f"   Annual cashflow: ${summary.annual_cashflow:,.0f}")
    print(f"   Average LVR: {summary.average_lvr:.1f}%")
    print()

    feasibility = result.feasibility()
    print(feasibility.message)
    for bottleneck in feasibility.bottlenecks:
        print(f"   - {bottleneck.message}")
    for suggestion in feasibility.suggestions:
        print(f"   [{suggestion.priority.value}] {suggestion.action}: {suggestion.impact}")


if __name__ == "__main__":
    main()
