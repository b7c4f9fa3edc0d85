#!/usr/bin/env python3
# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Scenario Comparison Example

Compares two strategies for the same investor: a regional "yield first"
plan of cheaper, higher-yielding stock against a metro "growth first" plan.
Both scenarios are value snapshots, so the second is derived from the first
without touching it.
"""

from __future__ import annotations

from propladder.analysis import Scenario, compare_scenarios


def main():
    print("=" * 70)
    print("SCENARIO COMPARISON")
    print("=" * 70)
    print()

    yield_first = Scenario(
        name="Yield first",
        selections={"houses-regional": 2, "villas": 1, "duplexes": 1},
    ).with_profile(deposit_pool=120_000, annual_savings=36_000, base_salary=110_000)

    growth_first = yield_first.model_copy(
        update={"name": "Growth first", "selections": {"metro-houses": 2, "units": 1}}
    )

    comparison = compare_scenarios(yield_first.run(), growth_first.run())

    for label, scenario, metrics in (
        ("A", yield_first, comparison.scenario_a),
        ("B", growth_first, comparison.scenario_b),
    ):
        print(f"Scenario {label}: {scenario.name}")
        print(f"   Properties: {metrics.total_properties}")
        print(f"   Final equity: ${metrics.final_equity:,.0f}")
        print(f"   Annual cashflow: ${metrics.final_cashflow:,.0f}")
        print(f"   Average LVR: {metrics.average_lvr:.1f}% ({metrics.risk_level.value} risk)")
        print()

    if comparison.winner == "tie":
        print(f"Result: tie, {comparison.winner_reason}")
    else:
        print(f"Result: Scenario {comparison.winner} wins on {comparison.winner_reason}")
    for insight in comparison.insights:
        print(f"   - {insight}")


if __name__ == "__main__":
    main()
