# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

import importlib
import logging

"""
propladder - Property Acquisition Timeline Simulation

Determines in which future half-year period each acquisition in an ordered
property plan becomes affordable, and projects the portfolio's value, debt,
equity and cashflow across the planning horizon.

Key Entry Points:
- propladder.simulate() - Run a timeline simulation for a profile and selection
- propladder.portfolio.* - Investor profile, property catalog and purchase queue
- propladder.analysis.* - Metrics, feasibility analysis and scenario comparison

Example Usage:
    ```python
    from propladder import simulate
    from propladder.portfolio import InvestmentProfile

    profile = InvestmentProfile(deposit_pool=80_000, annual_savings=30_000)
    result = simulate(profile, {"units": 2, "duplexes": 1})

    for row in result.timeline:
        print(row.slot.instance_id, row.display_period or "not within horizon")
    print(result.feasibility().message)
    ```
"""

# Applications configure handlers; the library only emits records.
logging.getLogger(__name__).addHandler(logging.NullHandler())


# Public API surface (lazy-loaded on first attribute access)
__all__ = [  # noqa: F822 - lazy loading
    "analysis",
    "core",
    "portfolio",
    "simulate",
]


_LAZY_MODULES = {
    "analysis": "propladder.analysis",
    "core": "propladder.core",
    "portfolio": "propladder.portfolio",
}

_LAZY_ATTRIBUTES = {
    "simulate": "propladder.analysis.api",
}


def __getattr__(name: str):
    module_path = _LAZY_MODULES.get(name)
    if module_path is not None:
        module = importlib.import_module(module_path)
        globals()[name] = module
        return module

    module_path = _LAZY_ATTRIBUTES.get(name)
    if module_path is None:
        raise AttributeError(f"module 'propladder' has no attribute '{name}'")
    value = getattr(importlib.import_module(module_path), name)
    globals()[name] = value
    return value
