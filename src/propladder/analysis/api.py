# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Timeline Analysis API

Public entry point for running a timeline simulation. The simulation is a
pure function of its inputs: calling it twice with equal arguments yields
equal results, so callers recompute rather than patch results in place.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from ..core.primitives import EngineSettings
from ..portfolio.catalog import PropertyCatalog
from ..portfolio.profile import InvestmentProfile
from ..portfolio.queue import build_purchase_queue
from .results import SimulationResult
from .simulator import TimelineSimulator

logger = logging.getLogger(__name__)


def simulate(
    profile: InvestmentProfile,
    selections: Mapping[str, int],
    catalog: Optional[PropertyCatalog] = None,
    settings: Optional[EngineSettings] = None,
) -> SimulationResult:
    """
    Simulate when each selected acquisition becomes affordable.

    Workflow:
      1) Expand the selection into a FIFO purchase queue
      2) Run the timeline simulator over the profile's horizon
      3) Return the result, from which metrics, feasibility analysis and
         summaries are derived on demand

    Args:
        profile: Investor starting position and lending parameters
        selections: Property type id -> quantity, in the order the types were added
        catalog: Property assumptions; defaults to `PropertyCatalog.default()`
        settings: Engine assumptions; defaults to `EngineSettings()`

    Returns:
        SimulationResult with the per-slot timeline and per-period breakdown

    Raises:
        ConfigurationError: On invalid horizon, monetary inputs, quantities or
            unknown property types

    Out-of-range values are usually caught earlier, when the profile or
    settings are constructed, as a pydantic `ValidationError`. Both errors
    subclass `ValueError`, so `except ValueError` handles every invalid
    input whether it fails at construction or at the engine boundary.

    Example:
        ```python
        result = simulate(InvestmentProfile(), {"units": 2, "duplexes": 1})
        print(result.to_dataframe()[["display_period", "status", "equity"]])
        ```
    """
    catalog = catalog if catalog is not None else PropertyCatalog.default()
    settings = settings if settings is not None else EngineSettings()

    slots = build_purchase_queue(selections, catalog)
    return TimelineSimulator(settings=settings).run(profile, slots, catalog)
