# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Scenario snapshots.

A Scenario bundles everything a simulation needs apart from the catalog:
the investor profile, the ordered selection and the engine settings. It is a
plain value; variants are copies, never edits of a shared object, so two
scenarios can be simulated and compared side by side.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Dict, Optional

from pydantic import Field

from ..core.primitives import EngineSettings, Model, PositiveInt
from ..portfolio.catalog import PropertyCatalog
from ..portfolio.profile import InvestmentProfile
from .api import simulate
from .results import SimulationResult

logger = logging.getLogger(__name__)


class Scenario(Model):
    """
    Serialisable snapshot of one investment strategy.

    Attributes:
        name: Display name of the strategy
        profile: Investor profile
        selections: Property type id -> quantity, in the order types were added
        settings: Engine assumptions

    Example:
        ```python
        base = Scenario(name="Units first", selections={"units": 2, "duplexes": 1})
        richer = base.with_profile(deposit_pool=120_000)
        comparison = compare_scenarios(base.run(), richer.run())
        ```
    """

    name: str = "Scenario"
    profile: InvestmentProfile = Field(default_factory=InvestmentProfile)
    selections: Dict[str, PositiveInt] = Field(default_factory=dict)
    settings: EngineSettings = Field(default_factory=EngineSettings)

    def with_profile(self, **updates) -> "Scenario":
        """
        Copy of this scenario with profile fields replaced.

        The updated profile is re-validated, so out-of-range values raise a
        pydantic ValidationError instead of slipping into the copy.
        """
        profile = InvestmentProfile.model_validate(
            {**self.profile.model_dump(), **updates}
        )
        return self.model_copy(update={"profile": profile})

    def cache_key(self) -> str:
        """SHA-256 of the canonical JSON dump; equal scenarios share a key."""
        return hashlib.sha256(self.model_dump_json().encode("utf-8")).hexdigest()

    def run(self, catalog: Optional[PropertyCatalog] = None) -> SimulationResult:
        """Simulate this scenario."""
        logger.debug(f"Running scenario '{self.name}' ({self.cache_key()[:12]})")
        return simulate(self.profile, self.selections, catalog=catalog, settings=self.settings)
