# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Property type assumptions and the catalog they are looked up from."""

from __future__ import annotations

import logging
from typing import Dict, List

from pydantic import Field, model_validator

from ..core.primitives import ConfigurationError, FloatBetween0And1, GrowthCurve, Model

logger = logging.getLogger(__name__)


class PropertyAssumption(Model):
    """
    Market assumptions for one property type.

    Attributes:
        type_id: Stable identifier referenced by selections
        name: Human-readable type name
        average_cost: Typical purchase price
        yield_percent: Gross annual rental yield as a decimal
        growth_percent: Flat annual capital growth as a decimal
        deposit_percent: Deposit as a share of cost (1.0 = cash purchase)

    Example:
        >>> units = PropertyAssumption(
        ...     type_id="units", name="Units / Apartments", average_cost=350_000,
        ...     yield_percent=0.07, growth_percent=0.05, deposit_percent=0.15,
        ... )
        >>> units.loan_amount
        297500.0
    """

    type_id: str = Field(..., min_length=1)
    name: str = ""
    average_cost: float = Field(..., gt=0)
    yield_percent: FloatBetween0And1
    growth_percent: FloatBetween0And1
    deposit_percent: FloatBetween0And1

    @property
    def required_deposit(self) -> float:
        return self.average_cost * self.deposit_percent

    @property
    def loan_amount(self) -> float:
        return self.average_cost - self.required_deposit

    @property
    def display_name(self) -> str:
        return self.name or self.type_id

    def flat_growth_curve(self) -> GrowthCurve:
        """This type's growth_percent expressed as a single-tier curve."""
        return GrowthCurve.flat(self.growth_percent)


class PropertyCatalog(Model):
    """
    Lookup of property assumptions by type id.

    Selections reference property types by id; an id the catalog does not
    know is a configuration error rather than a silently skipped purchase.
    """

    assumptions: List[PropertyAssumption] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_ids(self) -> "PropertyCatalog":
        seen = set()
        for assumption in self.assumptions:
            if assumption.type_id in seen:
                raise ValueError(f"Duplicate property type id '{assumption.type_id}'")
            seen.add(assumption.type_id)
        return self

    def __contains__(self, type_id: object) -> bool:
        return any(a.type_id == type_id for a in self.assumptions)

    @property
    def type_ids(self) -> List[str]:
        return [a.type_id for a in self.assumptions]

    @property
    def by_id(self) -> Dict[str, PropertyAssumption]:
        return {a.type_id: a for a in self.assumptions}

    def get(self, type_id: str) -> PropertyAssumption:
        """
        Look up a property type.

        Raises:
            ConfigurationError: If the catalog has no entry for `type_id`
        """
        for assumption in self.assumptions:
            if assumption.type_id == type_id:
                return assumption
        logger.warning(f"Unknown property type '{type_id}' requested from catalog")
        raise ConfigurationError(f"Property type '{type_id}' is not in the catalog")

    @classmethod
    def default(cls) -> "PropertyCatalog":
        """Catalog of the standard residential and commercial property types."""
        rows = [
            ("units", "Units / Apartments", 350_000, 0.07, 0.05, 0.15),
            ("villas", "Villas / Townhouses", 325_000, 0.07, 0.06, 0.15),
            ("houses-regional", "Houses (Regional focus)", 350_000, 0.07, 0.06, 0.15),
            ("granny-flats", "Granny Flats (add-on)", 195_000, 0.09, 0.0, 1.0),
            ("duplexes", "Duplexes", 550_000, 0.07, 0.06, 0.15),
            ("small-blocks", "Small Blocks (3-4 units)", 900_000, 0.07, 0.06, 0.20),
            ("metro-houses", "Metro Houses", 800_000, 0.04, 0.07, 0.15),
            ("large-blocks", "Larger Blocks (10-20 units)", 3_500_000, 0.07, 0.05, 0.45),
            ("commercial", "Commercial Property", 3_000_000, 0.08, 0.04, 0.40),
        ]
        return cls(
            assumptions=[
                PropertyAssumption(
                    type_id=type_id,
                    name=name,
                    average_cost=cost,
                    yield_percent=yield_percent,
                    growth_percent=growth_percent,
                    deposit_percent=deposit_percent,
                )
                for type_id, name, cost, yield_percent, growth_percent, deposit_percent in rows
            ]
        )
