# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Purchase queue: expands a per-type selection into ordered acquisition slots."""

from __future__ import annotations

import logging
from typing import List, Mapping

from pydantic import Field

from ..core.primitives import Model, PositiveInt, validate_quantities
from .catalog import PropertyCatalog

logger = logging.getLogger(__name__)


class AcquisitionSlot(Model):
    """
    One desired purchase in the FIFO queue.

    Attributes:
        property_type_id: Catalog type id of the property to buy
        sequence_index: 0-based position in the queue (purchase priority)
        instance_number: 1-based count of this type within the queue
    """

    property_type_id: str = Field(..., min_length=1)
    sequence_index: PositiveInt
    instance_number: PositiveInt = 1

    @property
    def instance_id(self) -> str:
        """Stable identifier for this purchase instance, e.g. "units_2"."""
        return f"{self.property_type_id}_{self.instance_number}"


def build_purchase_queue(
    selections: Mapping[str, int], catalog: PropertyCatalog
) -> List[AcquisitionSlot]:
    """
    Expand a quantity-per-type selection into an ordered slot queue.

    Types appear in the selection's insertion order (the order the investor
    added them) and each type is expanded to `quantity` consecutive slots.
    No financial computation happens here.

    Args:
        selections: Mapping of property type id to quantity
        catalog: Catalog used to reject unknown type ids

    Returns:
        Slots with sequence_index 0..n-1

    Raises:
        ConfigurationError: On a negative quantity or a type id missing from the
            catalog, including ids selected with quantity 0
    """
    validate_quantities(selections)

    slots: List[AcquisitionSlot] = []
    for type_id, quantity in selections.items():
        catalog.get(type_id)
        if quantity == 0:
            continue
        for instance_number in range(1, quantity + 1):
            slots.append(
                AcquisitionSlot(
                    property_type_id=type_id,
                    sequence_index=len(slots),
                    instance_number=instance_number,
                )
            )

    logger.debug(f"Built purchase queue of {len(slots)} slots from {len(selections)} types")
    return slots
