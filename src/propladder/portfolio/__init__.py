# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Portfolio inputs and run state.

The investor profile, the property catalog, the purchase queue built from a
selection, the per-run portfolio state the simulator mutates, and the
borrowing capacity and acquisition cost calculators.
"""

from .capacity import (
    BorrowingCapacityInput,
    BorrowingCapacityResult,
    calculate_borrowing_capacity,
    convert_fees,
)
from .catalog import PropertyAssumption, PropertyCatalog
from .costs import (
    AcquisitionCosts,
    calculate_acquisition_costs,
    calculate_lmi,
    calculate_stamp_duty,
)
from .profile import InvestmentProfile
from .queue import AcquisitionSlot, build_purchase_queue
from .state import OwnedProperty, PortfolioSnapshot, PortfolioState

__all__ = [
    "AcquisitionCosts",
    "AcquisitionSlot",
    "BorrowingCapacityInput",
    "BorrowingCapacityResult",
    "InvestmentProfile",
    "OwnedProperty",
    "PortfolioSnapshot",
    "PortfolioState",
    "PropertyAssumption",
    "PropertyCatalog",
    "build_purchase_queue",
    "calculate_acquisition_costs",
    "calculate_borrowing_capacity",
    "calculate_lmi",
    "calculate_stamp_duty",
    "convert_fees",
]
