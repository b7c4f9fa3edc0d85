# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Acquisition costs paid in cash at purchase.

Transfer (stamp) duty, lenders mortgage insurance and fixed conveyancing
fees. The duty schedules are simplified marginal brackets per state; with no
state a flat rate of the price is used instead.

Each bracket is `(upper, base, rate, floor)`: a price up to `upper` pays
`base + (price - floor) * rate`.
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Tuple

from ..core.primitives import AcquisitionCostSettings, AustralianStateEnum, Model, PositiveFloat

Bracket = Tuple[float, float, float, float]

STAMP_DUTY_BRACKETS: Dict[AustralianStateEnum, List[Bracket]] = {
    AustralianStateEnum.VIC: [
        (25_000, 0, 0.014, 0),
        (130_000, 350, 0.024, 25_000),
        (960_000, 2_870, 0.06, 130_000),
        (math.inf, 52_670, 0.055, 960_000),
    ],
    AustralianStateEnum.NSW: [
        (14_000, 0, 0.0125, 0),
        (32_000, 175, 0.015, 14_000),
        (85_000, 445, 0.0175, 32_000),
        (319_000, 1_372.50, 0.035, 85_000),
        (1_064_000, 9_562.50, 0.045, 319_000),
        (math.inf, 43_072.50, 0.055, 1_064_000),
    ],
    AustralianStateEnum.QLD: [
        (5_000, 0, 0.0, 0),
        (75_000, 0, 0.015, 5_000),
        (540_000, 1_050, 0.035, 75_000),
        (1_000_000, 17_325, 0.045, 540_000),
        (math.inf, 38_025, 0.0575, 1_000_000),
    ],
    AustralianStateEnum.SA: [
        (12_000, 0, 0.01, 0),
        (30_000, 120, 0.02, 12_000),
        (50_000, 480, 0.03, 30_000),
        (100_000, 1_080, 0.035, 50_000),
        (200_000, 2_830, 0.04, 100_000),
        (250_000, 6_830, 0.0425, 200_000),
        (300_000, 8_955, 0.045, 250_000),
        (500_000, 11_205, 0.0475, 300_000),
        (math.inf, 20_705, 0.055, 500_000),
    ],
    AustralianStateEnum.WA: [
        (120_000, 0, 0.019, 0),
        (150_000, 2_280, 0.029, 120_000),
        (360_000, 3_150, 0.039, 150_000),
        (725_000, 11_340, 0.049, 360_000),
        (math.inf, 29_225, 0.051, 725_000),
    ],
    AustralianStateEnum.TAS: [
        (3_000, 50, 0.0, 0),
        (25_000, 50, 0.0175, 3_000),
        (75_000, 435, 0.0225, 25_000),
        (200_000, 1_560, 0.035, 75_000),
        (375_000, 5_935, 0.04, 200_000),
        (725_000, 12_935, 0.0425, 375_000),
        (math.inf, 27_812.50, 0.045, 725_000),
    ],
    AustralianStateEnum.NT: [
        (525_000, 0, 0.0, 0),
        (3_000_000, 0, 0.0465, 525_000),
        (5_000_000, 115_087.50, 0.0565, 3_000_000),
        (math.inf, 228_087.50, 0.0665, 5_000_000),
    ],
    AustralianStateEnum.ACT: [
        (math.inf, 0, 0.04, 0),
    ],
}

# (max LVR percent, premium as a share of the loan)
LMI_TIERS: List[Tuple[float, float]] = [
    (80, 0.0),
    (85, 0.01),
    (90, 0.02),
    (95, 0.04),
    (math.inf, 0.05),
]


class AcquisitionCosts(Model):
    """Cash costs of one purchase, excluding the deposit."""

    stamp_duty: PositiveFloat
    lmi: PositiveFloat
    legal_fees: PositiveFloat
    inspection_fees: PositiveFloat
    other_fees: PositiveFloat

    @property
    def total(self) -> float:
        return (
            self.stamp_duty
            + self.lmi
            + self.legal_fees
            + self.inspection_fees
            + self.other_fees
        )

    @classmethod
    def none(cls) -> "AcquisitionCosts":
        return cls(stamp_duty=0, lmi=0, legal_fees=0, inspection_fees=0, other_fees=0)


def calculate_stamp_duty(
    price: float,
    state: Optional[AustralianStateEnum] = None,
    flat_rate: float = 0.04,
) -> float:
    """
    Transfer duty on a purchase price.

    Example:
        >>> calculate_stamp_duty(500_000, AustralianStateEnum.VIC)
        25070.0
    """
    if state is None:
        return price * flat_rate
    for upper, base, rate, floor in STAMP_DUTY_BRACKETS[state]:
        if price <= upper:
            return base + (price - floor) * rate
    raise AssertionError("duty brackets must end at infinity")


def calculate_lmi(loan_amount: float, lvr_percent: float, waived: bool = False) -> float:
    """Lenders mortgage insurance premium, rounded to whole dollars; none at or below 80% LVR."""
    if waived:
        return 0.0
    for max_lvr, rate in LMI_TIERS:
        if lvr_percent <= max_lvr:
            return float(round(loan_amount * rate))
    return 0.0


def calculate_acquisition_costs(
    price: float,
    loan_amount: float,
    settings: AcquisitionCostSettings,
) -> AcquisitionCosts:
    """
    All cash costs of a purchase under the given settings.

    Returns zero costs when acquisition costs are disabled.
    """
    if not settings.enabled:
        return AcquisitionCosts.none()

    lvr_percent = loan_amount * 100 / price if price > 0 else 0.0
    return AcquisitionCosts(
        stamp_duty=round(
            calculate_stamp_duty(price, settings.state, settings.stamp_duty_rate), 2
        ),
        lmi=calculate_lmi(loan_amount, lvr_percent, settings.lmi_waiver),
        legal_fees=settings.legal_fees,
        inspection_fees=settings.inspection_fees,
        other_fees=settings.other_fees,
    )
