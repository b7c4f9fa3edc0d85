# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Optional

from pydantic import Field, model_validator

from .enums import AustralianStateEnum
from .model import Model
from .types import FloatBetween0And1, PositiveFloat, PositiveIntGe1


class RentalRecognitionSettings(Model):
    """
    Share of gross rent a lender recognises as the portfolio grows.

    Larger portfolios carry more vacancy and concentration risk, so each
    additional tier of holdings is credited with a smaller share of its rent.
    """

    enabled: bool = True
    small_portfolio_rate: FloatBetween0And1 = Field(
        default=0.75, description="Recognised share while at most 2 properties are owned."
    )
    medium_portfolio_rate: FloatBetween0And1 = Field(
        default=0.70, description="Recognised share for 3-4 owned properties."
    )
    large_portfolio_rate: FloatBetween0And1 = Field(
        default=0.65, description="Recognised share for 5 or more owned properties."
    )

    def rate_for(self, owned_count: int) -> float:
        """Recognition rate for a portfolio of `owned_count` purchased properties."""
        if not self.enabled:
            return 1.0
        if owned_count <= 2:
            return self.small_portfolio_rate
        if owned_count <= 4:
            return self.medium_portfolio_rate
        return self.large_portfolio_rate


class AcquisitionCostSettings(Model):
    """
    Transaction costs paid in cash on top of each deposit.

    Disabled by default, in which case a purchase needs only its deposit plus
    the profile's buffer. When enabled, stamp duty, lenders mortgage
    insurance and fixed fees are added to the cash a purchase requires.
    """

    enabled: bool = False
    state: Optional[AustralianStateEnum] = Field(
        default=None,
        description="Duty schedule to apply; None uses the flat stamp_duty_rate.",
    )
    stamp_duty_rate: FloatBetween0And1 = Field(
        default=0.04, description="Flat duty rate used when no state is set."
    )
    lmi_waiver: bool = Field(
        default=False, description="Waive mortgage insurance above 80% LVR."
    )
    legal_fees: PositiveFloat = 2_000.0
    inspection_fees: PositiveFloat = 650.0
    other_fees: PositiveFloat = Field(
        default=1_500.0, description="Searches, mortgage registration and settlement fees."
    )

    @property
    def fixed_fees(self) -> float:
        return self.legal_fees + self.inspection_fees + self.other_fees


class EngineSettings(Model):
    """
    Global assumptions for the timeline simulation engine.

    These are market and lender assumptions shared by every scenario, as
    opposed to the investor-specific values on `InvestmentProfile`.

    Usage Examples:
        # Defaults: half-year periods, 6.5% interest-only lending
        settings = EngineSettings()

        # Quarterly ticks with a higher rate environment
        settings = EngineSettings(periods_per_year=4, interest_rate=0.075)

        # Count Victorian stamp duty, LMI and fees toward each purchase's cash
        settings = EngineSettings(
            acquisition_costs=AcquisitionCostSettings(enabled=True, state="VIC")
        )
    """

    periods_per_year: PositiveIntGe1 = Field(
        default=2, description="Simulation ticks per calendar year (2 = half-years)."
    )
    base_year: int = Field(
        default=2025, description="Calendar year of the first simulated period."
    )
    interest_rate: FloatBetween0And1 = Field(
        default=0.065, description="Annual interest-only rate applied to all debt."
    )
    expense_ratio: FloatBetween0And1 = Field(
        default=0.30,
        description="Operating expenses as a share of gross rent (management, maintenance, vacancy, insurance).",
    )
    max_extractable_lvr: FloatBetween0And1 = Field(
        default=0.80, description="LVR ceiling up to which equity may be extracted."
    )
    max_purchases_per_period: PositiveIntGe1 = Field(
        default=1, description="Maximum acquisitions committed in a single period."
    )
    use_type_growth: bool = Field(
        default=False,
        description=(
            "If True each property grows at its catalog growth_percent as a flat curve; "
            "otherwise every property follows the profile's tiered growth curve."
        ),
    )
    rental_recognition: RentalRecognitionSettings = Field(
        default_factory=RentalRecognitionSettings
    )
    acquisition_costs: AcquisitionCostSettings = Field(
        default_factory=AcquisitionCostSettings
    )

    @model_validator(mode="after")
    def check_base_year(self) -> "EngineSettings":
        if self.base_year < 1900:
            raise ValueError(f"base_year must be a calendar year, got {self.base_year}")
        return self
