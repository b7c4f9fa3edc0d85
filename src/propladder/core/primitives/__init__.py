# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
propladder Core Primitives

Essential building blocks for the timeline simulation engine.
Handles the immutable model base, fixed-point money, growth compounding,
engine settings, period labelling and configuration validation.
"""

from .enums import (
    AffordabilityTestEnum,
    AustralianStateEnum,
    BottleneckTypeEnum,
    PriorityEnum,
    PurchaseStatusEnum,
    RepaymentFrequencyEnum,
    RiskLevelEnum,
    SeverityEnum,
    SimulatorStatusEnum,
)
from .growth_rates import (
    DEFAULT_PERIODS_PER_YEAR,
    GrowthCurve,
    annual_to_period_rate,
    compound,
)
from .model import Model
from .money import Money
from .settings import AcquisitionCostSettings, EngineSettings, RentalRecognitionSettings
from .timeline import period_label, period_labels, period_to_year, total_periods
from .types import FloatBetween0And1, GrowthRateFloat, PositiveFloat, PositiveInt, PositiveIntGe1
from .validation import (
    ConfigurationError,
    validate_amounts,
    validate_horizon,
    validate_non_negative_amount,
    validate_quantities,
)

__all__ = [
    # Core models
    "Model",
    "Money",
    # Growth
    "DEFAULT_PERIODS_PER_YEAR",
    "GrowthCurve",
    "annual_to_period_rate",
    "compound",
    # Settings
    "AcquisitionCostSettings",
    "EngineSettings",
    "RentalRecognitionSettings",
    # Timeline helpers
    "period_label",
    "period_labels",
    "period_to_year",
    "total_periods",
    # Enums
    "AffordabilityTestEnum",
    "AustralianStateEnum",
    "BottleneckTypeEnum",
    "PriorityEnum",
    "PurchaseStatusEnum",
    "RepaymentFrequencyEnum",
    "RiskLevelEnum",
    "SeverityEnum",
    "SimulatorStatusEnum",
    # Types
    "FloatBetween0And1",
    "GrowthRateFloat",
    "PositiveFloat",
    "PositiveInt",
    "PositiveIntGe1",
    # Validation
    "ConfigurationError",
    "validate_amounts",
    "validate_horizon",
    "validate_non_negative_amount",
    "validate_quantities",
]
