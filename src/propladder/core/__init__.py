# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
propladder Core Framework

Foundational building blocks shared by the portfolio and analysis layers.
"""

from . import primitives
from .primitives import ConfigurationError, EngineSettings, GrowthCurve, Model, Money

__all__ = [
    "primitives",
    "ConfigurationError",
    "EngineSettings",
    "GrowthCurve",
    "Model",
    "Money",
]
