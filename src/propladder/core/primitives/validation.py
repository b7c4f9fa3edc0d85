# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Configuration validation shared by the simulation entry points.

Model construction already rejects most bad input through pydantic field
constraints. These checks run again at the engine boundary because profiles
restored from snapshots (or built with `model_construct`) bypass validation.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """
    Invalid engine input: bad horizon, unknown property type, or a negative,
    NaN or infinite monetary value.

    Raised before any period is simulated; nothing is partially computed.
    Like pydantic's `ValidationError` (raised when a model is constructed
    with out-of-range values) it is a `ValueError`, which is the common base
    to catch for any rejected input.
    """


def validate_non_negative_amount(value: Any, field_name: str) -> float:
    """
    Validate a monetary input is a finite, non-negative number.

    Args:
        value: Value to check
        field_name: Name used in the error message

    Returns:
        The value as a float

    Raises:
        ConfigurationError: If the value is not a number, NaN, infinite or negative
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(
            f"{field_name} must be a number, got {type(value).__name__}"
        )
    if not math.isfinite(value):
        raise ConfigurationError(f"{field_name} must be finite, got {value}")
    if value < 0:
        raise ConfigurationError(f"{field_name} must be non-negative, got {value}")
    return float(value)


def validate_amounts(source: Any, field_names: Iterable[str], prefix: str = "") -> None:
    """Validate several monetary attributes of `source` at once."""
    for name in field_names:
        label = f"{prefix}.{name}" if prefix else name
        try:
            validate_non_negative_amount(getattr(source, name), label)
        except ConfigurationError as e:
            logger.warning(f"Rejected configuration: {e}")
            raise


def validate_horizon(timeline_years: Any) -> int:
    """
    Validate the planning horizon in years.

    A zero horizon is accepted (it simulates no periods); negative or
    non-integer horizons are configuration errors.
    """
    if isinstance(timeline_years, bool) or not isinstance(timeline_years, int):
        raise ConfigurationError(
            f"timeline_years must be an integer, got {timeline_years!r}"
        )
    if timeline_years < 0:
        logger.warning(f"Rejected negative horizon: {timeline_years}")
        raise ConfigurationError(
            f"timeline_years must be non-negative, got {timeline_years}"
        )
    return timeline_years


def validate_quantities(selections: Mapping[str, Any]) -> None:
    """Validate a selection mapping of type id -> non-negative integer quantity."""
    for type_id, quantity in selections.items():
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise ConfigurationError(
                f"Quantity for '{type_id}' must be an integer, got {quantity!r}"
            )
        if quantity < 0:
            raise ConfigurationError(
                f"Quantity for '{type_id}' must be non-negative, got {quantity}"
            )
