# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import pytest
from pydantic import ValidationError

from propladder.core.primitives import EngineSettings, RentalRecognitionSettings


def test_engine_settings_default_instantiation():
    """Test that EngineSettings can be instantiated with default values."""
    settings = EngineSettings()
    assert settings.periods_per_year == 2
    assert settings.base_year == 2025
    assert settings.interest_rate == 0.065
    assert settings.expense_ratio == 0.30
    assert settings.max_extractable_lvr == 0.80
    assert settings.max_purchases_per_period == 1
    assert settings.use_type_growth is False
    assert isinstance(settings.rental_recognition, RentalRecognitionSettings)


def test_engine_settings_custom_instantiation():
    """Test that nested settings accept plain dicts."""
    settings = EngineSettings(
        periods_per_year=4,
        rental_recognition={"small_portfolio_rate": 0.8},
    )
    assert settings.periods_per_year == 4
    assert settings.rental_recognition.small_portfolio_rate == 0.8


def test_engine_settings_are_frozen():
    settings = EngineSettings()
    with pytest.raises(ValidationError):
        settings.interest_rate = 0.07


def test_engine_settings_field_validation():
    """Test Pydantic's built-in field validation for constraints."""
    with pytest.raises(ValidationError):
        EngineSettings(periods_per_year=0)  # Fails ge=1
    with pytest.raises(ValidationError):
        EngineSettings(periods_per_year=1.5)  # Fails strict int
    with pytest.raises(ValidationError):
        EngineSettings(interest_rate=1.2)  # Fails le=1
    with pytest.raises(ValidationError):
        EngineSettings(unknown_field=True)  # extra="forbid"


def test_engine_settings_base_year_validator():
    with pytest.raises(ValueError, match="base_year must be a calendar year"):
        EngineSettings(base_year=25)


@pytest.mark.parametrize(
    "owned_count,expected",
    [(0, 0.75), (1, 0.75), (2, 0.75), (3, 0.70), (4, 0.70), (5, 0.65), (12, 0.65)],
)
def test_rental_recognition_tiers(owned_count, expected):
    assert RentalRecognitionSettings().rate_for(owned_count) == expected


def test_rental_recognition_disabled():
    assert RentalRecognitionSettings(enabled=False).rate_for(10) == 1.0
