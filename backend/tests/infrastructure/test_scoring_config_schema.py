"""Scoring Config Schema & Provider — boundary validation of parsed backend configuration.

Tests cover:
    - Valid document converts to a ScoringConfig usable by the calculator
    - The attenuation cap is read from the document (default 30), not from Settings
    - Exactly one HIGH class required
    - min > max, negative weights and non-positive divisor rejected
    - StaticScoringConfigProvider serves and replaces configuration
"""

import pytest
from pydantic import ValidationError

from exposure_risk.config import Settings
from exposure_risk.core.calculate_score import calculate_risk_score
from exposure_risk.infrastructure.scoring_config_provider import StaticScoringConfigProvider
from exposure_risk.schemas.scoring_config import ScoringConfigSchema


def _document(**overrides):
    document = {
        "weights": {"low": 1.0, "mid": 0.5, "high": 0.0},
        "risk_score_classes": [
            {"label": "LOW", "min": 0, "max": 14.99},
            {"label": "HIGH", "min": 15, "max": 100},
        ],
        "default_bucket_offset": 0,
        "normalization_divisor": 8,
        "max_attenuation_duration": 30,
    }
    document.update(overrides)
    return document


def test_valid_document_converts_to_domain(measurement):
    config = ScoringConfigSchema.model_validate(_document()).to_domain()
    assert config.classes.high_class.max == 100
    assert calculate_risk_score(config, measurement) == 25.00


def test_attenuation_cap_comes_from_the_document():
    document = _document()
    del document["max_attenuation_duration"]
    assert ScoringConfigSchema.model_validate(document).to_domain().max_attenuation_duration == 30

    capped = ScoringConfigSchema.model_validate(_document(max_attenuation_duration=10))
    assert capped.to_domain().max_attenuation_duration == 10
    assert "max_attenuation_duration" not in Settings.model_fields


def test_missing_high_class_rejected():
    with pytest.raises(ValidationError, match="HIGH"):
        ScoringConfigSchema.model_validate(_document(
            risk_score_classes=[{"label": "LOW", "min": 0, "max": 14.99}],
        ))


def test_duplicate_high_class_rejected():
    with pytest.raises(ValidationError, match="found 2"):
        ScoringConfigSchema.model_validate(_document(
            risk_score_classes=[
                {"label": "HIGH", "min": 15, "max": 100},
                {"label": "HIGH", "min": 10, "max": 90},
            ],
        ))


def test_class_min_above_max_rejected():
    with pytest.raises(ValidationError, match="min must not exceed max"):
        ScoringConfigSchema.model_validate(_document(
            risk_score_classes=[{"label": "HIGH", "min": 50, "max": 10}],
        ))


def test_negative_weight_rejected():
    with pytest.raises(ValidationError):
        ScoringConfigSchema.model_validate(_document(
            weights={"low": -1.0, "mid": 0.5, "high": 0.0},
        ))


@pytest.mark.parametrize("divisor", [0, -8])
def test_non_positive_divisor_rejected(divisor):
    with pytest.raises(ValidationError):
        ScoringConfigSchema.model_validate(_document(normalization_divisor=divisor))


async def test_static_provider_serves_and_replaces(config_factory):
    provider = StaticScoringConfigProvider.from_document(_document())
    first = await provider.get_scoring_config()
    assert first.normalization_divisor == 8

    replacement = config_factory(high_min=20, high_max=200)
    provider.replace(replacement)
    assert await provider.get_scoring_config() is replacement
