"""Risk Classification — tests for the three-way HIGH band decision.

Tests cover:
    - Boundaries of HIGH = [15, 100]: 14.99, 15.00, 100.00, 100.01
    - Missing HIGH class raises regardless of score
    - find_high_risk_class picks the HIGH label among others
    - Reference scenario (25.00) is increased risk
"""

import pytest

from exposure_risk.core.classify_risk import (
    find_high_risk_class, is_increased_risk, within_defined_level_threshold,
)
from exposure_risk.core.errors import ClassificationError


# ─── Boundaries ──────────────────────────────────────────────────

def test_score_below_high_min_is_not_increased(scoring_config):
    assert is_increased_risk(scoring_config, 14.99) is False


def test_score_at_high_min_is_increased(scoring_config):
    assert is_increased_risk(scoring_config, 15.00) is True


def test_score_at_high_max_is_increased(scoring_config):
    assert is_increased_risk(scoring_config, 100.00) is True


def test_score_above_high_max_raises(scoring_config):
    with pytest.raises(ClassificationError) as exc_info:
        is_increased_risk(scoring_config, 100.01)
    assert exc_info.value.code == "CLASSIFICATION_ERROR"
    assert "above the max threshold" in exc_info.value.message


def test_zero_score_is_not_increased(scoring_config):
    assert is_increased_risk(scoring_config, 0.0) is False


def test_reference_score_is_increased(scoring_config):
    assert is_increased_risk(scoring_config, 25.00) is True


# ─── Missing HIGH band ───────────────────────────────────────────

@pytest.mark.parametrize("score", [0.0, 14.99, 15.0, 50.0, 1000.0])
def test_missing_high_class_always_raises(config_factory, score):
    config = config_factory(include_high=False)
    with pytest.raises(ClassificationError, match="No high risk score class"):
        is_increased_risk(config, score)


def test_find_high_risk_class_returns_high_label(scoring_config):
    high = find_high_risk_class(scoring_config)
    assert high.label == "HIGH"
    assert (high.min, high.max) == (15, 100)


# ─── within_defined_level_threshold ──────────────────────────────

def test_threshold_is_inclusive_on_both_ends():
    assert within_defined_level_threshold(1.0, 1, 2)
    assert within_defined_level_threshold(2.0, 1, 2)
    assert not within_defined_level_threshold(0.99, 1, 2)
    assert not within_defined_level_threshold(2.01, 1, 2)
