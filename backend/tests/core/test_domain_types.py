"""Domain Types — verifies risk level codes, bands and decided states.

Tests:
    - Integer codes are stable
    - Only LOW and INCREASED are decided
    - High and low bands are disjoint and exclude UNDETERMINED
"""

from exposure_risk.core.domain_types import (
    HIGH_RISK_LEVELS, LOW_RISK_LEVELS, RiskLevel,
)


def test_risk_level_codes():
    assert RiskLevel.UNKNOWN_INITIAL.code == 0
    assert RiskLevel.NO_CALCULATION_POSSIBLE_TRACING_OFF.code == 1
    assert RiskLevel.LOW.code == 2
    assert RiskLevel.INCREASED.code == 3
    assert RiskLevel.UNKNOWN_OUTDATED.code == 4
    assert RiskLevel.UNKNOWN_OUTDATED_MANUAL.code == 5
    assert RiskLevel.UNDETERMINED.code == 9001


def test_only_low_and_increased_are_decided():
    assert {level for level in RiskLevel if level.is_decided} == {
        RiskLevel.LOW, RiskLevel.INCREASED,
    }


def test_bands_are_disjoint_and_exclude_undetermined():
    assert HIGH_RISK_LEVELS.isdisjoint(LOW_RISK_LEVELS)
    assert RiskLevel.UNDETERMINED not in HIGH_RISK_LEVELS | LOW_RISK_LEVELS
    assert HIGH_RISK_LEVELS | LOW_RISK_LEVELS | {RiskLevel.UNDETERMINED} == set(RiskLevel)


def test_risk_level_serializes_as_string():
    assert RiskLevel.INCREASED.value == "increased"
    assert RiskLevel("low") is RiskLevel.LOW
