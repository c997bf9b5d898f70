"""Risk Classification — maps a score onto the backend's HIGH band.

Invariants:
    - PURE: no IO, no side effects beyond DEBUG logging
    - Three-way decision: inside HIGH -> True, below HIGH -> False,
      above HIGH.max -> ClassificationError (config must cover the full score range)
    - A classification without a "HIGH" label always raises, regardless of score

Design Decisions:
    - Exceptions, not error dicts: classification failures are not user input
      errors and must abort the cycle before anything is persisted
"""

import logging

from exposure_risk.core.errors import ClassificationError, ErrorContext
from exposure_risk.core.scoring_models import RiskScoreClass, ScoringConfig

logger = logging.getLogger(__name__)


def within_defined_level_threshold(score: float, min_value: float, max_value: float) -> bool:
    return min_value <= score <= max_value


def find_high_risk_class(config: ScoringConfig) -> RiskScoreClass:
    """Return the HIGH band or raise if the backend did not deliver one."""
    high_class = config.classes.high_class
    if high_class is None:
        raise ClassificationError("No high risk score class found")
    return high_class


def is_increased_risk(config: ScoringConfig, score: float) -> bool:
    """Classify score against the HIGH band. Raises on a missing or undersized band."""
    high_class = find_high_risk_class(config)

    if within_defined_level_threshold(score, high_class.min, high_class.max):
        logger.debug(f"{score} is within the high risk class [{high_class.min}, {high_class.max}]")
        return True

    if score > high_class.max:
        raise ClassificationError(
            "Risk score is above the max threshold for score class",
            ErrorContext(debug_info={"score": score, "max": high_class.max}),
        )

    return False
