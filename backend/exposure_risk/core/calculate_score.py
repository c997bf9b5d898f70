"""Risk Score Calculation — weighted attenuation formula over one exposure summary.

Invariants:
    - PURE: no IO, no clock, identical inputs give an identical score
    - Each bucket duration is capped at config.max_attenuation_duration (no lower bound)
    - Rounding happens exactly once, at the end: round-half-to-even on score * 100

Design Decisions:
    - Python round() is banker's rounding; applied to score * DECIMAL_MULTIPLIER so
      the two-decimal result matches the upstream rounding bit-for-bit
    - Formula logged at DEBUG: lets support reproduce a score from the log line alone
"""

import logging

from exposure_risk.core.domain_types import RiskScore
from exposure_risk.core.scoring_models import ExposureMeasurement, ScoringConfig

logger = logging.getLogger(__name__)

DECIMAL_MULTIPLIER: int = 100


def capped(duration: int, cap: int) -> int:
    """Clamp a bucket duration to the configured maximum."""
    return cap if duration >= cap else duration


def weighted_attenuation_duration(
    config: ScoringConfig, measurement: ExposureMeasurement,
) -> float:
    """Sum of capped bucket durations times their weights, plus the bucket offset."""
    cap = config.max_attenuation_duration
    low, mid, high = (capped(d, cap) for d in measurement.attenuation_durations)

    weighted_low = config.weights.low * low
    weighted_mid = config.weights.mid * mid
    weighted_high = config.weights.high * high
    offset = float(config.default_bucket_offset)

    logger.debug(
        f"Weighted attenuation: ({weighted_low} + {weighted_mid} + "
        f"{weighted_high} + {offset})"
    )
    return weighted_low + weighted_mid + weighted_high + offset


def calculate_risk_score(
    config: ScoringConfig, measurement: ExposureMeasurement,
) -> RiskScore:
    """(maximum_risk_score / normalization_divisor) * weighted duration, 2 decimals."""
    weighted = weighted_attenuation_duration(config, measurement)
    maximum_risk_score = float(measurement.maximum_risk_score)
    divisor = float(config.normalization_divisor)

    logger.debug(
        f"Formula used: ({maximum_risk_score} / {divisor}) * {weighted}"
    )
    raw_score = (maximum_risk_score / divisor) * weighted
    return RiskScore(round(raw_score * DECIMAL_MULTIPLIER) / DECIMAL_MULTIPLIER)
