"""Notification Policy — decides whether a risk level change warrants a user notification.

Invariants:
    - Fires only on a crossing between LOW_RISK_LEVELS and HIGH_RISK_LEVELS (either direction)
    - Never fires after a successful test result submission
    - UNDETERMINED belongs to neither band, so transitions involving it never fire
"""

from exposure_risk.core.domain_types import (
    HIGH_RISK_LEVELS, LOW_RISK_LEVELS, RiskLevel,
)


def risk_level_changed_between_low_and_high(
    previous: RiskLevel, current: RiskLevel,
) -> bool:
    return (
        (previous in HIGH_RISK_LEVELS and current in LOW_RISK_LEVELS)
        or (previous in LOW_RISK_LEVELS and current in HIGH_RISK_LEVELS)
    )


def should_notify(
    previous: RiskLevel, current: RiskLevel, submission_successful: bool,
) -> bool:
    """Submission already told the user their outcome; stay silent afterwards."""
    return (
        risk_level_changed_between_low_and_high(previous, current)
        and not submission_successful
    )
