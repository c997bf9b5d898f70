"""Domain Types — risk levels, notification priorities and value types.

Invariants:
    - Exactly one RiskLevel is current at any time
    - LOW and INCREASED are the only decided levels; UNKNOWN_* are undecided
    - HIGH_RISK_LEVELS and LOW_RISK_LEVELS are disjoint; UNDETERMINED is in neither
    - Every RiskLevel has a stable integer code for persistence and logs

Design Decisions:
    - str Enums: serialize to JSON without custom encoders (store values, API responses)
    - Integer codes kept alongside names: API responses carry both
"""

from enum import Enum
from typing import NewType


# ─── Value Types ─────────────────────────────────────────────────

RiskScore = NewType("RiskScore", float)     # rounded to 2 decimals
ExposureToken = NewType("ExposureToken", str)


# ─── Enums ───────────────────────────────────────────────────────

class RiskLevel(str, Enum):
    """Risk classification states. Persisted as the `last_score` field."""
    UNKNOWN_INITIAL = "unknown_initial"
    NO_CALCULATION_POSSIBLE_TRACING_OFF = "no_calculation_possible_tracing_off"
    LOW = "low"
    INCREASED = "increased"
    UNKNOWN_OUTDATED = "unknown_outdated"
    UNKNOWN_OUTDATED_MANUAL = "unknown_outdated_manual"
    UNDETERMINED = "undetermined"

    @property
    def code(self) -> int:
        return _RISK_LEVEL_CODES[self]

    @property
    def is_decided(self) -> bool:
        return self in (RiskLevel.LOW, RiskLevel.INCREASED)


_RISK_LEVEL_CODES: dict[RiskLevel, int] = {
    RiskLevel.UNKNOWN_INITIAL: 0,
    RiskLevel.NO_CALCULATION_POSSIBLE_TRACING_OFF: 1,
    RiskLevel.LOW: 2,
    RiskLevel.INCREASED: 3,
    RiskLevel.UNKNOWN_OUTDATED: 4,
    RiskLevel.UNKNOWN_OUTDATED_MANUAL: 5,
    RiskLevel.UNDETERMINED: 9001,
}


HIGH_RISK_LEVELS: frozenset[RiskLevel] = frozenset({RiskLevel.INCREASED})

LOW_RISK_LEVELS: frozenset[RiskLevel] = frozenset({
    RiskLevel.UNKNOWN_INITIAL,
    RiskLevel.NO_CALCULATION_POSSIBLE_TRACING_OFF,
    RiskLevel.LOW,
    RiskLevel.UNKNOWN_OUTDATED,
    RiskLevel.UNKNOWN_OUTDATED_MANUAL,
})


class NotificationPriority(str, Enum):
    """Priority hint passed to the notification dispatcher."""
    HIGH = "high"


HIGH_RISK_CLASS_LABEL = "HIGH"
