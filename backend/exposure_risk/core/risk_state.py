"""Risk State — persisted record and explicit outcome types for update and cycle.

Invariants:
    - PersistedRiskState starts as UNKNOWN_INITIAL with no calculation timestamp
    - StateUpdateResult / CycleResult are either success (new_state set, error None)
      or failure (error set); partially_applied only meaningful on failure
    - partially_applied is True iff a write landed and its rollback did not restore it

Design Decisions:
    - Result types over bare exceptions at the orchestrator boundary: callers branch
      on .ok without try/except, while the updater still re-raises internally
"""

from dataclasses import dataclass
from datetime import datetime

from exposure_risk.core.domain_types import RiskLevel, RiskScore


@dataclass(frozen=True)
class PersistedRiskState:
    """The two fields a calculation cycle writes."""
    last_score: RiskLevel = RiskLevel.UNKNOWN_INITIAL
    last_calculation_timestamp: datetime | None = None


@dataclass(frozen=True)
class StateUpdateResult:
    """Outcome of one transactional two-field update."""
    new_state: PersistedRiskState | None = None
    error: Exception | None = None
    partially_applied: bool = False
    notification_sent: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(
        cls, new_state: PersistedRiskState, notification_sent: bool = False,
    ) -> "StateUpdateResult":
        return cls(new_state=new_state, notification_sent=notification_sent)

    @classmethod
    def failure(
        cls, error: Exception, partially_applied: bool,
    ) -> "StateUpdateResult":
        return cls(error=error, partially_applied=partially_applied)


@dataclass(frozen=True)
class CycleResult:
    """Outcome of one full risk-level calculation cycle."""
    risk_level: RiskLevel | None = None
    risk_score: RiskScore | None = None
    new_state: PersistedRiskState | None = None
    error: Exception | None = None
    partially_applied: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(
        cls,
        risk_level: RiskLevel,
        new_state: PersistedRiskState,
        risk_score: RiskScore | None = None,
    ) -> "CycleResult":
        return cls(risk_level=risk_level, risk_score=risk_score, new_state=new_state)

    @classmethod
    def failure(
        cls,
        error: Exception,
        partially_applied: bool = False,
        risk_level: RiskLevel | None = None,
    ) -> "CycleResult":
        return cls(
            risk_level=risk_level, error=error, partially_applied=partially_applied,
        )
