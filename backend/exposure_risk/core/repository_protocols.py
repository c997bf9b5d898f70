"""Boundary Protocols — contracts between the risk core and its collaborators.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - RiskStateStore fields are individually addressable; the store provides no
      multi-field transaction (atomicity is synthesized by RiskStateUpdater)
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: implementations do IO; core pure functions that consume the
      returned values are never async themselves
    - NotificationDispatcher.notify is sync: fire-and-forget, nothing to await
"""

from collections.abc import AsyncIterator
from datetime import datetime, timedelta
from typing import Protocol

from exposure_risk.core.domain_types import (
    ExposureToken, NotificationPriority, RiskLevel,
)
from exposure_risk.core.scoring_models import ExposureMeasurement, ScoringConfig


class RiskStateStore(Protocol):
    """Contract for persisted risk state — implemented by infrastructure."""
    async def get_last_score(self) -> RiskLevel: ...
    async def set_last_score(self, level: RiskLevel) -> None: ...
    async def get_last_calculation_timestamp(self) -> datetime | None: ...
    async def set_last_calculation_timestamp(
        self, timestamp: datetime | None,
    ) -> None: ...
    async def get_last_key_fetch_timestamp(self) -> datetime | None: ...
    async def get_active_tracing_duration(self) -> timedelta: ...
    async def get_submission_successful(self) -> bool: ...
    async def get_exposure_token(self) -> ExposureToken | None: ...


class ScoringConfigProvider(Protocol):
    """Contract for the live backend scoring configuration."""
    async def get_scoring_config(self) -> ScoringConfig: ...


class ExposureMeasurementProvider(Protocol):
    """Contract for the platform exposure-summary lookup."""
    async def get_measurement(self, token: ExposureToken) -> ExposureMeasurement: ...


class TracingStatusProvider(Protocol):
    """Contract for the live 'tracing enabled' signal."""
    def tracing_enabled(self) -> AsyncIterator[bool]: ...


class NotificationDispatcher(Protocol):
    """Contract for the user notification side effect."""
    def notify(self, message: str, priority: NotificationPriority) -> None: ...
