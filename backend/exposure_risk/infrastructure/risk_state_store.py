"""Risk State Stores — in-memory and SQLAlchemy implementations of RiskStateStore.

Invariants:
    - Fresh stores report UNKNOWN_INITIAL, no timestamps, zero active tracing,
      no successful submission, no exposure token
    - Each setter persists exactly one field; there is no multi-field transaction
    - SqlRiskStateStore commits per write; SQLAlchemy failures surface as PersistenceError
      through DatabaseSessionManager.session()
    - Timestamps come back timezone-aware: naive values are read as UTC

Design Decisions:
    - Setters for key-fetch timestamp, tracing duration, submission flag and token
      exist on the concrete stores only: the core reads them, other components write them
    - Text encoding per field (enum value, ISO-8601, seconds, "true"/"false") keeps
      rows human-readable in psql/sqlite3
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from sqlalchemy import select

from exposure_risk.core.domain_types import ExposureToken, RiskLevel
from exposure_risk.core.risk_state import PersistedRiskState
from exposure_risk.infrastructure.database import DatabaseSessionManager
from exposure_risk.models.risk_state_field import RiskStateField

logger = logging.getLogger(__name__)

LAST_SCORE = "last_score"
LAST_CALCULATION_TIMESTAMP = "last_calculation_timestamp"
LAST_KEY_FETCH_TIMESTAMP = "last_key_fetch_timestamp"
ACTIVE_TRACING_DURATION = "active_tracing_duration"
SUBMISSION_SUCCESSFUL = "submission_successful"
EXPOSURE_TOKEN = "exposure_token"


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to a naive timestamp written by a component that dropped the offset."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


# ─── In-memory ───────────────────────────────────────────────────

@dataclass
class InMemoryRiskStateStore:
    """Process-local store. No locking: callers serialize cycles."""

    last_score: RiskLevel = RiskLevel.UNKNOWN_INITIAL
    last_calculation_timestamp: datetime | None = None
    last_key_fetch_timestamp: datetime | None = None
    active_tracing_duration: timedelta = field(default_factory=timedelta)
    submission_successful: bool = False
    exposure_token: ExposureToken | None = None

    def __post_init__(self):
        self.last_calculation_timestamp = as_utc(self.last_calculation_timestamp)
        self.last_key_fetch_timestamp = as_utc(self.last_key_fetch_timestamp)

    async def get_last_score(self) -> RiskLevel:
        return self.last_score

    async def set_last_score(self, level: RiskLevel) -> None:
        self.last_score = level

    async def get_last_calculation_timestamp(self) -> datetime | None:
        return self.last_calculation_timestamp

    async def set_last_calculation_timestamp(self, timestamp: datetime | None) -> None:
        self.last_calculation_timestamp = as_utc(timestamp)

    async def get_last_key_fetch_timestamp(self) -> datetime | None:
        return self.last_key_fetch_timestamp

    async def set_last_key_fetch_timestamp(self, timestamp: datetime | None) -> None:
        self.last_key_fetch_timestamp = as_utc(timestamp)

    async def get_active_tracing_duration(self) -> timedelta:
        return self.active_tracing_duration

    async def set_active_tracing_duration(self, duration: timedelta) -> None:
        self.active_tracing_duration = duration

    async def get_submission_successful(self) -> bool:
        return self.submission_successful

    async def set_submission_successful(self, successful: bool) -> None:
        self.submission_successful = successful

    async def get_exposure_token(self) -> ExposureToken | None:
        return self.exposure_token

    async def set_exposure_token(self, token: ExposureToken | None) -> None:
        self.exposure_token = token

    async def get_state(self) -> PersistedRiskState:
        return PersistedRiskState(self.last_score, self.last_calculation_timestamp)


# ─── SQLAlchemy ──────────────────────────────────────────────────

def _encode_datetime(value: datetime | None) -> str | None:
    return as_utc(value).isoformat() if value is not None else None


def _decode_datetime(raw: str | None) -> datetime | None:
    return as_utc(datetime.fromisoformat(raw)) if raw is not None else None


class SqlRiskStateStore:
    """Key/value store over the risk_state_fields table. One commit per write."""

    def __init__(self, manager: DatabaseSessionManager):
        self._manager = manager

    async def _read(self, name: str) -> str | None:
        async with self._manager.session() as db:
            row = await db.scalar(
                select(RiskStateField).where(RiskStateField.name == name),
            )
            return row.value if row is not None else None

    async def _write(self, name: str, value: str | None) -> None:
        logger.debug(f"Writing risk state field '{name}'", extra={"field": name})
        async with self._manager.session() as db:
            row = await db.get(RiskStateField, name)
            if row is None:
                db.add(RiskStateField(name=name, value=value))
            else:
                row.value = value
            await db.commit()

    async def get_last_score(self) -> RiskLevel:
        raw = await self._read(LAST_SCORE)
        return RiskLevel(raw) if raw is not None else RiskLevel.UNKNOWN_INITIAL

    async def set_last_score(self, level: RiskLevel) -> None:
        await self._write(LAST_SCORE, level.value)

    async def get_last_calculation_timestamp(self) -> datetime | None:
        return _decode_datetime(await self._read(LAST_CALCULATION_TIMESTAMP))

    async def set_last_calculation_timestamp(self, timestamp: datetime | None) -> None:
        await self._write(LAST_CALCULATION_TIMESTAMP, _encode_datetime(timestamp))

    async def get_last_key_fetch_timestamp(self) -> datetime | None:
        return _decode_datetime(await self._read(LAST_KEY_FETCH_TIMESTAMP))

    async def set_last_key_fetch_timestamp(self, timestamp: datetime | None) -> None:
        await self._write(LAST_KEY_FETCH_TIMESTAMP, _encode_datetime(timestamp))

    async def get_active_tracing_duration(self) -> timedelta:
        raw = await self._read(ACTIVE_TRACING_DURATION)
        return timedelta(seconds=float(raw)) if raw is not None else timedelta()

    async def set_active_tracing_duration(self, duration: timedelta) -> None:
        await self._write(ACTIVE_TRACING_DURATION, str(duration.total_seconds()))

    async def get_submission_successful(self) -> bool:
        return await self._read(SUBMISSION_SUCCESSFUL) == "true"

    async def set_submission_successful(self, successful: bool) -> None:
        await self._write(SUBMISSION_SUCCESSFUL, "true" if successful else "false")

    async def get_exposure_token(self) -> ExposureToken | None:
        raw = await self._read(EXPOSURE_TOKEN)
        return ExposureToken(raw) if raw is not None else None

    async def set_exposure_token(self, token: ExposureToken | None) -> None:
        await self._write(EXPOSURE_TOKEN, token)

    async def get_state(self) -> PersistedRiskState:
        return PersistedRiskState(
            last_score=await self.get_last_score(),
            last_calculation_timestamp=await self.get_last_calculation_timestamp(),
        )
