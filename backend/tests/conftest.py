"""Root conftest — shared fakes and fixtures for the risk core tests.

Invariants:
    - No test touches a real database file; SQL tests use in-memory SQLite
    - Fakes implement the core Protocols structurally (no inheritance from core)

Design Decisions:
    - Fakes exposed through fixtures, not imported: tests/ is not a package
    - FlakyRiskStateStore fails chosen calls by (method, call number) so rollback
      paths can be driven deterministically
"""

import os
from datetime import datetime, timedelta, timezone

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

from exposure_risk.core.errors import PersistenceError  # noqa: E402
from exposure_risk.core.scoring_models import (  # noqa: E402
    AttenuationWeights,
    ExposureMeasurement,
    RiskScoreClass,
    RiskScoreClassification,
    ScoringConfig,
)
from exposure_risk.infrastructure.notifications import (  # noqa: E402
    LoggingNotificationDispatcher,
)
from exposure_risk.infrastructure.risk_state_store import (  # noqa: E402
    InMemoryRiskStateStore,
)

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


class FlakyRiskStateStore(InMemoryRiskStateStore):
    """In-memory store whose setters fail on configured call numbers (1-based)."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.failures: dict[str, set[int]] = {}
        self.calls: list[tuple[str, object]] = []
        self._counts: dict[str, int] = {}

    def _maybe_fail(self, method: str, value: object) -> None:
        self._counts[method] = self._counts.get(method, 0) + 1
        self.calls.append((method, value))
        if self._counts[method] in self.failures.get(method, set()):
            raise PersistenceError("simulated failure", method)

    async def set_last_score(self, level):
        self._maybe_fail("set_last_score", level)
        await super().set_last_score(level)

    async def set_last_calculation_timestamp(self, timestamp):
        self._maybe_fail("set_last_calculation_timestamp", timestamp)
        await super().set_last_calculation_timestamp(timestamp)


class FakeTracingStatus:
    """Live tracing signal: yields the configured values in order."""

    def __init__(self, *values: bool):
        self.values = values
        self.consumed = 0

    async def tracing_enabled(self):
        for value in self.values:
            self.consumed += 1
            yield value


class FakeMeasurementProvider:
    def __init__(self, measurement: ExposureMeasurement):
        self.measurement = measurement
        self.tokens: list[str] = []

    async def get_measurement(self, token):
        self.tokens.append(token)
        return self.measurement


class FakeConfigProvider:
    def __init__(self, config: ScoringConfig):
        self.config = config
        self.calls = 0

    async def get_scoring_config(self):
        self.calls += 1
        return self.config


def make_config(
    high_min: float = 15, high_max: float = 100, include_high: bool = True,
) -> ScoringConfig:
    classes = [RiskScoreClass("LOW", 0, high_min - 0.01 if high_min > 0 else 0)]
    if include_high:
        classes.append(RiskScoreClass("HIGH", high_min, high_max))
    return ScoringConfig(
        weights=AttenuationWeights(low=1.0, mid=0.5, high=0.0),
        classes=RiskScoreClassification(tuple(classes)),
        default_bucket_offset=0,
        normalization_divisor=8,
        max_attenuation_duration=30,
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def scoring_config():
    """Weights {1.0, 0.5, 0.0}, offset 0, divisor 8, cap 30, HIGH = [15, 100]."""
    return make_config()


@pytest.fixture
def config_factory():
    return make_config


@pytest.fixture
def measurement():
    """Durations [10, 40, 5] minutes, maximum risk score 8 → score 25.00."""
    return ExposureMeasurement(
        low_attenuation_minutes=10,
        mid_attenuation_minutes=40,
        high_attenuation_minutes=5,
        maximum_risk_score=8,
    )


@pytest.fixture
def low_measurement():
    """Durations [2, 2, 0] minutes, maximum risk score 8 → score 3.00."""
    return ExposureMeasurement(
        low_attenuation_minutes=2,
        mid_attenuation_minutes=2,
        high_attenuation_minutes=0,
        maximum_risk_score=8,
    )


@pytest.fixture
def store():
    return InMemoryRiskStateStore()


@pytest.fixture
def flaky_store():
    return FlakyRiskStateStore()


@pytest.fixture
def ready_store_kwargs():
    """Store fields for a device that has traced long enough and fetched keys recently."""
    return {
        "last_key_fetch_timestamp": NOW - timedelta(hours=2),
        "active_tracing_duration": timedelta(days=3),
        "exposure_token": "token-123",
    }


@pytest.fixture
def notifier():
    return LoggingNotificationDispatcher()


@pytest.fixture
def tracing_factory():
    return FakeTracingStatus


@pytest.fixture
def measurement_provider_factory():
    return FakeMeasurementProvider


@pytest.fixture
def config_provider_factory():
    return FakeConfigProvider


@pytest.fixture
def flaky_store_factory():
    return FlakyRiskStateStore
