"""Risk Level Cycle — one end-to-end calculation: gate, score, classify, persist.

Invariants:
    - Precedence: tracing off > no keys ever fetched > outdated results > calculation
    - A non-increased score with too little active tracing is UNKNOWN_INITIAL, not LOW
    - Every collaborator await completes before the first write; cancellation while
      suspended leaves the persisted state untouched
    - Cycles are single-flight: one asyncio.Lock per RiskLevelCycle instance
    - run() never raises RiskCoreError; failures come back as CycleResult.failure
    - No retries: the caller decides whether to run again

Design Decisions:
    - Measurement, then configuration, awaited sequentially: logically independent,
      but no fan-out is needed for two calls per cycle
    - Calculator/classifier errors are not recovered here, only reported
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime

from exposure_risk.config import Settings
from exposure_risk.core.calculate_score import calculate_risk_score
from exposure_risk.core.classify_risk import is_increased_risk
from exposure_risk.core.domain_types import RiskLevel, RiskScore
from exposure_risk.core.errors import PreconditionError, RiskCoreError
from exposure_risk.core.repository_protocols import (
    ExposureMeasurementProvider, NotificationDispatcher, RiskStateStore,
    ScoringConfigProvider, TracingStatusProvider,
)
from exposure_risk.core.risk_state import CycleResult
from exposure_risk.services.precondition_evaluator import (
    PreconditionEvaluator, utc_now,
)
from exposure_risk.services.risk_state_updater import RiskStateUpdater

logger = logging.getLogger(__name__)


class RiskLevelCycle:
    """Orchestrates PreconditionEvaluator -> score -> classify -> RiskStateUpdater."""

    def __init__(
        self,
        store: RiskStateStore,
        config_provider: ScoringConfigProvider,
        measurement_provider: ExposureMeasurementProvider,
        preconditions: PreconditionEvaluator,
        updater: RiskStateUpdater,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._store = store
        self._config_provider = config_provider
        self._measurement_provider = measurement_provider
        self._preconditions = preconditions
        self._updater = updater
        self._clock = clock
        self._lock = asyncio.Lock()

    async def run(self) -> CycleResult:
        async with self._lock:
            return await self._run_once()

    async def _run_once(self) -> CycleResult:
        try:
            risk_level, risk_score = await self._determine_risk_level()
        except RiskCoreError as e:
            logger.error(
                f"Risk level calculation failed: {e.message}",
                extra={"error_code": e.code},
            )
            return CycleResult.failure(e)

        logger.info(
            f"Calculated risk level {risk_level.value}",
            extra={"risk_level": risk_level.value, "risk_score": risk_score},
        )

        update = await self._updater.try_update_state(risk_level, self._clock())
        if not update.ok:
            return CycleResult.failure(
                update.error,
                partially_applied=update.partially_applied,
                risk_level=risk_level,
            )
        return CycleResult.success(risk_level, update.new_state, risk_score)

    async def _determine_risk_level(self) -> tuple[RiskLevel, RiskScore | None]:
        if await self._preconditions.tracing_is_off():
            return RiskLevel.NO_CALCULATION_POSSIBLE_TRACING_OFF, None

        if await self._preconditions.no_keys_ever_fetched():
            return RiskLevel.UNKNOWN_INITIAL, None

        if await self._preconditions.outdated_results():
            return RiskLevel.UNKNOWN_OUTDATED, None

        increased, score = await self.calculate_increased_risk()
        if increased:
            return RiskLevel.INCREASED, score

        if not await self._preconditions.active_tracing_above_threshold():
            return RiskLevel.UNKNOWN_INITIAL, score

        return RiskLevel.LOW, score

    async def calculate_increased_risk(self) -> tuple[bool, RiskScore]:
        """Fetch measurement and live config, then score and classify."""
        token = await self._store.get_exposure_token()
        if token is None:
            raise PreconditionError(
                "Exposure summary is not persisted", missing="exposure_token",
            )
        measurement = await self._measurement_provider.get_measurement(token)
        config = await self._config_provider.get_scoring_config()
        logger.debug("Retrieved scoring configuration from backend")

        score = calculate_risk_score(config, measurement)
        logger.debug(f"Calculated risk with the given config: {score}")
        return is_increased_risk(config, score), score


def build_risk_level_cycle(
    settings: Settings,
    store: RiskStateStore,
    config_provider: ScoringConfigProvider,
    measurement_provider: ExposureMeasurementProvider,
    tracing: TracingStatusProvider,
    notifier: NotificationDispatcher,
    clock: Callable[[], datetime] = utc_now,
) -> RiskLevelCycle:
    """Wire a cycle from Settings thresholds and the given collaborators."""
    preconditions = PreconditionEvaluator(
        store,
        tracing,
        max_stale_result_range_hours=settings.max_stale_result_range_hours,
        min_active_tracing_hours=settings.min_active_tracing_hours,
        clock=clock,
    )
    updater = RiskStateUpdater(store, notifier, settings.notification_body)
    return RiskLevelCycle(
        store, config_provider, measurement_provider, preconditions, updater, clock,
    )
