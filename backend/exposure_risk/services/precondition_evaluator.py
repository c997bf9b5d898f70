"""Precondition Evaluator — reads gate inputs from collaborators and applies the pure gates.

Invariants:
    - tracing_is_off awaits exactly the FIRST value of the tracing signal
    - no_keys_ever_fetched must be consulted before outdated_results
      (outdated_results raises PreconditionError without a key-fetch timestamp)
    - No method writes to the store

Design Decisions:
    - Thin async shell over core/enforce_preconditions.py: every decision is made
      by a pure function, this class only fetches its inputs
    - Clock injected as a callable: tests pin `now` without monkeypatching datetime
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from exposure_risk.core import enforce_preconditions
from exposure_risk.core.repository_protocols import (
    RiskStateStore, TracingStatusProvider,
)

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PreconditionEvaluator:
    """Gate checks consumed by the cycle before a calculation is attempted."""

    def __init__(
        self,
        store: RiskStateStore,
        tracing: TracingStatusProvider,
        max_stale_result_range_hours: int,
        min_active_tracing_hours: int,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._store = store
        self._tracing = tracing
        self._max_stale_hours = max_stale_result_range_hours
        self._min_active_hours = min_active_tracing_hours
        self._clock = clock

    async def no_keys_ever_fetched(self) -> bool:
        last_fetch = await self._store.get_last_key_fetch_timestamp()
        result = enforce_preconditions.no_keys_ever_fetched(last_fetch)
        if result:
            logger.debug("No last key fetch timestamp was found")
        return result

    async def tracing_is_off(self) -> bool:
        """Negation of the first observed 'tracing enabled' value."""
        signal = self._tracing.tracing_enabled()
        try:
            enabled = await anext(signal)
        finally:
            aclose = getattr(signal, "aclose", None)
            if aclose is not None:
                await aclose()
        return not enabled

    async def active_tracing_above_threshold(self) -> bool:
        duration = await self._store.get_active_tracing_duration()
        result = enforce_preconditions.active_tracing_above_threshold(
            duration, self._min_active_hours,
        )
        logger.debug(
            f"Active tracing time ({enforce_preconditions.whole_hours(duration)} h) "
            f"is above threshold ({self._min_active_hours} h): {result}"
        )
        return result

    async def outdated_results(self) -> bool:
        last_fetch = await self._store.get_last_key_fetch_timestamp()
        duration = await self._store.get_active_tracing_duration()
        return enforce_preconditions.outdated_results(
            last_fetch,
            self._clock(),
            self._max_stale_hours,
            duration,
            self._min_active_hours,
        )
