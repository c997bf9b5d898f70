"""Risk State Updater — two-field transactional write with compensating rollback.

Invariants:
    - Score write ALWAYS precedes timestamp write
    - A rollback action is recorded immediately after each successful write, never before
    - On failure every recorded action runs in recording order (FIFO: score, then timestamp)
    - A failing rollback action is logged as RollbackFailure and never aborts the
      remaining actions nor replaces the original error
    - At most one notification per call, only on a low<->high crossing without a
      successful submission

Design Decisions:
    - FIFO rollback kept deliberately; reversing it is a product decision, not a cleanup
    - try_update_state returns StateUpdateResult for the orchestrator; update_state
      re-raises the original error for callers that prefer exceptions
    - Notification dispatched after the score write lands: a failed score write never
      notifies. A failed timestamp write still rolls the score back after the
      notification went out; the notification is not retracted
    - Cancellation rolls back like any other failure, then propagates CancelledError
    - Callers must serialize calls (single-flight): interleaved updates would let one
      call's rollback restore a value written by another
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from functools import partial

from exposure_risk.core.domain_types import NotificationPriority, RiskLevel
from exposure_risk.core.errors import RiskCoreError, RollbackFailure
from exposure_risk.core.notification_policy import should_notify
from exposure_risk.core.repository_protocols import (
    NotificationDispatcher, RiskStateStore,
)
from exposure_risk.core.risk_state import PersistedRiskState, StateUpdateResult

logger = logging.getLogger(__name__)

RollbackAction = Callable[[], Awaitable[None]]


class RiskStateUpdater:
    """Persists a computed risk level and its timestamp, restoring both on failure."""

    def __init__(
        self,
        store: RiskStateStore,
        notifier: NotificationDispatcher,
        notification_body: str,
    ):
        self._store = store
        self._notifier = notifier
        self._notification_body = notification_body

    async def update_state(
        self, new_level: RiskLevel, timestamp: datetime,
    ) -> PersistedRiskState:
        """Apply the update; on failure roll back and re-raise the original error."""
        result = await self.try_update_state(new_level, timestamp)
        if not result.ok:
            raise result.error
        return result.new_state

    async def try_update_state(
        self, new_level: RiskLevel, timestamp: datetime,
    ) -> StateUpdateResult:
        rollback_items: list[tuple[str, RollbackAction]] = []
        notification_sent = False
        try:
            logger.debug(
                f"Update the risk level with {new_level.value}",
                extra={"risk_level": new_level.value},
            )
            previous_level = await self._store.get_last_score()
            submission_successful = await self._store.get_submission_successful()
            await self._store.set_last_score(new_level)
            rollback_items.append(
                ("last_score", partial(self._store.set_last_score, previous_level)),
            )
            if should_notify(previous_level, new_level, submission_successful):
                logger.info(
                    "Risk level crossed between low and high band",
                    extra={
                        "risk_level": new_level.value,
                        "previous_level": previous_level.value,
                    },
                )
                self._notifier.notify(
                    self._notification_body, NotificationPriority.HIGH,
                )
                notification_sent = True

            previous_timestamp = await self._store.get_last_calculation_timestamp()
            await self._store.set_last_calculation_timestamp(timestamp)
            rollback_items.append((
                "last_calculation_timestamp",
                partial(self._store.set_last_calculation_timestamp, previous_timestamp),
            ))
        except asyncio.CancelledError:
            logger.warning(
                "Risk state update cancelled, rolling back",
                extra={"risk_level": new_level.value},
            )
            await self._rollback(rollback_items)
            raise
        except Exception as error:
            if isinstance(error, RiskCoreError) and error.context.risk_level is None:
                error.context.risk_level = new_level.value
            logger.error(
                f"Updating the risk state failed: {error}",
                exc_info=True,
                extra={
                    "risk_level": new_level.value,
                    "error_code": getattr(error, "code", None),
                },
            )
            failures = await self._rollback(rollback_items)
            return StateUpdateResult.failure(error, partially_applied=bool(failures))

        return StateUpdateResult.success(
            PersistedRiskState(
                last_score=new_level, last_calculation_timestamp=timestamp,
            ),
            notification_sent=notification_sent,
        )

    async def _rollback(
        self, rollback_items: list[tuple[str, RollbackAction]],
    ) -> list[RollbackFailure]:
        logger.debug(f"Initiate rollback of {len(rollback_items)} field(s)")
        failures: list[RollbackFailure] = []
        for field_name, action in rollback_items:
            try:
                await action()
            except Exception as e:
                failure = RollbackFailure(field_name, e)
                logger.error(
                    failure.message,
                    exc_info=True,
                    extra={"error_code": failure.code, "field": field_name},
                )
                failures.append(failure)
        return failures
