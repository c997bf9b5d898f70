"""Precondition Enforcement — pure gates that decide whether a calculation is meaningful.

Invariants:
    - All functions are PURE: the caller supplies timestamps, durations and `now`
    - Durations are compared in whole hours, truncated toward zero
    - outdated_results requires a key-fetch timestamp; None raises PreconditionError
    - UNKNOWN_INITIAL overrules UNKNOWN_OUTDATED: the outdated signal is suppressed
      until active tracing reaches the minimum threshold

Design Decisions:
    - Timestamps as Optional[datetime]: absence is explicit, never a sentinel value
    - Tracing status is NOT checked here: it needs an await and lives in
      services/precondition_evaluator.py
"""

from datetime import datetime, timedelta

from exposure_risk.core.errors import PreconditionError


def whole_hours(duration: timedelta) -> int:
    """Truncate a duration to whole hours, toward zero for negative durations."""
    return int(duration.total_seconds() / 3600)


def no_keys_ever_fetched(last_key_fetch: datetime | None) -> bool:
    return last_key_fetch is None


def active_tracing_above_threshold(
    active_tracing_duration: timedelta, min_active_tracing_hours: int,
) -> bool:
    return whole_hours(active_tracing_duration) >= min_active_tracing_hours


def outdated_results(
    last_key_fetch: datetime | None,
    now: datetime,
    max_stale_hours: int,
    active_tracing_duration: timedelta,
    min_active_tracing_hours: int,
) -> bool:
    """Stale beyond max_stale_hours AND tracing long enough to have a decided result."""
    if last_key_fetch is None:
        raise PreconditionError(
            "Time since last key fetch is unknown: no key fetch was ever recorded",
            missing="last_key_fetch_timestamp",
        )
    is_stale = whole_hours(now - last_key_fetch) > max_stale_hours
    return is_stale and active_tracing_above_threshold(
        active_tracing_duration, min_active_tracing_hours,
    )
