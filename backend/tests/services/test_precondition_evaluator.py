"""Precondition Evaluator — async gate checks over store and tracing signal.

Tests cover:
    - tracing_is_off negates only the first observed value
    - no_keys_ever_fetched reads the key-fetch timestamp
    - outdated_results uses the injected clock and raises without a timestamp
    - active_tracing_above_threshold reads the tracing duration
"""

from datetime import timedelta

import pytest

from exposure_risk.core.errors import PreconditionError
from exposure_risk.services.precondition_evaluator import PreconditionEvaluator


def _evaluator(store, tracing, clock):
    return PreconditionEvaluator(
        store, tracing,
        max_stale_result_range_hours=48,
        min_active_tracing_hours=24,
        clock=clock,
    )


async def test_tracing_is_off_when_first_value_false(store, tracing_factory, clock):
    tracing = tracing_factory(False, True)
    assert await _evaluator(store, tracing, clock).tracing_is_off() is True
    assert tracing.consumed == 1


async def test_tracing_is_on_when_first_value_true(store, tracing_factory, clock):
    tracing = tracing_factory(True, False)
    assert await _evaluator(store, tracing, clock).tracing_is_off() is False


async def test_no_keys_ever_fetched(store, tracing_factory, clock, now):
    evaluator = _evaluator(store, tracing_factory(True), clock)
    assert await evaluator.no_keys_ever_fetched() is True

    store.last_key_fetch_timestamp = now
    assert await evaluator.no_keys_ever_fetched() is False


async def test_outdated_results_uses_clock(store, tracing_factory, clock, now):
    store.last_key_fetch_timestamp = now - timedelta(hours=72)
    store.active_tracing_duration = timedelta(days=5)
    assert await _evaluator(store, tracing_factory(True), clock).outdated_results()


async def test_outdated_results_suppressed_by_short_tracing(
    store, tracing_factory, clock, now,
):
    store.last_key_fetch_timestamp = now - timedelta(hours=72)
    store.active_tracing_duration = timedelta(hours=3)
    assert not await _evaluator(store, tracing_factory(True), clock).outdated_results()


async def test_outdated_results_without_key_fetch_raises(store, tracing_factory, clock):
    with pytest.raises(PreconditionError):
        await _evaluator(store, tracing_factory(True), clock).outdated_results()


async def test_active_tracing_above_threshold(store, tracing_factory, clock):
    evaluator = _evaluator(store, tracing_factory(True), clock)
    store.active_tracing_duration = timedelta(hours=23)
    assert not await evaluator.active_tracing_above_threshold()
    store.active_tracing_duration = timedelta(hours=24)
    assert await evaluator.active_tracing_above_threshold()
