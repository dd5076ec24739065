"""Correlation store tests."""

from __future__ import annotations

import pytest
from cuke_message_formatter.correlation import (
    CorrelationStore,
    ProtocolViolationError,
    started_id_for,
)
from cuke_message_formatter.lifecycle_events import RunnerTestCase, RunnerTestStep


def _test_case(case_id: str, *step_ids: str) -> RunnerTestCase:
    return RunnerTestCase(
        id=case_id,
        test_steps=tuple(RunnerTestStep(id=step_id, pickle_step_id=step_id) for step_id in step_ids),
    )


def test_register_maps_every_step_to_its_test_case() -> None:
    store = CorrelationStore()

    store.register(_test_case("tc1", "a", "b"))
    store.register(_test_case("tc2", "c"))

    assert store.owner_of("a") == "tc1"
    assert store.owner_of("b") == "tc1"
    assert store.owner_of("c") == "tc2"


def test_owner_of_unregistered_step_raises_protocol_violation() -> None:
    store = CorrelationStore()
    store.register(_test_case("tc1", "a"))

    with pytest.raises(ProtocolViolationError, match="'missing'"):
        store.owner_of("missing")


def test_current_pointers_start_empty_and_are_rebound() -> None:
    store = CorrelationStore()

    assert store.current_test_case_started is None
    assert store.current_test_step is None

    store.set_current_test_case_started("tc1-0")
    store.set_current_test_step("a")
    store.set_current_test_step("b")

    assert store.current_test_case_started == "tc1-0"
    assert store.current_test_step == "b"


def test_started_id_uses_fixed_zero_attempt_suffix() -> None:
    assert started_id_for("tc-42") == "tc-42-0"
