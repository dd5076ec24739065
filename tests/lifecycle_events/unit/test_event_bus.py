"""Lifecycle event bus tests."""

from __future__ import annotations

import pytest
from cuke_message_formatter.lifecycle_events import (
    LifecycleEventBus,
    TestRunFinished,
    TestRunStarted,
)


def test_publish_calls_handlers_of_the_event_type_in_subscription_order() -> None:
    bus = LifecycleEventBus()
    calls: list[str] = []
    bus.subscribe(TestRunStarted, lambda event: calls.append("first"))
    bus.subscribe(TestRunStarted, lambda event: calls.append("second"))
    bus.subscribe(TestRunFinished, lambda event: calls.append("finished"))

    bus.publish(TestRunStarted())

    assert calls == ["first", "second"]


def test_publish_without_subscribers_is_a_no_op() -> None:
    bus = LifecycleEventBus()

    bus.publish(TestRunFinished(success=True))


def test_handler_errors_propagate_to_publisher() -> None:
    bus = LifecycleEventBus()

    def _fail(event: TestRunStarted) -> None:
        raise RuntimeError("boom")

    bus.subscribe(TestRunStarted, _fail)

    with pytest.raises(RuntimeError, match="boom"):
        bus.publish(TestRunStarted())
