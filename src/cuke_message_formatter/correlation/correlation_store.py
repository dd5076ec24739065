"""Correlation of test steps with their owning test cases."""

from __future__ import annotations

from cuke_message_formatter.lifecycle_events.run_events import RunnerTestCase

ATTEMPT = 0


class ProtocolViolationError(Exception):
    """Raised when the event stream references a step before its test case was registered."""


def started_id_for(test_case_id: str) -> str:
    """Derive the id of the (only) execution attempt of a test case."""
    return f"{test_case_id}-{ATTEMPT}"


class CorrelationStore:
    """Step-to-case lookup plus the current case-started and step pointers.

    Not thread-safe: the runner must deliver events one at a time.
    """

    def __init__(self) -> None:
        self._test_case_id_by_step: dict[str, str] = {}
        self._current_test_case_started: str | None = None
        self._current_test_step: str | None = None

    def register(self, test_case: RunnerTestCase) -> None:
        for step in test_case.test_steps:
            self._test_case_id_by_step[step.id] = test_case.id

    def owner_of(self, step_id: str) -> str:
        try:
            return self._test_case_id_by_step[step_id]
        except KeyError as exc:
            raise ProtocolViolationError(
                f"Test step {step_id!r} was referenced before its test case was ready."
            ) from exc

    def set_current_test_case_started(self, started_id: str) -> None:
        self._current_test_case_started = started_id

    def set_current_test_step(self, step_id: str) -> None:
        self._current_test_step = step_id

    @property
    def current_test_case_started(self) -> str | None:
        return self._current_test_case_started

    @property
    def current_test_step(self) -> str | None:
        return self._current_test_step
