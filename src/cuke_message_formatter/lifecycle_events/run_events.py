"""Lifecycle events delivered by the test runner."""

from __future__ import annotations

from dataclasses import dataclass

from cuke_message_formatter.message_schema.envelopes import Envelope


@dataclass(frozen=True)
class RunnerTestStep:
    """Test step as prepared by the runner: a hook or a pickle step."""

    id: str
    hook_id: str | None = None
    pickle_step_id: str | None = None
    step_definition_ids: tuple[str, ...] = ()

    @property
    def is_hook(self) -> bool:
        return self.hook_id is not None


@dataclass(frozen=True)
class RunnerTestCase:
    """Test case as prepared by the runner."""

    id: str
    test_steps: tuple[RunnerTestStep, ...]
    pickle_id: str | None = None


@dataclass(frozen=True)
class GherkinSourceRead:
    path: str
    body: str


@dataclass(frozen=True)
class TestCaseReady:
    __test__ = False

    test_case: RunnerTestCase


@dataclass(frozen=True)
class TestRunStarted:
    __test__ = False


@dataclass(frozen=True)
class TestCaseStarted:
    __test__ = False

    test_case: RunnerTestCase


@dataclass(frozen=True)
class TestStepStarted:
    __test__ = False

    test_step: RunnerTestStep


@dataclass(frozen=True)
class TestStepFinished:
    """Step completion carrying the runner's already computed result."""

    __test__ = False

    test_step: RunnerTestStep
    result: object


@dataclass(frozen=True)
class TestCaseFinished:
    __test__ = False

    test_case: RunnerTestCase
    result: object = None


@dataclass(frozen=True)
class TestRunFinished:
    __test__ = False

    success: bool | None = None


@dataclass(frozen=True)
class EnvelopeProduced:
    """Fully formed envelope the runner wants written unchanged."""

    envelope: Envelope


LifecycleEvent = (
    GherkinSourceRead
    | TestCaseReady
    | TestRunStarted
    | TestCaseStarted
    | TestStepStarted
    | TestStepFinished
    | TestCaseFinished
    | TestRunFinished
    | EnvelopeProduced
)
