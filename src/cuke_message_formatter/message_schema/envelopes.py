"""Message schema entities written to the NDJSON message stream."""

from __future__ import annotations

import time
from dataclasses import dataclass, field, fields
from enum import Enum

GHERKIN_MEDIA_TYPE = "text/x.cucumber.gherkin+plain"


@dataclass(frozen=True)
class Timestamp:
    """Wall clock instant split into seconds and nanoseconds."""

    seconds: int
    nanos: int

    @staticmethod
    def now() -> Timestamp:
        total_nanos = time.time_ns()
        return Timestamp(seconds=total_nanos // 1_000_000_000, nanos=total_nanos % 1_000_000_000)


@dataclass(frozen=True)
class Duration:
    """Elapsed time of a test step."""

    seconds: int
    nanos: int

    @staticmethod
    def from_seconds(value: float) -> Duration:
        total_nanos = int(round(value * 1_000_000_000))
        return Duration(seconds=total_nanos // 1_000_000_000, nanos=total_nanos % 1_000_000_000)


class TestStepResultStatus(str, Enum):
    """Outcome of one executed test step."""

    __test__ = False

    UNKNOWN = "UNKNOWN"
    PASSED = "PASSED"
    SKIPPED = "SKIPPED"
    PENDING = "PENDING"
    UNDEFINED = "UNDEFINED"
    AMBIGUOUS = "AMBIGUOUS"
    FAILED = "FAILED"


@dataclass(frozen=True)
class TestStepResult:
    """Pre-computed step outcome passed through to the message stream."""

    __test__ = False

    status: TestStepResultStatus
    duration: Duration
    message: str | None = None


@dataclass(frozen=True)
class Source:
    """Verbatim feature file content."""

    uri: str
    data: str
    media_type: str = GHERKIN_MEDIA_TYPE


@dataclass(frozen=True)
class TestStep:
    """Hook step (hook_id set) or pickle step (pickle_step_id set)."""

    __test__ = False

    id: str
    hook_id: str | None = None
    pickle_step_id: str | None = None
    step_definition_ids: tuple[str, ...] | None = None

    @staticmethod
    def for_hook(step_id: str, hook_id: str) -> TestStep:
        return TestStep(id=step_id, hook_id=hook_id)

    @staticmethod
    def for_pickle_step(
        step_id: str, pickle_step_id: str, step_definition_ids: tuple[str, ...] = ()
    ) -> TestStep:
        return TestStep(
            id=step_id,
            pickle_step_id=pickle_step_id,
            step_definition_ids=tuple(step_definition_ids),
        )


@dataclass(frozen=True)
class TestCase:
    """Test case definition emitted once the runner has prepared it."""

    __test__ = False

    id: str
    pickle_id: str | None
    test_steps: tuple[TestStep, ...]


@dataclass(frozen=True)
class TestRunStarted:
    """Marker opening the test run."""

    __test__ = False

    timestamp: Timestamp = field(default_factory=Timestamp.now)


@dataclass(frozen=True)
class TestCaseStarted:
    """One execution attempt of a test case."""

    __test__ = False

    id: str
    test_case_id: str
    attempt: int = 0
    timestamp: Timestamp = field(default_factory=Timestamp.now)


@dataclass(frozen=True)
class TestStepStarted:
    __test__ = False

    test_step_id: str
    test_case_started_id: str
    timestamp: Timestamp = field(default_factory=Timestamp.now)


@dataclass(frozen=True)
class TestStepFinished:
    __test__ = False

    test_step_id: str
    test_case_started_id: str
    test_step_result: object
    timestamp: Timestamp = field(default_factory=Timestamp.now)


@dataclass(frozen=True)
class TestCaseFinished:
    __test__ = False

    test_case_started_id: str
    will_be_retried: bool = False
    timestamp: Timestamp = field(default_factory=Timestamp.now)


@dataclass(frozen=True)
class TestRunFinished:
    """Marker closing the test run."""

    __test__ = False

    success: bool | None = None
    timestamp: Timestamp = field(default_factory=Timestamp.now)


@dataclass(frozen=True)
class Attachment:
    """Evidence attached to a running step, inline text or base64 binary."""

    media_type: str
    test_step_id: str | None = None
    test_case_started_id: str | None = None
    text: str | None = None
    binary: str | None = None


@dataclass(frozen=True)
class Envelope:  # pylint: disable=too-many-instance-attributes
    """Tagged union holding exactly one populated message variant."""

    source: Source | None = None
    test_run_started: TestRunStarted | None = None
    test_case: TestCase | None = None
    test_case_started: TestCaseStarted | None = None
    test_step_started: TestStepStarted | None = None
    test_step_finished: TestStepFinished | None = None
    test_case_finished: TestCaseFinished | None = None
    test_run_finished: TestRunFinished | None = None
    attachment: Attachment | None = None

    def variant_names(self) -> tuple[str, ...]:
        """Return the attribute names of every populated variant."""
        return tuple(item.name for item in fields(self) if getattr(self, item.name) is not None)
