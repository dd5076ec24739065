"""Lifecycle event exports."""

from .event_bus import LifecycleEventBus, LifecycleEventSource
from .run_events import (
    EnvelopeProduced,
    GherkinSourceRead,
    LifecycleEvent,
    RunnerTestCase,
    RunnerTestStep,
    TestCaseFinished,
    TestCaseReady,
    TestCaseStarted,
    TestRunFinished,
    TestRunStarted,
    TestStepFinished,
    TestStepStarted,
)

__all__ = [
    "LifecycleEventBus",
    "LifecycleEventSource",
    "LifecycleEvent",
    "EnvelopeProduced",
    "GherkinSourceRead",
    "RunnerTestCase",
    "RunnerTestStep",
    "TestCaseFinished",
    "TestCaseReady",
    "TestCaseStarted",
    "TestRunFinished",
    "TestRunStarted",
    "TestStepFinished",
    "TestStepStarted",
]
