"""Formatter turning runner lifecycle events into NDJSON message envelopes."""

from __future__ import annotations

import logging

from cuke_message_formatter.correlation import CorrelationStore, started_id_for
from cuke_message_formatter.lifecycle_events import run_events
from cuke_message_formatter.lifecycle_events.event_bus import LifecycleEventSource
from cuke_message_formatter.message_schema import envelopes
from cuke_message_formatter.message_schema.envelopes import Envelope
from cuke_message_formatter.message_schema.ndjson_codec import render_envelope
from cuke_message_formatter.output_sinks.file_output import MessageOutput

from .attachment_payloads import AttachmentSource, encode_payload

_LOGGER = logging.getLogger(__name__)


class MessageFormatter:
    """Writes one envelope per lifecycle event to the output sink.

    Precondition: the event source delivers events one at a time from a
    single thread. `embed` is called from step code running between a step's
    started and finished events.
    """

    def __init__(self, event_source: LifecycleEventSource, output: MessageOutput) -> None:
        self._output = output
        self._correlation = CorrelationStore()
        event_source.subscribe(run_events.EnvelopeProduced, self.on_envelope)
        event_source.subscribe(run_events.GherkinSourceRead, self.on_gherkin_source_read)
        event_source.subscribe(run_events.TestCaseReady, self.on_test_case_ready)
        event_source.subscribe(run_events.TestRunStarted, self.on_test_run_started)
        event_source.subscribe(run_events.TestCaseStarted, self.on_test_case_started)
        event_source.subscribe(run_events.TestStepStarted, self.on_test_step_started)
        event_source.subscribe(run_events.TestStepFinished, self.on_test_step_finished)
        event_source.subscribe(run_events.TestCaseFinished, self.on_test_case_finished)
        event_source.subscribe(run_events.TestRunFinished, self.on_test_run_finished)

    @property
    def correlation(self) -> CorrelationStore:
        return self._correlation

    def embed(self, source: AttachmentSource, media_type: str, label: str | None = None) -> None:
        """Attach evidence to the currently running step."""
        if label:
            _LOGGER.debug("Embedding %s attachment %r", media_type, label)
        attachment = envelopes.Attachment(
            media_type=media_type,
            test_step_id=self._correlation.current_test_step,
            test_case_started_id=self._correlation.current_test_case_started,
            **encode_payload(source, media_type),
        )
        self._write(Envelope(attachment=attachment))

    def close(self) -> None:
        """Close the sink; delivery errors surface here."""
        self._output.close()

    def on_envelope(self, event: run_events.EnvelopeProduced) -> None:
        self._write(event.envelope)

    def on_gherkin_source_read(self, event: run_events.GherkinSourceRead) -> None:
        self._write(Envelope(source=envelopes.Source(uri=event.path, data=event.body)))

    def on_test_case_ready(self, event: run_events.TestCaseReady) -> None:
        test_case = event.test_case
        self._correlation.register(test_case)
        self._write(
            Envelope(
                test_case=envelopes.TestCase(
                    id=test_case.id,
                    pickle_id=test_case.pickle_id,
                    test_steps=tuple(_to_message_step(step) for step in test_case.test_steps),
                )
            )
        )

    def on_test_run_started(self, _event: run_events.TestRunStarted) -> None:
        self._write(Envelope(test_run_started=envelopes.TestRunStarted()))

    def on_test_case_started(self, event: run_events.TestCaseStarted) -> None:
        started_id = started_id_for(event.test_case.id)
        self._correlation.set_current_test_case_started(started_id)
        self._write(
            Envelope(
                test_case_started=envelopes.TestCaseStarted(
                    id=started_id,
                    test_case_id=event.test_case.id,
                )
            )
        )

    def on_test_step_started(self, event: run_events.TestStepStarted) -> None:
        test_case_id = self._correlation.owner_of(event.test_step.id)
        self._correlation.set_current_test_step(event.test_step.id)
        self._write(
            Envelope(
                test_step_started=envelopes.TestStepStarted(
                    test_step_id=event.test_step.id,
                    test_case_started_id=started_id_for(test_case_id),
                )
            )
        )

    def on_test_step_finished(self, event: run_events.TestStepFinished) -> None:
        test_case_id = self._correlation.owner_of(event.test_step.id)
        self._write(
            Envelope(
                test_step_finished=envelopes.TestStepFinished(
                    test_step_id=event.test_step.id,
                    test_case_started_id=started_id_for(test_case_id),
                    test_step_result=event.result,
                )
            )
        )

    def on_test_case_finished(self, event: run_events.TestCaseFinished) -> None:
        self._write(
            Envelope(
                test_case_finished=envelopes.TestCaseFinished(
                    test_case_started_id=started_id_for(event.test_case.id),
                )
            )
        )

    def on_test_run_finished(self, event: run_events.TestRunFinished) -> None:
        self._write(Envelope(test_run_finished=envelopes.TestRunFinished(success=event.success)))

    def _write(self, envelope: Envelope) -> None:
        self._output.write(render_envelope(envelope))


def _to_message_step(step: run_events.RunnerTestStep) -> envelopes.TestStep:
    if step.is_hook:
        assert step.hook_id is not None
        return envelopes.TestStep.for_hook(step.id, step.hook_id)
    if step.pickle_step_id is None:
        raise ValueError(f"Test step {step.id!r} has neither a hook id nor a pickle step id.")
    return envelopes.TestStep.for_pickle_step(
        step.id, step.pickle_step_id, tuple(step.step_definition_ids)
    )
