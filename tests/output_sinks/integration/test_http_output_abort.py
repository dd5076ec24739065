"""An aborted run with an open HTTP sink must still let the process exit."""

from __future__ import annotations

import os
import socket
import subprocess
import sys
import textwrap
from pathlib import Path

_ABORTING_RUN = textwrap.dedent(
    """
    import sys

    from cuke_message_formatter.lifecycle_events import (
        LifecycleEventBus,
        RunnerTestStep,
        TestStepStarted,
    )
    from cuke_message_formatter.message_formatting import MessageFormatter
    from cuke_message_formatter.output_sinks import open_output

    bus = LifecycleEventBus()
    MessageFormatter(bus, open_output(f"http://127.0.0.1:{sys.argv[1]}/"))
    bus.publish(TestStepStarted(RunnerTestStep(id="unregistered")))
    """
)


def _source_root() -> Path:
    return Path(__file__).resolve().parents[3] / "src"


def test_protocol_violation_with_open_http_sink_exits_process(tmp_path: Path) -> None:
    script = tmp_path / "aborting_run.py"
    script.write_text(_ABORTING_RUN, encoding="utf-8")
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        part for part in (str(_source_root()), env.get("PYTHONPATH")) if part
    )

    # Accepts the connection at TCP level and never answers, so the request stays open.
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
        listener.bind(("127.0.0.1", 0))
        listener.listen(1)
        port = listener.getsockname()[1]

        completed = subprocess.run(
            [sys.executable, str(script), str(port)],
            env=env,
            capture_output=True,
            text=True,
            timeout=30,
            check=False,
        )

    assert completed.returncode == 1
    assert "ProtocolViolationError" in completed.stderr
