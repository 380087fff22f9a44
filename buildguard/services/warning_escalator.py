"""
Warning Escalator
=================
Turns compiler warning lines into build failures, without cutting the
tool's output short.

Lifecycle (one build step):
    1. escalate_warnings() registers the escalator on the OutputStream
    2. Every line containing " warning: " is appended to DeferredFailures
    3. The step finishes; the listener is ALWAYS deregistered
    4. on_complete() drains the failures, in the order they were seen

Matching never raises. Draining is the only way a failure leaves the
escalator, so the full tool output is visible before the step fails.
"""
import logging
from contextlib import contextmanager
from typing import Iterator

from buildguard.core.constants import WARNING_TOKEN
from buildguard.core.errors import WarningEscalated
from buildguard.executor.output_stream import OutputStream
from buildguard.models.output_event import OutputEvent

logger = logging.getLogger(__name__)


class DeferredFailures:
    """
    Ordered, step-scoped accumulator of warning failures.

    Usage:
        failures = DeferredFailures()
        failures.append(WarningEscalated("Foo.java:3: warning: no @param"))
        for failure in failures.drain():
            ...
    """

    def __init__(self) -> None:
        self._pending: list[WarningEscalated] = []

    def __len__(self) -> int:
        return len(self._pending)

    def append(self, failure: WarningEscalated) -> None:
        self._pending.append(failure)

    def drain(self) -> list[WarningEscalated]:
        """Return every pending failure in accumulation order and empty the buffer."""
        drained, self._pending = self._pending, []
        return drained


class WarningEscalator:

    def __init__(self, step_name: str = "", token: str = WARNING_TOKEN) -> None:
        self.step_name = step_name
        self.token = token
        self.failures = DeferredFailures()

    def on_output(self, event: OutputEvent) -> None:
        if self.token in event.text:
            self.failures.append(WarningEscalated(event.text))

    def on_complete(self) -> list[WarningEscalated]:
        drained = self.failures.drain()
        if drained:
            logger.info(
                "Escalating %d warning(s) from step %s", len(drained), self.step_name or "<unnamed>",
            )
        return drained


@contextmanager
def escalate_warnings(stream: OutputStream, step_name: str = "") -> Iterator[WarningEscalator]:
    """
    Listen for warnings on stream for the duration of the with-block.

    The listener is removed on exit even if the block raises.
    """
    escalator = WarningEscalator(step_name)
    stream.add_listener(escalator.on_output)
    try:
        yield escalator
    finally:
        stream.remove_listener(escalator.on_output)
