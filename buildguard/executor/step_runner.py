"""
Step Runner
===========
Host side of the build-step lifecycle. Runs one verification action and
records every failure it surfaces in a StepOutcome.

BOUNDARY RULES:
    - BuildCheckError subclasses become StepFailure records.
    - Anything else is a bug in the action and propagates untouched.
    - A monitored step records one failure PER escalated warning.
"""
import logging
from datetime import datetime, timezone
from typing import Callable

from buildguard.core.errors import BuildCheckError
from buildguard.executor.output_stream import OutputStream
from buildguard.models.step_outcome import StepOutcome
from buildguard.services.warning_escalator import escalate_warnings

logger = logging.getLogger(__name__)


def _finish(outcome: StepOutcome) -> StepOutcome:
    outcome.finished_at = datetime.now(timezone.utc)
    if outcome.succeeded:
        logger.info("Step %s succeeded", outcome.name)
    else:
        logger.error("Step %s failed with %d failure(s)", outcome.name, len(outcome.failures))
    return outcome


def run_step(name: str, action: Callable[[], object]) -> StepOutcome:
    """
    Run an unmonitored verification action.

    Parameters
    ----------
    name : str
        Step label used in logs and the outcome.
    action : callable
        Zero-argument callable; raises BuildCheckError to fail the step.
    """
    outcome = StepOutcome(name=name, started_at=datetime.now(timezone.utc))
    logger.info("Running step %s", name)
    try:
        action()
    except BuildCheckError as e:
        outcome.record(e)
    return _finish(outcome)


def run_monitored_step(
    name: str,
    action: Callable[[OutputStream], object],
    stream: OutputStream | None = None,
) -> StepOutcome:
    """
    Run an action whose output is watched for compiler warnings.

    The escalator listens only while the action runs. If the action itself
    fails, that failure is recorded and pending warnings are not drained.

    Parameters
    ----------
    name : str
        Step label; also the source_task of emitted events.
    action : callable
        Receives the OutputStream to emit onto.
    stream : OutputStream | None
        Stream to monitor. A fresh one is created if omitted.
    """
    stream = stream or OutputStream()
    outcome = StepOutcome(name=name, started_at=datetime.now(timezone.utc))
    logger.info("Running monitored step %s", name)

    with escalate_warnings(stream, name) as escalator:
        try:
            action(stream)
        except BuildCheckError as e:
            outcome.record(e)
            return _finish(outcome)

    for failure in escalator.on_complete():
        outcome.record(failure)

    return _finish(outcome)
