"""
Unit Tests — Warning Escalator
==============================
Tests for the output stream, deferred failure accumulation, listener
scoping and the monitored step lifecycle.

No external tool is run here; events are emitted directly.
"""
import pytest

from buildguard.core.errors import ToolExecutionError, WarningEscalated
from buildguard.executor.output_stream import OutputStream
from buildguard.executor.step_runner import run_monitored_step
from buildguard.models.output_event import OutputEvent
from buildguard.services.warning_escalator import (
    DeferredFailures,
    WarningEscalator,
    escalate_warnings,
)


WARN_1 = "src/main/java/com/acme/Foo.java:12: warning: no @param for name"
WARN_2 = "src/main/java/com/acme/Bar.java:40: warning: no @return"
INFO = "Generating build/docs/javadoc/com/acme/Foo.html..."


# ---------------------------------------------------------------------------
# 1. Output stream
# ---------------------------------------------------------------------------
class TestOutputStream:

    def test_emits_in_order(self):
        stream = OutputStream()
        seen = []
        stream.add_listener(lambda e: seen.append(e.text))
        for text in ("a", "b", "c"):
            stream.emit_line(text)
        assert seen == ["a", "b", "c"]

    def test_removed_listener_receives_nothing(self):
        stream = OutputStream()
        seen = []
        listener = lambda e: seen.append(e.text)  # noqa: E731
        stream.add_listener(listener)
        stream.remove_listener(listener)
        stream.emit_line("ignored")
        assert seen == []
        assert stream.listener_count == 0

    def test_remove_unknown_listener_is_noop(self):
        stream = OutputStream()
        stream.remove_listener(lambda e: None)
        assert stream.listener_count == 0

    def test_event_carries_source_task(self):
        stream = OutputStream()
        seen = []
        stream.add_listener(seen.append)
        stream.emit_line("x", source_task="javadoc")
        assert seen[0].source_task == "javadoc"
        assert seen[0].timestamp is not None


# ---------------------------------------------------------------------------
# 2. Deferred failures
# ---------------------------------------------------------------------------
class TestDeferredFailures:

    def test_drain_returns_in_accumulation_order(self):
        failures = DeferredFailures()
        failures.append(WarningEscalated("first"))
        failures.append(WarningEscalated("second"))
        drained = failures.drain()
        assert [f.message for f in drained] == ["first", "second"]

    def test_drain_empties_buffer(self):
        failures = DeferredFailures()
        failures.append(WarningEscalated("only"))
        failures.drain()
        assert len(failures) == 0
        assert failures.drain() == []


# ---------------------------------------------------------------------------
# 3. Matching
# ---------------------------------------------------------------------------
class TestWarningEscalator:

    def test_warning_line_is_captured_verbatim(self):
        escalator = WarningEscalator()
        escalator.on_output(OutputEvent(text=WARN_1))
        failures = escalator.on_complete()
        assert len(failures) == 1
        assert str(failures[0]) == WARN_1
        assert failures[0].message == WARN_1

    def test_non_warning_line_ignored(self):
        escalator = WarningEscalator()
        escalator.on_output(OutputEvent(text=INFO))
        assert escalator.on_complete() == []

    @pytest.mark.parametrize("text", [
        "warning: at line start",
        "Foo.java:1:warning: no space before",
        "Foo.java:1: Warning: capitalised",
        "1 warning",
    ])
    def test_token_requires_exact_spacing(self, text):
        escalator = WarningEscalator()
        escalator.on_output(OutputEvent(text=text))
        assert escalator.on_complete() == []

    def test_matching_never_raises(self):
        escalator = WarningEscalator()
        # on_output returns normally even for a warning line
        assert escalator.on_output(OutputEvent(text=WARN_1)) is None


# ---------------------------------------------------------------------------
# 4. Listener scoping
# ---------------------------------------------------------------------------
class TestEscalateWarnings:

    def test_listener_registered_only_inside_block(self):
        stream = OutputStream()
        with escalate_warnings(stream, "javadoc"):
            assert stream.listener_count == 1
        assert stream.listener_count == 0

    def test_listener_released_when_block_raises(self):
        stream = OutputStream()
        with pytest.raises(RuntimeError):
            with escalate_warnings(stream, "javadoc"):
                raise RuntimeError("unrelated failure")
        assert stream.listener_count == 0

    def test_events_after_block_not_captured(self):
        stream = OutputStream()
        with escalate_warnings(stream) as escalator:
            stream.emit_line(WARN_1)
        stream.emit_line(WARN_2)
        assert [f.message for f in escalator.on_complete()] == [WARN_1]


# ---------------------------------------------------------------------------
# 5. Monitored step
# ---------------------------------------------------------------------------
class TestRunMonitoredStep:

    def test_one_failure_per_warning_in_order(self):
        lines = [INFO, WARN_1, INFO, WARN_2, WARN_1]

        def action(stream):
            for line in lines:
                stream.emit_line(line)

        outcome = run_monitored_step("javadoc", action)
        assert not outcome.succeeded
        assert [f.message for f in outcome.failures] == [WARN_1, WARN_2, WARN_1]
        assert all(f.kind == "WARNING" for f in outcome.failures)

    def test_zero_warnings_succeeds(self):
        outcome = run_monitored_step("javadoc", lambda s: s.emit_line(INFO))
        assert outcome.succeeded
        assert outcome.failures == []
        assert outcome.finished_at is not None

    def test_failed_action_records_failure_and_releases_listener(self):
        stream = OutputStream()

        def action(s):
            s.emit_line(WARN_1)
            raise ToolExecutionError("javadoc exited with code 1", exit_code=1)

        outcome = run_monitored_step("javadoc", action, stream)
        assert [f.kind for f in outcome.failures] == ["TOOL_EXECUTION"]
        assert stream.listener_count == 0

    def test_unexpected_exception_propagates(self):
        stream = OutputStream()
        with pytest.raises(KeyError):
            run_monitored_step("javadoc", lambda s: {}["missing"], stream)
        assert stream.listener_count == 0

    def test_other_listeners_still_see_all_lines(self):
        stream = OutputStream()
        echoed = []
        stream.add_listener(lambda e: echoed.append(e.text))
        run_monitored_step("javadoc", lambda s: [s.emit_line(t) for t in (WARN_1, INFO)], stream)
        assert echoed == [WARN_1, INFO]
