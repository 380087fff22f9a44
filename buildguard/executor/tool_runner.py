"""
Tool Runner
===========
Runs a compiler / documentation tool as a child process and feeds every
output line to the host OutputStream as it is produced.

BOUNDARY RULES (CRITICAL):
    - Runner ONLY observes execution.
    - Runner NEVER decides whether a warning fails the build — that is the
      Warning Escalator's job (it listens on the same stream).
    - Runner NEVER buffers lines before emitting them.

STREAMING:
    - stdout and stderr are merged, so javadoc/javac diagnostics interleave
      with normal output exactly as on a terminal.
    - Lines are emitted without their trailing newline.

DETERMINISM:
    Same command + same workspace → same event sequence.
"""
import os
import time
import logging
import subprocess
from dataclasses import dataclass, field
from typing import Optional, Sequence

from buildguard.core.errors import ToolExecutionError
from buildguard.executor.output_stream import OutputStream

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Execution Result
# ---------------------------------------------------------------------------
@dataclass
class ExecutionResult:
    """
    Structured output from a single tool execution.

    Fields
    ------
    exit_code : int
        Process exit code (0 = success).
    full_log : str
        Every emitted line, newline-joined.
    log_excerpt : str
        Abbreviated log (first + last N lines) for console summaries.
    execution_time_seconds : float
        Wall clock duration of the execution.
    command : list[str]
        The argv that was executed.
    """
    exit_code: int = -1
    full_log: str = ""
    log_excerpt: str = ""
    execution_time_seconds: float = 0.0
    command: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Log Excerpt Helper
# ---------------------------------------------------------------------------
_EXCERPT_HEAD_LINES = 30
_EXCERPT_TAIL_LINES = 30


def create_log_excerpt(full_log: str,
                       head: int = _EXCERPT_HEAD_LINES,
                       tail: int = _EXCERPT_TAIL_LINES) -> str:
    """
    Create an abbreviated log showing the first and last N lines.

    If the log is short enough, it is returned as-is.
    """
    lines = full_log.splitlines()
    total = len(lines)

    if total <= head + tail:
        return full_log

    omitted = total - head - tail
    return "\n".join(
        lines[:head]
        + [f"\n... ({omitted} lines omitted) ...\n"]
        + lines[-tail:]
    )


# ---------------------------------------------------------------------------
# Process Execution
# ---------------------------------------------------------------------------
def run_tool(
    command: Sequence[str],
    stream: OutputStream,
    cwd: Optional[str] = None,
    source_task: str = "",
    env: Optional[dict] = None,
) -> ExecutionResult:
    """
    Execute a tool and stream its output.

    Lifecycle:
        1. Launch the process (stdout + stderr merged, text mode)
        2. Emit one OutputEvent per line, in order, on this thread
        3. Wait for exit
        4. Raise if the tool failed

    Parameters
    ----------
    command : sequence of str
        argv of the tool, e.g. ["javadoc", "-d", "build/docs", ...].
    stream : OutputStream
        Stream that receives every output line.
    cwd : str | None
        Working directory for the tool.
    source_task : str
        Label stamped on every OutputEvent.
    env : dict | None
        Extra environment variables layered over the current environment.

    Returns
    -------
    ExecutionResult
        On exit code 0.

    Raises
    ------
    ToolExecutionError
        If the tool cannot be started or exits non-zero.
    """
    argv = list(command)
    if not argv:
        raise ToolExecutionError("No tool command given")

    result = ExecutionResult(command=argv)
    start_time = time.monotonic()
    process_env = {**os.environ, **env} if env else None

    logger.info("Starting tool | task=%s | cmd=%s | cwd=%s", source_task, argv, cwd or ".")

    try:
        process = subprocess.Popen(
            argv,
            cwd=cwd,
            env=process_env,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as e:
        raise ToolExecutionError(f"Unable to start {argv[0]}: {e}") from e

    captured: list[str] = []
    with process:
        assert process.stdout is not None
        for raw_line in process.stdout:
            line = raw_line.rstrip("\r\n")
            captured.append(line)
            stream.emit_line(line, source_task=source_task)
        result.exit_code = process.wait()

    result.full_log = "\n".join(captured)
    result.log_excerpt = create_log_excerpt(result.full_log)
    result.execution_time_seconds = round(time.monotonic() - start_time, 3)

    logger.info(
        "Tool complete | exit=%d | time=%.2fs | lines=%d",
        result.exit_code, result.execution_time_seconds, len(captured),
    )

    if result.exit_code != 0:
        raise ToolExecutionError(
            f"{argv[0]} exited with code {result.exit_code}:\n{result.log_excerpt}",
            exit_code=result.exit_code,
        )

    return result
