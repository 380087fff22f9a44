"""
Report Gate
===========
Turns a parsed BugReport into console text and a pass/fail decision.

Gate rule:
    bug_count == 0                       → no output, pass (flag irrelevant)
    bug_count  > 0, override flag unset  → render, FAIL with the summary line
    bug_count  > 0, override flag set    → render, pass

render_and_gate() is pure: the override flag is an argument, never read
from the environment here. output_spotbugs_report() is the host-facing
wrapper that reads the flag once from configuration.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from buildguard.core import config
from buildguard.core.errors import BugThresholdExceeded
from buildguard.core.report_formatter import format_summary, render_report
from buildguard.models.bug_report import BugReport
from buildguard.parser.report_parser import parse_report

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GateResult:
    """
    Outcome of one gate evaluation.

    Fields
    ------
    text : str
        Console text to print. Empty when the report has no instances.
    passed : bool
        False only when bugs were found and the override flag is unset.
    summary : str | None
        The summary line (also the failure message), None for a clean report.
    bug_count : int
        Number of BugInstance records in the report.
    """
    text: str
    passed: bool
    summary: Optional[str] = None
    bug_count: int = 0


def render_and_gate(report: BugReport, ignore_failures: bool = False) -> GateResult:
    """Render a report and decide pass/fail without side effects."""
    rendered = render_report(report)
    if rendered is None:
        return GateResult(text="", passed=True)

    return GateResult(
        text=rendered,
        passed=ignore_failures,
        summary=format_summary(report.bug_count, report.source_path),
        bug_count=report.bug_count,
    )


def enforce(result: GateResult, report_path: str = "") -> None:
    """Raise BugThresholdExceeded if the gate failed."""
    if not result.passed:
        raise BugThresholdExceeded(
            result.summary or "",
            bug_count=result.bug_count,
            report_path=report_path,
        )


def output_spotbugs_report(
    report_path: str,
    ignore_failures: Optional[bool] = None,
    echo: Callable[[str], None] = print,
) -> GateResult:
    """
    Display a SpotBugs report on the console and fail the step if needed.

    Parameters
    ----------
    report_path : str
        Path to the XML report. A missing file is a pass.
    ignore_failures : bool | None
        Override flag. None reads it from configuration (once).
    echo : callable
        Console writer; defaults to print.

    Returns
    -------
    GateResult
        The evaluation, when the gate passed.

    Raises
    ------
    MalformedReport
        If the report exists but cannot be parsed.
    BugThresholdExceeded
        If bugs were found and the override flag is unset.
    """
    report = parse_report(report_path)

    if ignore_failures is None:
        ignore_failures = config.ignore_findbugs_failures()

    result = render_and_gate(report, ignore_failures)
    if result.text:
        echo(result.text)

    if result.bug_count and result.passed:
        logger.warning(
            "%d Spotbugs violation(s) ignored (%s is set)",
            result.bug_count, config.IGNORE_FAILURES_ENV,
        )

    enforce(result, report.source_path)
    return result
