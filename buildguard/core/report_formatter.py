"""
Report Formatter
================
THE SINGLE SOURCE OF TRUTH for all SpotBugs console output strings.

STRICT DETERMINISM CONTRACT:
  - This module NEVER reads environment variables.
  - This module NEVER touches the filesystem.
  - Given the same BugReport, it ALWAYS returns the exact same text.

Per BugInstance, in document order:

    *********************************
    Bug ({abbrev}): {type} [{priority}-{rank}] @ category {category}
    \\tClass: {classname}
    \\tStart Line: {start}, End Line: {end}, Source Path: [{sourcepath}], Source File: [{sourcefile}]
    \\t----------------------METHOD-----------------------------
    \\tMethod: {name} [static: {true|false|}]
    \\tSignature: {signature}
    \\tStart Line: {start}, End Line: {end}
    \\t-------------------SOURCE LINE---------------------------
    \\tStart Line: {start}, End Line: {end}, Class: [{classname}]

Missing attribute values render as the empty string.
"""
from typing import Optional

from buildguard.models.bug_report import (
    BugInstance,
    BugReport,
    ClassRef,
    MethodRef,
    SourceLine,
)

# ---------------------------------------------------------------------------
# Fixed fragments
# ---------------------------------------------------------------------------
SEPARATOR = "*********************************"
HEADER = "Found Spotbugs rule violation(s):"
METHOD_DIVIDER = "\t----------------------METHOD-----------------------------"
SOURCE_LINE_DIVIDER = "\t-------------------SOURCE LINE---------------------------"


def _text(value) -> str:
    return "" if value is None else str(value)


def _flag(value: Optional[bool]) -> str:
    if value is None:
        return ""
    return "true" if value else "false"


# ---------------------------------------------------------------------------
# Line formatters
# ---------------------------------------------------------------------------
def format_instance_heading(bug: BugInstance) -> str:
    return (
        f"Bug ({_text(bug.abbrev)}): {bug.type} "
        f"[{_text(bug.priority)}-{_text(bug.rank)}] @ category {_text(bug.category)}"
    )


def format_class_lines(clz: ClassRef) -> list[str]:
    lines = [f"\tClass: {_text(clz.classname)}"]
    for line in clz.source_lines:
        lines.append(
            f"\tStart Line: {_text(line.start)}, End Line: {_text(line.end)}, "
            f"Source Path: [{_text(line.sourcepath)}], Source File: [{_text(line.sourcefile)}]"
        )
    return lines


def format_method_lines(md: MethodRef) -> list[str]:
    lines = [
        f"\tMethod: {_text(md.name)} [static: {_flag(md.is_static)}]",
        f"\tSignature: {_text(md.signature)}",
    ]
    for line in md.source_lines:
        lines.append(f"\tStart Line: {_text(line.start)}, End Line: {_text(line.end)}")
    return lines


def format_source_line(line: SourceLine) -> str:
    return (
        f"\tStart Line: {_text(line.start)}, End Line: {_text(line.end)}, "
        f"Class: [{_text(line.classname)}]"
    )


def format_instance(bug: BugInstance) -> list[str]:
    """All console lines for one BugInstance, separator first."""
    lines = [SEPARATOR, format_instance_heading(bug)]
    for clz in bug.classes:
        lines.extend(format_class_lines(clz))
    lines.append(METHOD_DIVIDER)
    for md in bug.methods:
        lines.extend(format_method_lines(md))
    lines.append(SOURCE_LINE_DIVIDER)
    for line in bug.source_lines:
        lines.append(format_source_line(line))
    return lines


def format_summary(bug_count: int, report_path: str) -> str:
    """One-line summary; also the exact failure message of the gate."""
    return (
        f"{bug_count} Spotbugs rule violation(s) were found. "
        f"See the report at: {report_path}"
    )


def render_report(report: BugReport) -> Optional[str]:
    """
    Render the full console text for a report.

    Returns
    -------
    str | None
        The rendered text, or None when the report has no instances
        (nothing at all is printed in that case).
    """
    if not report.instances:
        return None

    lines = [SEPARATOR, HEADER, ""]
    for bug in report.instances:
        lines.extend(format_instance(bug))
    lines.append("")
    lines.append(format_summary(report.bug_count, report.source_path))
    return "\n".join(lines)
