"""
buildguard command line.

Each subcommand runs one verification step the way a build host would
(before/after a build task) and exits non-zero if the step failed.
Reports go to stdout; logs go to stderr.
"""
import argparse
import logging
import os
import sys
from typing import List, Optional

from buildguard.core import config
from buildguard.core.errors import BuildCheckError
from buildguard.core.settings import load_project_settings
from buildguard.executor.output_stream import OutputStream
from buildguard.executor.step_runner import run_monitored_step, run_step
from buildguard.executor.tool_runner import run_tool
from buildguard.models.step_outcome import StepOutcome
from buildguard.services.classpath_builder import build_classpath, to_classpath_token
from buildguard.services.log_cleaner import clean_logs
from buildguard.services.manifest_validator import validate_manifest
from buildguard.services.report_gate import output_spotbugs_report
from buildguard.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _report_outcome(outcome: StepOutcome) -> int:
    """Print every failure on its own line; return the exit code."""
    for failure in outcome.failures:
        print(f"FAILURE [{outcome.name}] {failure.message}", file=sys.stderr)
    return 0 if outcome.succeeded else 1


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------
def _cmd_check_warnings(args: argparse.Namespace) -> int:
    command = list(args.tool_command)
    if command and command[0] == "--":
        command = command[1:]
    if not command:
        print("Error: no tool command given (use: check-warnings -- CMD ...)", file=sys.stderr)
        return 2

    stream = OutputStream()
    # Echo the tool's output so the whole log is visible before failing
    stream.add_listener(lambda event: print(event.text))

    outcome = run_monitored_step(
        args.task,
        lambda s: run_tool(command, s, cwd=args.cwd, source_task=args.task),
        stream,
    )
    return _report_outcome(outcome)


def _cmd_spotbugs_report(args: argparse.Namespace) -> int:
    settings = load_project_settings(args.project_dir)
    report_path = args.report or settings.resolve(args.project_dir, settings.spotbugs_report)
    ignore = True if args.ignore_failures else config.ignore_findbugs_failures()

    outcome = run_step(
        "spotbugs-report",
        lambda: output_spotbugs_report(report_path, ignore_failures=ignore),
    )
    return _report_outcome(outcome)


def _cmd_verify_factories(args: argparse.Namespace) -> int:
    settings = load_project_settings(args.project_dir)
    manifest = args.manifest or settings.resolve(args.project_dir, settings.factories_file)

    outcome = run_step(
        "verify-factories",
        lambda: validate_manifest(manifest, args.project_dir),
    )
    return _report_outcome(outcome)


def _read_artifacts(args: argparse.Namespace) -> List[str]:
    artifacts = list(args.artifacts)
    if args.artifacts_file:
        with open(args.artifacts_file, "r", encoding="utf-8") as f:
            artifacts.extend(line.strip() for line in f if line.strip())
    return artifacts


def _cmd_classpath(args: argparse.Namespace) -> int:
    artifacts = _read_artifacts(args)
    if args.list:
        for artifact in artifacts:
            print(to_classpath_token(artifact))
    else:
        print(build_classpath(artifacts))
    return 0


def _cmd_clean_logs(args: argparse.Namespace) -> int:
    settings = load_project_settings(args.project_dir)
    for path in clean_logs(args.project_dir, settings.clean_patterns):
        print(f"Removed {path}")
    return 0


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="buildguard",
        description="Build-time verification: warnings, SpotBugs, spring.factories, classpath",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("check-warnings", help="Run a tool and fail on every ' warning: ' line")
    p.add_argument("--cwd", default=None, help="Working directory for the tool")
    p.add_argument("--task", default="javadoc", help="Step name shown in failures")
    p.add_argument("tool_command", nargs=argparse.REMAINDER, help="-- followed by the tool argv")
    p.set_defaults(func=_cmd_check_warnings)

    p = sub.add_parser("spotbugs-report", help="Print a SpotBugs XML report and gate on it")
    p.add_argument("--project-dir", default=".", help="Project root")
    p.add_argument("--report", default=None, help="Report path (overrides buildguard.yml)")
    p.add_argument(
        "--ignore-failures", action="store_true",
        help=f"Render without failing (same as {config.IGNORE_FAILURES_ENV}=true)",
    )
    p.set_defaults(func=_cmd_spotbugs_report)

    p = sub.add_parser("verify-factories", help="Check spring.factories classes exist in src/main/java")
    p.add_argument("--project-dir", default=".", help="Project root")
    p.add_argument("--manifest", default=None, help="Manifest path (overrides buildguard.yml)")
    p.set_defaults(func=_cmd_verify_factories)

    p = sub.add_parser("classpath", help="Print the pathing-manifest Class-Path value")
    p.add_argument("--artifacts-file", default=None, help="File with one artifact path per line")
    p.add_argument("--list", action="store_true", help="Print one normalized entry per line")
    p.add_argument("artifacts", nargs="*", help="Resolved artifact paths")
    p.set_defaults(func=_cmd_classpath)

    p = sub.add_parser("clean-logs", help="Delete build log files under the project")
    p.add_argument("--project-dir", default=".", help="Project root")
    p.set_defaults(func=_cmd_clean_logs)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(
        level="DEBUG" if args.verbose else config.LOG_LEVEL,
        log_dir=config.LOG_DIR or None,
    )

    if hasattr(args, "project_dir"):
        args.project_dir = os.path.abspath(args.project_dir)

    try:
        return args.func(args)
    except BuildCheckError as e:
        # Settings errors and malformed inputs outside a step
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
