"""
Configuration
=============
Loads process-level settings from the environment (and a .env file via
python-dotenv).

Environment Variables:
    BUILDGUARD_LOG_LEVEL      — Root log level (default: INFO)
    BUILDGUARD_LOG_DIR        — Directory for the daily log file (default: unset, console only)
    IGNORE_FINDBUGS_FAILURES  — "true" renders SpotBugs violations without failing the build

Override Flag Philosophy:
    The override flag is read once per gate evaluation through
    ignore_findbugs_failures() and handed to the gate as a plain bool.
    The gate itself never reads the environment.
"""
import os
from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("BUILDGUARD_LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("BUILDGUARD_LOG_DIR", "")

IGNORE_FAILURES_ENV = "IGNORE_FINDBUGS_FAILURES"


def ignore_findbugs_failures() -> bool:
    """
    Return True if the SpotBugs override flag is set.

    Only the literal "true" (any case) enables it.
    """
    return os.getenv(IGNORE_FAILURES_ENV, "").strip().lower() == "true"
