"""
Errors
======
Failure taxonomy shared by every verification routine.

    BuildCheckError
    ├── PolicyViolation            — the build broke a rule the tools do not enforce
    │   ├── WarningEscalated
    │   ├── BugThresholdExceeded
    │   └── MissingConfigurationClass
    ├── MalformedReport            — an artifact exists but cannot be parsed
    ├── MalformedManifest          — spring.factories cannot be read or unescaped
    ├── ToolExecutionError         — the monitored tool could not run or failed
    └── SettingsError              — buildguard.yml is unreadable

A missing optional artifact (report, manifest) is never an error.
Every message is self-contained so it can be acted on without a re-run.
"""


class BuildCheckError(Exception):
    """Base class for failures that abort the current build step."""

    kind = "BUILD_CHECK"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class PolicyViolation(BuildCheckError):
    kind = "POLICY_VIOLATION"


class WarningEscalated(PolicyViolation):
    """A compiler warning line; the message is the line's exact text."""

    kind = "WARNING"


class BugThresholdExceeded(PolicyViolation):
    kind = "STATIC_ANALYSIS"

    def __init__(self, message: str, bug_count: int = 0, report_path: str = ""):
        super().__init__(message)
        self.bug_count = bug_count
        self.report_path = report_path


class MissingConfigurationClass(PolicyViolation):
    kind = "MISSING_CLASS"

    def __init__(self, class_name: str, expected_path: str, key: str = ""):
        super().__init__(
            f"Spring configuration class does not exist: {class_name} "
            f"(expected source file: {expected_path})"
        )
        self.class_name = class_name
        self.expected_path = expected_path
        self.key = key


class MalformedReport(BuildCheckError):
    kind = "MALFORMED_INPUT"

    def __init__(self, report_path: str, reason: str):
        super().__init__(f"Malformed analysis report {report_path}: {reason}")
        self.report_path = report_path
        self.reason = reason


class MalformedManifest(BuildCheckError):
    kind = "MALFORMED_INPUT"

    def __init__(self, manifest_path: str, reason: str):
        super().__init__(f"Malformed factories manifest {manifest_path}: {reason}")
        self.manifest_path = manifest_path
        self.reason = reason


class ToolExecutionError(BuildCheckError):
    kind = "TOOL_EXECUTION"

    def __init__(self, message: str, exit_code: int = -1):
        super().__init__(message)
        self.exit_code = exit_code


class SettingsError(BuildCheckError):
    kind = "SETTINGS"
