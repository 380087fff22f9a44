"""
Step Outcome Model
==================
Pydantic models recording what happened in one host build step.

Fields:
    name         — step label (e.g. "javadoc", "spotbugs-report")
    failures     — List[StepFailure], one per surfaced failure, in order
    started_at   — UTC start time
    finished_at  — UTC end time, None while the step is running

A step that surfaced N warnings carries N failures, never one aggregate.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel


class StepFailure(BaseModel):
    kind: str
    message: str


class StepOutcome(BaseModel):
    name: str
    failures: List[StepFailure] = []
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    @property
    def succeeded(self) -> bool:
        return not self.failures

    def record(self, error) -> None:
        """Append a BuildCheckError as an independent failure."""
        self.failures.append(StepFailure(kind=error.kind, message=error.message))
