"""
Output Event Model
Pydantic model for one line of build-tool output on the live stream.
Consumed immediately by listeners; never persisted.
"""
from datetime import datetime, timezone
from pydantic import BaseModel, Field


class OutputEvent(BaseModel):
    text: str
    source_task: str = ""
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def __str__(self) -> str:
        return self.text
