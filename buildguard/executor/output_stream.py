"""
Output Stream
=============
The host's live build-output stream. Tools (via run_tool) emit one
OutputEvent per line; registered listeners receive every event
synchronously, on the emitting thread, in emission order.

Listeners are plain callables taking an OutputEvent.
"""
import logging
from typing import Callable

from buildguard.models.output_event import OutputEvent

logger = logging.getLogger(__name__)

OutputListener = Callable[[OutputEvent], None]


class OutputStream:

    def __init__(self) -> None:
        self._listeners: list[OutputListener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_listener(self, listener: OutputListener) -> None:
        self._listeners.append(listener)
        logger.debug("Output listener registered (%d active)", len(self._listeners))

    def remove_listener(self, listener: OutputListener) -> None:
        """Deregister a listener. Removing an unknown listener is a no-op."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            return
        logger.debug("Output listener removed (%d active)", len(self._listeners))

    def emit(self, event: OutputEvent) -> None:
        # Snapshot so a listener may deregister itself mid-dispatch
        for listener in list(self._listeners):
            listener(event)

    def emit_line(self, text: str, source_task: str = "") -> None:
        self.emit(OutputEvent(text=text, source_task=source_task))
