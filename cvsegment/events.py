"""
Extraction event channel.

A small publish/subscribe fan-out used to observe many concurrent
extractions in one place. The channel is owned by whoever composes the
coordinator and is passed in explicitly; there is no module-level instance.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .logging_utils import LOG
from .shared import DocumentFormat

EXTRACTION_START = "extraction:start"
EXTRACTION_PROGRESS = "extraction:progress"
EXTRACTION_COMPLETE = "extraction:complete"
EXTRACTION_ERROR = "extraction:error"

EVENT_NAMES = (
    EXTRACTION_START,
    EXTRACTION_PROGRESS,
    EXTRACTION_COMPLETE,
    EXTRACTION_ERROR,
)

TERMINAL_EVENTS = (EXTRACTION_COMPLETE, EXTRACTION_ERROR)


@dataclass(frozen=True)
class ExtractionEvent:
    name: str
    format: DocumentFormat
    path: Optional[str]
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_terminal(self) -> bool:
        return self.name in TERMINAL_EVENTS

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"type": self.format.value, "path": self.path}
        payload.update(self.data)
        return payload


Listener = Callable[[ExtractionEvent], None]


class EventChannel:
    """
    Fan-out channel for extraction events.

    publish() delivers synchronously to a snapshot of the current listeners,
    so subscribing or unsubscribing from another thread (or from inside a
    listener) never affects an in-flight delivery. A failing listener is
    logged and skipped.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._listeners: Dict[Optional[str], List[Listener]] = {}

    def subscribe(self, name: Optional[str], listener: Listener) -> Callable[[], None]:
        """
        Register a listener for one event name (or every event when name is None).

        Returns a callable that removes the listener again.
        """
        if name is not None and name not in EVENT_NAMES:
            raise ValueError(f"Unknown event name: {name}")
        with self._lock:
            self._listeners.setdefault(name, []).append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                listeners = self._listeners.get(name, [])
                if listener in listeners:
                    listeners.remove(listener)

        return _unsubscribe

    def subscribe_all(self, listener: Listener) -> Callable[[], None]:
        return self.subscribe(None, listener)

    def listener_count(self, name: Optional[str] = None) -> int:
        with self._lock:
            return len(self._listeners.get(name, []))

    def publish(self, event: ExtractionEvent) -> None:
        with self._lock:
            targets = list(self._listeners.get(event.name, [])) + list(self._listeners.get(None, []))
        for listener in targets:
            try:
                listener(event)
            except Exception as e:
                LOG.error("Listener for %s failed: %s", event.name, e)


class EventRecorder:
    """Listener that keeps every event it sees, in order."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.events: List[ExtractionEvent] = []

    def __call__(self, event: ExtractionEvent) -> None:
        with self._lock:
            self.events.append(event)

    def names(self, path: Optional[str] = None) -> List[str]:
        with self._lock:
            return [e.name for e in self.events if path is None or e.path == path]

    def for_path(self, path: str) -> List[ExtractionEvent]:
        with self._lock:
            return [e for e in self.events if e.path == path]
