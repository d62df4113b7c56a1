"""Structured processing events for the chainhook pipeline.

Every component that produces an observable side effect (dispatching a
contract call, sending a notification, skipping a block) reports it to an
``EventRecorder``. The recorder keeps a bounded in-memory history plus
per-type counters, and mirrors each event to the structured logger.
"""

from collections import Counter, deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List, Optional

from passkey_vault.lib.logger import configure_logger

logger = configure_logger(__name__)


@dataclass
class ProcessingEvent:
    """A single recorded event."""

    event_type: str
    timestamp: datetime
    data: Dict[str, Any] = field(default_factory=dict)


class EventRecorder:
    """Collects processing events emitted by the chainhook components."""

    def __init__(self, max_events: int = 10000, log_events: bool = True):
        self._events: Deque[ProcessingEvent] = deque(maxlen=max_events)
        self._counts: Counter = Counter()
        self._log_events = log_events

    def record(self, event_type: str, **data: Any) -> ProcessingEvent:
        """Record an event and return it."""
        event = ProcessingEvent(
            event_type=event_type,
            timestamp=datetime.now(timezone.utc),
            data=data,
        )
        self._events.append(event)
        self._counts[event_type] += 1

        if self._log_events:
            logger.debug(event_type, extra={"event_type": event_type, **data})

        return event

    def events(self, event_type: Optional[str] = None) -> List[ProcessingEvent]:
        """Return recorded events, optionally filtered by type."""
        if event_type is None:
            return list(self._events)
        return [e for e in self._events if e.event_type == event_type]

    def count(self, event_type: str) -> int:
        """Total number of events of a type recorded since the last reset."""
        return self._counts[event_type]

    def get_counts(self) -> Dict[str, int]:
        return dict(self._counts)

    def reset(self) -> None:
        self._events.clear()
        self._counts.clear()
