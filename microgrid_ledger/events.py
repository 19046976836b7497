"""
Outbound Event Queue

Ledger components append events here as part of a committed state change.
Delivery to external observers happens separately, in commit order.
"""

import logging
import threading
from collections import deque
from typing import Callable, Deque, List, Optional

from .models import AnyLedgerEvent, EventType

logger = logging.getLogger(__name__)

EventSink = Callable[[AnyLedgerEvent], None]


class EventQueue:
    """Ordered, fire-and-forget event queue"""

    def __init__(self, max_history: Optional[int] = None):
        """
        Initialize the queue.

        Args:
            max_history: Number of delivered events kept for inspection (None keeps all)
        """
        self._pending: Deque[AnyLedgerEvent] = deque()
        self._history: Deque[AnyLedgerEvent] = deque(maxlen=max_history)
        self._sinks: List[EventSink] = []
        self._queue_lock = threading.Lock()
        self._delivery_lock = threading.Lock()
        self._local = threading.local()

    @property
    def max_history(self) -> Optional[int]:
        return self._history.maxlen

    def subscribe(self, sink: EventSink) -> None:
        with self._queue_lock:
            self._sinks.append(sink)

    def unsubscribe(self, sink: EventSink) -> None:
        with self._queue_lock:
            self._sinks = [s for s in self._sinks if s != sink]

    def emit(self, event: AnyLedgerEvent) -> None:
        """Enqueue an event. Called while the ledger state lock is held."""
        with self._queue_lock:
            self._pending.append(event)
            self._history.append(event)
        logger.debug("Queued %s event", event.event_type)

    def deliver(self) -> int:
        """
        Hand every pending event to the subscribed sinks, oldest first.

        A sink that raises is logged and skipped; the ledger has already
        committed the change the event describes. A sink may write back to
        the ledger: the nested call returns at once and the events it queued
        are delivered by this loop, after the current one.

        Returns:
            Number of events delivered
        """
        if getattr(self._local, "delivering", False):
            return 0
        delivered = 0
        with self._delivery_lock:
            self._local.delivering = True
            try:
                delivered = self._deliver_pending()
            finally:
                self._local.delivering = False
        return delivered

    def _deliver_pending(self) -> int:
        delivered = 0
        while True:
            with self._queue_lock:
                if not self._pending:
                    break
                event = self._pending.popleft()
                sinks = list(self._sinks)
            for sink in sinks:
                try:
                    sink(event)
                except Exception:
                    logger.exception("Event sink %r failed on %s", sink, event.event_type)
            delivered += 1
        return delivered

    def drain(self) -> List[AnyLedgerEvent]:
        """Remove and return pending events without invoking sinks"""
        with self._queue_lock:
            events = list(self._pending)
            self._pending.clear()
        return events

    def history(self, event_type: Optional[EventType] = None) -> List[AnyLedgerEvent]:
        """Get emitted events in emission order, optionally filtered by type"""
        with self._queue_lock:
            events = list(self._history)
        if event_type is None:
            return events
        return [e for e in events if e.event_type == event_type]

    def pending_count(self) -> int:
        with self._queue_lock:
            return len(self._pending)
