"""
In-process real-time event channel.

Connected observers (a websocket bridge, the housekeeping app) subscribe
a callback and receive every broadcast event.
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List

from app.core.logging import get_logger

ROOM_HOUSEKEEPING_UPDATED = "room.housekeeping.updated"
TASK_REFRESH = "task.refresh"
CHECKOUT_COMPLETED = "checkout.completed"


@dataclass
class RealtimeEvent:
    """One broadcast event."""

    event: str
    payload: Dict[str, Any] = field(default_factory=dict)
    emitted_at: datetime = field(default_factory=datetime.utcnow)


Subscriber = Callable[[RealtimeEvent], None]


class RealtimeBroadcaster:
    """
    Fan-out of events to subscribers.

    A failing subscriber is logged and skipped; the others still receive
    the event.
    """

    def __init__(self):
        self._subscribers: List[Subscriber] = []
        self._lock = threading.Lock()
        self._logger = get_logger(self.__class__.__name__)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback; returns a function that unsubscribes it."""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def broadcast(self, event: str, payload: Dict[str, Any] = None) -> RealtimeEvent:
        message = RealtimeEvent(event=event, payload=payload or {})
        with self._lock:
            subscribers = list(self._subscribers)

        for callback in subscribers:
            try:
                callback(message)
            except Exception as e:
                self._logger.error(
                    f"Realtime subscriber failed for {event}: {e}",
                    extra={"event_name": event},
                    exc_info=True,
                )

        self._logger.debug(
            f"Event broadcast: {event}",
            extra={"event_name": event, "subscriber_count": len(subscribers)},
        )
        return message


broadcaster = RealtimeBroadcaster()
