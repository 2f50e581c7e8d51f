from __future__ import annotations

import itertools
import json
import logging
import queue
import threading
from dataclasses import dataclass, field
from typing import Dict, Optional, Set

from ..core.constants import DEFAULT_SUBSCRIBER_QUEUE_SIZE

logger = logging.getLogger(__name__)

_ids = itertools.count(1)


@dataclass(frozen=True)
class Event:
    name: str
    payload: dict

    def to_sse(self) -> str:
        data = json.dumps(self.payload, separators=(",", ":"))
        return f"event: {self.name}\ndata: {data}\n\n"


@dataclass(eq=False)
class Subscription:
    """One live connection watching one session code."""

    session_code: str
    max_pending: int = DEFAULT_SUBSCRIBER_QUEUE_SIZE
    subscription_id: int = field(default_factory=lambda: next(_ids))

    def __post_init__(self):
        self._queue: "queue.Queue[Event]" = queue.Queue(maxsize=self.max_pending)

    def offer(self, event: Event) -> bool:
        try:
            self._queue.put_nowait(event)
        except queue.Full:
            return False
        return True

    def next_event(self, timeout: Optional[float] = None) -> Optional[Event]:
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None


class RealtimeNotifier:
    """Lock-guarded map of session code -> live subscriptions.

    Delivery is at-most-once and best-effort: nothing is persisted for
    subscribers that are not connected, and a subscriber whose queue is full
    misses the event.
    """

    def __init__(self, *, max_pending: int = DEFAULT_SUBSCRIBER_QUEUE_SIZE):
        self._max_pending = int(max_pending)
        self._lock = threading.Lock()
        self._groups: Dict[str, Set[Subscription]] = {}

    def subscribe(self, session_code: str) -> Subscription:
        sub = Subscription(session_code=session_code, max_pending=self._max_pending)
        with self._lock:
            self._groups.setdefault(session_code, set()).add(sub)
        logger.debug("subscription %s joined %s", sub.subscription_id, session_code)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            group = self._groups.get(sub.session_code)
            if group is None:
                return
            group.discard(sub)
            if not group:
                del self._groups[sub.session_code]
        logger.debug("subscription %s left %s", sub.subscription_id, sub.session_code)

    def publish(self, session_code: str, event: str, payload: dict) -> int:
        """Deliver to every current subscriber; returns how many accepted it."""
        with self._lock:
            targets = list(self._groups.get(session_code, ()))

        message = Event(name=event, payload=payload)
        delivered = 0
        for sub in targets:
            if sub.offer(message):
                delivered += 1
            else:
                logger.warning("dropped %s for subscription %s (queue full)", event, sub.subscription_id)
        return delivered

    def subscriber_count(self, session_code: str) -> int:
        with self._lock:
            return len(self._groups.get(session_code, ()))
