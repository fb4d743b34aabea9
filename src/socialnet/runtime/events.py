from __future__ import annotations

"""Ledger notifications.

Events are fire-and-forget observability records. Appliers return them next
to their meta instead of publishing them, so the ledger can hand them to the
EventLog only after a transition has committed. A failed call never produces
an event.
"""

import logging
import threading
from collections import deque
from dataclasses import asdict, dataclass
from typing import Any, Callable, ClassVar, Deque, Dict, Iterator, List, Tuple, Union

Json = Dict[str, Any]

_log = logging.getLogger("socialnet.events")


@dataclass(frozen=True)
class UserRegistered:
    principal: str
    username: str

    name: ClassVar[str] = "UserRegistered"

    def to_json(self) -> Json:
        return {"event": self.name, **asdict(self)}


@dataclass(frozen=True)
class PostCreated:
    post_id: int
    author: str
    content: str

    name: ClassVar[str] = "PostCreated"

    def to_json(self) -> Json:
        return {"event": self.name, **asdict(self)}


@dataclass(frozen=True)
class PostLiked:
    post_id: int
    liker: str

    name: ClassVar[str] = "PostLiked"

    def to_json(self) -> Json:
        return {"event": self.name, **asdict(self)}


# Unlike intentionally has no event: only the like branch of a toggle is announced.
LedgerEvent = Union[UserRegistered, PostCreated, PostLiked]
Subscriber = Callable[[LedgerEvent], None]


class EventLog:
    """Ordered, append-only record of emitted events plus subscriber fan-out.

    Subscribers see events in exactly the order they were recorded, even with
    concurrent writers: `record` queues events for delivery in the same step
    that appends them, and `flush` drains that queue from one thread at a time.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._deliver_lock = threading.Lock()
        self._events: List[LedgerEvent] = []
        self._pending: Deque[LedgerEvent] = deque()
        self._subscribers: List[Subscriber] = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def __iter__(self) -> Iterator[LedgerEvent]:
        return iter(self.snapshot())

    def snapshot(self) -> Tuple[LedgerEvent, ...]:
        with self._lock:
            return tuple(self._events)

    def of_type(self, name: str) -> List[LedgerEvent]:
        return [e for e in self.snapshot() if e.name == name]

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback; returns a function that unsubscribes it."""
        with self._lock:
            self._subscribers.append(callback)

        def _unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return _unsubscribe

    def record(self, events: Tuple[LedgerEvent, ...]) -> None:
        with self._lock:
            self._events.extend(events)
            self._pending.extend(events)

    def flush(self) -> None:
        """Deliver every recorded-but-undelivered event to subscribers, in order.

        Only one thread delivers at a time. A caller that finds delivery busy
        returns at once; the delivering thread picks its events up. A subscriber
        that writes to the ledger therefore sees its own events after the
        current one, not nested inside it.
        """
        while True:
            if not self._deliver_lock.acquire(blocking=False):
                return
            try:
                while True:
                    with self._lock:
                        if not self._pending:
                            break
                        ev = self._pending.popleft()
                        subs = list(self._subscribers)
                    self._deliver(ev, subs)
            finally:
                self._deliver_lock.release()
            # An event queued between the last drain and the release has no
            # other thread left to deliver it.
            with self._lock:
                if not self._pending:
                    return

    @staticmethod
    def _deliver(ev: LedgerEvent, subs: List[Subscriber]) -> None:
        # A failing subscriber cannot undo a committed transition or starve the others.
        for cb in subs:
            try:
                cb(ev)
            except Exception:
                _log.exception("event subscriber failed for %s", ev.name)


__all__ = [
    "EventLog",
    "LedgerEvent",
    "PostCreated",
    "PostLiked",
    "Subscriber",
    "UserRegistered",
]
