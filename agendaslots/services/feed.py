"""
Live read model over the store subscription.

The feed holds the most recent full snapshot delivered by the store and
nothing else: each notification replaces the previous list wholesale, so
admin and customer views recompute from the same source and never drift.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, List, Tuple

from ..adapters.store import SlotStoreProtocol, Subscription
from ..domain.models import ResolvedSlot, SlotException
from ..domain.resolver import AvailabilityResolver

logger = logging.getLogger(__name__)

FeedListener = Callable[[Tuple[SlotException, ...]], None]


class ExceptionFeed:
    """
    Subscribes once and exposes the latest snapshot.

    Listeners added with ``add_listener`` get every new snapshot; the
    returned callable removes them again.
    """

    def __init__(self, store: SlotStoreProtocol, resolver: AvailabilityResolver):
        self._resolver = resolver
        self._lock = threading.Lock()
        self._snapshot: Tuple[SlotException, ...] = ()
        self._listeners: List[FeedListener] = []
        self._subscription: Subscription | None = store.subscribe(self._on_snapshot)

    def _on_snapshot(self, records: List[SlotException]) -> None:
        snapshot = tuple(records)
        with self._lock:
            self._snapshot = snapshot
            listeners = list(self._listeners)
        logger.debug("Received snapshot with %d record(s)", len(snapshot))
        for listener in listeners:
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Feed listener failed, continuing with the others")

    def snapshot(self) -> Tuple[SlotException, ...]:
        with self._lock:
            return self._snapshot

    def resolve(self, date: str) -> List[ResolvedSlot]:
        return self._resolver.resolve(date, self.snapshot())

    def add_listener(self, listener: FeedListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def remove() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return remove

    def close(self) -> None:
        """Cancel the store subscription. Safe to call more than once."""
        subscription, self._subscription = self._subscription, None
        if subscription is not None:
            subscription.cancel()
        with self._lock:
            self._listeners.clear()

    def __enter__(self) -> "ExceptionFeed":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
