"""
Process-local store for slot exceptions.

Used as the reference backend and in tests; ``JsonFileSlotStore`` builds on
it to add durability.
"""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Dict, Iterable, List

from ..domain.exceptions import NotFound
from ..domain.models import SlotException
from .store import SnapshotCallback, Subscription

logger = logging.getLogger(__name__)


class InMemorySlotStore:
    """
    Keeps records in a dict keyed by id.

    Each mutation is atomic under a re-entrant lock. Listeners receive a
    fresh list after the lock is released, so a callback may call back into
    the store or cancel its own subscription.
    """

    def __init__(self, records: Iterable[SlotException] = ()):
        self._lock = threading.RLock()
        self._records: Dict[str, SlotException] = {}
        self._subscriptions: List[Subscription] = []
        for record in records:
            record_id = record.id or self._new_id()
            self._records[record_id] = record.with_id(record_id)

    def subscribe(self, callback: SnapshotCallback) -> Subscription:
        subscription = Subscription(callback, on_cancel=self._unsubscribe)
        with self._lock:
            self._subscriptions.append(subscription)
            snapshot = self._snapshot()
        subscription.deliver(snapshot)
        return subscription

    def create(self, record: SlotException) -> str:
        record_id = self._new_id()
        with self._lock:
            candidate = dict(self._records)
            candidate[record_id] = record.with_id(record_id)
            self._commit(candidate)
        logger.debug("Created %s %s removed=%s as %s", record.date, record.time, record.removed, record_id)
        self._notify()
        return record_id

    def update(self, record_id: str, *, removed: bool) -> None:
        with self._lock:
            current = self._records.get(record_id)
            if current is None:
                raise NotFound(f"Record {record_id} not found")
            candidate = dict(self._records)
            candidate[record_id] = current.with_removed(removed)
            self._commit(candidate)
        logger.debug("Updated %s removed=%s", record_id, removed)
        self._notify()

    def delete(self, record_id: str) -> None:
        with self._lock:
            if record_id not in self._records:
                raise NotFound(f"Record {record_id} not found")
            candidate = dict(self._records)
            del candidate[record_id]
            self._commit(candidate)
        logger.debug("Deleted %s", record_id)
        self._notify()

    def records(self) -> List[SlotException]:
        with self._lock:
            return self._snapshot()

    def _commit(self, records: Dict[str, SlotException]) -> None:
        """Swap in the new record set. Subclasses persist it first."""
        self._records = records

    def _snapshot(self) -> List[SlotException]:
        return sorted(self._records.values(), key=lambda record: record.id or "")

    def _notify(self) -> None:
        with self._lock:
            snapshot = self._snapshot()
            subscriptions = list(self._subscriptions)
        for subscription in subscriptions:
            try:
                subscription.deliver(list(snapshot))
            except Exception:
                logger.exception("Slot subscriber failed, continuing with the others")

    def _unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

    @staticmethod
    def _new_id() -> str:
        return uuid.uuid4().hex
