"""
Contract between the slot engine and the document store holding exceptions.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, List, Protocol

from ..domain.models import SlotException

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[List[SlotException]], None]


class Subscription:
    """
    Handle returned by ``subscribe``.

    ``cancel`` stops delivery and runs the store's teardown exactly once;
    calling it again, or from inside the callback, is harmless.
    """

    def __init__(self, callback: SnapshotCallback, on_cancel: Callable[["Subscription"], None] | None = None):
        self._callback = callback
        self._on_cancel = on_cancel
        self._lock = threading.Lock()
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def deliver(self, snapshot: List[SlotException]) -> None:
        if not self._active:
            return
        self._callback(snapshot)

    def cancel(self) -> None:
        with self._lock:
            if not self._active:
                return
            self._active = False
            on_cancel, self._on_cancel = self._on_cancel, None
        if on_cancel is not None:
            on_cancel(self)
        logger.debug("Subscription cancelled")


class SlotStoreProtocol(Protocol):
    """Operations the engine needs from persistence."""

    def subscribe(self, callback: SnapshotCallback) -> Subscription:
        """Deliver the full record set now and after every change."""

    def create(self, record: SlotException) -> str:
        """Insert ``record`` and return its new id. Raises WriteError."""

    def update(self, record_id: str, *, removed: bool) -> None:
        """Flip ``removed`` on one record. Raises NotFound or WriteError."""

    def delete(self, record_id: str) -> None:
        """Remove one record for good. Raises NotFound or WriteError."""
