"""
Admin mutations on the agenda.

The manager is the only writer of slot exceptions. Every operation checks
the request against the latest snapshot and the clock before it touches the
store, so a rejected request never leaves partial state behind. It holds no
state of its own; the store decides record identity.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List

from ..adapters.store import SlotStoreProtocol
from ..domain.clock import ClockPolicy
from ..domain.exceptions import (
    AlreadyOffered,
    NotExtraSlot,
    NotFixedTime,
    NotFound,
    PastDate,
    WriteError,
)
from ..domain.models import ExtraSlot, FixedSlot, ResolvedSlot, SlotException, validate_time
from ..domain.resolver import AvailabilityResolver
from .feed import ExceptionFeed

logger = logging.getLogger(__name__)


@dataclass
class PurgeReport:
    """Outcome of one expiry sweep."""
    deleted: List[str] = field(default_factory=list)
    already_gone: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.deleted) + len(self.already_gone) + len(self.failed)


class SlotLifecycleManager:
    """
    Adds, suppresses, restores and deletes slot exceptions.

    Duplicate submissions are absorbed: re-adding an offered time is
    rejected before any write, and deleting a vanished record succeeds.
    """

    def __init__(
        self,
        store: SlotStoreProtocol,
        feed: ExceptionFeed,
        resolver: AvailabilityResolver,
        clock: ClockPolicy,
    ) -> None:
        self._store = store
        self._feed = feed
        self._resolver = resolver
        self._clock = clock

    @property
    def template(self):
        return self._resolver.template

    def add_extra(self, day: date | str, time: str) -> str:
        """
        Offer ``time`` on ``day``.

        A removal marker for the same pair is reactivated instead of
        creating a second record.

        Returns:
            Id of the record now backing the slot

        Raises:
            InvalidTime, InvalidDate, PastDate, AlreadyOffered, WriteError
        """
        validate_time(time)
        date_str = self._writable_date(day)
        snapshot = self._feed.snapshot()

        if self._resolver.is_offered(date_str, time, snapshot):
            raise AlreadyOffered(f"{time} is already offered on {date_str}")

        markers = self._records_for(date_str, time, snapshot, removed=True)
        active = self._resolver.find_record(date_str, time, snapshot, removed=False)

        if markers and active is None:
            marker, stale = markers[0], markers[1:]
            try:
                self._store.update(marker.id, removed=False)
            except NotFound:
                logger.info("Marker %s vanished before reactivation, creating a new record", marker.id)
            else:
                logger.info("Reactivated %s %s (%s)", date_str, time, marker.id)
                self._delete_quietly(record.id for record in stale)
                return marker.id
            active_id = self._store.create(SlotException(date=date_str, time=time))
            self._delete_quietly(record.id for record in stale)
            return active_id

        if markers and active is not None:
            # An active record is hidden by stray markers; drop the markers.
            self._delete_quietly(record.id for record in markers)
            logger.info("Restored %s %s (%s)", date_str, time, active.id)
            return active.id

        record_id = self._store.create(SlotException(date=date_str, time=time))
        logger.info("Added %s %s (%s)", date_str, time, record_id)
        return record_id

    def suppress_fixed(self, day: date | str, time: str) -> str:
        """
        Stop offering a template time on one date.

        Returns:
            Id of the removal marker

        Raises:
            InvalidTime, InvalidDate, PastDate, NotFixedTime, WriteError
        """
        validate_time(time)
        if time not in self.template:
            raise NotFixedTime(f"{time} is not a fixed template time")
        date_str = self._writable_date(day)
        snapshot = self._feed.snapshot()

        marker = self._resolver.find_record(date_str, time, snapshot, removed=True)
        if marker is not None:
            logger.info("%s %s already suppressed (%s)", date_str, time, marker.id)
            return marker.id

        active = self._resolver.find_record(date_str, time, snapshot, removed=False)
        if active is not None:
            try:
                self._store.update(active.id, removed=True)
            except NotFound:
                logger.info("Record %s vanished, creating a new marker", active.id)
            else:
                logger.info("Suppressed %s %s (%s)", date_str, time, active.id)
                return active.id

        record_id = self._store.create(SlotException(date=date_str, time=time, removed=True))
        logger.info("Suppressed %s %s (%s)", date_str, time, record_id)
        return record_id

    def remove_extra(self, record_id: str) -> None:
        """
        Delete an extra slot record.

        A record that is already gone counts as removed.

        Raises:
            NotExtraSlot: The record suppresses or restores a template time
            WriteError: The store could not delete it
        """
        record = next((r for r in self._feed.snapshot() if r.id == record_id), None)
        if record is not None and record.time in self.template:
            raise NotExtraSlot(f"Record {record_id} belongs to fixed time {record.time}")

        try:
            self._store.delete(record_id)
        except NotFound:
            logger.info("Record %s already removed", record_id)
            return
        logger.info("Removed extra %s", record_id)

    def withdraw(self, day: date | str, slot: ResolvedSlot) -> str | None:
        """
        Stop offering a resolved slot, choosing the operation its origin allows.

        Returns the marker id for fixed slots, None for extras.
        """
        if isinstance(slot, FixedSlot):
            return self.suppress_fixed(day, slot.time)
        if isinstance(slot, ExtraSlot):
            self.remove_extra(slot.source_id)
            return None
        raise TypeError(f"Unsupported slot type: {type(slot).__name__}")

    def purge_expired(
        self,
        exceptions: Iterable[SlotException] | None = None,
        today: date | str | None = None,
    ) -> PurgeReport:
        """
        Delete every record dated before ``today``.

        Best effort: a failed delete is logged and skipped. Resolution
        already ignores other dates, so leftovers only cost storage.
        """
        records = self._feed.snapshot() if exceptions is None else list(exceptions)
        cutoff = self._clock.today_string() if today is None else self._clock.date_string(today)
        report = PurgeReport()

        # Zero-padded ISO dates compare correctly as strings
        expired = [record for record in records if record.id and record.date < cutoff]

        for record in expired:
            try:
                self._store.delete(record.id)
            except NotFound:
                report.already_gone.append(record.id)
            except WriteError as exc:
                logger.warning("Could not purge %s (%s %s): %s", record.id, record.date, record.time, exc)
                report.failed.append(record.id)
            else:
                report.deleted.append(record.id)

        if report.total:
            logger.info(
                "Purged %d expired record(s), %d already gone, %d failed",
                len(report.deleted), len(report.already_gone), len(report.failed),
            )
        return report

    def _writable_date(self, day: date | str) -> str:
        parsed = self._clock.parse_date(day)
        if parsed < self._clock.today():
            raise PastDate(f"{parsed.isoformat()} is before {self._clock.today_string()}")
        return parsed.isoformat()

    @staticmethod
    def _records_for(
        date_str: str,
        time: str,
        records: Iterable[SlotException],
        *,
        removed: bool,
    ) -> List[SlotException]:
        matches = [
            record for record in records
            if record.key == (date_str, time) and record.removed == removed and record.id
        ]
        return sorted(matches, key=lambda record: record.id)

    def _delete_quietly(self, record_ids: Iterable[str]) -> None:
        for record_id in record_ids:
            try:
                self._store.delete(record_id)
            except NotFound:
                continue
            except WriteError as exc:
                logger.warning("Could not delete stale marker %s: %s", record_id, exc)
