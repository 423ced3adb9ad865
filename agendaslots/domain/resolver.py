"""
Core availability logic: merge the fixed template with stored exceptions.

Pure domain logic, no I/O. The same inputs always produce the same list in
the same order, which keeps redundant store notifications from reshuffling
what admins and customers see.
"""

from typing import Dict, Iterable, List, Sequence, Set

from .models import ExtraSlot, FixedSlot, FixedTemplate, ResolvedSlot, SlotException


class AvailabilityResolver:
    """
    Computes the offered times for one date.

    Algorithm:
    1. Keep the exceptions dated on the query date
    2. Split them into active extras and removed times
    3. Candidates = template times + active extra times
    4. Drop removed times, tag each survivor fixed or extra
    5. Sort by time (zero-padded HH:MM sorts chronologically)
    """

    def __init__(self, template: FixedTemplate):
        self.template = template

    def resolve(self, date: str, exceptions: Iterable[SlotException]) -> List[ResolvedSlot]:
        """
        Resolve the offered slots for ``date``.

        Args:
            date: Civil date as ``YYYY-MM-DD``
            exceptions: Current full snapshot of stored exceptions (any order)

        Returns:
            Slots ordered by time, one entry per time
        """
        # Step 1: records for this date only
        todays = [record for record in exceptions if record.date == date]

        # Step 2: partition
        extras = self._active_extras(todays)
        removed_times: Set[str] = {record.time for record in todays if record.removed}

        # Step 3: candidate times
        candidates = set(self.template.times) | set(extras)

        # Step 4 + 5: subtract removals, tag, sort
        resolved: List[ResolvedSlot] = []
        for time in sorted(candidates - removed_times):
            if time in self.template:
                resolved.append(FixedSlot(time=time))
            else:
                resolved.append(ExtraSlot(time=time, source_id=extras[time]))

        return resolved

    def offered_times(self, date: str, exceptions: Iterable[SlotException]) -> List[str]:
        return [slot.time for slot in self.resolve(date, exceptions)]

    def is_offered(self, date: str, time: str, exceptions: Iterable[SlotException]) -> bool:
        return time in self.offered_times(date, exceptions)

    def find_record(
        self,
        date: str,
        time: str,
        exceptions: Iterable[SlotException],
        *,
        removed: bool | None = None,
    ) -> SlotException | None:
        """
        Find the stored record for a (date, time) pair.

        ``removed`` narrows the search to markers (True) or active records
        (False). Ties go to the lowest id so repeated calls agree.
        """
        matches = [
            record for record in exceptions
            if record.date == date
            and record.time == time
            and (removed is None or record.removed == removed)
        ]
        if not matches:
            return None
        return min(matches, key=lambda record: record.id or "")

    def _active_extras(self, records: Sequence[SlotException]) -> Dict[str, str]:
        """
        Map extra time -> id of the record backing it.

        Duplicated active records for one time should not exist; if they do,
        the lowest id is used.
        """
        extras: Dict[str, str] = {}
        for record in records:
            if record.removed or record.time in self.template or record.id is None:
                continue
            current = extras.get(record.time)
            if current is None or record.id < current:
                extras[record.time] = record.id
        return extras
