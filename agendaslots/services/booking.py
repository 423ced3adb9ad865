"""
Customer-side availability lookup.
"""

from __future__ import annotations

from datetime import date
from typing import List

from ..domain.clock import ClockPolicy
from .feed import ExceptionFeed


class BookingQuery:
    """
    Read-only view of which times a customer may pick on a date.

    No reservation step exists yet: a time stays listed after somebody
    picks it, so two customers can be shown the same opening.

    Unlike a bare resolve, dates before today return an empty list:
    customers cannot book a day that has already passed.
    """

    def __init__(self, feed: ExceptionFeed, clock: ClockPolicy) -> None:
        self._feed = feed
        self._clock = clock

    def available_times(self, day: date | str) -> List[str]:
        """Return the bookable ``HH:MM`` times for ``day``; empty for past dates."""
        parsed = self._clock.parse_date(day)
        if parsed < self._clock.today():
            return []
        return [slot.time for slot in self._feed.resolve(parsed.isoformat())]
