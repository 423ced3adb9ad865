"""
Civil-date policy for the business time zone.

All "today" decisions and every stored date string are derived here, so
callers in other zones still agree on which day it is at the shop.
"""

from datetime import date, datetime
from typing import Callable

import pendulum
from pendulum import Date, DateTime

from .exceptions import InvalidDate
from .models import DATE_PATTERN

DEFAULT_TIMEZONE = "America/Sao_Paulo"


class ClockPolicy:
    """
    Resolves today and compares dates in one fixed civil time zone.

    ``now`` can be injected to pin the wall clock; it must return an aware
    datetime (any zone).
    """

    def __init__(
        self,
        timezone: str = DEFAULT_TIMEZONE,
        now: Callable[[], DateTime] | None = None,
        locale: str = "pt_br",
    ):
        self.timezone = timezone
        self.locale = locale
        self._tz = pendulum.timezone(timezone)
        self._now = now or (lambda: pendulum.now(self._tz))

    def now(self) -> DateTime:
        return pendulum.instance(self._now()).in_timezone(self._tz)

    def today(self) -> Date:
        """Return the current civil date, time of day dropped."""
        return self.now().date()

    def is_past(self, value: date | str) -> bool:
        """True iff ``value`` is strictly before today (date-only comparison)."""
        return self.parse_date(value) < self.today()

    def parse_date(self, value: date | datetime | str) -> Date:
        """
        Normalize a date-like value to a civil date in the business zone.

        Aware datetimes are converted into the zone before truncation; naive
        ones are read as wall-clock time in the zone.
        """
        if isinstance(value, datetime):
            if value.tzinfo is None:
                instant = pendulum.instance(value, tz=self._tz)
            else:
                instant = pendulum.instance(value).in_timezone(self._tz)
            return instant.date()

        if isinstance(value, date):
            return Date(value.year, value.month, value.day)

        if isinstance(value, str) and DATE_PATTERN.match(value):
            try:
                return pendulum.from_format(value, "YYYY-MM-DD", tz=self._tz).date()
            except ValueError as exc:
                raise InvalidDate(f"Invalid date {value!r}: {exc}") from exc

        raise InvalidDate(f"Invalid date {value!r}, expected YYYY-MM-DD")

    def date_string(self, value: date | datetime | str) -> str:
        """Return the stored ``YYYY-MM-DD`` form of ``value``."""
        return self.parse_date(value).isoformat()

    def today_string(self) -> str:
        return self.today().isoformat()

    def format_display(self, value: date | str) -> str:
        """
        Friendly label for a date, e.g. ``terça-feira, 10 de junho``.
        """
        day = self.parse_date(value)
        return day.format("dddd, D [de] MMMM", locale=self.locale)
