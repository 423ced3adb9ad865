"""
Domain models for fixed template times, stored exceptions and resolved slots.
"""

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Tuple, Union

from .exceptions import InvalidDate, InvalidTime

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def validate_time(value: Any) -> str:
    """Return ``value`` if it is a zero-padded 24h ``HH:MM`` string."""
    if not isinstance(value, str) or not TIME_PATTERN.match(value):
        raise InvalidTime(f"Invalid time {value!r}, expected HH:MM (24h)")
    return value


def is_valid_time(value: Any) -> bool:
    return isinstance(value, str) and TIME_PATTERN.match(value) is not None


class SlotOrigin(str, Enum):
    """Where an offered time comes from."""
    FIXED = "fixed"
    EXTRA = "extra"


@dataclass(frozen=True)
class FixedTemplate:
    """
    Times of day offered on every date by default.

    Configuration value only; it has no stored representation.
    Entries keep their configured order, duplicates collapse.
    """
    times: Tuple[str, ...] = ()

    def __post_init__(self):
        seen: set[str] = set()
        ordered: List[str] = []
        for value in self.times:
            validate_time(value)
            if value not in seen:
                seen.add(value)
                ordered.append(value)
        object.__setattr__(self, "times", tuple(ordered))

    @classmethod
    def of(cls, times: Iterable[str]) -> "FixedTemplate":
        return cls(times=tuple(times))

    def __contains__(self, value: object) -> bool:
        return value in self.times

    def __iter__(self):
        return iter(self.times)

    def __len__(self) -> int:
        return len(self.times)

    def sorted_times(self) -> List[str]:
        """Return the template in lexicographic (chronological) order."""
        return sorted(self.times)


@dataclass(frozen=True)
class SlotException:
    """
    A stored deviation from the template for one (date, time) pair.

    ``removed=True`` suppresses the pair; ``id`` is assigned by the store.
    """
    date: str
    time: str
    removed: bool = False
    id: str | None = None

    def __post_init__(self):
        if not isinstance(self.date, str) or not DATE_PATTERN.match(self.date):
            raise InvalidDate(f"Invalid date {self.date!r}, expected YYYY-MM-DD")
        validate_time(self.time)

    @property
    def key(self) -> Tuple[str, str]:
        return (self.date, self.time)

    def with_id(self, record_id: str) -> "SlotException":
        return replace(self, id=record_id)

    def with_removed(self, removed: bool) -> "SlotException":
        return replace(self, removed=removed)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "SlotException":
        """
        Build a record from the store wire format.

        ``removed`` absent is read as ``False``. A non-string ``id`` or a
        non-boolean ``removed`` raises TypeError.
        """
        record_id = payload.get("id")
        if record_id is not None and not isinstance(record_id, str):
            raise TypeError(f"Record id must be a string, got {record_id!r}")
        removed = payload.get("removed", False)
        if not isinstance(removed, bool):
            raise TypeError(f"removed must be true or false, got {removed!r}")
        return cls(
            id=record_id,
            date=payload["date"],
            time=payload["time"],
            removed=removed,
        )

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"date": self.date, "time": self.time}
        if self.id is not None:
            payload["id"] = self.id
        if self.removed:
            payload["removed"] = True
        return payload


@dataclass(frozen=True)
class FixedSlot:
    """An offered template time. Never deletable, only suppressible."""
    time: str
    origin: SlotOrigin = field(default=SlotOrigin.FIXED, init=False)


@dataclass(frozen=True)
class ExtraSlot:
    """An offered ad-hoc time backed by its own stored record."""
    time: str
    source_id: str
    origin: SlotOrigin = field(default=SlotOrigin.EXTRA, init=False)


ResolvedSlot = Union[FixedSlot, ExtraSlot]
