"""
Shared fixtures: a pinned clock, the default template and in-memory stores.
"""

from typing import Dict, List, Tuple

import pendulum
import pytest

from agendaslots.adapters.memory_store import InMemorySlotStore
from agendaslots.domain.clock import ClockPolicy
from agendaslots.domain.models import FixedTemplate, SlotException
from agendaslots.services.agenda import Agenda

TZ = "America/Sao_Paulo"


class RecordingStore(InMemorySlotStore):
    """In-memory store that logs mutations and can be told to fail."""

    def __init__(self, records=()):
        super().__init__(records)
        self.calls: List[Tuple[str, object]] = []
        self.failures: Dict[Tuple[str, str], Exception] = {}

    def fail(self, operation: str, record_id: str, error: Exception) -> None:
        self.failures[(operation, record_id)] = error

    def create(self, record: SlotException) -> str:
        self.calls.append(("create", record))
        error = self.failures.get(("create", "*"))
        if error is not None:
            raise error
        return super().create(record)

    def update(self, record_id: str, *, removed: bool) -> None:
        self.calls.append(("update", record_id))
        error = self.failures.get(("update", record_id))
        if error is not None:
            raise error
        super().update(record_id, removed=removed)

    def delete(self, record_id: str) -> None:
        self.calls.append(("delete", record_id))
        error = self.failures.get(("delete", record_id))
        if error is not None:
            raise error
        super().delete(record_id)


@pytest.fixture
def clock() -> ClockPolicy:
    """Clock pinned to 2025-06-01 12:00 in São Paulo."""
    return ClockPolicy(
        timezone=TZ,
        now=lambda: pendulum.datetime(2025, 6, 1, 12, 0, tz=TZ),
    )


@pytest.fixture
def template() -> FixedTemplate:
    return FixedTemplate.of(["07:00", "08:30", "14:00"])


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def agenda(store, template, clock):
    with Agenda.build(store, template, clock) as opened:
        yield opened
