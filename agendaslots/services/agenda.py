"""
Wiring of store, feed, resolver and services for one process.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..adapters.store import SlotStoreProtocol
from ..config import AppConfig
from ..domain.clock import ClockPolicy
from ..domain.models import FixedTemplate
from ..domain.resolver import AvailabilityResolver
from .booking import BookingQuery
from .feed import ExceptionFeed
from .lifecycle import SlotLifecycleManager


@dataclass
class Agenda:
    """Everything the admin and customer flows need, sharing one feed."""
    clock: ClockPolicy
    resolver: AvailabilityResolver
    feed: ExceptionFeed
    manager: SlotLifecycleManager
    booking: BookingQuery

    @classmethod
    def build(
        cls,
        store: SlotStoreProtocol,
        template: FixedTemplate,
        clock: ClockPolicy,
    ) -> "Agenda":
        resolver = AvailabilityResolver(template)
        feed = ExceptionFeed(store, resolver)
        return cls(
            clock=clock,
            resolver=resolver,
            feed=feed,
            manager=SlotLifecycleManager(store, feed, resolver, clock),
            booking=BookingQuery(feed, clock),
        )

    @classmethod
    def from_config(cls, config: AppConfig) -> "Agenda":
        return cls.build(config.build_store(), config.build_template(), config.build_clock())

    def close(self) -> None:
        self.feed.close()

    def __enter__(self) -> "Agenda":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
