"""
Service layer that orchestrates the store and domain logic.
"""

from .agenda import Agenda
from .booking import BookingQuery
from .feed import ExceptionFeed
from .lifecycle import PurgeReport, SlotLifecycleManager

__all__ = ["Agenda", "BookingQuery", "ExceptionFeed", "PurgeReport", "SlotLifecycleManager"]
