"""
Domain layer - Pure business logic without external dependencies.
"""

from .clock import ClockPolicy
from .models import (
    ExtraSlot,
    FixedSlot,
    FixedTemplate,
    ResolvedSlot,
    SlotException,
    SlotOrigin,
)
from .resolver import AvailabilityResolver

__all__ = [
    "AvailabilityResolver",
    "ClockPolicy",
    "ExtraSlot",
    "FixedSlot",
    "FixedTemplate",
    "ResolvedSlot",
    "SlotException",
    "SlotOrigin",
]
