"""
Adapters layer - Persistence backends for slot exceptions.
"""

from .json_store import JsonFileSlotStore
from .memory_store import InMemorySlotStore
from .store import SlotStoreProtocol, Subscription

__all__ = ["InMemorySlotStore", "JsonFileSlotStore", "SlotStoreProtocol", "Subscription"]
