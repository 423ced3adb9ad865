"""
Tests for the ExceptionFeed read model.
"""

from agendaslots.adapters.memory_store import InMemorySlotStore
from agendaslots.domain.models import SlotException
from agendaslots.domain.resolver import AvailabilityResolver
from agendaslots.services.feed import ExceptionFeed

DAY = "2025-06-10"


class TestExceptionFeed:
    """Tests for ExceptionFeed."""

    def test_snapshot_is_replaced_not_merged(self, template):
        """Test each notification becomes the whole new state."""
        store = InMemorySlotStore()
        feed = ExceptionFeed(store, AvailabilityResolver(template))

        record_id = store.create(SlotException(date=DAY, time="09:00"))
        assert [record.id for record in feed.snapshot()] == [record_id]

        store.delete(record_id)
        assert feed.snapshot() == ()

    def test_listeners_receive_snapshots(self, template):
        """Test views registered on the feed see every change."""
        store = InMemorySlotStore()
        feed = ExceptionFeed(store, AvailabilityResolver(template))
        seen = []
        remove = feed.add_listener(lambda snapshot: seen.append(len(snapshot)))

        store.create(SlotException(date=DAY, time="09:00"))
        remove()
        store.create(SlotException(date=DAY, time="10:00"))

        assert seen == [1]

    def test_resolve_uses_latest_snapshot(self, template):
        """Test resolution reflects the most recent notification."""
        store = InMemorySlotStore()
        feed = ExceptionFeed(store, AvailabilityResolver(template))

        store.create(SlotException(date=DAY, time="07:00", removed=True))

        assert [slot.time for slot in feed.resolve(DAY)] == ["08:30", "14:00"]

    def test_close_is_idempotent(self, template):
        """Test closing twice is safe and stops updates."""
        store = InMemorySlotStore()
        with ExceptionFeed(store, AvailabilityResolver(template)) as feed:
            pass
        feed.close()

        store.create(SlotException(date=DAY, time="09:00"))

        assert feed.snapshot() == ()

    def test_failing_listener_does_not_stop_others(self, template, caplog):
        """Test a crashing listener is logged and later listeners still run."""
        store = InMemorySlotStore()
        feed = ExceptionFeed(store, AvailabilityResolver(template))
        seen = []

        def crashing(snapshot):
            raise RuntimeError("render failed")

        feed.add_listener(crashing)
        feed.add_listener(lambda snapshot: seen.append(len(snapshot)))

        store.create(SlotException(date=DAY, time="09:00"))

        assert seen == [1]
        assert len(feed.snapshot()) == 1
        assert "Feed listener failed" in caplog.text
