"""
Tests for the customer-facing BookingQuery.
"""

from agendaslots.domain.models import SlotException
from agendaslots.services.agenda import Agenda

DAY = "2025-06-10"


def test_available_times_follow_resolution(agenda):
    """Customer view should list the resolved times only."""
    agenda.manager.add_extra(DAY, "09:00")
    agenda.manager.suppress_fixed(DAY, "14:00")

    assert agenda.booking.available_times(DAY) == ["07:00", "08:30", "09:00"]


def test_available_times_for_untouched_date(agenda):
    """Dates without exceptions should offer the whole template."""
    assert agenda.booking.available_times("2025-06-20") == ["07:00", "08:30", "14:00"]


def test_past_dates_have_no_times(store, template, clock):
    """Yesterday cannot be booked, even with stale records around."""
    store.create(SlotException(date="2025-05-31", time="09:00"))

    with Agenda.build(store, template, clock) as agenda:
        assert agenda.booking.available_times("2025-05-31") == []
        assert agenda.booking.available_times("2025-06-01") == ["07:00", "08:30", "14:00"]


def test_admin_changes_reach_customer_without_refresh(agenda):
    """A write by the admin should be visible on the next customer read."""
    before = agenda.booking.available_times(DAY)

    agenda.manager.add_extra(DAY, "16:45")

    assert "16:45" not in before
    assert agenda.booking.available_times(DAY)[-1] == "16:45"
