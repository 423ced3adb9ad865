"""
Tests for domain models.
"""

import pytest

from agendaslots.domain.exceptions import InvalidDate, InvalidTime
from agendaslots.domain.models import (
    ExtraSlot,
    FixedSlot,
    FixedTemplate,
    SlotException,
    SlotOrigin,
    validate_time,
)


class TestValidateTime:
    """Tests for the HH:MM pattern."""

    @pytest.mark.parametrize("value", ["00:00", "07:05", "19:59", "23:59"])
    def test_accepts_zero_padded_24h(self, value):
        """Test valid times pass through unchanged."""
        assert validate_time(value) == value

    @pytest.mark.parametrize("value", ["24:00", "7:00", "07:60", "0700", "", None, 700])
    def test_rejects_everything_else(self, value):
        """Test invalid times raise InvalidTime."""
        with pytest.raises(InvalidTime):
            validate_time(value)


class TestFixedTemplate:
    """Tests for FixedTemplate."""

    def test_keeps_order_and_drops_duplicates(self):
        """Test configured order survives while duplicates collapse."""
        template = FixedTemplate.of(["14:00", "07:00", "14:00", "08:30"])

        assert template.times == ("14:00", "07:00", "08:30")
        assert template.sorted_times() == ["07:00", "08:30", "14:00"]
        assert len(template) == 3

    def test_membership(self):
        """Test `in` checks template times."""
        template = FixedTemplate.of(["07:00"])

        assert "07:00" in template
        assert "09:00" not in template

    def test_invalid_time_raises_error(self):
        """Test a malformed template time is rejected."""
        with pytest.raises(InvalidTime):
            FixedTemplate.of(["07:00", "25:00"])


class TestSlotException:
    """Tests for SlotException."""

    def test_from_payload_defaults_removed_to_false(self):
        """Test a payload without `removed` is an active record."""
        record = SlotException.from_payload({"id": "a1", "date": "2025-06-10", "time": "09:00"})

        assert record.id == "a1"
        assert record.removed is False
        assert record.key == ("2025-06-10", "09:00")

    @pytest.mark.parametrize(
        "payload",
        [
            {"id": 5, "date": "2025-06-10", "time": "09:00"},
            {"id": "a1", "date": "2025-06-10", "time": "09:00", "removed": "false"},
            {"id": "a1", "date": "2025-06-10", "time": "09:00", "removed": 1},
        ],
    )
    def test_from_payload_rejects_wrong_field_types(self, payload):
        """Test ids must be strings and `removed` a real boolean."""
        with pytest.raises(TypeError):
            SlotException.from_payload(payload)

    def test_to_payload_omits_false_removed(self):
        """Test the wire format only carries `removed` when set."""
        active = SlotException(id="a1", date="2025-06-10", time="09:00")
        marker = SlotException(id="m1", date="2025-06-10", time="08:30", removed=True)

        assert active.to_payload() == {"id": "a1", "date": "2025-06-10", "time": "09:00"}
        assert marker.to_payload()["removed"] is True

    def test_invalid_date_raises_error(self):
        """Test dates must be YYYY-MM-DD."""
        with pytest.raises(InvalidDate):
            SlotException(date="10/06/2025", time="09:00")

    def test_with_removed_returns_copy(self):
        """Test flipping `removed` leaves the original untouched."""
        record = SlotException(id="a1", date="2025-06-10", time="09:00")

        flipped = record.with_removed(True)

        assert flipped.removed is True
        assert record.removed is False
        assert flipped.id == "a1"


class TestResolvedSlot:
    """Tests for the fixed/extra slot variants."""

    def test_origin_tags(self):
        """Test each variant reports its origin."""
        assert FixedSlot(time="07:00").origin is SlotOrigin.FIXED
        assert ExtraSlot(time="09:00", source_id="a1").origin is SlotOrigin.EXTRA
        assert SlotOrigin.EXTRA == "extra"

    def test_only_extra_has_source_id(self):
        """Test fixed slots carry no record id."""
        assert not hasattr(FixedSlot(time="07:00"), "source_id")
        assert ExtraSlot(time="09:00", source_id="a1").source_id == "a1"
