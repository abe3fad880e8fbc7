"""Test availability parsing and time-of-day filtering."""
import json
import pytest

from portal.availability import TimeFilter, TimeOfDay, parse_availability


class TestParseAvailability:

    def test_flattens_weekdays_in_order(self):
        raw = json.dumps({
            "wednesday": ["14:00"],
            "monday": ["10:30", "09:00"],
        })

        slots = parse_availability(raw)

        assert slots == [
            {"day": "monday", "time": "09:00"},
            {"day": "monday", "time": "10:30"},
            {"day": "wednesday", "time": "14:00"},
        ]

    def test_sorts_unpadded_times_numerically(self):
        raw = json.dumps({"friday": ["10:00", "9:30"]})

        assert [s["time"] for s in parse_availability(raw)] == ["9:30", "10:00"]

    def test_missing_availability_is_empty(self):
        assert parse_availability(None) == []
        assert parse_availability("") == []

    def test_malformed_availability_is_empty(self):
        assert parse_availability("{not json") == []
        assert parse_availability(json.dumps(["09:00"])) == []

    def test_ignores_invalid_entries(self):
        raw = json.dumps({"monday": ["09:00", "noon", 5], "funday": ["10:00"], "tuesday": "09:00"})

        assert parse_availability(raw) == [{"day": "monday", "time": "09:00"}]


class TestTimeFilter:
    """Test filtering slots by weekday and time of day."""

    @pytest.fixture
    def sample_slots(self):
        return [
            {"day": "monday", "time": "09:00"},
            {"day": "monday", "time": "10:30"},
            {"day": "monday", "time": "14:00"},
            {"day": "tuesday", "time": "11:59"},
            {"day": "tuesday", "time": "12:00"},
        ]

    def test_filter_morning_slots(self, sample_slots):
        result = TimeFilter().filter_by_time_of_day(sample_slots, TimeOfDay.MORNING)

        assert [s["time"] for s in result] == ["09:00", "10:30", "11:59"]

    def test_filter_afternoon_slots(self, sample_slots):
        """Noon counts as afternoon."""
        result = TimeFilter().filter_by_time_of_day(sample_slots, TimeOfDay.AFTERNOON)

        assert [s["time"] for s in result] == ["14:00", "12:00"]

    def test_any_returns_everything(self, sample_slots):
        assert TimeFilter().filter_by_time_of_day(sample_slots, TimeOfDay.ANY) == sample_slots

    def test_filter_by_day_is_case_insensitive(self, sample_slots):
        result = TimeFilter().filter_by_day(sample_slots, "Tuesday")

        assert len(result) == 2
        assert all(s["day"] == "tuesday" for s in result)

    def test_no_day_keeps_all(self, sample_slots):
        assert TimeFilter().filter_by_day(sample_slots, None) == sample_slots
