"""Doctor availability parsing and time-of-day filtering.

A doctor's availability is stored as a JSON string mapping weekday names
to lists of "HH:MM" start times. It is informational only: booking never
consults it.
"""
import json
import re
from enum import Enum
from typing import Dict, List, Optional

WEEKDAYS = [
    "monday", "tuesday", "wednesday", "thursday",
    "friday", "saturday", "sunday",
]

TIME_PATTERN = re.compile(r"^\d{1,2}:\d{2}$")


class TimeOfDay(str, Enum):
    """Time of day preferences."""
    MORNING = "morning"  # Before 12:00
    AFTERNOON = "afternoon"  # 12:00 and after
    ANY = "any"


def parse_availability(raw: Optional[str]) -> List[Dict[str, str]]:
    """
    Flatten a stored availability string into slots.

    Args:
        raw: JSON object of weekday -> list of "HH:MM" strings

    Returns:
        Slots as {"day", "time"} dicts, ordered by weekday then time.
        Empty when raw is missing or not a weekday mapping.
    """
    if not raw:
        return []

    try:
        schedule = json.loads(raw)
    except ValueError:
        return []

    if not isinstance(schedule, dict):
        return []

    slots = []
    for day in WEEKDAYS:
        times = schedule.get(day)
        if not isinstance(times, list):
            continue
        valid = [t for t in times if isinstance(t, str) and TIME_PATTERN.match(t)]
        for time in sorted(valid, key=lambda t: tuple(int(part) for part in t.split(":"))):
            slots.append({"day": day, "time": time})

    return slots


class TimeFilter:
    """Filter availability slots by weekday and time of day."""

    MORNING_CUTOFF = 12  # 12:00 (noon)

    def filter_by_day(
        self,
        slots: List[Dict[str, str]],
        day: Optional[str]
    ) -> List[Dict[str, str]]:
        if not day:
            return slots
        day = day.lower()
        return [slot for slot in slots if slot["day"] == day]

    def filter_by_time_of_day(
        self,
        slots: List[Dict[str, str]],
        preference: TimeOfDay
    ) -> List[Dict[str, str]]:
        """
        Filter slots by time of day preference.

        Args:
            slots: Available slots
            preference: Morning, afternoon, or any

        Returns:
            Filtered slots
        """
        if preference == TimeOfDay.ANY:
            return slots

        filtered = []
        for slot in slots:
            hour = int(slot["time"].split(":")[0])

            if preference == TimeOfDay.MORNING and hour < self.MORNING_CUTOFF:
                filtered.append(slot)
            elif preference == TimeOfDay.AFTERNOON and hour >= self.MORNING_CUTOFF:
                filtered.append(slot)

        return filtered
