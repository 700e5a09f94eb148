from __future__ import annotations

from datetime import date, datetime

import pytest

from reliefmatch.core import AvailabilityChecker, AvailabilityConfig
from reliefmatch.schemas import AvailabilitySlot

# 2025-03-12 is a Wednesday (day_of_week == 3, counting from Sunday).
MISSION_DATE = datetime(2025, 3, 12, 20, 0)


def weekly(start: str, end: str, *, day: int = 3, active: bool = True) -> AvailabilitySlot:
    return AvailabilitySlot(day_of_week=day, start_time=start, end_time=end, is_active=active)


def dated(on: date, start: str = "08:00", end: str = "16:00", *, active: bool = True) -> AvailabilitySlot:
    return AvailabilitySlot(specific_date=on, start_time=start, end_time=end, is_active=active)


def test_no_declared_slots_means_available():
    checker = AvailabilityChecker()

    assert checker.is_available([], MISSION_DATE, True) is True
    assert checker.is_available(None, MISSION_DATE, False) is True


def test_night_slot_covers_night_shift():
    checker = AvailabilityChecker()

    assert checker.is_available([weekly("22:00", "06:00")], MISSION_DATE, True) is True


def test_day_slot_covers_day_shift_only():
    checker = AvailabilityChecker()
    slots = [weekly("09:00", "17:00")]

    assert checker.is_available(slots, MISSION_DATE, True) is False
    assert checker.is_available(slots, MISSION_DATE, False) is True


@pytest.mark.parametrize(
    ("start", "expected"),
    [("18:00", True), ("17:59", False), ("00:30", True), ("05:00", True), ("06:00", False)],
)
def test_night_window_bounds(start: str, expected: bool):
    checker = AvailabilityChecker()

    assert checker.is_available([weekly(start, "23:00")], MISSION_DATE, True) is expected


def test_other_weekday_without_dated_slot_is_unavailable():
    checker = AvailabilityChecker()

    assert checker.is_available([weekly("08:00", "16:00", day=1)], MISSION_DATE, False) is False


def test_dated_slot_used_when_no_weekday_slot():
    checker = AvailabilityChecker()
    slots = [weekly("08:00", "16:00", day=1), dated(date(2025, 3, 12))]

    assert checker.is_available(slots, MISSION_DATE, False) is True
    assert checker.is_available(slots, MISSION_DATE, True) is True
    assert checker.is_available([dated(date(2025, 3, 13))], MISSION_DATE, False) is False


def test_inactive_slots_are_ignored():
    checker = AvailabilityChecker()
    slots = [weekly("22:00", "06:00", active=False), dated(date(2025, 3, 12), active=False)]

    assert checker.is_available(slots, MISSION_DATE, True) is False


def test_accepts_raw_slots_and_string_dates():
    checker = AvailabilityChecker()
    slots = [{"day_of_week": 3, "start_time": "21:00", "end_time": "07:00"}]

    assert checker.is_available(slots, "2025-03-12T21:00:00", True) is True


def test_malformed_slot_raises_value_error():
    checker = AvailabilityChecker()

    with pytest.raises(ValueError):
        checker.is_available(
            [{"day_of_week": 3, "start_time": "soir", "end_time": "06:00"}],
            MISSION_DATE,
            True,
        )


def test_custom_night_window():
    checker = AvailabilityChecker(config=AvailabilityConfig(night_start_hour=20, night_end_hour=5))

    assert checker.is_available([weekly("19:00", "23:00")], MISSION_DATE, True) is False
    assert checker.is_available([weekly("20:00", "23:00")], MISSION_DATE, True) is True
