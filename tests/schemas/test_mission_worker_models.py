from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from pydantic import ValidationError

from reliefmatch.schemas import (
    AvailabilitySlot,
    Mission,
    MissionStatus,
    UrgencyLevel,
    WorkerProfile,
    WorkerStatus,
    parse_time_of_day,
)


def test_mission_defaults():
    start = datetime(2025, 3, 12, 20, 0)
    mission = Mission(mission_id="M-001", start_date=start)

    assert mission.required_skills == []
    assert mission.required_diplomas == []
    assert mission.radius_km is None
    assert mission.is_night_shift is False
    assert mission.status is MissionStatus.OPEN
    assert mission.urgency_level is UrgencyLevel.HIGH
    assert mission.end_date == start + timedelta(hours=8)
    assert mission.location.latitude is None


def test_mission_keeps_explicit_end_date():
    start = datetime(2025, 3, 12, 20, 0)
    end = datetime(2025, 3, 13, 8, 0)

    mission = Mission(mission_id="M-002", start_date=start, end_date=end)

    assert mission.end_date == end


def test_mission_rejects_non_positive_radius():
    with pytest.raises(ValidationError):
        Mission(mission_id="M-003", start_date="2025-03-12T20:00:00", radius_km=0)


def test_worker_profile_defaults():
    worker = WorkerProfile(worker_id="W-001")

    assert worker.specialties == []
    assert worker.diplomas == []
    assert worker.availability_slots == []
    assert worker.average_rating == 0.0
    assert worker.completed_jobs == 0
    assert worker.status is WorkerStatus.VERIFIED
    assert worker.is_verified is True


def test_worker_profile_parses_nested_records():
    worker = WorkerProfile(
        worker_id="W-002",
        diplomas=[{"name": "DE Infirmier", "issuer": "IFSI Lyon", "obtained_on": "2019-07-01"}],
        availability_slots=[{"specific_date": "2025-03-12", "start_time": "8:00", "end_time": "16:30"}],
    )

    assert worker.diplomas[0].name == "DE Infirmier"
    slot = worker.availability_slots[0]
    assert slot.is_recurring is False
    assert slot.start_hour == 8
    assert slot.is_active is True


def test_worker_profile_accepts_bare_diploma_names():
    worker = WorkerProfile(worker_id="W-004", diplomas=["DE Aide-Soignant", {"name": "AFGSU 2"}])

    assert [diploma.name for diploma in worker.diplomas] == ["DE Aide-Soignant", "AFGSU 2"]
    assert worker.diplomas[0].issuer is None


@pytest.mark.parametrize("rating", [-0.5, 5.5])
def test_worker_profile_rejects_out_of_range_rating(rating: float):
    with pytest.raises(ValidationError):
        WorkerProfile(worker_id="W-003", average_rating=rating)


@pytest.mark.parametrize("value", ["24:00", "12:60", "noon", "", "1200"])
def test_availability_slot_rejects_malformed_times(value: str):
    with pytest.raises(ValidationError):
        AvailabilitySlot(day_of_week=1, start_time=value, end_time="18:00")


def test_availability_slot_rejects_bad_weekday():
    with pytest.raises(ValidationError):
        AvailabilitySlot(day_of_week=7, start_time="08:00", end_time="18:00")


def test_parse_time_of_day():
    assert parse_time_of_day("22:15") == (22, 15)
    assert parse_time_of_day(" 06:00 ") == (6, 0)
