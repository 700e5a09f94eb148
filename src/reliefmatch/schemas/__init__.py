"""Pydantic schema definitions for missions and worker profiles."""

from __future__ import annotations

from .location import GeoPoint
from .mission import Mission, MissionStatus, UrgencyLevel
from .worker import (
    AvailabilitySlot,
    Credential,
    WorkerProfile,
    WorkerStatus,
    parse_time_of_day,
)

__all__ = [
    "GeoPoint",
    "Mission",
    "MissionStatus",
    "UrgencyLevel",
    "AvailabilitySlot",
    "Credential",
    "WorkerProfile",
    "WorkerStatus",
    "parse_time_of_day",
]
