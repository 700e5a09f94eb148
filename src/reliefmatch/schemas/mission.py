from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .location import GeoPoint


class MissionStatus(str, Enum):
    OPEN = "OPEN"
    ASSIGNED = "ASSIGNED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class UrgencyLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


DEFAULT_SHIFT_HOURS = 8


class Mission(BaseModel):
    """Relief staffing request posted by an institution."""

    mission_id: str
    title: str | None = None
    job_title: str | None = None
    city: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    radius_km: float | None = Field(default=None, gt=0)
    required_skills: list[str] = Field(default_factory=list)
    required_diplomas: list[str] = Field(default_factory=list)
    start_date: datetime
    end_date: datetime | None = None
    is_night_shift: bool = False
    hourly_rate: float | None = Field(default=None, ge=0)
    urgency_level: UrgencyLevel = UrgencyLevel.HIGH
    status: MissionStatus = MissionStatus.OPEN

    model_config = ConfigDict(extra="allow")

    @model_validator(mode="after")
    def _default_end_date(self) -> "Mission":
        # Shifts without an explicit end run a standard eight hours.
        if self.end_date is None:
            self.end_date = self.start_date + timedelta(hours=DEFAULT_SHIFT_HOURS)
        return self

    @property
    def location(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude)
