from __future__ import annotations

import re
from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .location import GeoPoint

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time_of_day(value: str) -> tuple[int, int]:
    """Split an ``HH:MM`` string into hour and minute, rejecting anything else."""
    match = _TIME_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"Invalid time of day: {value!r}")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"Time of day out of range: {value!r}")
    return hour, minute


class WorkerStatus(str, Enum):
    PENDING = "PENDING"
    VERIFIED = "VERIFIED"
    SUSPENDED = "SUSPENDED"


class Credential(BaseModel):
    """Diploma or certification held by a worker."""

    name: str = ""
    issuer: str | None = None
    obtained_on: date | None = None

    model_config = ConfigDict(extra="allow")


class AvailabilitySlot(BaseModel):
    """Recurring weekday window or one-off dated window.

    ``day_of_week`` counts from Sunday (0) to Saturday (6).
    """

    day_of_week: int | None = Field(default=None, ge=0, le=6)
    specific_date: date | None = None
    start_time: str
    end_time: str
    is_active: bool = True

    model_config = ConfigDict(extra="allow")

    @field_validator("start_time", "end_time")
    @classmethod
    def _validate_time(cls, value: str) -> str:
        parse_time_of_day(value)
        return value.strip()

    @property
    def is_recurring(self) -> bool:
        return self.day_of_week is not None

    @property
    def start_hour(self) -> int:
        return parse_time_of_day(self.start_time)[0]


class WorkerProfile(BaseModel):
    """Verified on-demand worker as seen by the ranking engine."""

    worker_id: str
    user_id: str | None = None
    first_name: str = ""
    last_name: str = ""
    headline: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    specialties: list[str] = Field(default_factory=list)
    diplomas: list[Credential] = Field(default_factory=list)
    hourly_rate: float | None = Field(default=None, ge=0)
    average_rating: float = Field(default=0.0, ge=0.0, le=5.0)
    completed_jobs: int = Field(default=0, ge=0)
    status: WorkerStatus = WorkerStatus.VERIFIED
    availability_slots: list[AvailabilitySlot] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")

    @field_validator("diplomas", mode="before")
    @classmethod
    def _wrap_bare_diploma_names(cls, value):
        if isinstance(value, list):
            return [{"name": item} if isinstance(item, str) else item for item in value]
        return value

    @property
    def location(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude)

    @property
    def is_verified(self) -> bool:
        return self.status is WorkerStatus.VERIFIED
