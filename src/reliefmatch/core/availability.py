"""Worker availability against a mission date and shift type."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable

import pendulum

from ..schemas import AvailabilitySlot


@dataclass
class AvailabilityConfig:
    """Night window bounds, in whole hours of the slot start time."""

    night_start_hour: int = 18
    night_end_hour: int = 6


class AvailabilityChecker:
    """Decide whether declared availability covers a mission.

    Declaring no availability at all is treated as available. Otherwise
    recurring weekday slots take precedence over dated slots, and a night
    shift needs a slot that starts inside the night window.
    """

    def __init__(self, *, config: AvailabilityConfig | None = None) -> None:
        self._config = config or AvailabilityConfig()

    def is_available(
        self,
        slots: Iterable[AvailabilitySlot | dict[str, Any]] | None,
        mission_date: datetime | date | str,
        is_night_shift: bool,
    ) -> bool:
        parsed_slots = [self._coerce_slot(slot) for slot in slots or []]
        if not parsed_slots:
            return True

        day = self._resolve_date(mission_date)
        weekday = day.isoweekday() % 7

        day_slots = [
            slot
            for slot in parsed_slots
            if slot.is_active and slot.is_recurring and slot.day_of_week == weekday
        ]

        if not day_slots:
            return any(
                slot.is_active and slot.specific_date == day
                for slot in parsed_slots
            )

        if is_night_shift:
            return any(self.starts_at_night(slot) for slot in day_slots)
        return True

    def starts_at_night(self, slot: AvailabilitySlot) -> bool:
        hour = slot.start_hour
        return hour >= self._config.night_start_hour or hour < self._config.night_end_hour

    @staticmethod
    def _coerce_slot(slot: AvailabilitySlot | dict[str, Any]) -> AvailabilitySlot:
        if isinstance(slot, AvailabilitySlot):
            return slot
        return AvailabilitySlot.model_validate(slot)

    @staticmethod
    def _resolve_date(value: datetime | date | str) -> date:
        if isinstance(value, str):
            value = pendulum.parse(value)
        if isinstance(value, datetime):
            return value.date()
        return value
