"""Read-only data access ports and their implementations."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Protocol, runtime_checkable

from ..schemas import Mission, WorkerProfile
from .jsonfile import JsonMissionRepository, JsonlWorkerRepository
from .memory import InMemoryMissionRepository, InMemoryWorkerRepository


@runtime_checkable
class MissionRepository(Protocol):
    """Mission lookup contract.

    Implementations return ``None`` for unknown ids and raise only when the
    backing store itself fails.
    """

    def get(self, mission_id: str) -> Mission | None:
        """Return the mission with ``mission_id`` or ``None``."""


@runtime_checkable
class WorkerRepository(Protocol):
    """Candidate pool contract.

    Records may be validated profiles or raw mappings; the ranking pipeline
    validates raw records one by one so a single bad record cannot sink a batch.
    """

    def list_verified(self) -> Iterable[WorkerProfile | Mapping[str, Any]]:
        """Return every verified worker with a profile."""


__all__ = [
    "MissionRepository",
    "WorkerRepository",
    "InMemoryMissionRepository",
    "InMemoryWorkerRepository",
    "JsonMissionRepository",
    "JsonlWorkerRepository",
]
