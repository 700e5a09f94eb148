"""In-memory repositories for embedding and tests."""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping

import structlog

from ..schemas import Mission, WorkerProfile, WorkerStatus

logger = structlog.get_logger(__name__)


def is_verified_record(record: Any) -> bool:
    """True for verified profiles and mappings; anything else is logged and rejected."""
    if isinstance(record, WorkerProfile):
        return record.is_verified
    if not isinstance(record, Mapping):
        logger.warning(
            "repository.invalid_record",
            source="memory",
            error=f"expected a mapping, got {type(record).__name__}",
        )
        return False
    status = record.get("status", WorkerStatus.VERIFIED.value)
    return str(getattr(status, "value", status)).upper() == WorkerStatus.VERIFIED.value


class InMemoryMissionRepository:
    """Mission lookup backed by a dict."""

    def __init__(self, missions: Iterable[Mission | Mapping[str, Any]] = ()):
        self._missions: dict[str, Mission] = {}
        for mission in missions:
            self.add(mission)

    def add(self, mission: Mission | Mapping[str, Any]) -> Mission:
        model = mission if isinstance(mission, Mission) else Mission.model_validate(mission)
        self._missions[model.mission_id] = model
        return model

    def get(self, mission_id: str) -> Mission | None:
        return self._missions.get(mission_id)


class InMemoryWorkerRepository:
    """Worker pool backed by a list; raw records are handed out unvalidated."""

    def __init__(self, workers: Iterable[WorkerProfile | Mapping[str, Any]] = ()):
        self._workers = list(workers)

    def add(self, worker: WorkerProfile | Mapping[str, Any]) -> None:
        self._workers.append(worker)

    def list_verified(self) -> Iterator[WorkerProfile | Mapping[str, Any]]:
        return (record for record in list(self._workers) if is_verified_record(record))
