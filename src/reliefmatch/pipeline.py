"""Ranking pipeline assembly and execution."""

from __future__ import annotations

import json
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

import pendulum
import structlog

from . import __version__
from .adapters import MissionRepository, WorkerRepository
from .core import (
    CandidateMatch,
    InvalidInputError,
    NotFoundError,
    RankingTimeoutError,
    ScoringEngine,
    UpstreamError,
    distance_km,
)
from .logging import request_logger
from .schemas import Mission, WorkerProfile

_CANCEL_POLL_SECONDS = 0.05


@dataclass
class RankingConfig:
    """Engine-wide defaults applied when a call does not override them."""

    default_radius_km: float = 30.0
    default_limit: int = 10
    max_workers: int = 8
    timeout_seconds: float | None = None


@dataclass
class RankingOptions:
    """Per-call options for :meth:`RankingPipeline.compute_candidates`."""

    required_skills_override: list[str] | None = None
    radius_km: float | None = None
    limit: int | None = None
    timeout_seconds: float | None = None


@dataclass(slots=True)
class RankingResult:
    """Ordered, bounded candidate list for one mission."""

    matches: list[CandidateMatch]
    total_found: int
    search_radius_km: float
    mission_id: str
    skipped: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "mission_id": self.mission_id,
            "total_found": self.total_found,
            "search_radius_km": self.search_radius_km,
            "matches": [match.to_dict() for match in self.matches],
            "skipped": list(self.skipped),
        }


@dataclass(slots=True)
class _Scored:
    match: CandidateMatch | None = None
    skipped_id: str | None = None


class RankingPipeline:
    """Load a mission and its candidate pool, then score, sort and truncate.

    Scoring runs on a bounded thread pool; results are merged before sorting
    so completion order never shows in the output.
    """

    def __init__(
        self,
        *,
        missions: MissionRepository,
        workers: WorkerRepository,
        scoring: ScoringEngine | None = None,
        config: RankingConfig | None = None,
        logger: Any | None = None,
    ) -> None:
        self._missions = missions
        self._workers = workers
        self._scoring = scoring or ScoringEngine()
        self._config = config or RankingConfig()
        self._logger = logger or structlog.get_logger(__name__)

    def compute_candidates(
        self,
        mission_id: str,
        options: RankingOptions | None = None,
        *,
        cancel_event: threading.Event | None = None,
    ) -> RankingResult:
        options = options or RankingOptions()
        self._validate(mission_id, options)
        log = request_logger(self._logger, mission_id=mission_id)

        timeout = (
            options.timeout_seconds
            if options.timeout_seconds is not None
            else self._config.timeout_seconds
        )
        deadline = None if timeout is None else time.monotonic() + timeout

        mission = self._load_mission(mission_id, log)
        records = self._load_pool(mission_id, log)
        self._check_deadline(mission_id, deadline, cancel_event, log)

        radius = self._search_radius(options.radius_km)
        filter_radius = self._effective_radius(mission, radius)
        limit = options.limit if options.limit is not None else self._config.default_limit
        log.info(
            "ranking.started",
            pool_size=len(records),
            search_radius_km=radius,
            filter_radius_km=filter_radius,
            limit=limit,
        )

        scored = self._score_pool(
            mission,
            records,
            radius_km=radius,
            filter_radius_km=filter_radius,
            required_skills=options.required_skills_override,
            deadline=deadline,
            cancel_event=cancel_event,
            log=log,
        )
        matches = [item.match for item in scored if item.match is not None]
        skipped = [item.skipped_id for item in scored if item.skipped_id is not None]
        matches.sort(key=lambda match: (-match.composite_score, match.worker_id))

        result = RankingResult(
            matches=matches[:limit],
            total_found=len(matches),
            search_radius_km=radius,
            mission_id=mission_id,
            skipped=skipped,
        )
        log.info(
            "ranking.completed",
            total_found=result.total_found,
            returned=len(result.matches),
            skipped=len(skipped),
        )
        return result

    def compute_score(
        self,
        mission: Mission,
        worker: WorkerProfile,
        *,
        radius_km: float | None = None,
        required_skills: Iterable[str] | None = None,
    ) -> CandidateMatch:
        """Score a single pair without loading anything or applying the radius filter."""
        if radius_km is not None and radius_km <= 0:
            raise InvalidInputError(
                f"radius_km must be positive, got {radius_km}",
                mission_id=mission.mission_id,
            )
        return self._scoring.evaluate(
            mission,
            worker,
            radius_km=self._search_radius(radius_km),
            required_skills=required_skills,
        )

    def _validate(self, mission_id: str, options: RankingOptions) -> None:
        if options.limit is not None and options.limit <= 0:
            raise InvalidInputError(
                f"limit must be positive, got {options.limit}", mission_id=mission_id
            )
        if options.radius_km is not None and options.radius_km <= 0:
            raise InvalidInputError(
                f"radius_km must be positive, got {options.radius_km}",
                mission_id=mission_id,
            )
        if options.timeout_seconds is not None and options.timeout_seconds <= 0:
            raise InvalidInputError(
                f"timeout_seconds must be positive, got {options.timeout_seconds}",
                mission_id=mission_id,
            )

    def _search_radius(self, requested: float | None) -> float:
        if requested is not None:
            return float(requested)
        return float(self._config.default_radius_km)

    @staticmethod
    def _effective_radius(mission: Mission, search_radius: float) -> float:
        if mission.radius_km:
            return float(mission.radius_km)
        return search_radius

    def _load_mission(self, mission_id: str, log: Any) -> Mission:
        try:
            mission = self._missions.get(mission_id)
        except Exception as exc:  # noqa: BLE001
            log.error("ranking.upstream_failed", source="missions", error=str(exc))
            raise UpstreamError(
                f"Mission lookup failed: {exc}", mission_id=mission_id, original=exc
            ) from exc
        if mission is None:
            raise NotFoundError(f"Mission {mission_id} not found", mission_id=mission_id)
        return mission

    def _load_pool(
        self, mission_id: str, log: Any
    ) -> list[WorkerProfile | Mapping[str, Any]]:
        try:
            return list(self._workers.list_verified())
        except Exception as exc:  # noqa: BLE001
            log.error("ranking.upstream_failed", source="workers", error=str(exc))
            raise UpstreamError(
                f"Worker pool lookup failed: {exc}", mission_id=mission_id, original=exc
            ) from exc

    def _score_pool(
        self,
        mission: Mission,
        records: Sequence[WorkerProfile | Mapping[str, Any]],
        *,
        radius_km: float,
        filter_radius_km: float,
        required_skills: list[str] | None,
        deadline: float | None,
        cancel_event: threading.Event | None,
        log: Any,
    ) -> list[_Scored]:
        if not records:
            return []

        executor = ThreadPoolExecutor(
            max_workers=min(len(records), self._config.max_workers),
            thread_name_prefix="reliefmatch-score",
        )
        try:
            futures = [
                executor.submit(
                    self._score_candidate,
                    mission,
                    record,
                    radius_km,
                    filter_radius_km,
                    required_skills,
                    log,
                )
                for record in records
            ]
            self._wait_all(mission.mission_id, futures, deadline, cancel_event, log)
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        return [future.result() for future in futures]

    def _score_candidate(
        self,
        mission: Mission,
        record: WorkerProfile | Mapping[str, Any],
        radius_km: float,
        filter_radius_km: float,
        required_skills: list[str] | None,
        log: Any,
    ) -> _Scored:
        try:
            worker = (
                record
                if isinstance(record, WorkerProfile)
                else WorkerProfile.model_validate(record)
            )
            distance = distance_km(mission.location, worker.location)
            # Geographic eligibility is binary: beyond the radius nothing gets scored.
            if distance > filter_radius_km:
                return _Scored()
            match = self._scoring.evaluate(
                mission,
                worker,
                radius_km=radius_km,
                required_skills=required_skills,
                distance_km=distance,
            )
        except Exception as exc:  # noqa: BLE001
            worker_id = _record_id(record)
            log.warning("candidate.skipped", worker_id=worker_id, error=str(exc))
            return _Scored(skipped_id=worker_id or "<unknown>")
        return _Scored(match=match)

    def _wait_all(
        self,
        mission_id: str,
        futures: list[Future],
        deadline: float | None,
        cancel_event: threading.Event | None,
        log: Any,
    ) -> None:
        pending = set(futures)
        while pending:
            self._check_deadline(mission_id, deadline, cancel_event, log)
            timeout = None if deadline is None else deadline - time.monotonic()
            if cancel_event is not None:
                timeout = (
                    _CANCEL_POLL_SECONDS
                    if timeout is None
                    else min(timeout, _CANCEL_POLL_SECONDS)
                )
            _, pending = wait(pending, timeout=timeout)

    @staticmethod
    def _check_deadline(
        mission_id: str,
        deadline: float | None,
        cancel_event: threading.Event | None,
        log: Any,
    ) -> None:
        if cancel_event is not None and cancel_event.is_set():
            log.warning("ranking.timeout", reason="cancelled")
            raise RankingTimeoutError("Ranking cancelled", mission_id=mission_id)
        if deadline is not None and time.monotonic() >= deadline:
            log.warning("ranking.timeout", reason="deadline")
            raise RankingTimeoutError("Ranking deadline exceeded", mission_id=mission_id)


def _record_id(record: WorkerProfile | Mapping[str, Any]) -> str | None:
    if isinstance(record, WorkerProfile):
        return record.worker_id
    if isinstance(record, Mapping):
        value = record.get("worker_id")
        return None if value is None else str(value)
    return None


def json_default(value: Any) -> Any:
    if isinstance(value, pendulum.DateTime):
        return value.to_iso8601_string()
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def result_metadata(result: RankingResult) -> dict[str, Any]:
    return {
        "mission_id": result.mission_id,
        "generated_at": pendulum.now().to_iso8601_string(),
        "app_version": __version__,
    }


class OutputWriter:
    """Persist ranking results."""

    def write(self, path: Path, result: RankingResult) -> None:
        payload = {"metadata": result_metadata(result), "result": result.to_dict()}
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2, default=json_default),
            encoding="utf-8",
        )


class AuditLogger:
    """Append-only audit logger writing one JSON line per ranking call."""

    def __init__(self, path: Path):
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def record(self, result: RankingResult) -> None:
        self.append(
            {
                **result_metadata(result),
                "total_found": result.total_found,
                "search_radius_km": result.search_radius_km,
                "ranked": [
                    {"worker_id": match.worker_id, "composite_score": match.composite_score}
                    for match in result.matches
                ],
                "skipped": result.skipped,
            }
        )

    def append(self, record: dict) -> None:
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=False, default=json_default))
            handle.write("\n")
