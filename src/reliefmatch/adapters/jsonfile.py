"""JSON file backed repositories used by the CLI."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator, Mapping

import structlog

from ..schemas import Mission
from .memory import is_verified_record


class JsonMissionRepository:
    """Missions stored as a JSON list or as ``{"missions": [...]}``."""

    def __init__(self, path: Path):
        self._path = Path(path)
        self._records: dict[str, dict[str, Any]] | None = None

    def get(self, mission_id: str) -> Mission | None:
        record = self._load().get(mission_id)
        if record is None:
            return None
        return Mission.model_validate(record)

    def _load(self) -> dict[str, dict[str, Any]]:
        if self._records is None:
            with self._path.open("r", encoding="utf-8") as handle:
                try:
                    data = json.load(handle)
                except json.JSONDecodeError as exc:
                    raise ValueError(f"Invalid missions JSON: {exc}") from exc
            if isinstance(data, dict):
                data = data.get("missions", [])
            if not isinstance(data, list):
                raise ValueError("Missions file must hold a list of missions")
            self._records = {
                str(item["mission_id"]): item
                for item in data
                if isinstance(item, dict) and "mission_id" in item
            }
        return self._records


class JsonlWorkerRepository:
    """Worker records, one JSON object per line.

    Lines that are not valid JSON objects are logged and skipped.
    """

    def __init__(self, path: Path):
        self._path = Path(path)
        self._logger = structlog.get_logger(__name__)

    def list_verified(self) -> Iterator[Mapping[str, Any]]:
        with self._path.open("r", encoding="utf-8") as handle:
            for idx, line in enumerate(handle, start=1):
                raw = line.strip()
                if not raw:
                    continue
                try:
                    record = json.loads(raw)
                except json.JSONDecodeError as exc:
                    self._logger.warning(
                        "repository.invalid_record",
                        path=str(self._path),
                        line=idx,
                        error=str(exc),
                    )
                    continue
                if not isinstance(record, dict):
                    self._logger.warning(
                        "repository.invalid_record",
                        path=str(self._path),
                        line=idx,
                        error="record is not an object",
                    )
                    continue
                if is_verified_record(record):
                    yield record
