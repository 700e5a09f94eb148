"""Typer CLI entrypoint for the ranking engine."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional

import typer
import yaml
from dependency_injector import providers
from pydantic import ValidationError

from .adapters import JsonlWorkerRepository, JsonMissionRepository
from .container import RankingContainer, create_container
from .core import NotFoundError, RankingError
from .logging import configure_logging
from .pipeline import AuditLogger, OutputWriter, RankingOptions, json_default
from .schemas import WorkerProfile
from .schemas.config import load_config

app = typer.Typer(help="Relief mission candidate ranking CLI.")


def _load_settings(config: Path | None) -> dict[str, Any]:
    if not config:
        return {}
    with config.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    try:
        return load_config(loaded).to_settings()
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid config: {exc}", param_name="config") from exc


def _build_container(missions: Path, workers: Path, config: Path | None) -> RankingContainer:
    container = create_container(settings=_load_settings(config))
    container.mission_repository.override(
        providers.Singleton(JsonMissionRepository, path=missions)
    )
    container.worker_repository.override(
        providers.Singleton(JsonlWorkerRepository, path=workers)
    )
    return container


def _fail(exc: Exception) -> typer.Exit:
    typer.echo(f"Error: {exc}", err=True)
    return typer.Exit(code=1)


@app.command()
def rank(
    missions: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Missions JSON path."),
    workers: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Workers JSONL path."),
    mission_id: str = typer.Option(..., help="Mission to rank candidates for."),
    output: Path = typer.Option(
        ...,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output JSON path.",
    ),
    skill: Optional[List[str]] = typer.Option(None, help="Override the mission's required skills (repeatable)."),
    radius: Optional[float] = typer.Option(None, help="Search radius in km when the mission has none."),
    limit: Optional[int] = typer.Option(None, help="Maximum number of candidates returned."),
    timeout: Optional[float] = typer.Option(None, help="Deadline for the whole ranking call, in seconds."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    audit_log: Optional[Path] = typer.Option(None, dir_okay=False, help="Audit log output (JSONL)."),
) -> None:
    """Rank verified workers for a mission."""
    configure_logging(log_level)

    container = _build_container(missions, workers, config)
    pipeline = container.pipeline()
    options = RankingOptions(
        required_skills_override=list(skill) if skill else None,
        radius_km=radius,
        limit=limit,
        timeout_seconds=timeout,
    )

    try:
        result = pipeline.compute_candidates(mission_id, options)
    except RankingError as exc:
        raise _fail(exc) from exc

    OutputWriter().write(output, result)
    if audit_log:
        AuditLogger(audit_log).record(result)
    typer.echo(
        f"Ranked {len(result.matches)} of {result.total_found} candidates. Results saved to {output}."
    )


@app.command()
def score(
    missions: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Missions JSON path."),
    workers: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Workers JSONL path."),
    mission_id: str = typer.Option(..., help="Mission to score against."),
    worker_id: str = typer.Option(..., help="Worker to score."),
    radius: Optional[float] = typer.Option(None, help="Radius in km when the mission has none."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
) -> None:
    """Score a single worker against a mission and print the match as JSON."""
    configure_logging(log_level)

    container = _build_container(missions, workers, config)
    pipeline = container.pipeline()

    mission = container.mission_repository().get(mission_id)
    if mission is None:
        raise _fail(NotFoundError(f"Mission {mission_id} not found", mission_id=mission_id))

    record = next(
        (
            item
            for item in container.worker_repository().list_verified()
            if str(item.get("worker_id")) == worker_id
        ),
        None,
    )
    if record is None:
        raise _fail(NotFoundError(f"Verified worker {worker_id} not found", mission_id=mission_id))

    try:
        worker = WorkerProfile.model_validate(record)
        match = pipeline.compute_score(mission, worker, radius_km=radius)
    except (RankingError, ValueError) as exc:
        raise _fail(exc) from exc
    typer.echo(json.dumps(match.to_dict(), ensure_ascii=False, default=json_default))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
