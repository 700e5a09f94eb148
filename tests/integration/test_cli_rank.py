from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from reliefmatch.cli import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def data_files(tmp_path: Path) -> tuple[Path, Path]:
    missions_path = tmp_path / "missions.json"
    workers_path = tmp_path / "workers.jsonl"

    missions = [
        {
            "mission_id": "M-001",
            "title": "Renfort de nuit - Infirmier",
            "job_title": "Infirmier",
            "city": "Paris",
            "latitude": 48.8566,
            "longitude": 2.3522,
            "radius_km": 25,
            "required_skills": ["Infirmier"],
            "required_diplomas": ["DE Infirmier"],
            "start_date": "2025-03-12T20:00:00",
            "is_night_shift": True,
        }
    ]
    workers = [
        {
            "worker_id": "W-002",
            "first_name": "Claire",
            "last_name": "Martin",
            "latitude": 48.8600,
            "longitude": 2.3400,
            "specialties": ["Infirmier diplômé d'État"],
            "diplomas": [{"name": "DE Infirmier"}],
            "average_rating": 4.8,
            "completed_jobs": 32,
            "availability_slots": [
                {"day_of_week": 3, "start_time": "22:00", "end_time": "06:00"}
            ],
        },
        {
            "worker_id": "W-001",
            "first_name": "Lucas",
            "last_name": "Bernard",
            "latitude": 48.8700,
            "longitude": 2.3600,
            "specialties": ["Aide-soignant"],
            "diplomas": [],
            "average_rating": 4.0,
            "completed_jobs": 3,
            "availability_slots": [
                {"day_of_week": 3, "start_time": "09:00", "end_time": "17:00"}
            ],
        },
        {
            "worker_id": "W-003",
            "first_name": "Inès",
            "last_name": "Petit",
            "latitude": 45.7640,
            "longitude": 4.8357,
            "specialties": ["Infirmier"],
        },
    ]

    missions_path.write_text(json.dumps(missions, ensure_ascii=False), encoding="utf-8")
    workers_path.write_text(
        "\n".join(json.dumps(item, ensure_ascii=False) for item in workers),
        encoding="utf-8",
    )
    return missions_path, workers_path


def test_cli_ranks_and_writes_output(tmp_path: Path, runner: CliRunner, data_files) -> None:
    missions_path, workers_path = data_files
    output_path = tmp_path / "results.json"
    audit_path = tmp_path / "audit.jsonl"

    result = runner.invoke(
        app,
        [
            "rank",
            "--missions",
            str(missions_path),
            "--workers",
            str(workers_path),
            "--mission-id",
            "M-001",
            "--output",
            str(output_path),
            "--audit-log",
            str(audit_path),
        ],
    )

    assert result.exit_code == 0, result.stdout
    rendered = json.loads(output_path.read_text(encoding="utf-8"))
    assert rendered["metadata"]["mission_id"] == "M-001"
    assert rendered["metadata"]["app_version"]

    ranking = rendered["result"]
    assert ranking["total_found"] == 2
    assert ranking["search_radius_km"] == 30.0
    assert [entry["worker_id"] for entry in ranking["matches"]] == ["W-002", "W-001"]
    top = ranking["matches"][0]
    assert top["is_available"] is True
    assert top["skill_ratio"] == 1.0
    assert ranking["matches"][1]["is_available"] is False

    audit_entry = json.loads(audit_path.read_text(encoding="utf-8").strip().splitlines()[0])
    assert audit_entry["mission_id"] == "M-001"
    assert audit_entry["ranked"][0]["worker_id"] == "W-002"


def test_cli_applies_limit_and_config(tmp_path: Path, runner: CliRunner, data_files) -> None:
    missions_path, workers_path = data_files
    output_path = tmp_path / "results.json"
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "engine:\n  max_workers: 2\nmatcher:\n  strategy: fuzzy\n",
        encoding="utf-8",
    )

    result = runner.invoke(
        app,
        [
            "rank",
            "--missions",
            str(missions_path),
            "--workers",
            str(workers_path),
            "--mission-id",
            "M-001",
            "--output",
            str(output_path),
            "--limit",
            "1",
            "--config",
            str(config_path),
        ],
    )

    assert result.exit_code == 0, result.stdout
    ranking = json.loads(output_path.read_text(encoding="utf-8"))["result"]
    assert ranking["total_found"] == 2
    assert len(ranking["matches"]) == 1


def test_cli_unknown_mission_fails(tmp_path: Path, runner: CliRunner, data_files) -> None:
    missions_path, workers_path = data_files

    result = runner.invoke(
        app,
        [
            "rank",
            "--missions",
            str(missions_path),
            "--workers",
            str(workers_path),
            "--mission-id",
            "M-404",
            "--output",
            str(tmp_path / "results.json"),
        ],
    )

    assert result.exit_code == 1
    assert not (tmp_path / "results.json").exists()


def test_cli_rejects_zero_limit(tmp_path: Path, runner: CliRunner, data_files) -> None:
    missions_path, workers_path = data_files

    result = runner.invoke(
        app,
        [
            "rank",
            "--missions",
            str(missions_path),
            "--workers",
            str(workers_path),
            "--mission-id",
            "M-001",
            "--output",
            str(tmp_path / "results.json"),
            "--limit",
            "0",
        ],
    )

    assert result.exit_code == 1


def test_cli_scores_single_worker(runner: CliRunner, data_files) -> None:
    missions_path, workers_path = data_files

    result = runner.invoke(
        app,
        [
            "score",
            "--missions",
            str(missions_path),
            "--workers",
            str(workers_path),
            "--mission-id",
            "M-001",
            "--worker-id",
            "W-003",
        ],
    )

    assert result.exit_code == 0, result.stdout
    payload = json.loads(result.stdout.strip().splitlines()[-1])
    assert payload["worker_id"] == "W-003"
    assert payload["distance_km"] == pytest.approx(392, abs=5)
    assert 0 <= payload["composite_score"] <= 100
