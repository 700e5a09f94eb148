"""Composite candidate scoring."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterable

from ..schemas import Mission, WorkerProfile
from .availability import AvailabilityChecker
from .geo import distance_km as compute_distance
from .geo import round_distance
from .matchers import SubstringMatcher, credential_names


@dataclass(slots=True)
class ScoringSignals:
    """Raw inputs to the composite score."""

    distance_km: float
    max_radius_km: float
    skill_ratio: float
    diploma_ratio: float
    is_available: bool
    average_rating: float
    completed_jobs: int


@dataclass(slots=True)
class CandidateMatch:
    """Scored candidate for one mission; lives only for one ranking call."""

    worker: WorkerProfile
    distance_km: float
    skill_ratio: float
    diploma_ratio: float
    is_available: bool
    composite_score: int
    components: dict[str, float] = field(default_factory=dict)

    @property
    def worker_id(self) -> str:
        return self.worker.worker_id

    def to_dict(self) -> dict[str, Any]:
        worker = self.worker
        return {
            "worker_id": worker.worker_id,
            "user_id": worker.user_id,
            "first_name": worker.first_name,
            "last_name": worker.last_name,
            "headline": worker.headline,
            "specialties": list(worker.specialties),
            "diplomas": [name for name in credential_names(worker.diplomas) if name],
            "hourly_rate": worker.hourly_rate,
            "average_rating": worker.average_rating,
            "completed_jobs": worker.completed_jobs,
            "distance_km": None if math.isinf(self.distance_km) else self.distance_km,
            "composite_score": self.composite_score,
            "is_available": self.is_available,
            "skill_ratio": self.skill_ratio,
            "diploma_ratio": self.diploma_ratio,
        }


def _unit(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return min(max(value, 0.0), 1.0)


class ScoringEngine:
    """Combine distance, requirement coverage, availability and reputation.

    Credential compliance carries the most weight; distance and availability
    come next; rating and experience separate otherwise close candidates.
    """

    DEFAULT_WEIGHTS: dict[str, float] = {
        "distance": 0.20,
        "skills": 0.25,
        "diplomas": 0.25,
        "availability": 0.15,
        "rating": 0.10,
        "experience": 0.05,
    }

    DEFAULT_UNAVAILABLE_CREDIT = 0.3
    DEFAULT_EXPERIENCE_CAP = 50
    MAX_RATING = 5.0

    def __init__(
        self,
        *,
        matcher: Any | None = None,
        availability: AvailabilityChecker | None = None,
        weights: dict[str, float] | None = None,
        unavailable_credit: float | None = None,
        experience_cap: int | None = None,
    ) -> None:
        self._matcher = matcher or SubstringMatcher()
        self._availability = availability or AvailabilityChecker()
        self._weights = self.DEFAULT_WEIGHTS.copy()
        if weights:
            unknown = set(weights) - set(self.DEFAULT_WEIGHTS)
            if unknown:
                raise ValueError(f"Unknown score weights: {sorted(unknown)}")
            self._weights.update(weights)
        self._unavailable_credit = (
            self.DEFAULT_UNAVAILABLE_CREDIT if unavailable_credit is None else unavailable_credit
        )
        self._experience_cap = experience_cap or self.DEFAULT_EXPERIENCE_CAP

    @property
    def weights(self) -> dict[str, float]:
        return dict(self._weights)

    def components(self, signals: ScoringSignals) -> dict[str, float]:
        """Per-signal values in [0, 1] before weighting."""
        if signals.max_radius_km > 0 and not math.isnan(signals.distance_km):
            distance_score = _unit(1 - signals.distance_km / signals.max_radius_km)
        else:
            distance_score = 0.0
        return {
            "distance": distance_score,
            "skills": _unit(signals.skill_ratio),
            "diplomas": _unit(signals.diploma_ratio),
            "availability": 1.0 if signals.is_available else _unit(self._unavailable_credit),
            "rating": _unit(signals.average_rating / self.MAX_RATING),
            "experience": _unit(signals.completed_jobs / self._experience_cap),
        }

    def score(self, signals: ScoringSignals) -> int:
        return self._weighted_score(self.components(signals))

    def evaluate(
        self,
        mission: Mission,
        worker: WorkerProfile,
        *,
        radius_km: float,
        required_skills: Iterable[str] | None = None,
        distance_km: float | None = None,
    ) -> CandidateMatch:
        """Score one worker against one mission.

        ``required_skills`` replaces the mission's own skill list when given.
        ``distance_km`` skips recomputing a distance the caller already has.
        """
        if distance_km is None:
            distance_km = compute_distance(mission.location, worker.location)
        skills = mission.required_skills if required_skills is None else list(required_skills)

        skill_ratio = self._matcher.match_ratio(skills, worker.specialties)
        diploma_ratio = self._matcher.match_ratio(
            mission.required_diplomas,
            credential_names(worker.diplomas),
        )
        available = self._availability.is_available(
            worker.availability_slots,
            mission.start_date,
            mission.is_night_shift,
        )

        signals = ScoringSignals(
            distance_km=distance_km,
            max_radius_km=radius_km,
            skill_ratio=skill_ratio,
            diploma_ratio=diploma_ratio,
            is_available=available,
            average_rating=worker.average_rating,
            completed_jobs=worker.completed_jobs,
        )
        components = self.components(signals)

        return CandidateMatch(
            worker=worker,
            distance_km=round_distance(distance_km),
            skill_ratio=skill_ratio,
            diploma_ratio=diploma_ratio,
            is_available=available,
            composite_score=self._weighted_score(components),
            components=components,
        )

    def _weighted_score(self, components: dict[str, float]) -> int:
        weighted = sum(
            components.get(name, 0.0) * weight
            for name, weight in self._weights.items()
        )
        # Halves round up, never to even.
        return int(min(max(math.floor(100 * weighted + 0.5), 0), 100))
