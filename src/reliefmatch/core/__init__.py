"""Pure ranking computations: distance, matching, availability and scoring."""

from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

# NOTE: keep imports explicit for export clarity.
from .availability import AvailabilityChecker, AvailabilityConfig
from .errors import (
    InvalidInputError,
    NotFoundError,
    RankingError,
    RankingTimeoutError,
    UpstreamError,
)
from .geo import UNREACHABLE_KM, distance_km
from .matchers import FuzzyMatcher, SubstringMatcher, credential_names
from .scoring import CandidateMatch, ScoringEngine, ScoringSignals


@runtime_checkable
class Matcher(Protocol):
    """Requirement coverage contract shared by skill and diploma matching."""

    strategy: str

    def match_ratio(self, required: Iterable[str], possessed: Iterable[str]) -> float:
        """Return the share of ``required`` terms covered by ``possessed``, in [0, 1]."""


__all__ = [
    "Matcher",
    "AvailabilityChecker",
    "AvailabilityConfig",
    "CandidateMatch",
    "ScoringEngine",
    "ScoringSignals",
    "SubstringMatcher",
    "FuzzyMatcher",
    "credential_names",
    "distance_km",
    "UNREACHABLE_KM",
    "RankingError",
    "NotFoundError",
    "InvalidInputError",
    "RankingTimeoutError",
    "UpstreamError",
]
