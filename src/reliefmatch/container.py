"""Dependency injection container for the ranking engine."""

from __future__ import annotations

from typing import Any

from dependency_injector import containers, providers

from .adapters import InMemoryMissionRepository, InMemoryWorkerRepository
from .core import AvailabilityChecker, AvailabilityConfig, FuzzyMatcher, ScoringEngine, SubstringMatcher
from .core.matchers import FuzzyMatcherConfig
from .pipeline import RankingConfig, RankingPipeline


class RankingContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    mission_repository = providers.Singleton(InMemoryMissionRepository)
    worker_repository = providers.Singleton(InMemoryWorkerRepository)

    matcher = providers.Singleton(SubstringMatcher)
    availability_checker = providers.Singleton(AvailabilityChecker)

    scoring_engine = providers.Singleton(
        ScoringEngine,
        matcher=matcher,
        availability=availability_checker,
    )

    ranking_config = providers.Singleton(RankingConfig)

    pipeline = providers.Factory(
        RankingPipeline,
        missions=mission_repository,
        workers=worker_repository,
        scoring=scoring_engine,
        config=ranking_config,
    )


def create_container(*, settings: dict[str, Any] | None = None) -> RankingContainer:
    """Instantiate container with optional overrides."""

    container = RankingContainer()

    if not settings or not isinstance(settings, dict):
        return container

    engine_settings = settings.get("engine") or {}
    if engine_settings:
        container.ranking_config.override(
            providers.Singleton(RankingConfig, **engine_settings)
        )

    matcher_settings = settings.get("matcher") or {}
    if matcher_settings.get("strategy") == "fuzzy":
        fuzzy_config = FuzzyMatcherConfig(
            **{k: v for k, v in matcher_settings.items() if k != "strategy"}
        )
        container.matcher.override(providers.Singleton(FuzzyMatcher, config=fuzzy_config))

    availability_settings = settings.get("availability") or {}
    if availability_settings:
        availability_config = AvailabilityConfig(**availability_settings)
        container.availability_checker.override(
            providers.Singleton(AvailabilityChecker, config=availability_config)
        )

    scoring_settings = settings.get("scoring") or {}
    if scoring_settings:
        container.scoring_engine.override(
            providers.Singleton(
                ScoringEngine,
                matcher=container.matcher,
                availability=container.availability_checker,
                **scoring_settings,
            )
        )

    return container
