"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class EngineConfig(BaseModel):
    default_radius_km: float | None = Field(default=None, gt=0)
    default_limit: int | None = Field(default=None, gt=0)
    max_workers: int | None = Field(default=None, gt=0)
    timeout_seconds: float | None = Field(default=None, gt=0)

    model_config = ConfigDict(extra="forbid")


class ScoringConfig(BaseModel):
    weights: dict[str, float] | None = None
    unavailable_credit: float | None = Field(default=None, ge=0, le=1)
    experience_cap: int | None = Field(default=None, gt=0)

    model_config = ConfigDict(extra="forbid")


class AvailabilityConfig(BaseModel):
    night_start_hour: int | None = Field(default=None, ge=0, le=23)
    night_end_hour: int | None = Field(default=None, ge=0, le=23)

    model_config = ConfigDict(extra="forbid")


class MatcherConfig(BaseModel):
    strategy: Literal["substring", "fuzzy"] | None = None
    min_similarity: float | None = Field(default=None, ge=0, le=100)

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    engine: EngineConfig = Field(default_factory=EngineConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    availability: AvailabilityConfig = Field(default_factory=AvailabilityConfig)
    matcher: MatcherConfig = Field(default_factory=MatcherConfig)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        for section in ("engine", "scoring", "availability", "matcher"):
            values = getattr(self, section).model_dump(exclude_none=True)
            if values:
                settings[section] = values
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
