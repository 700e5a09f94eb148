"""Error taxonomy for ranking calls."""

from __future__ import annotations


class RankingError(Exception):
    """Base error; every ranking failure names the mission it concerns."""

    def __init__(self, message: str, *, mission_id: str | None):
        super().__init__(message)
        self.mission_id = mission_id

    def __str__(self) -> str:
        base = super().__str__()
        return f"{base} (mission_id={self.mission_id!r})"


class NotFoundError(RankingError, LookupError):
    """The requested mission does not exist."""


class InvalidInputError(RankingError, ValueError):
    """A caller-supplied option is out of range."""


class RankingTimeoutError(RankingError, TimeoutError):
    """The deadline expired or the call was cancelled before ranking finished."""


class UpstreamError(RankingError):
    """A repository call failed; the original exception is kept as ``original``."""

    def __init__(self, message: str, *, mission_id: str | None, original: BaseException):
        super().__init__(message, mission_id=mission_id)
        self.original = original


__all__ = [
    "RankingError",
    "NotFoundError",
    "InvalidInputError",
    "RankingTimeoutError",
    "UpstreamError",
]
