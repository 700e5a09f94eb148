from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """Latitude/longitude pair in decimal degrees; either side may be unknown."""

    latitude: float | None
    longitude: float | None
