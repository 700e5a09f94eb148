"""Great-circle distance on a spherical Earth."""

from __future__ import annotations

import math

from ..schemas import GeoPoint

EARTH_RADIUS_KM = 6371.0
UNREACHABLE_KM = math.inf


def _is_known(value: float | None) -> bool:
    # Zero is what unset coordinates collapse to upstream, so it counts as unknown.
    return value is not None and math.isfinite(value) and value != 0


def distance_km(a: GeoPoint | None, b: GeoPoint | None) -> float:
    """Haversine distance in km, or ``UNREACHABLE_KM`` when a location is unknown."""
    if a is None or b is None:
        return UNREACHABLE_KM
    coords = (a.latitude, a.longitude, b.latitude, b.longitude)
    if not all(_is_known(value) for value in coords):
        return UNREACHABLE_KM

    lat1, lon1, lat2, lon2 = (float(value) for value in coords)
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)

    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )
    h = min(1.0, max(0.0, h))
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c


def round_distance(value: float) -> float:
    """Round to 0.1 km; unreachable stays infinite."""
    if math.isinf(value):
        return value
    return math.floor(value * 10 + 0.5) / 10


__all__ = ["EARTH_RADIUS_KM", "UNREACHABLE_KM", "distance_km", "round_distance"]
