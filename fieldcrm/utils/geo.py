"""Great-circle distance helpers for arrival verification."""

import math

EARTH_RADIUS_METERS = 6371e3


def haversine_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Distance in metres between two WGS84 points.

    Args:
        lat1: Latitude of the first point in degrees
        lng1: Longitude of the first point in degrees
        lat2: Latitude of the second point in degrees
        lng2: Longitude of the second point in degrees

    Returns:
        float: Distance along the Earth's surface in metres
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lng2 - lng1)

    a = (
        math.sin(delta_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def is_within_radius(
    lat1: float, lng1: float, lat2: float, lng2: float, radius_meters: float
) -> tuple[bool, float]:
    """Return (within radius, distance in metres)."""
    distance = haversine_distance(lat1, lng1, lat2, lng2)
    return distance <= radius_meters, distance
