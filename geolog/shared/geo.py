"""
Geographic utility functions.

This is the SINGLE SOURCE OF TRUTH for geographic calculations.
DO NOT duplicate these functions elsewhere.
"""
import math

from geolog.shared.constants import EARTH_RADIUS_KM


def haversin(theta: float) -> float:
    """Haversine of an angle in radians: sin²(θ/2)."""
    return math.sin(theta / 2) ** 2


def distance_km(
    lat1: float, lon1: float,
    lat2: float, lon2: float
) -> float:
    """
    Calculate great-circle distance between two points.

    Uses a spherical Earth of radius EARTH_RADIUS_KM, which is accurate
    enough for alert thresholds in the hundreds or thousands of km.
    Inputs are expected to be valid coordinates; out-of-range values do
    not raise but give a meaningless distance.

    Args:
        lat1, lon1: First point coordinates (degrees)
        lat2, lon2: Second point coordinates (degrees)

    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    h = (
        haversin(delta_lat) +
        math.cos(lat1_rad) * math.cos(lat2_rad) * haversin(delta_lon)
    )
    # Floating point can push h just outside [0, 1]
    h = min(1.0, max(0.0, h))

    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(h))


def switch_meridian(lon: float) -> float:
    """
    Re-express a longitude in the frame shifted by 180 degrees.

    Negative longitudes move up by 180, everything else (including 0)
    moves down by 180. Applying it twice returns the input, except for
    +180, which maps to 0 and comes back as -180 (the same meridian).

    Args:
        lon: Longitude in degrees, [-180, 180]

    Returns:
        Longitude in the dateline-centered frame
    """
    if lon < 0.0:
        return lon + 180.0
    return lon - 180.0
