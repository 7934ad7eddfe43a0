"""
Geocenter estimation.

A plain weighted mean of longitudes breaks at the antimeridian: points at
+179 and -179 average to 0, on the far side of the planet. The estimator
therefore averages longitudes twice, once in the natural (Greenwich)
frame and once in the frame shifted by 180 degrees (dateline), and keeps
whichever center is closer on average to the weighted points.

Latitude has no wraparound and is averaged once.
"""

import logging
from typing import Sequence

from geolog.shared.exceptions import DegenerateInputError
from geolog.shared.geo import distance_km, switch_meridian
from .models import Geocenter, Location

logger = logging.getLogger(__name__)


def _weighted_avg_distance(
    locations: Sequence[Location],
    lat: float,
    lon: float,
    total_weight: float
) -> float:
    """Weighted mean distance (km) from each location to (lat, lon)."""
    total = 0.0
    for loc in locations:
        total += distance_km(loc.latitude, loc.longitude, lat, lon) * loc.weight
    return total / total_weight


def estimate_geocenter(locations: Sequence[Location]) -> Geocenter:
    """
    Estimate the usual point of presence of a set of weighted locations.

    Args:
        locations: Non-empty sequence of Locations

    Returns:
        Geocenter whose longitude is taken from the frame with the
        smaller average distance; ties go to the Greenwich frame.

    Raises:
        DegenerateInputError: If locations is empty or weighs nothing
    """
    if not locations:
        raise DegenerateInputError("no locations to compute a geocenter from")

    total_weight = 0.0
    lat_sum = 0.0
    lon_gw_sum = 0.0
    lon_dl_sum = 0.0

    # Pass 1: weighted centroids in both frames
    for loc in locations:
        total_weight += loc.weight
        lat_sum += loc.latitude * loc.weight
        lon_gw_sum += loc.longitude * loc.weight
        lon_dl_sum += switch_meridian(loc.longitude) * loc.weight

    if total_weight <= 0:
        raise DegenerateInputError("total weight of locations is zero")

    lat_c = lat_sum / total_weight
    lon_gw = lon_gw_sum / total_weight
    lon_dl = switch_meridian(lon_dl_sum / total_weight)

    # Pass 2: keep the candidate with the smaller mean residual
    avg_dist_gw = _weighted_avg_distance(locations, lat_c, lon_gw, total_weight)
    avg_dist_dl = _weighted_avg_distance(locations, lat_c, lon_dl, total_weight)

    if avg_dist_dl < avg_dist_gw:
        lon_c, avg_dist = lon_dl, avg_dist_dl
        frame = "dateline"
    else:
        lon_c, avg_dist = lon_gw, avg_dist_gw
        frame = "greenwich"

    logger.debug(
        f"Geocenter {lat_c:.4f},{lon_c:.4f} ({frame} frame): "
        f"avg_dist gw={avg_dist_gw:.1f}km dl={avg_dist_dl:.1f}km"
    )

    return Geocenter(
        latitude=lat_c,
        longitude=lon_c,
        weight=total_weight,
        avg_dist=avg_dist,
    )
