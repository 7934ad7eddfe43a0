"""
Anomaly scoring against a traveler's geocenter.
"""

import logging
from typing import List

from geolog.shared.exceptions import DegenerateInputError
from geolog.shared.geo import distance_km
from .models import Alert, Traveler

logger = logging.getLogger(__name__)


def score(traveler: Traveler, threshold_km: float) -> List[Alert]:
    """
    Flag every location farther than threshold_km from the geocenter.

    Alerts come out in location order and are appended to
    traveler.alerts. A location exactly at the threshold is not
    an anomaly. The location list itself is left untouched.

    Args:
        traveler: Traveler with a computed geocenter
        threshold_km: Alert distance in kilometers

    Returns:
        The new alerts

    Raises:
        DegenerateInputError: If the traveler has no geocenter yet
    """
    center = traveler.geocenter
    if center is None:
        raise DegenerateInputError(f"traveler {traveler.id} has no geocenter")

    alerts: List[Alert] = []
    for loc in traveler.locations:
        d = distance_km(loc.latitude, loc.longitude, center.latitude, center.longitude)
        if d > threshold_km:
            alerts.append(Alert(
                traveler_id=traveler.id,
                location=loc,
                distance_km=d,
                geocenter=center,
            ))

    if alerts:
        logger.debug(f"{traveler.id}: {len(alerts)} location(s) beyond {threshold_km:.0f}km")

    traveler.alerts.extend(alerts)
    return alerts
