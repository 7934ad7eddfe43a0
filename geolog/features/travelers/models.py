"""
Traveler domain types.

Plain dataclasses with no I/O. Locations are immutable once built;
a Traveler's geocenter and alerts are filled in by the analysis.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional

from geolog.shared.exceptions import InputError


@dataclass(frozen=True)
class Location:
    """
    One observed connection point.

    weight is the number of hits seen from this ip; locality is the
    display name from the IP database and is not used in computation.
    """
    ip: str
    timestamp: str
    latitude: float
    longitude: float
    weight: float
    locality: str = ""

    def __post_init__(self):
        for name in ("latitude", "longitude", "weight"):
            if not math.isfinite(getattr(self, name)):
                raise InputError(f"{name} is not finite for {self.ip}: {getattr(self, name)}")
        if not -90.0 <= self.latitude <= 90.0:
            raise InputError(f"latitude out of range for {self.ip}: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise InputError(f"longitude out of range for {self.ip}: {self.longitude}")
        if not self.weight >= 0:
            raise InputError(f"negative weight for {self.ip}: {self.weight}")


@dataclass(frozen=True)
class Geocenter:
    """Weighted center of a traveler's connections."""
    latitude: float
    longitude: float
    weight: float
    avg_dist: float
    locality: str = ""


@dataclass(frozen=True)
class Alert:
    """A connection found too far from the traveler's geocenter."""
    traveler_id: str
    location: Location
    distance_km: float
    geocenter: Geocenter


@dataclass
class Traveler:
    """
    A user under analysis.

    When travelers are grouped by month, month holds the month key and
    id is '<month> <user>'; user always holds the bare identifier.
    """
    id: str
    user: str = ""
    month: Optional[str] = None
    locations: List[Location] = field(default_factory=list)
    geocenter: Optional[Geocenter] = None
    alerts: List[Alert] = field(default_factory=list)
    alert_distance: Optional[float] = None

    def __post_init__(self):
        if not self.user:
            self.user = self.id

    @property
    def total_weight(self) -> float:
        return sum(loc.weight for loc in self.locations)


@dataclass(frozen=True)
class SkippedTraveler:
    """A traveler whose geocenter could not be computed."""
    traveler_id: str
    reason: str
