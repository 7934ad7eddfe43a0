"""
IP geolocation backed by a local MaxMind city database.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import geoip2.database
import geoip2.errors

from geolog.shared.constants import DEFAULT_MAXMIND_DB
from geolog.shared.exceptions import InputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IPLocation:
    """Resolved position of an IP address."""
    latitude: float
    longitude: float
    locality: str = ""


class IPResolver:
    """
    Resolve IP addresses with geoip2.

    Opening the database is a structural step: a missing or corrupt file
    raises straight away. Lookups of unknown addresses raise InputError.
    """

    def __init__(self, db_path: str = DEFAULT_MAXMIND_DB):
        self.db_path = db_path
        self._reader: Optional[geoip2.database.Reader] = geoip2.database.Reader(db_path)
        logger.info(f"Opened MaxMind database {db_path}")

    def resolve(self, ip: str) -> IPLocation:
        """
        Look up the coordinates of an IP.

        Args:
            ip: IPv4 or IPv6 address

        Returns:
            IPLocation with 'City, Country' locality

        Raises:
            InputError: If the ip is invalid, unknown, or has no coordinates
        """
        if self._reader is None:
            raise RuntimeError("IPResolver is closed")

        try:
            resp = self._reader.city(ip)
        except geoip2.errors.AddressNotFoundError as e:
            raise InputError(f"ip {ip} not found in {self.db_path}") from e
        except ValueError as e:
            raise InputError(f"invalid ip {ip!r}: {e}") from e

        lat = resp.location.latitude
        lon = resp.location.longitude
        if lat is None or lon is None:
            raise InputError(f"ip {ip} has no coordinates")

        parts = [resp.city.name, resp.country.name]
        locality = ", ".join(p for p in parts if p)

        return IPLocation(latitude=lat, longitude=lon, locality=locality)

    def close(self) -> None:
        if self._reader is not None:
            self._reader.close()
            self._reader = None

    def __enter__(self) -> "IPResolver":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
