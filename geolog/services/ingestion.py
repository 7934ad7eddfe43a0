"""
Build travelers from parsed log entries.

Resolves every entry's IP to coordinates and groups the resulting
Locations per traveler. Entries that cannot be turned into a valid
Location are rejected and reported, never coerced.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Protocol

from geolog.features.travelers.models import Location, Traveler
from geolog.shared.exceptions import InputError
from .ip_lookup import IPLocation
from .log_parser import LogEntry

logger = logging.getLogger(__name__)


class Resolver(Protocol):
    def resolve(self, ip: str) -> IPLocation: ...


@dataclass(frozen=True)
class RejectedEntry:
    """A log entry that did not make it into a traveler."""
    entry: LogEntry
    reason: str


@dataclass
class IngestionResult:
    travelers: Dict[str, Traveler] = field(default_factory=dict)
    rejected: List[RejectedEntry] = field(default_factory=list)


def traveler_key(entry: LogEntry, group_by_month: bool) -> str:
    """Traveler id for an entry: the user, or '<month> <user>'."""
    if group_by_month:
        return f"{entry.month} {entry.user}"
    return entry.user


def _to_location(entry: LogEntry, resolver: Resolver, cache: Dict[str, IPLocation]) -> Location:
    if not entry.user:
        raise InputError(f"line {entry.line_no}: hits for {entry.ip} before any user header")
    if not entry.month:
        raise InputError(f"line {entry.line_no}: hits for {entry.ip} before any month header")

    resolved = cache.get(entry.ip)
    if resolved is None:
        resolved = resolver.resolve(entry.ip)
        cache[entry.ip] = resolved

    return Location(
        ip=entry.ip,
        timestamp=entry.month,
        latitude=resolved.latitude,
        longitude=resolved.longitude,
        weight=entry.hits,
        locality=resolved.locality,
    )


def build_travelers(
    entries: Iterable[LogEntry],
    resolver: Resolver,
    group_by_month: bool = False
) -> IngestionResult:
    """
    Group log entries into travelers.

    Args:
        entries: Parsed log entries
        resolver: IP geolocation lookup
        group_by_month: One traveler per (month, user) instead of per user

    Returns:
        IngestionResult with travelers in first-seen order and rejected entries
    """
    result = IngestionResult()
    cache: Dict[str, IPLocation] = {}

    for entry in entries:
        try:
            location = _to_location(entry, resolver, cache)
        except InputError as e:
            logger.warning(f"Rejected log entry: {e}")
            result.rejected.append(RejectedEntry(entry=entry, reason=str(e)))
            continue

        key = traveler_key(entry, group_by_month)
        traveler = result.travelers.get(key)
        if traveler is None:
            traveler = Traveler(
                id=key,
                user=entry.user,
                month=entry.month if group_by_month else None,
            )
            result.travelers[key] = traveler
        traveler.locations.append(location)

    logger.info(
        f"Ingested {len(result.travelers)} travelers "
        f"({len(result.rejected)} entries rejected)"
    )
    return result
