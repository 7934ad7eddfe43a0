"""
Traveler analysis service - main orchestrator.

For each traveler: estimate the geocenter, optionally name it through
the reverse geocoder, then score every location against it.
"""

import asyncio
import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from geolog.config import Settings
from geolog.services.reverse_geocoder import ReverseGeocoder
from geolog.shared.exceptions import DegenerateInputError, ExternalServiceError
from .geocenter import estimate_geocenter
from .models import Alert, SkippedTraveler, Traveler
from .scoring import score

logger = logging.getLogger(__name__)


@dataclass
class AnalysisReport:
    """Outcome of one analysis run."""

    alert_distance_km: float
    travelers: List[Traveler] = field(default_factory=list)
    skipped: List[SkippedTraveler] = field(default_factory=list)
    run_at: datetime = field(default_factory=datetime.now)

    @property
    def alerts(self) -> List[Alert]:
        return [a for t in self.travelers for a in t.alerts]

    @property
    def n_alerts(self) -> int:
        return sum(len(t.alerts) for t in self.travelers)


class TravelerAnalysisService:
    """
    Run geocenter estimation and anomaly scoring over many travelers.

    Travelers are independent: a traveler that cannot get a geocenter is
    reported as skipped and the run carries on. Reverse geocoding is
    optional, called once per traveler, one call at a time, and a failed
    call only leaves the geocenter without a locality.
    """

    def __init__(
        self,
        settings: Settings,
        geocoder: Optional[ReverseGeocoder] = None
    ):
        self.settings = settings
        self.threshold_km = settings.alert_distance_km

        if geocoder is None and settings.reverse_geocoding_enabled:
            geocoder = ReverseGeocoder(
                api_key=settings.google_api_key,
                url=settings.reverse_geocode_url,
                timeout=settings.reverse_geocode_timeout,
                delay=settings.reverse_geocode_delay,
            )
        self.geocoder = geocoder

    async def run(
        self,
        travelers: Iterable[Traveler],
        on_analyzed: Optional[Callable[[Traveler], None]] = None
    ) -> AnalysisReport:
        """
        Analyze travelers in order and collect the report.

        on_analyzed, if given, is called with each traveler as soon as
        its alerts are known, so callers can report them as they appear.
        """
        report = AnalysisReport(alert_distance_km=self.threshold_km)

        for traveler in travelers:
            try:
                await self.analyze_traveler(traveler)
            except DegenerateInputError as e:
                logger.warning(f"Skipping traveler {traveler.id}: {e}")
                report.skipped.append(SkippedTraveler(traveler_id=traveler.id, reason=str(e)))
                continue
            report.travelers.append(traveler)
            if on_analyzed is not None:
                on_analyzed(traveler)

        logger.info(
            f"Analyzed {len(report.travelers)} travelers, "
            f"{report.n_alerts} alerts, {len(report.skipped)} skipped"
        )
        return report

    def analyze(self, travelers: Iterable[Traveler]) -> AnalysisReport:
        """Synchronous wrapper around run()."""
        return asyncio.run(self.run(travelers))

    async def analyze_traveler(self, traveler: Traveler) -> List[Alert]:
        """
        Fill in one traveler's geocenter and alerts.

        Raises:
            DegenerateInputError: If the traveler has no usable locations
        """
        geocenter = estimate_geocenter(traveler.locations)

        if self.geocoder is not None:
            locality = await self._locality_for(traveler, geocenter.latitude, geocenter.longitude)
            if locality:
                geocenter = replace(geocenter, locality=locality)

        traveler.geocenter = geocenter
        traveler.alert_distance = self.threshold_km
        logger.debug(
            f"{traveler.id}: geocenter {geocenter.latitude:.4f},{geocenter.longitude:.4f} "
            f"avg_dist={geocenter.avg_dist:.1f}km over {len(traveler.locations)} locations"
        )

        return score(traveler, self.threshold_km)

    async def _locality_for(self, traveler: Traveler, lat: float, lon: float) -> str:
        try:
            return await self.geocoder.reverse_geocode(lat, lon)
        except ExternalServiceError as e:
            logger.warning(f"Reverse geocoding failed for {traveler.id}: {e}")
            return ""
