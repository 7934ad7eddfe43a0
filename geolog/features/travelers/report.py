"""
Report generators for analysis results.

Formats results for console and JSON output.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from geolog.shared.formatters import format_coordinates, format_distance_km, format_hits
from .models import Alert, Geocenter, Location, Traveler
from .service import AnalysisReport


class ReportGenerator:
    """Generate reports in various formats."""

    def format_alert(self, alert: Alert, traveler: Traveler) -> str:
        """One alert line, in the wording operators grep for."""
        loc = alert.location
        where = loc.locality or "unknown location"
        line = (
            f"in {loc.timestamp}, {traveler.user} connected from {where} "
            f"{format_hits(loc.weight)} times; src ip {loc.ip} was "
            f"{format_distance_km(alert.distance_km)} away from usual connection center"
        )
        if alert.geocenter.locality:
            line += f" in {alert.geocenter.locality}"
        return line

    def traveler_lines(self, traveler: Traveler, verbose: bool = False) -> List[str]:
        """Alert lines for one analyzed traveler, geocenter first if verbose."""
        lines = []
        if verbose and traveler.geocenter is not None:
            lines.append(self._format_traveler(traveler))
        for alert in traveler.alerts:
            lines.append(self.format_alert(alert, traveler))
        return lines

    def generate_console(
        self,
        report: AnalysisReport,
        verbose: bool = False,
        include_travelers: bool = True
    ) -> str:
        """
        Generate plain text report for console output.

        With include_travelers=False only skipped travelers and the
        summary are rendered, for callers that already streamed the
        alert lines.
        """

        lines = []
        if include_travelers:
            for traveler in report.travelers:
                lines.extend(self.traveler_lines(traveler, verbose=verbose))

        if report.skipped:
            lines.append("")
            for skipped in report.skipped:
                lines.append(f"skipped {skipped.traveler_id}: {skipped.reason}")

        lines.extend([
            "",
            f"Run at:         {report.run_at.strftime('%Y-%m-%d %H:%M:%S')}",
            f"Alert distance: {format_distance_km(report.alert_distance_km)}",
            f"Travelers:      {len(report.travelers)} (skipped: {len(report.skipped)})",
            f"Alerts:         {report.n_alerts}",
        ])

        return "\n".join(lines)

    def _format_traveler(self, traveler: Traveler) -> str:
        gc = traveler.geocenter
        where = f" ({gc.locality})" if gc.locality else ""
        return (
            f"{traveler.id}: geocenter {format_coordinates(gc.latitude, gc.longitude)}{where}, "
            f"avg distance {format_distance_km(gc.avg_dist)}, {format_hits(gc.weight)} hits"
        )

    def generate_json(self, report: AnalysisReport) -> Dict[str, Any]:
        """Generate JSON-serializable dict."""
        return {
            "run_at": report.run_at.isoformat(),
            "alert_distance_km": report.alert_distance_km,
            "summary": {
                "n_travelers": len(report.travelers),
                "n_skipped": len(report.skipped),
                "n_alerts": report.n_alerts,
            },
            "travelers": [self._traveler_to_dict(t) for t in report.travelers],
            "skipped": [
                {"traveler_id": s.traveler_id, "reason": s.reason}
                for s in report.skipped
            ],
        }

    def save_json(self, report: AnalysisReport, path: Path) -> None:
        """Save report as JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.generate_json(report), f, indent=2, ensure_ascii=False)

    def _traveler_to_dict(self, traveler: Traveler) -> Dict[str, Any]:
        return {
            "id": traveler.id,
            "user": traveler.user,
            "month": traveler.month,
            "alert_distance_km": traveler.alert_distance,
            "geocenter": self._geocenter_to_dict(traveler.geocenter),
            "locations": [self._location_to_dict(loc) for loc in traveler.locations],
            "alerts": [
                {
                    "ip": a.location.ip,
                    "timestamp": a.location.timestamp,
                    "locality": a.location.locality,
                    "hits": a.location.weight,
                    "distance_km": round(a.distance_km, 1),
                }
                for a in traveler.alerts
            ],
        }

    @staticmethod
    def _geocenter_to_dict(gc: Optional[Geocenter]) -> Optional[Dict[str, Any]]:
        if gc is None:
            return None
        return {
            "latitude": gc.latitude,
            "longitude": gc.longitude,
            "weight": gc.weight,
            "avg_dist_km": round(gc.avg_dist, 1),
            "locality": gc.locality,
        }

    @staticmethod
    def _location_to_dict(loc: Location) -> Dict[str, Any]:
        return {
            "ip": loc.ip,
            "timestamp": loc.timestamp,
            "latitude": loc.latitude,
            "longitude": loc.longitude,
            "weight": loc.weight,
            "locality": loc.locality,
        }
