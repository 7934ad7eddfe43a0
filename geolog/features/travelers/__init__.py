"""
Traveler geocenter and anomaly module.

Usage:
    from geolog.features.travelers import TravelerAnalysisService, Traveler
    from geolog.features.travelers.geocenter import estimate_geocenter

Components:
- estimate_geocenter: Weighted center, antimeridian aware
- score: Distance-threshold anomaly detection
- TravelerAnalysisService: Per-traveler orchestration
- ReportGenerator: Console and JSON output
"""

from .models import Location, Geocenter, Alert, Traveler, SkippedTraveler
from .geocenter import estimate_geocenter
from .scoring import score
from .service import TravelerAnalysisService, AnalysisReport
from .report import ReportGenerator

__all__ = [
    # Models
    "Location",
    "Geocenter",
    "Alert",
    "Traveler",
    "SkippedTraveler",
    # Core
    "estimate_geocenter",
    "score",
    # Service
    "TravelerAnalysisService",
    "AnalysisReport",
    # Reporting
    "ReportGenerator",
]
