"""
Tests for anomaly scoring.
"""

import pytest

from geolog.features.travelers.geocenter import estimate_geocenter
from geolog.features.travelers.models import Geocenter, Location, Traveler
from geolog.features.travelers.scoring import score
from geolog.shared.exceptions import DegenerateInputError
from geolog.shared.geo import distance_km


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def alice():
    """Mostly San Francisco, once from Paris."""
    traveler = Traveler(id="alice")
    traveler.locations.extend([
        Location("198.51.100.10", "2015/03", 37.77, -122.4, 100, "SF"),
        Location("203.0.113.7", "2015/03", 48.85, 2.35, 1, "Paris"),
    ])
    traveler.geocenter = estimate_geocenter(traveler.locations)
    return traveler


def at_center(lat, lon):
    return Geocenter(latitude=lat, longitude=lon, weight=1.0, avg_dist=0.0)


# =============================================================================
# Test Scenarios
# =============================================================================

class TestScore:

    def test_paris_flagged_sf_not(self, alice):
        alerts = score(alice, 5000)

        assert len(alerts) == 1
        alert = alerts[0]
        assert alert.location.locality == "Paris"
        assert alert.traveler_id == "alice"
        assert alert.distance_km > 5000
        assert 8000 < alert.distance_km < 9500
        assert alert.geocenter is alice.geocenter

    def test_geocenter_weighted_toward_sf(self, alice):
        gc = alice.geocenter
        assert distance_km(gc.latitude, gc.longitude, 37.77, -122.4) < 200

    def test_alerts_appended_to_traveler(self, alice):
        alerts = score(alice, 5000)
        assert alice.alerts == alerts

    def test_locations_untouched(self, alice):
        before = list(alice.locations)
        score(alice, 10)
        assert alice.locations == before

    def test_single_location_never_alerts(self):
        traveler = Traveler(id="bob")
        traveler.locations.append(Location("192.0.2.5", "2015/01", -33.87, 151.21, 3))
        traveler.geocenter = estimate_geocenter(traveler.locations)

        for threshold in (0.001, 1, 5000):
            assert score(traveler, threshold) == []

    def test_order_follows_locations(self):
        traveler = Traveler(id="carol")
        traveler.locations.extend([
            Location("192.0.2.1", "2015/01", 0.0, 90.0, 1),
            Location("192.0.2.2", "2015/01", 0.0, 0.0, 1),
            Location("192.0.2.3", "2015/01", 0.0, 60.0, 1),
        ])
        traveler.geocenter = at_center(0.0, -60.0)

        alerts = score(traveler, 1000)
        assert [a.location.ip for a in alerts] == ["192.0.2.1", "192.0.2.2", "192.0.2.3"]

    def test_no_geocenter_raises(self):
        traveler = Traveler(id="dave")
        traveler.locations.append(Location("192.0.2.1", "2015/01", 1.0, 1.0, 1))
        with pytest.raises(DegenerateInputError):
            score(traveler, 5000)


# =============================================================================
# Test Threshold Boundary
# =============================================================================

class TestThresholdBoundary:

    def setup_method(self):
        self.traveler = Traveler(id="erin")
        self.traveler.locations.append(Location("192.0.2.9", "2015/02", 10.0, 10.0, 1))
        self.traveler.geocenter = at_center(0.0, 0.0)
        self.exact = distance_km(10.0, 10.0, 0.0, 0.0)

    def test_exactly_at_threshold_not_flagged(self):
        assert score(self.traveler, self.exact) == []

    def test_just_below_threshold_flagged(self):
        alerts = score(self.traveler, self.exact - 0.001)
        assert len(alerts) == 1
        assert alerts[0].distance_km == self.exact

    def test_threshold_above_distance_not_flagged(self):
        assert score(self.traveler, self.exact + 0.001) == []
