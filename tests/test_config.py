"""
Tests for Settings validation.
"""

import pytest
from pydantic import ValidationError

from geolog.config import Settings
from geolog.shared.constants import DEFAULT_ALERT_DISTANCE_KM, GEOCODE_DELAY_SECONDS


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("GEOLOG_ALERT_DISTANCE_KM", raising=False)
        monkeypatch.delenv("GEOLOG_GOOGLE_API_KEY", raising=False)
        s = Settings(_env_file=None)
        assert s.alert_distance_km == DEFAULT_ALERT_DISTANCE_KM
        assert s.reverse_geocode_delay == GEOCODE_DELAY_SECONDS
        assert s.group_by_month is False
        assert s.reverse_geocoding_enabled is False

    def test_placeholder_key_disabled(self):
        s = Settings(google_api_key="someapikey")
        assert s.google_api_key is None
        assert s.reverse_geocoding_enabled is False

    def test_real_key_enabled(self):
        s = Settings(google_api_key="AIza-test")
        assert s.reverse_geocoding_enabled is True

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("GEOLOG_ALERT_DISTANCE_KM", "1234.5")
        monkeypatch.setenv("GEOLOG_GROUP_BY_MONTH", "true")
        s = Settings(_env_file=None)
        assert s.alert_distance_km == 1234.5
        assert s.group_by_month is True

    @pytest.mark.parametrize("distance", [0, -10.0])
    def test_non_positive_distance_rejected(self, distance):
        with pytest.raises(ValidationError):
            Settings(alert_distance_km=distance)
