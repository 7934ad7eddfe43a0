"""
Shared constants for geocenter estimation and alerting.
"""

# Earth radius in kilometers (equatorial approximation)
EARTH_RADIUS_KM = 6378.0

# Distance from the geocenter beyond which a connection is an anomaly
DEFAULT_ALERT_DISTANCE_KM = 5000.0

# Google Geocoding API
GOOGLE_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
# Free tier is throttled at 5 qps
GEOCODE_DELAY_SECONDS = 0.222
GEOCODE_TIMEOUT_SECONDS = 10.0

# Placeholder key used by the command line default; means "not configured"
PLACEHOLDER_API_KEY = "someapikey"

# Result types accepted as a locality name, in order of preference
LOCALITY_RESULT_TYPES: tuple[str, ...] = ("locality", "administrative_area_level_1")

DEFAULT_MAXMIND_DB = "GeoIP2-City.mmdb"
