"""
Error taxonomy.

InputError is raised at ingestion, DegenerateInputError by the geocenter
estimator, ExternalServiceError by the reverse geocoder. None of them
is fatal to a whole run: callers record them per entry or per traveler.
"""


class GeologError(Exception):
    """Base geolog error."""
    pass


class InputError(GeologError):
    """Malformed or out-of-range location data."""
    pass


class DegenerateInputError(GeologError):
    """No locations, or zero total weight, for a traveler."""
    pass


class ExternalServiceError(GeologError):
    """Reverse geocoding failed (network, quota, bad response)."""
    pass
