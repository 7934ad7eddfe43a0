"""
Formatting utilities for report display.
"""


def format_distance_km(km: float) -> str:
    """
    Format a distance the way alert lines print it.

    Args:
        km: Distance in kilometers

    Returns:
        Formatted string (e.g., '9012km')
    """
    return f"{km:.0f}km"


def format_hits(weight: float) -> str:
    """Format a hit count without decimals."""
    return f"{weight:.0f}"


def format_coordinates(lat: float, lon: float) -> str:
    """
    Format a coordinate pair with hemisphere letters.

    Args:
        lat: Latitude in degrees
        lon: Longitude in degrees

    Returns:
        Formatted string (e.g., '37.7700N 122.4000W')
    """
    ns = "N" if lat >= 0 else "S"
    ew = "E" if lon >= 0 else "W"
    return f"{abs(lat):.4f}{ns} {abs(lon):.4f}{ew}"
