"""
geolog - flag connections made far from a user's usual location.
"""

__version__ = "0.1.0"
