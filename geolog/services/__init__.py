"""
Collaborators around the core: log parsing, IP lookup, ingestion,
reverse geocoding.
"""
