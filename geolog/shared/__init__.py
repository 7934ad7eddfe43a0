"""
Shared utilities: geo math, constants, errors, formatters.
"""
