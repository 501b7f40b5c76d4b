"""
EmployeeHub - Resilient data-access layer for a remote employee directory.

Exposes employee listing, lookup, search, salary aggregates, creation and
deletion on top of a rate-limited HTTP employee-record service.
"""

__version__ = "0.1.0"
