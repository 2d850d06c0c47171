"""Utility helpers used across stationnet.

Small, self-contained modules that do not depend on project internals.
"""
