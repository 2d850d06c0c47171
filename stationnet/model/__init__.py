"""Typed records for stations, routes and a loaded dataset."""

from .station import Dataset, Route, Station

__all__ = ["Station", "Route", "Dataset"]
