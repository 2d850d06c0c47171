"""Network statistics over a StationGraph.

Every function here reads the graph and returns a value; none mutates it.
``compute_metrics`` bundles them into a ``MetricsReport``.
"""

from .components import ComponentSummary, strongly_connected_components
from .degree import DegreeEntry, degree_table, density, raw_density
from .distance import (
    DistanceHistogram,
    DistanceTable,
    diameter,
    diameter_path,
    distance_histogram,
    mean_distance,
    shortest_path_lengths,
)
from .report import MetricsReport, compute_metrics

__all__ = [
    "ComponentSummary",
    "DegreeEntry",
    "DistanceHistogram",
    "DistanceTable",
    "MetricsReport",
    "compute_metrics",
    "degree_table",
    "density",
    "diameter",
    "diameter_path",
    "distance_histogram",
    "mean_distance",
    "raw_density",
    "shortest_path_lengths",
    "strongly_connected_components",
]
