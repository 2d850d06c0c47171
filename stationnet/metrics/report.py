"""Compute every metric over a station graph into one read-only report."""

from __future__ import annotations

import math
from dataclasses import dataclass
from time import perf_counter
from typing import Any, Dict, Optional, Tuple

from stationnet.graph import StationGraph
from stationnet.logging import get_logger
from stationnet.metrics.components import strongly_connected_components
from stationnet.metrics.degree import DegreeEntry, degree_table, density, raw_density
from stationnet.metrics.distance import (
    DistanceHistogram,
    diameter,
    diameter_path,
    distance_histogram,
    mean_distance,
    shortest_path_lengths,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class MetricsReport:
    """Snapshot of the network statistics of one graph.

    Attributes:
        vertex_count: Number of stations.
        edge_count: Number of routes (parallel routes counted).
        density: Distinct connected ordered pairs over ``V * (V - 1)``.
        raw_density: Raw edge count over ``V * (V - 1)``.
        degree_table: Stations with their undirected degree, highest first.
        mean_distance: Mean hop distance over reachable ordered pairs.
        distance_histogram: Hop distance counts plus unreachable pairs.
        diameter: Largest finite hop distance.
        diameter_path: Witness path with ``diameter`` edges.
        component_count: Number of strongly connected components.
        component_sizes: Component sizes, descending.
        vertex_to_component: Station id -> component id.
    """

    vertex_count: int
    edge_count: int
    density: float
    raw_density: float
    degree_table: Tuple[DegreeEntry, ...]
    mean_distance: float
    distance_histogram: DistanceHistogram
    diameter: int
    diameter_path: Tuple[int, ...]
    component_count: int
    component_sizes: Tuple[int, ...]
    vertex_to_component: Dict[int, int]

    def degree_of(self, station_id: int) -> int:
        """Degree of one station.

        Raises:
            KeyError: If the station is not in the report.
        """
        for entry in self.degree_table:
            if entry.station.id == station_id:
                return entry.degree
        raise KeyError(station_id)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-safe dictionary (``nan`` mean distance becomes None)."""
        return {
            "vertex_count": self.vertex_count,
            "edge_count": self.edge_count,
            "density": self.density,
            "raw_density": self.raw_density,
            "degree_table": [entry.to_dict() for entry in self.degree_table],
            "mean_distance": None
            if math.isnan(self.mean_distance)
            else self.mean_distance,
            "distance_histogram": self.distance_histogram.to_dict(),
            "diameter": self.diameter,
            "diameter_path": list(self.diameter_path),
            "component_count": self.component_count,
            "component_sizes": list(self.component_sizes),
            "vertex_to_component": dict(self.vertex_to_component),
        }


def compute_metrics(graph: StationGraph, top_n: Optional[int] = None) -> MetricsReport:
    """Compute all metrics with a single shared BFS pass.

    Args:
        graph: Frozen station graph.
        top_n: Only used for the DEBUG log line listing the busiest stations.

    Raises:
        EmptyGraphError: If the graph has no vertices.
    """
    start = perf_counter()
    lengths = shortest_path_lengths(graph)
    components = strongly_connected_components(graph)
    degrees = degree_table(graph)

    report = MetricsReport(
        vertex_count=graph.vertex_count,
        edge_count=graph.edge_count,
        density=density(graph),
        raw_density=raw_density(graph),
        degree_table=degrees,
        mean_distance=mean_distance(graph, lengths),
        distance_histogram=distance_histogram(graph, lengths),
        diameter=diameter(graph, lengths),
        diameter_path=diameter_path(graph, lengths),
        component_count=components.count,
        component_sizes=components.sizes,
        vertex_to_component=components.vertex_to_component,
    )

    logger.info(
        "Metrics: vertices=%d edges=%d density=%.4f mean_distance=%.3f "
        "diameter=%d components=%d (%.3fs)",
        report.vertex_count,
        report.edge_count,
        report.density,
        report.mean_distance,
        report.diameter,
        report.component_count,
        perf_counter() - start,
    )
    if top_n:
        logger.debug(
            "Top %d stations by degree: %s",
            top_n,
            ", ".join(f"{e.station.name or e.station.id}={e.degree}" for e in degrees[:top_n]),
        )
    return report
