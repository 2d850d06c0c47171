"""Hop-count distance metrics: mean distance, histogram and diameter.

Edge weights are ignored; every route counts as one hop. All functions accept
an optional precomputed ``lengths`` table so callers can share a single BFS
pass, and all of them refuse graphs without vertices.
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple

import networkx as nx

from stationnet.errors import EmptyGraphError
from stationnet.graph import StationGraph
from stationnet.logging import get_logger

logger = get_logger(__name__)

#: source -> {target: hop count} for every target reachable from source.
DistanceTable = Dict[int, Dict[int, int]]


@dataclass(frozen=True)
class DistanceHistogram:
    """Counts of ordered station pairs by shortest-path length.

    Attributes:
        counts: Path length (>= 1) -> number of ordered pairs at that distance.
        unreachable: Number of ordered pairs (u != v) with no directed path.
    """

    counts: Dict[int, int] = field(default_factory=dict)
    unreachable: int = 0

    @property
    def reachable_pairs(self) -> int:
        return sum(self.counts.values())

    @property
    def total_pairs(self) -> int:
        return self.reachable_pairs + self.unreachable

    def to_dict(self) -> Dict[str, Any]:
        return {"counts": dict(self.counts), "unreachable": self.unreachable}


def _require_vertices(graph: StationGraph, metric: str) -> None:
    if graph.number_of_nodes() == 0:
        raise EmptyGraphError(f"Cannot compute {metric} on a graph with no vertices")


def _pair_lengths(lengths: DistanceTable) -> Iterator[int]:
    for source, row in lengths.items():
        for target, hops in row.items():
            if target != source:
                yield hops


def shortest_path_lengths(graph: StationGraph) -> DistanceTable:
    """Run one BFS per vertex and return the full hop-count table."""
    _require_vertices(graph, "shortest path lengths")
    return {
        source: dict(nx.single_source_shortest_path_length(graph, source))
        for source in graph.stations_in_order()
    }


def mean_distance(graph: StationGraph, lengths: Optional[DistanceTable] = None) -> float:
    """Average hop distance over ordered reachable pairs, self-pairs excluded.

    Returns ``nan`` when no pair of distinct stations is connected.
    """
    _require_vertices(graph, "mean distance")
    if lengths is None:
        lengths = shortest_path_lengths(graph)
    values = list(_pair_lengths(lengths))
    if not values:
        logger.warning("No reachable station pairs; mean distance is undefined")
        return math.nan
    return math.fsum(values) / len(values)


def distance_histogram(
    graph: StationGraph, lengths: Optional[DistanceTable] = None
) -> DistanceHistogram:
    """Histogram of hop distances plus the count of unreachable ordered pairs."""
    _require_vertices(graph, "distance histogram")
    if lengths is None:
        lengths = shortest_path_lengths(graph)
    counts = Counter(_pair_lengths(lengths))
    n = graph.number_of_nodes()
    reachable = sum(counts.values())
    return DistanceHistogram(
        counts=dict(sorted(counts.items())),
        unreachable=n * (n - 1) - reachable,
    )


def diameter(graph: StationGraph, lengths: Optional[DistanceTable] = None) -> int:
    """Largest finite hop distance between two stations (0 if none are connected)."""
    _require_vertices(graph, "diameter")
    if lengths is None:
        lengths = shortest_path_lengths(graph)
    return max(_pair_lengths(lengths), default=0)


def diameter_path(
    graph: StationGraph, lengths: Optional[DistanceTable] = None
) -> Tuple[int, ...]:
    """One shortest path whose length equals the diameter.

    The witness joins the first maximal pair in station order. Without any
    connected pair the witness is the first station on its own (length 0).
    """
    _require_vertices(graph, "diameter path")
    if lengths is None:
        lengths = shortest_path_lengths(graph)

    order = graph.stations_in_order()
    best_hops = 0
    best_pair: Optional[Tuple[int, int]] = None
    for source in order:
        row = lengths.get(source, {})
        for target in order:
            hops = row.get(target)
            if hops is not None and hops > best_hops:
                best_hops = hops
                best_pair = (source, target)

    if best_pair is None:
        return (order[0],)
    return tuple(nx.shortest_path(graph, *best_pair))
