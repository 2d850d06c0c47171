"""Build the frozen station graph from a cleaned dataset.

Each station becomes one node keyed by its id. Each route becomes exactly one
directed edge carrying its weight; parallel routes stay parallel edges.
"""

from __future__ import annotations

import networkx as nx

from stationnet.errors import DataIntegrityError
from stationnet.graph.station_graph import StationGraph
from stationnet.logging import get_logger
from stationnet.model import Dataset

logger = get_logger(__name__)


def build_graph(dataset: Dataset) -> StationGraph:
    """Return a frozen ``StationGraph`` for ``dataset``.

    Args:
        dataset: Output of the loader.

    Returns:
        The graph. It is frozen; any attempt to add or remove nodes or
        edges raises ``networkx.NetworkXError``.

    Raises:
        DataIntegrityError: If the dataset repeats a station id or a route
            references a station that is not part of it.
    """
    graph = StationGraph(name="stations")
    try:
        for order, station in enumerate(dataset.stations):
            graph.add_station(station, order)
        for route in dataset.routes:
            graph.add_edge(route.source_id, route.target_id, weight=route.weight)
    except ValueError as exc:
        raise DataIntegrityError(f"Cannot build graph: {exc}") from exc

    nx.freeze(graph)
    logger.info(
        "Graph built: vertices=%d edges=%d parallel_pairs=%d",
        graph.vertex_count,
        graph.edge_count,
        sum(1 for u, v in set(graph.edges()) if len(graph.edges_between(u, v)) > 1),
    )
    return graph
