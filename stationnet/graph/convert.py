"""Conversions from StationGraph to simple NetworkX graphs.

Parallel routes between the same ordered pair are consolidated into one edge
that keeps the smallest weight and the number of routes as ``count``.
"""

from __future__ import annotations

import networkx as nx

from stationnet.graph.station_graph import StationGraph


def to_digraph(graph: StationGraph) -> nx.DiGraph:
    """Collapse a StationGraph into a simple ``networkx.DiGraph``.

    Node attributes are copied. Each edge carries ``weight`` (minimum over
    the parallel routes) and ``count`` (number of parallel routes).
    """
    simple = nx.DiGraph()
    simple.add_nodes_from(graph.get_nodes().items())

    for u, neighbors in graph.adjacency():
        for v, edges in neighbors.items():
            weights = [attrs.get("weight", 1) for attrs in edges.values()]
            simple.add_edge(u, v, weight=min(weights), count=len(weights))
    return simple


def to_undirected(graph: StationGraph) -> nx.Graph:
    """Simple undirected view used for layout; direction and multiplicity are dropped."""
    return to_digraph(graph).to_undirected()
