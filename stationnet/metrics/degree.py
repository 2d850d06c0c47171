"""Density and degree centrality.

Degree is the undirected count used by the library default: every edge adds
one to its source and one to its target, parallel edges included.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

import networkx as nx

from stationnet.graph import StationGraph
from stationnet.model import Station


@dataclass(frozen=True)
class DegreeEntry:
    """One row of the degree table."""

    station: Station
    degree: int

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.station.id, "name": self.station.name, "degree": self.degree}


def density(graph: StationGraph) -> float:
    """Share of ordered station pairs joined by at least one route.

    Parallel routes count once and self-loops are ignored, so the value is
    always in ``[0, 1]``. A graph whose only edges are self-loops therefore
    has density 0.0 even though ``edge_count > 0``; ``raw_density`` still
    counts them. Returns 0.0 for graphs with fewer than two vertices.
    """
    n = graph.number_of_nodes()
    if n < 2:
        return 0.0
    pairs = {(u, v) for u, v in graph.edges() if u != v}
    return len(pairs) / (n * (n - 1))


def raw_density(graph: StationGraph) -> float:
    """Raw edge count over ``V * (V - 1)``, as ``networkx.density`` reports it.

    Parallel edges are all counted, so this can exceed 1.
    """
    return float(nx.density(graph))


def degree_table(graph: StationGraph) -> Tuple[DegreeEntry, ...]:
    """Stations sorted by undirected degree, highest first.

    Ties keep the order the stations had in the input table.
    """
    # sorted() is stable, so station order survives as the tie-break
    ranked = sorted(graph.stations_in_order(), key=lambda n: -graph.degree(n))
    return tuple(DegreeEntry(graph.station(n), int(graph.degree(n))) for n in ranked)
