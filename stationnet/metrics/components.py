"""Strongly connected components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

import networkx as nx

from stationnet.graph import StationGraph


@dataclass(frozen=True)
class ComponentSummary:
    """Partition of the stations into strongly connected components.

    Component ids run from 0 in order of decreasing size; equal sizes are
    ordered by their earliest station in the input table.

    Attributes:
        count: Number of components.
        sizes: Component sizes, descending.
        members: Station ids per component id, in station order.
        vertex_to_component: Station id -> component id.
    """

    count: int = 0
    sizes: Tuple[int, ...] = ()
    members: Tuple[Tuple[int, ...], ...] = ()
    vertex_to_component: Dict[int, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "sizes": list(self.sizes),
            "members": [list(m) for m in self.members],
            "vertex_to_component": dict(self.vertex_to_component),
        }


def strongly_connected_components(graph: StationGraph) -> ComponentSummary:
    """Group stations that can reach each other in both directions.

    Stations without a cycle through them form singleton components.
    """
    position = {node: i for i, node in enumerate(graph.stations_in_order())}
    components = [
        tuple(sorted(component, key=position.__getitem__))
        for component in nx.strongly_connected_components(graph)
    ]
    components.sort(key=lambda c: (-len(c), position[c[0]]))

    return ComponentSummary(
        count=len(components),
        sizes=tuple(len(c) for c in components),
        members=tuple(components),
        vertex_to_component={
            node: cid for cid, component in enumerate(components) for node in component
        },
    )
