"""Node-link serialization for StationGraph."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict

if TYPE_CHECKING:
    from stationnet.graph.station_graph import StationGraph


def graph_to_node_link(graph: StationGraph) -> Dict[str, Any]:
    """Return a node-link representation suitable for direct JSON serialization.

    {"graph": {**attr},
     "nodes": [{"id": station_id, "attr": {**attr}}, ...],
     "links": [{"source": station_id, "target": station_id, "key": edge_id, "attr": {**attr}}, ...]}

    Station ids are used as-is for ``source`` and ``target``; no positional
    renumbering happens.
    """
    return {
        "graph": {**graph.graph},
        "nodes": [
            {"id": node_id, "attr": {**attrs}}
            for node_id, attrs in graph.nodes(data=True)
        ],
        "links": [
            {"source": u, "target": v, "key": key, "attr": {**attrs}}
            for u, v, key, attrs in graph.get_edges().values()
        ],
    }
