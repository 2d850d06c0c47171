"""Strict multi-directed graph keyed by station id.

`StationGraph` extends `networkx.MultiDiGraph` to enforce explicit node
management and unique integer edge keys. Node ids are the station ids handed
in by the loader and are never renumbered. Once built, the graph is frozen
with `networkx.freeze`, so every metric reads the same snapshot.
"""

from __future__ import annotations

from typing import Any, Dict, Hashable, List, Optional, Tuple

import networkx as nx

from stationnet.model import Station

NodeID = int
EdgeID = Hashable
AttrDict = Dict[str, Any]
EdgeTuple = Tuple[NodeID, NodeID, EdgeID, AttrDict]


class StationGraph(nx.MultiDiGraph):
    """A multi-directed graph of stations with strict rules and unique edge IDs.

    This class enforces:
      - No automatic creation of missing nodes when adding an edge.
      - No duplicate nodes (raises ValueError on duplicates).
      - No duplicate edges by key (raises ValueError on duplicates).
      - Each edge key is unique; by default a monotonically increasing
        integer is assigned.

    Inherits from:
        networkx.MultiDiGraph
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize a StationGraph.

        Attributes:
            _edges: Map edge key to ``(source_node, target_node, edge_key, attribute_dict)``.
        """
        super().__init__(*args, **kwargs)
        self._edges: Dict[EdgeID, EdgeTuple] = {}
        # Only advances; keys are never reused.
        self._next_edge_id: int = 0

    def new_edge_key(self, u: NodeID, v: NodeID, key: Optional[int] = None) -> int:  # type: ignore[override]
        """Return a new unique integer edge ID.

        Signature matches NetworkX's ``new_edge_key(self, u, v, key=None)``.
        """
        next_edge_id = self._next_edge_id
        self._next_edge_id += 1
        return int(next_edge_id)

    #
    # Construction
    #
    def add_node(self, node_for_adding: NodeID, **attr: Any) -> None:
        """Add a single node, disallowing duplicates.

        Raises:
            ValueError: If the node already exists in the graph.
        """
        if node_for_adding in self:
            raise ValueError(f"Node '{node_for_adding}' already exists in this graph.")
        super().add_node(node_for_adding, **attr)

    def add_station(self, station: Station, order: int) -> None:
        """Add a station node carrying its name, load position and coordinates."""
        self.add_node(
            station.id,
            name=station.name,
            order=order,
            latitude=station.latitude,
            longitude=station.longitude,
        )

    def add_edge(  # pyright: ignore[reportIncompatibleMethodOverride]
        self,
        u_for_edge: NodeID,
        v_for_edge: NodeID,
        key: Optional[EdgeID] = None,
        **attr: Any,
    ) -> EdgeID:
        """Add a directed edge from u_for_edge to v_for_edge.

        Both endpoints must already exist. Without an explicit key a new
        integer key is assigned via ``new_edge_key``.

        Returns:
            EdgeID: The key associated with this new edge.

        Raises:
            ValueError: If either node does not exist, or if the key is already in use.
        """
        if u_for_edge not in self:
            raise ValueError(f"Source node '{u_for_edge}' does not exist.")
        if v_for_edge not in self:
            raise ValueError(f"Target node '{v_for_edge}' does not exist.")

        if key is None:
            key = self.new_edge_key(u_for_edge, v_for_edge)
        else:
            if key in self._edges:
                raise ValueError(f"Edge with id '{key}' already exists.")
            # Keep the auto counter ahead of explicit integer keys
            if isinstance(key, int) and key >= self._next_edge_id:
                self._next_edge_id = key + 1

        super().add_edge(u_for_edge, v_for_edge, key=key, **attr)
        assert key is not None
        self._edges[key] = (
            u_for_edge,
            v_for_edge,
            key,
            self[u_for_edge][v_for_edge][key],  # pyright: ignore[reportArgumentType]
        )
        return key

    #
    # Read access
    #
    @property
    def vertex_count(self) -> int:
        return self.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return self.number_of_edges()

    def get_nodes(self) -> Dict[NodeID, AttrDict]:
        """Return a mapping of node ID to its attributes."""
        return dict(self.nodes(data=True))

    def get_edges(self) -> Dict[EdgeID, EdgeTuple]:
        """Return a mapping of edge key to ``(source, target, key, attributes)``."""
        return self._edges

    def get_edge_attr(self, key: EdgeID) -> AttrDict:
        """Return the attribute dictionary of a specific edge.

        Raises:
            ValueError: If no edge with this key is found.
        """
        if key not in self._edges:
            raise ValueError(f"Edge with id='{key}' not found.")
        return self._edges[key][3]

    def edge_weight(self, key: EdgeID) -> int:
        """Return the route weight stored on an edge."""
        return self.get_edge_attr(key)["weight"]

    def edges_between(self, u: NodeID, v: NodeID) -> List[EdgeID]:
        """List all edge keys from node u to node v (empty if none)."""
        if u not in self.succ or v not in self.succ[u]:
            return []
        return list(self.succ[u][v].keys())

    def station(self, node: NodeID) -> Station:
        """Rebuild the ``Station`` record for a node.

        Raises:
            ValueError: If the node does not exist.
        """
        if node not in self:
            raise ValueError(f"Node '{node}' does not exist.")
        data = self.nodes[node]
        return Station(
            id=node,
            name=data.get("name", ""),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
        )

    def stations_in_order(self) -> List[NodeID]:
        """Node ids sorted by the position their station had in the input table."""
        return sorted(self.nodes, key=lambda n: self.nodes[n].get("order", n))

    def to_dict(self) -> Dict[str, Any]:
        """Return a node-link dictionary suitable for JSON serialization."""
        from stationnet.graph.io import graph_to_node_link

        return graph_to_node_link(self)
