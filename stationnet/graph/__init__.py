"""Graph primitives and helpers.

This package provides the strict multi-directed graph type `StationGraph`,
the builder that turns a loaded dataset into one (`builder`), and helper
modules for conversion (`convert`) and serialization (`io`).
"""

from .builder import build_graph
from .convert import to_digraph, to_undirected
from .station_graph import StationGraph

__all__ = ["StationGraph", "build_graph", "to_digraph", "to_undirected"]
