"""Graph building step.

Builds the frozen station graph and stores its node-link representation.

Results stored under the step name:
    - metadata: vertex and edge counts
    - data: { graph: node-link dict }
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from stationnet.graph import build_graph
from stationnet.workflow.base import PipelineStep

if TYPE_CHECKING:
    from stationnet.pipeline import Pipeline


@dataclass
class BuildGraph(PipelineStep):
    """Populate ``pipeline.graph`` from ``pipeline.dataset``."""

    def run(self, pipeline: Pipeline) -> None:
        if pipeline.dataset is None:
            raise RuntimeError("BuildGraph requires a loaded dataset")
        graph = build_graph(pipeline.dataset)
        pipeline.graph = graph

        pipeline.results.put(
            "metadata",
            {"vertex_count": graph.vertex_count, "edge_count": graph.edge_count},
        )
        pipeline.results.put("data", {"graph": graph.to_dict()})
