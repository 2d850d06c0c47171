"""Metrics step: density, degrees, distances, diameter and components.

Results stored under the step name:
    - metadata: {}
    - data: MetricsReport.to_dict()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from stationnet.metrics import compute_metrics
from stationnet.workflow.base import PipelineStep

if TYPE_CHECKING:
    from stationnet.pipeline import Pipeline


@dataclass
class ComputeMetrics(PipelineStep):
    """Populate ``pipeline.report`` from ``pipeline.graph``."""

    def run(self, pipeline: Pipeline) -> None:
        if pipeline.graph is None:
            raise RuntimeError("ComputeMetrics requires a built graph")
        report = compute_metrics(pipeline.graph, top_n=pipeline.config.render.top_n)
        pipeline.report = report

        pipeline.results.put("metadata", {})
        pipeline.results.put("data", report.to_dict())
