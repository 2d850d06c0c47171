"""Rendering step: layout image, histogram chart and text summary.

Images are written only when rendering is enabled and the pipeline has
output paths for them. The layout seed is derived from the pipeline's master
seed and recorded with the step.

Results stored under the step name:
    - metadata: {}
    - data: { layout_path, histogram_path, seed, summary }
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from stationnet.render import ReportRenderer
from stationnet.workflow.base import PipelineStep

if TYPE_CHECKING:
    from stationnet.pipeline import Pipeline


@dataclass
class RenderReport(PipelineStep):
    """Populate ``pipeline.rendering`` from the graph and report."""

    def step_seed(self, pipeline: Pipeline) -> Optional[int]:
        return pipeline.seed_manager.derive_seed("layout")

    def run(self, pipeline: Pipeline) -> None:
        if pipeline.graph is None or pipeline.report is None:
            raise RuntimeError("RenderReport requires a graph and a metrics report")

        render_cfg = pipeline.config.render
        enabled = render_cfg.enabled
        result = ReportRenderer(render_cfg).render(
            pipeline.graph,
            pipeline.report,
            layout_path=pipeline.layout_path if enabled else None,
            histogram_path=pipeline.histogram_path if enabled else None,
            seed=self.step_seed(pipeline),
        )
        pipeline.rendering = result

        pipeline.results.put("metadata", {})
        pipeline.results.put("data", {**result.to_dict(), "summary": result.summary})
