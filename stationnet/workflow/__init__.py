"""Pipeline steps, executed in a fixed order by ``stationnet.pipeline.Pipeline``."""

from .base import PipelineStep
from .build_graph import BuildGraph
from .compute_metrics import ComputeMetrics
from .load_dataset import LoadDataset
from .render_report import RenderReport

__all__ = [
    "PipelineStep",
    "LoadDataset",
    "BuildGraph",
    "ComputeMetrics",
    "RenderReport",
]
