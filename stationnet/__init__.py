"""stationnet: network analysis of station and route tables.

Loads a stations table and a routes table, builds a directed multigraph,
computes degree, distance and connectivity statistics and renders a layout
image, a distance histogram and a text summary.

Primary API:
    Pipeline - Run all stages from a pipeline file or table paths
    load_dataset() - Read and clean the two tables
    build_graph() - Turn a dataset into a frozen StationGraph
    compute_metrics() - Collect every statistic into a MetricsReport
    ReportRenderer - Write images and format the summary

Example:
    from stationnet import Pipeline

    pipeline = Pipeline.from_paths("stations.csv", "routes.csv")
    report = pipeline.run()
    print(report.diameter, report.component_count)
"""

from __future__ import annotations

from stationnet import cli, logging
from stationnet._version import __version__
from stationnet.config import LoaderConfig, PipelineConfig, RenderConfig
from stationnet.errors import DataIntegrityError, EmptyGraphError, StationNetError
from stationnet.graph import StationGraph, build_graph
from stationnet.loader import dataset_from_records, load_dataset
from stationnet.metrics import MetricsReport, compute_metrics
from stationnet.model import Dataset, Route, Station
from stationnet.pipeline import Pipeline
from stationnet.render import ReportRenderer

__all__ = [
    # Version
    "__version__",
    # Model
    "Station",
    "Route",
    "Dataset",
    "StationGraph",
    # Stages
    "load_dataset",
    "dataset_from_records",
    "build_graph",
    "compute_metrics",
    "MetricsReport",
    "ReportRenderer",
    "Pipeline",
    # Config
    "LoaderConfig",
    "RenderConfig",
    "PipelineConfig",
    # Errors
    "StationNetError",
    "DataIntegrityError",
    "EmptyGraphError",
    # Submodules
    "cli",
    "logging",
]
