"""Pipeline object that runs loader, graph builder, metrics and renderer in order."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List, Optional

from stationnet.config import DEFAULT_SEED, LoaderConfig, PipelineConfig, RenderConfig
from stationnet.graph import StationGraph
from stationnet.logging import get_logger
from stationnet.metrics import MetricsReport
from stationnet.model import Dataset
from stationnet.pipeline_file import load_pipeline_yaml
from stationnet.render import RenderResult
from stationnet.results import Results
from stationnet.utils.seed_manager import SeedManager
from stationnet.workflow import (
    BuildGraph,
    ComputeMetrics,
    LoadDataset,
    PipelineStep,
    RenderReport,
)

logger = get_logger(__name__)


def default_steps() -> List[PipelineStep]:
    """The four stages, in the only order they can run."""
    return [
        LoadDataset(name="load_dataset"),
        BuildGraph(name="build_graph"),
        ComputeMetrics(name="compute_metrics"),
        RenderReport(name="render_report"),
    ]


@dataclass
class Pipeline:
    """One analysis run over a stations/routes pair.

    Each step reads what the previous one left on the pipeline and adds its
    own output; nothing is shared between pipeline instances.

    Typical usage example:

        pipeline = Pipeline.from_file(Path("analysis.yaml"))
        report = pipeline.run()
        print(pipeline.rendering.summary)

    Attributes:
        config: Paths, seed and component options.
        steps: Steps to execute, in order.
        results: Step-scoped results store.
        layout_path: Where the layout image goes (None: not written).
        histogram_path: Where the histogram chart goes (None: not written).
        dataset: Loader output, set by ``LoadDataset``.
        graph: Frozen graph, set by ``BuildGraph``.
        report: Metrics, set by ``ComputeMetrics``.
        rendering: Renderer output, set by ``RenderReport``.
    """

    config: PipelineConfig
    steps: List[PipelineStep] = field(default_factory=default_steps)
    results: Results = field(default_factory=Results)
    layout_path: Optional[Path] = None
    histogram_path: Optional[Path] = None
    dataset: Optional[Dataset] = field(default=None, init=False)
    graph: Optional[StationGraph] = field(default=None, init=False)
    report: Optional[MetricsReport] = field(default=None, init=False)
    rendering: Optional[RenderResult] = field(default=None, init=False)
    _execution_counter: int = field(default=0, init=False, repr=False)

    @property
    def seed(self) -> Optional[int]:
        return self.config.seed

    @property
    def seed_manager(self) -> SeedManager:
        """Seed manager configured with this pipeline's master seed."""
        return SeedManager(self.seed)

    def next_execution_order(self) -> int:
        order = self._execution_counter
        self._execution_counter += 1
        return order

    def snapshot(self) -> dict:
        """JSON-safe copy of the configuration for the results document."""
        return {
            "stations": str(self.config.stations),
            "routes": str(self.config.routes),
            "seed": self.config.seed,
            "loader": asdict(self.config.loader),
            "render": asdict(self.config.render),
        }

    def run(self) -> MetricsReport:
        """Execute every step in order and return the metrics report.

        Raises:
            DataIntegrityError: If the input tables are inconsistent.
            EmptyGraphError: If the dataset has no stations.
        """
        self._execution_counter = 0
        self.results.set_pipeline_snapshot(self.snapshot())
        if self.seed is None:
            logger.warning("No seed configured; layout output is not reproducible")
        for step in self.steps:
            step.execute(self)
        if self.report is None:
            raise RuntimeError("Pipeline finished without a metrics report")
        return self.report

    @classmethod
    def from_paths(
        cls,
        stations: Path,
        routes: Path,
        seed: Optional[int] = DEFAULT_SEED,
        loader: Optional[LoaderConfig] = None,
        render: Optional[RenderConfig] = None,
        **kwargs,
    ) -> Pipeline:
        """Build a pipeline directly from table paths.

        Extra keyword arguments (``layout_path``, ``histogram_path``, ...) are
        passed to the constructor.
        """
        config = PipelineConfig(
            stations=Path(stations),
            routes=Path(routes),
            seed=seed,
            loader=loader or LoaderConfig(),
            render=render or RenderConfig(),
        )
        return cls(config=config, **kwargs)

    @classmethod
    def from_yaml(
        cls, yaml_str: str, base_dir: Optional[Path] = None, **kwargs
    ) -> Pipeline:
        """Build a pipeline from a pipeline-file YAML string.

        Relative table paths are resolved against ``base_dir`` (CWD if None).

        Raises:
            ValueError: If the YAML is not a mapping or has unknown keys.
            jsonschema.ValidationError: If the YAML does not match the schema.
        """
        data = load_pipeline_yaml(yaml_str)
        config = PipelineConfig.from_dict(data, base_dir=base_dir)
        logger.debug(
            "Pipeline config: stations=%s routes=%s seed=%s",
            config.stations,
            config.routes,
            config.seed,
        )
        return cls(config=config, **kwargs)

    @classmethod
    def from_file(cls, path: Path, **kwargs) -> Pipeline:
        """Read a pipeline file; table paths are relative to its directory."""
        path = Path(path)
        return cls.from_yaml(path.read_text(), base_dir=path.parent, **kwargs)
