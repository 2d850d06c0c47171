"""Tests for individual pipeline steps and the execute() wrapper."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from stationnet.errors import DataIntegrityError
from stationnet.pipeline import Pipeline
from stationnet.results import Results
from stationnet.workflow import (
    BuildGraph,
    ComputeMetrics,
    LoadDataset,
    PipelineStep,
    RenderReport,
)


@pytest.fixture
def chain_pipeline(write_tables, tmp_path) -> Pipeline:
    stations, routes = write_tables(
        "index,name\n1,A\n2,B\n3,C\n4,D\n",
        "source,target,weight\n1,2,1\n2,3,1\n3,4,1\n",
    )
    return Pipeline.from_paths(stations, routes, seed=5)


@dataclass
class _Recorder(PipelineStep):
    def run(self, pipeline) -> None:
        pipeline.results.put("data", {"ran": True})


@dataclass
class _Boom(PipelineStep):
    def run(self, pipeline) -> None:
        raise DataIntegrityError("bad row")


def _mock_pipeline() -> MagicMock:
    pipeline = MagicMock()
    pipeline.results = Results()
    pipeline.next_execution_order.side_effect = [0, 1, 2]
    return pipeline


class TestExecuteWrapper:
    def test_records_metadata_and_duration(self):
        pipeline = _mock_pipeline()
        _Recorder(name="rec").execute(pipeline)

        md = pipeline.results.get_step_metadata("rec")
        assert md.step_type == "_Recorder"
        assert md.execution_order == 0
        assert md.seed is None
        stored = pipeline.results.get_step("rec")
        assert stored["data"] == {"ran": True}
        assert stored["metadata"]["duration_sec"] >= 0

    def test_unnamed_step_uses_class_name(self):
        pipeline = _mock_pipeline()
        _Recorder().execute(pipeline)
        assert pipeline.results.get_step_metadata("_Recorder") is not None

    def test_failure_is_logged_and_reraised(self, caplog):
        pipeline = _mock_pipeline()
        with pytest.raises(DataIntegrityError):
            _Boom(name="boom").execute(pipeline)
        assert "Failed pipeline step: boom" in caplog.text
        # Scope is closed even on failure
        with pytest.raises(RuntimeError):
            pipeline.results.put("data", {})


class TestSteps:
    def test_load_dataset(self, chain_pipeline):
        LoadDataset(name="load").execute(chain_pipeline)
        assert chain_pipeline.dataset is not None
        data = chain_pipeline.results.get_step("load")["data"]
        assert data["station_count"] == 4
        assert data["route_count"] == 3
        assert data["id_shift"] == 0

    def test_build_graph_requires_dataset(self, chain_pipeline):
        with pytest.raises(RuntimeError, match="loaded dataset"):
            BuildGraph(name="build").execute(chain_pipeline)

    def test_build_graph(self, chain_pipeline):
        LoadDataset(name="load").execute(chain_pipeline)
        BuildGraph(name="build").execute(chain_pipeline)
        assert chain_pipeline.graph.vertex_count == 4
        stored = chain_pipeline.results.get_step("build")
        assert stored["metadata"]["edge_count"] == 3
        assert len(stored["data"]["graph"]["links"]) == 3

    def test_compute_metrics_requires_graph(self, chain_pipeline):
        with pytest.raises(RuntimeError, match="built graph"):
            ComputeMetrics(name="metrics").execute(chain_pipeline)

    def test_compute_metrics(self, chain_pipeline):
        for step in (LoadDataset(name="l"), BuildGraph(name="b")):
            step.execute(chain_pipeline)
        ComputeMetrics(name="m").execute(chain_pipeline)
        assert chain_pipeline.report.diameter == 3
        assert chain_pipeline.results.get_step("m")["data"]["diameter"] == 3

    def test_render_report_records_derived_seed(self, chain_pipeline, tmp_path: Path):
        chain_pipeline.layout_path = tmp_path / "l.png"
        chain_pipeline.histogram_path = tmp_path / "h.png"
        for step in (LoadDataset(name="l"), BuildGraph(name="b"), ComputeMetrics(name="m")):
            step.execute(chain_pipeline)
        RenderReport(name="r").execute(chain_pipeline)

        expected_seed = chain_pipeline.seed_manager.derive_seed("layout")
        assert chain_pipeline.rendering.seed == expected_seed
        assert chain_pipeline.results.get_step_metadata("r").seed == expected_seed
        assert (tmp_path / "l.png").exists()
        assert "NETWORK SUMMARY" in chain_pipeline.results.get_step("r")["data"]["summary"]

    def test_render_report_requires_report(self, chain_pipeline):
        with pytest.raises(RuntimeError, match="metrics report"):
            RenderReport(name="r").execute(chain_pipeline)
