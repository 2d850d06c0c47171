"""Shared fixtures: small in-memory datasets and CSV writers."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Sequence

import matplotlib
import pytest

from stationnet.graph import StationGraph, build_graph
from stationnet.loader import dataset_from_records
from stationnet.logging import reset_logging, setup_root_logger
from stationnet.model import Dataset

matplotlib.use("Agg")

INTEGRATION_DIR = Path(__file__).parent / "integration"


@pytest.fixture(autouse=True)
def _restore_logging():
    """CLI runs change the global level; start every test from a clean state."""
    reset_logging()
    setup_root_logger()
    yield
    reset_logging()
    setup_root_logger()


@pytest.fixture
def chain_rows() -> tuple[List[Dict], List[Dict]]:
    """A -> B -> C -> D with 1-based ids."""
    stations = [
        {"index": 1, "name": "A"},
        {"index": 2, "name": "B"},
        {"index": 3, "name": "C"},
        {"index": 4, "name": "D"},
    ]
    routes = [
        {"source": 1, "target": 2, "weight": 1},
        {"source": 2, "target": 3, "weight": 1},
        {"source": 3, "target": 4, "weight": 1},
    ]
    return stations, routes


@pytest.fixture
def chain_dataset(chain_rows) -> Dataset:
    return dataset_from_records(*chain_rows)


@pytest.fixture
def chain_graph(chain_dataset) -> StationGraph:
    return build_graph(chain_dataset)


@pytest.fixture
def make_graph() -> Callable[..., StationGraph]:
    """Build a graph from ``n`` unnamed-but-labelled stations and (u, v) pairs."""

    def _make(n: int, edges: Sequence[tuple[int, int]]) -> StationGraph:
        stations = [{"index": i, "name": f"S{i}"} for i in range(1, n + 1)]
        routes = [{"source": u, "target": v, "weight": 1} for u, v in edges]
        return build_graph(dataset_from_records(stations, routes))

    return _make


@pytest.fixture
def write_tables(tmp_path: Path) -> Callable[[str, str], tuple[Path, Path]]:
    """Write stations and routes CSV text into ``tmp_path``."""

    def _write(stations_csv: str, routes_csv: str) -> tuple[Path, Path]:
        stations_path = tmp_path / "stations.csv"
        routes_path = tmp_path / "routes.csv"
        stations_path.write_text(stations_csv)
        routes_path.write_text(routes_csv)
        return stations_path, routes_path

    return _write


@pytest.fixture
def chain_pipeline_file(tmp_path: Path, write_tables) -> Path:
    """A pipeline YAML next to the chain tables, with small figures."""
    write_tables(
        "index,name\n1,A\n2,B\n3,C\n4,D\n",
        "source,target,weight\n1,2,1\n2,3,1\n3,4,1\n",
    )
    path = tmp_path / "chain.yaml"
    path.write_text(
        "stations: stations.csv\n"
        "routes: routes.csv\n"
        "seed: 7\n"
        "render:\n"
        "  figsize: [3, 3]\n"
        "  dpi: 40\n"
        "  iterations: 10\n"
    )
    return path
