from pathlib import Path

from stationnet.utils.output_paths import (
    figure_paths_for_run,
    resolve_override_path,
    results_path_for_run,
)


def test_results_path_defaults_to_cwd_relative():
    assert results_path_for_run(Path("dir/net.yaml"), None, None) == Path(
        "net.results.json"
    )


def test_results_path_under_output_dir(tmp_path: Path):
    assert (
        results_path_for_run(Path("net.yaml"), tmp_path, None)
        == tmp_path / "net.results.json"
    )


def test_results_override_wins(tmp_path: Path):
    override = tmp_path / "custom.json"
    assert results_path_for_run(Path("net.yaml"), None, override) == override


def test_relative_override_placed_under_output_dir(tmp_path: Path):
    resolved = resolve_override_path(Path("x.json"), tmp_path)
    assert resolved == (tmp_path / "x.json").resolve()
    assert resolve_override_path(None, tmp_path) is None
    assert resolve_override_path(Path("x.json"), None) == Path("x.json")


def test_figure_paths(tmp_path: Path):
    layout, distances = figure_paths_for_run(Path("a/net.yaml"), tmp_path)
    assert layout == tmp_path / "net.layout.png"
    assert distances == tmp_path / "net.distances.png"
