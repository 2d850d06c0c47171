"""Utilities for building CLI artifact output paths.

Paths are built from an optional output directory, a prefix derived from the
pipeline file name, and a per-artifact suffix.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

RESULTS_SUFFIX = ".results.json"
LAYOUT_SUFFIX = ".layout.png"
DISTANCES_SUFFIX = ".distances.png"


def pipeline_prefix_from_path(pipeline_path: Path) -> str:
    """Return the pipeline filename stem used as the artifact prefix."""
    return pipeline_path.stem


def ensure_parent_dir(path: Path) -> None:
    """Ensure the parent directory exists for a file path."""
    path.parent.mkdir(parents=True, exist_ok=True)


def build_artifact_path(output_dir: Optional[Path], prefix: str, suffix: str) -> Path:
    """Compose an artifact path as output_dir / (prefix + suffix).

    If ``output_dir`` is None, the path is relative to the current working directory.
    """
    base = output_dir if output_dir is not None else Path.cwd()
    return base / f"{prefix}{suffix}"


def resolve_override_path(
    override: Optional[Path], output_dir: Optional[Path]
) -> Optional[Path]:
    """Resolve a user-supplied path with respect to an optional output directory.

    Absolute paths are returned as-is. Relative paths are placed under
    ``output_dir`` when provided, otherwise left relative to the CWD.
    """
    if override is None:
        return None
    if override.is_absolute():
        return override
    if output_dir is not None:
        return (output_dir / override).resolve()
    return override


def results_path_for_run(
    pipeline_path: Path,
    output_dir: Optional[Path],
    results_override: Optional[Path],
) -> Path:
    """Determine the results JSON path for the ``run`` command.

    Args:
        pipeline_path: The pipeline YAML file path.
        output_dir: Optional base output directory.
        results_override: Optional explicit results file path.

    Returns:
        ``results_override`` if given, else ``<stem>.results.json`` under
        ``output_dir`` or the CWD.
    """
    resolved_override = resolve_override_path(results_override, output_dir)
    if resolved_override is not None:
        return resolved_override

    prefix = pipeline_prefix_from_path(pipeline_path)
    if output_dir is not None:
        return build_artifact_path(output_dir, prefix, RESULTS_SUFFIX)
    return Path(f"{prefix}{RESULTS_SUFFIX}")


def figure_paths_for_run(
    pipeline_path: Path, output_dir: Optional[Path]
) -> tuple[Path, Path]:
    """Return ``(layout_png, distances_png)`` paths for the ``run`` command."""
    prefix = pipeline_prefix_from_path(pipeline_path)
    return (
        build_artifact_path(output_dir, prefix, LAYOUT_SUFFIX),
        build_artifact_path(output_dir, prefix, DISTANCES_SUFFIX),
    )
