"""Configuration classes for stationnet components."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

#: Master seed used when a pipeline file does not set one.
DEFAULT_SEED = 42


@dataclass(frozen=True)
class LoaderConfig:
    """Column names and cleaning rules for the stations and routes tables."""

    delimiter: str = ","

    # Stations table
    index_column: str = "index"
    name_column: str = "name"
    latitude_column: str = "latitude"
    longitude_column: str = "longitude"

    # Routes table
    source_column: str = "source"
    target_column: str = "target"
    weight_column: str = "weight"

    # Drop nameless stations that no route references
    drop_sentinels: bool = True

    allowed_weights: Tuple[int, ...] = (1, 2, 3)


@dataclass(frozen=True)
class RenderConfig:
    """Options for the layout image, histogram chart and text summary."""

    enabled: bool = True

    # Rows shown in the degree table of the text summary
    top_n: int = 10

    figsize: Tuple[float, float] = (10.0, 10.0)
    dpi: int = 150

    # Spring layout iterations
    iterations: int = 50

    # Node marker area = base + scale * degree
    node_size_base: float = 10.0
    node_size_scale: float = 6.0

    with_labels: bool = False


def _section(cls: Any, data: Optional[Dict[str, Any]]) -> Any:
    """Build a config dataclass from a mapping, converting lists to tuples."""
    if not data:
        return cls()
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(
            f"Unrecognized key(s) for {cls.__name__}: {', '.join(sorted(unknown))}"
        )
    kwargs = {k: tuple(v) if isinstance(v, list) else v for k, v in data.items()}
    return cls(**kwargs)


@dataclass(frozen=True)
class PipelineConfig:
    """Everything a single pipeline run needs.

    Attributes:
        stations: Path to the stations table.
        routes: Path to the routes table.
        seed: Master seed; per-step seeds are derived from it. None disables
            seeding (layout is then not reproducible).
        loader: Loader options.
        render: Renderer options.
    """

    stations: Path
    routes: Path
    seed: Optional[int] = DEFAULT_SEED
    loader: LoaderConfig = field(default_factory=LoaderConfig)
    render: RenderConfig = field(default_factory=RenderConfig)

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], base_dir: Optional[Path] = None
    ) -> PipelineConfig:
        """Build a config from validated pipeline-file data.

        Relative ``stations`` / ``routes`` paths are resolved against
        ``base_dir`` (normally the directory holding the pipeline file).
        """
        base = base_dir if base_dir is not None else Path.cwd()

        def resolve(raw: str) -> Path:
            path = Path(raw)
            return path if path.is_absolute() else base / path

        return cls(
            stations=resolve(data["stations"]),
            routes=resolve(data["routes"]),
            seed=data.get("seed", DEFAULT_SEED),
            loader=_section(LoaderConfig, data.get("loader")),
            render=_section(RenderConfig, data.get("render")),
        )
