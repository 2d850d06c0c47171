"""Loader step: read the stations and routes tables.

Results stored under the step name:
    - metadata: station/route counts
    - data: { stations, routes (paths), id_shift, dropped_stations, ... }
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from stationnet.loader import load_dataset
from stationnet.workflow.base import PipelineStep

if TYPE_CHECKING:
    from stationnet.pipeline import Pipeline


@dataclass
class LoadDataset(PipelineStep):
    """Populate ``pipeline.dataset`` from the configured files."""

    def run(self, pipeline: Pipeline) -> None:
        config = pipeline.config
        dataset = load_dataset(config.stations, config.routes, config.loader)
        pipeline.dataset = dataset

        summary = dataset.summary()
        pipeline.results.put(
            "metadata",
            {
                "station_count": summary["station_count"],
                "route_count": summary["route_count"],
            },
        )
        pipeline.results.put(
            "data",
            {"stations": str(config.stations), "routes": str(config.routes), **summary},
        )
