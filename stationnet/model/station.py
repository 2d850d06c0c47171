"""Station and Route records validated at load time.

Records are frozen: once the loader hands a ``Dataset`` to the graph builder,
nothing downstream can change it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Station:
    """A train station.

    Attributes:
        id: 1-based unique identifier (after index normalization).
        name: Display name.
        latitude: Optional latitude in degrees.
        longitude: Optional longitude in degrees.
        attrs: Remaining columns of the stations table.
    """

    id: int
    name: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    attrs: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }


@dataclass(frozen=True)
class Route:
    """One directed route between two stations.

    Several routes may join the same ordered pair; each one is kept.

    Attributes:
        source_id: Station id the route leaves from.
        target_id: Station id the route arrives at.
        weight: Route weight, an integer in the configured allowed set.
        attrs: Remaining columns of the routes table.
    """

    source_id: int
    target_id: int
    weight: int
    attrs: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)


@dataclass(frozen=True)
class Dataset:
    """Cleaned stations and routes ready for graph construction.

    Attributes:
        stations: Retained stations in load order.
        routes: Routes in file order.
        id_shift: Offset added to every raw index (1 when the raw indices
            were 0-based, else 0).
        dropped: Ids (post-shift) of sentinel stations removed while loading.
    """

    stations: Tuple[Station, ...]
    routes: Tuple[Route, ...]
    id_shift: int = 0
    dropped: Tuple[int, ...] = ()

    @property
    def station_ids(self) -> Tuple[int, ...]:
        return tuple(s.id for s in self.stations)

    def summary(self) -> Dict[str, Any]:
        """Counts and cleaning decisions, JSON-safe."""
        return {
            "station_count": len(self.stations),
            "route_count": len(self.routes),
            "id_shift": self.id_shift,
            "dropped_stations": list(self.dropped),
        }
