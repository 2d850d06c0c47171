"""Load stations and routes tables into a validated ``Dataset``.

Tables are read with pandas. Column headers are normalized so that exports
with commented headers (``# index, name, ...``) load as-is. Cleaning happens
on plain row mappings, so in-memory rows go through exactly the same rules as
files:

1. Station indices must be unique non-negative integers.
2. 0-based indices are shifted to 1-based; route endpoints get the same shift.
3. A trailing placeholder row (the highest id, no name, not referenced by any
   route) is dropped as a sentinel. Other nameless stations are kept.
4. Every route endpoint must name a retained station and carry an allowed weight.
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

import pandas as pd

from stationnet.config import LoaderConfig
from stationnet.errors import DataIntegrityError
from stationnet.logging import get_logger
from stationnet.model import Dataset, Route, Station

logger = get_logger(__name__)

PathLike = Union[str, Path]
Row = Mapping[str, Any]


def _normalize_column(name: Any) -> str:
    return str(name).strip().lstrip("#").strip()


def _read_table(path: PathLike, delimiter: str, required: Sequence[str]) -> pd.DataFrame:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input table not found: {path}")
    try:
        frame = pd.read_csv(path, sep=delimiter, skipinitialspace=True)
    except pd.errors.EmptyDataError:
        raise DataIntegrityError(f"{path.name}: file is empty") from None
    frame.columns = [_normalize_column(c) for c in frame.columns]
    missing = [c for c in required if c not in frame.columns]
    if missing:
        raise DataIntegrityError(
            f"{path.name}: missing required column(s) {', '.join(missing)}; "
            f"found {', '.join(frame.columns)}"
        )
    logger.debug("Read %d rows from %s", len(frame), path)
    return frame


def _as_int(value: Any, what: str) -> int:
    if isinstance(value, bool):
        raise DataIntegrityError(f"{what} is not an integer: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise DataIntegrityError(f"{what} is not an integer: {value!r}") from None
    if not number.is_integer():
        raise DataIntegrityError(f"{what} is not an integer: {value!r}")
    return int(number)


def _as_name(value: Any) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    return str(value).strip()


def _as_coordinate(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if pd.isna(number) else number


def _extras(row: Row, known: Iterable[str]) -> Dict[str, Any]:
    skip = set(known)
    return {k: v for k, v in row.items() if k not in skip}


def _parse_stations(rows: Sequence[Row], config: LoaderConfig) -> List[Station]:
    known = (
        config.index_column,
        config.name_column,
        config.latitude_column,
        config.longitude_column,
    )
    stations: List[Station] = []
    for pos, row in enumerate(rows):
        if config.index_column not in row:
            raise DataIntegrityError(
                f"Station row {pos} has no '{config.index_column}' column"
            )
        index = _as_int(row[config.index_column], f"Station index in row {pos}")
        if index < 0:
            raise DataIntegrityError(f"Station index in row {pos} is negative: {index}")
        stations.append(
            Station(
                id=index,
                name=_as_name(row.get(config.name_column)),
                latitude=_as_coordinate(row.get(config.latitude_column)),
                longitude=_as_coordinate(row.get(config.longitude_column)),
                attrs=_extras(row, known),
            )
        )

    duplicates = sorted(i for i, n in Counter(s.id for s in stations).items() if n > 1)
    if duplicates:
        raise DataIntegrityError(
            f"Station indices are not unique: {', '.join(map(str, duplicates[:10]))}"
        )
    return stations


def _parse_routes(rows: Sequence[Row], shift: int, config: LoaderConfig) -> List[Route]:
    known = (config.source_column, config.target_column, config.weight_column)
    allowed = set(config.allowed_weights)
    routes: List[Route] = []
    for pos, row in enumerate(rows):
        for column in known:
            if column not in row:
                raise DataIntegrityError(f"Route row {pos} has no '{column}' column")
        weight = _as_int(row[config.weight_column], f"Route weight in row {pos}")
        if weight not in allowed:
            raise DataIntegrityError(
                f"Route weight in row {pos} is {weight}; allowed values are "
                f"{sorted(allowed)}"
            )
        routes.append(
            Route(
                source_id=_as_int(row[config.source_column], f"Route source in row {pos}")
                + shift,
                target_id=_as_int(row[config.target_column], f"Route target in row {pos}")
                + shift,
                weight=weight,
                attrs=_extras(row, known),
            )
        )
    return routes


def _shift_station(station: Station, shift: int) -> Station:
    return Station(
        id=station.id + shift,
        name=station.name,
        latitude=station.latitude,
        longitude=station.longitude,
        attrs=station.attrs,
    )


def dataset_from_records(
    station_rows: Sequence[Row],
    route_rows: Sequence[Row],
    config: Optional[LoaderConfig] = None,
) -> Dataset:
    """Validate and normalize in-memory station and route rows.

    Args:
        station_rows: Mappings with at least the index column (name optional).
        route_rows: Mappings with source, target and weight columns.
        config: Column names and cleaning rules; defaults to ``LoaderConfig()``.

    Returns:
        The cleaned ``Dataset``.

    Raises:
        DataIntegrityError: On duplicate/negative/non-integer station indices,
            disallowed weights, or routes that reference an unknown station.
    """
    config = config or LoaderConfig()

    raw_stations = _parse_stations(station_rows, config)
    shift = 1 if raw_stations and min(s.id for s in raw_stations) == 0 else 0
    if shift:
        logger.info("Station indices are 0-based; shifting all ids by +1")
    stations = [_shift_station(s, shift) for s in raw_stations]
    routes = _parse_routes(route_rows, shift, config)

    dropped: List[int] = []
    if config.drop_sentinels and stations:
        referenced = {r.source_id for r in routes} | {r.target_id for r in routes}
        last_id = max(s.id for s in stations)
        sentinel = next(s for s in stations if s.id == last_id)
        if not sentinel.name and sentinel.id not in referenced:
            logger.warning(
                "Dropping sentinel station %d (last row, no name, not referenced by any route)",
                sentinel.id,
            )
            dropped.append(sentinel.id)
            stations = [s for s in stations if s.id != last_id]

    station_ids = {s.id for s in stations}
    for pos, route in enumerate(routes):
        for endpoint in (route.source_id, route.target_id):
            if endpoint not in station_ids:
                raise DataIntegrityError(
                    f"Route row {pos} ({route.source_id} -> {route.target_id}) "
                    f"references unknown station id {endpoint}"
                )

    dataset = Dataset(
        stations=tuple(stations),
        routes=tuple(routes),
        id_shift=shift,
        dropped=tuple(dropped),
    )
    logger.info(
        "Loaded dataset: stations=%d routes=%d id_shift=%d dropped=%d",
        len(dataset.stations),
        len(dataset.routes),
        dataset.id_shift,
        len(dataset.dropped),
    )
    return dataset


def load_stations(path: PathLike, config: Optional[LoaderConfig] = None) -> List[Dict[str, Any]]:
    """Read the stations table into row mappings with normalized column names."""
    config = config or LoaderConfig()
    frame = _read_table(path, config.delimiter, [config.index_column, config.name_column])
    return frame.to_dict("records")


def load_routes(path: PathLike, config: Optional[LoaderConfig] = None) -> List[Dict[str, Any]]:
    """Read the routes table into row mappings with normalized column names."""
    config = config or LoaderConfig()
    frame = _read_table(
        path,
        config.delimiter,
        [config.source_column, config.target_column, config.weight_column],
    )
    return frame.to_dict("records")


def load_dataset(
    stations_path: PathLike,
    routes_path: PathLike,
    config: Optional[LoaderConfig] = None,
) -> Dataset:
    """Read both tables from disk and return the cleaned ``Dataset``.

    Raises:
        FileNotFoundError: If either file does not exist.
        DataIntegrityError: On missing columns or any cleaning-rule violation.
    """
    config = config or LoaderConfig()
    logger.info("Loading stations from %s and routes from %s", stations_path, routes_path)
    return dataset_from_records(
        load_stations(stations_path, config),
        load_routes(routes_path, config),
        config,
    )
