"""Tests for reading and cleaning the stations and routes tables."""

from __future__ import annotations

import logging

import pytest

from stationnet.config import LoaderConfig
from stationnet.errors import DataIntegrityError
from stationnet.graph import build_graph
from stationnet.loader import (
    dataset_from_records,
    load_dataset,
    load_routes,
    load_stations,
)


class TestDatasetFromRecords:
    def test_one_based_ids_are_kept(self, chain_rows):
        dataset = dataset_from_records(*chain_rows)
        assert dataset.station_ids == (1, 2, 3, 4)
        assert dataset.id_shift == 0
        assert [(r.source_id, r.target_id) for r in dataset.routes] == [
            (1, 2),
            (2, 3),
            (3, 4),
        ]

    def test_zero_based_ids_shift_stations_and_routes(self):
        stations = [{"index": 0, "name": "A"}, {"index": 1, "name": "B"}]
        routes = [{"source": 0, "target": 1, "weight": 2}]

        dataset = dataset_from_records(stations, routes)

        assert dataset.id_shift == 1
        assert dataset.station_ids == (1, 2)
        assert dataset.routes[0].source_id == 1
        assert dataset.routes[0].target_id == 2
        assert dataset.routes[0].weight == 2

    def test_nameless_unreferenced_station_is_dropped(self, caplog):
        stations = [
            {"index": 1, "name": "A"},
            {"index": 2, "name": "B"},
            {"index": 3, "name": ""},
        ]
        routes = [{"source": 1, "target": 2, "weight": 1}]

        with caplog.at_level(logging.WARNING):
            dataset = dataset_from_records(stations, routes)

        assert dataset.station_ids == (1, 2)
        assert dataset.dropped == (3,)
        assert "sentinel station 3" in caplog.text

    def test_nameless_unreferenced_station_mid_table_is_kept(self):
        stations = [
            {"index": 1, "name": "A"},
            {"index": 2, "name": ""},
            {"index": 3, "name": "C"},
        ]
        routes = [{"source": 1, "target": 3, "weight": 1}]

        dataset = dataset_from_records(stations, routes)

        assert dataset.station_ids == (1, 2, 3)
        assert dataset.dropped == ()
        assert build_graph(dataset).vertex_count == 3

    def test_only_the_last_nameless_row_is_dropped(self):
        stations = [
            {"index": 0, "name": "A"},
            {"index": 1, "name": None},
            {"index": 2, "name": "C"},
            {"index": 3, "name": ""},
        ]
        dataset = dataset_from_records(stations, [])
        assert dataset.station_ids == (1, 2, 3)
        assert dataset.dropped == (4,)

    def test_nameless_referenced_station_is_kept(self):
        stations = [{"index": 1, "name": "A"}, {"index": 2, "name": None}]
        routes = [{"source": 1, "target": 2, "weight": 1}]

        dataset = dataset_from_records(stations, routes)

        assert dataset.station_ids == (1, 2)
        assert dataset.stations[1].name == ""
        assert dataset.dropped == ()

    def test_sentinel_dropping_can_be_disabled(self):
        stations = [{"index": 1, "name": "A"}, {"index": 2, "name": ""}]
        dataset = dataset_from_records(
            stations, [], LoaderConfig(drop_sentinels=False)
        )
        assert dataset.station_ids == (1, 2)

    def test_unknown_route_endpoint_raises(self, chain_rows):
        stations, routes = chain_rows
        routes = routes + [{"source": 4, "target": 99, "weight": 1}]
        with pytest.raises(DataIntegrityError, match="unknown station id 99"):
            dataset_from_records(stations, routes)

    def test_duplicate_index_raises(self):
        stations = [{"index": 1, "name": "A"}, {"index": 1, "name": "B"}]
        with pytest.raises(DataIntegrityError, match="not unique"):
            dataset_from_records(stations, [])

    def test_negative_index_raises(self):
        with pytest.raises(DataIntegrityError, match="negative"):
            dataset_from_records([{"index": -1, "name": "A"}], [])

    @pytest.mark.parametrize("value", ["x", 1.5, None, True])
    def test_non_integer_index_raises(self, value):
        with pytest.raises(DataIntegrityError, match="not an integer"):
            dataset_from_records([{"index": value, "name": "A"}], [])

    def test_integral_float_index_is_accepted(self):
        dataset = dataset_from_records([{"index": 3.0, "name": "A"}], [])
        assert dataset.station_ids == (3,)

    @pytest.mark.parametrize("weight", [0, 4, -1])
    def test_weight_outside_allowed_set_raises(self, chain_rows, weight):
        stations, _ = chain_rows
        routes = [{"source": 1, "target": 2, "weight": weight}]
        with pytest.raises(DataIntegrityError, match="allowed values"):
            dataset_from_records(stations, routes)

    def test_allowed_weights_are_configurable(self, chain_rows):
        stations, _ = chain_rows
        routes = [{"source": 1, "target": 2, "weight": 7}]
        dataset = dataset_from_records(
            stations, routes, LoaderConfig(allowed_weights=(7,))
        )
        assert dataset.routes[0].weight == 7

    def test_route_missing_column_raises(self, chain_rows):
        stations, _ = chain_rows
        with pytest.raises(DataIntegrityError, match="'weight'"):
            dataset_from_records(stations, [{"source": 1, "target": 2}])

    def test_parallel_routes_are_all_kept(self, chain_rows):
        stations, _ = chain_rows
        routes = [
            {"source": 1, "target": 2, "weight": 1},
            {"source": 1, "target": 2, "weight": 3},
        ]
        dataset = dataset_from_records(stations, routes)
        assert len(dataset.routes) == 2

    def test_extra_columns_are_kept_as_attrs(self):
        stations = [{"index": 1, "name": "A", "country": "NL"}]
        routes = [{"source": 1, "target": 1, "weight": 1, "operator": "NS"}]
        dataset = dataset_from_records(stations, routes)
        assert dataset.stations[0].attrs == {"country": "NL"}
        assert dataset.routes[0].attrs == {"operator": "NS"}

    def test_empty_tables_give_empty_dataset(self):
        dataset = dataset_from_records([], [])
        assert dataset.stations == ()
        assert dataset.routes == ()
        assert dataset.id_shift == 0

    def test_summary(self, chain_dataset):
        assert chain_dataset.summary() == {
            "station_count": 4,
            "route_count": 3,
            "id_shift": 0,
            "dropped_stations": [],
        }


class TestFileLoading:
    def test_commented_header_and_padded_values(self, write_tables):
        stations_path, routes_path = write_tables(
            "# index, name, latitude, longitude\n"
            "0, Alpha, 52.1, 4.9\n"
            "1, Beta, 52.2, 5.0\n",
            "source, target, weight\n0, 1, 2\n",
        )

        dataset = load_dataset(stations_path, routes_path)

        assert dataset.id_shift == 1
        assert [s.name for s in dataset.stations] == ["Alpha", "Beta"]
        assert dataset.stations[0].latitude == pytest.approx(52.1)
        assert dataset.stations[1].longitude == pytest.approx(5.0)
        assert dataset.routes[0].source_id == 1
        assert dataset.routes[0].target_id == 2

    def test_load_stations_returns_rows(self, write_tables):
        stations_path, _ = write_tables("index,name\n1,A\n", "source,target,weight\n")
        rows = load_stations(stations_path)
        assert rows == [{"index": 1, "name": "A"}]

    def test_load_routes_returns_rows(self, write_tables):
        _, routes_path = write_tables("index,name\n1,A\n", "source,target,weight\n1,1,3\n")
        rows = load_routes(routes_path)
        assert len(rows) == 1
        assert rows[0]["weight"] == 3

    def test_sentinel_row_in_file_is_dropped(self, write_tables):
        stations_path, routes_path = write_tables(
            "index,name\n1,A\n2,B\n3,\n",
            "source,target,weight\n1,2,1\n",
        )
        dataset = load_dataset(stations_path, routes_path)
        assert dataset.station_ids == (1, 2)
        assert dataset.dropped == (3,)

    def test_custom_delimiter_and_columns(self, write_tables):
        stations_path, routes_path = write_tables(
            "id;label\n1;A\n2;B\n",
            "from;to;w\n1;2;1\n",
        )
        config = LoaderConfig(
            delimiter=";",
            index_column="id",
            name_column="label",
            source_column="from",
            target_column="to",
            weight_column="w",
        )
        dataset = load_dataset(stations_path, routes_path, config)
        assert [s.name for s in dataset.stations] == ["A", "B"]
        assert len(dataset.routes) == 1

    def test_missing_column_raises(self, write_tables):
        stations_path, routes_path = write_tables(
            "index,name\n1,A\n", "source,target\n1,1\n"
        )
        with pytest.raises(DataIntegrityError, match="missing required column"):
            load_dataset(stations_path, routes_path)

    def test_empty_file_raises(self, write_tables):
        stations_path, routes_path = write_tables("", "source,target,weight\n")
        with pytest.raises(DataIntegrityError, match="stations.csv: file is empty"):
            load_dataset(stations_path, routes_path)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_dataset(tmp_path / "nope.csv", tmp_path / "routes.csv")

    def test_unknown_reference_in_file_raises(self, write_tables):
        stations_path, routes_path = write_tables(
            "index,name\n1,A\n", "source,target,weight\n1,5,1\n"
        )
        with pytest.raises(DataIntegrityError):
            load_dataset(stations_path, routes_path)
