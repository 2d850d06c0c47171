"""End-to-end run over a small Dutch network.

Stations (after the +1 shift): 1 Amsterdam, 2 Utrecht, 3 Rotterdam,
4 Den Haag, 5 Eindhoven; row 6 is a nameless sentinel. Amsterdam, Utrecht,
Rotterdam and Den Haag form a cycle; Eindhoven is only reachable from Utrecht.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from stationnet.pipeline import Pipeline

NETWORK_1 = Path(__file__).parent / "network_1.yaml"


@pytest.fixture(scope="module")
def network_1():
    pipeline = Pipeline.from_file(NETWORK_1)
    pipeline.run()
    return pipeline


def test_loading(network_1):
    dataset = network_1.dataset
    assert dataset.id_shift == 1
    assert dataset.dropped == (6,)
    assert [s.name for s in dataset.stations][:2] == [
        "Amsterdam Centraal",
        "Utrecht Centraal",
    ]
    assert dataset.stations[0].latitude == pytest.approx(52.3791)


def test_counts_and_density(network_1):
    report = network_1.report
    assert report.vertex_count == 5
    assert report.edge_count == 8
    assert report.density == pytest.approx(7 / 20)
    assert report.raw_density == pytest.approx(8 / 20)


def test_degrees(network_1):
    table = network_1.report.degree_table
    assert [(e.station.id, e.degree) for e in table] == [
        (2, 6),
        (1, 4),
        (3, 3),
        (4, 2),
        (5, 1),
    ]


def test_distances(network_1):
    report = network_1.report
    assert report.distance_histogram.counts == {1: 7, 2: 6, 3: 3}
    assert report.distance_histogram.unreachable == 4
    assert report.mean_distance == pytest.approx(28 / 16)
    assert report.diameter == 3
    assert report.diameter_path == (1, 2, 3, 4)


def test_components(network_1):
    report = network_1.report
    assert report.component_count == 2
    assert report.component_sizes == (4, 1)
    assert report.vertex_to_component == {1: 0, 2: 0, 3: 0, 4: 0, 5: 1}


def test_summary_lists_busiest_station_first(network_1):
    summary = network_1.rendering.summary
    degree_section = summary.split("TOP 5 STATIONS BY DEGREE")[1]
    assert degree_section.index("Utrecht Centraal") < degree_section.index(
        "Amsterdam Centraal"
    )
