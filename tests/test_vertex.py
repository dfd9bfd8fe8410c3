# Copyright 2024, Gurobi Optimization, LLC

import itertools

import pytest

from bitour.errors import InsufficientPopulation, InvalidInputFile
from bitour.vertex import Metric, Vertex, VertexSet, read_records, sample

from conftest import random_vertices


def test_costs_are_symmetric_and_zero_on_self():
    vertices = random_vertices(6)
    for u, v in itertools.product(vertices, repeat=2):
        assert u.cost1(v) == v.cost1(u)
        assert u.cost2(v) == v.cost2(u)
        assert u.cost1(v) >= 0 and u.cost2(v) >= 0
    for u in vertices:
        assert u.cost1(u) == 0
        assert u.cost2(u) == 0


def test_costs_round_up_and_use_their_own_pair():
    u = Vertex(0, (0.0, 0.0), (0.0, 0.0))
    v = Vertex(1, (1.0, 1.0), (3.0, 4.0))
    assert u.cost1(v) == 2  # ceil(sqrt(2))
    assert u.cost2(v) == 5
    assert Metric.FIRST.cost(u, v) == 2
    assert Metric.SECOND.cost(u, v) == 5


def test_vertex_equality_is_by_id():
    assert Vertex(3, (0, 0), (0, 0)) == Vertex(3, (9, 9), (1, 1))
    assert Vertex(3, (0, 0), (0, 0)) != Vertex(4, (0, 0), (0, 0))
    assert str(Vertex(3, (0, 0), (0, 0))) == "v:3"


def test_vertex_set_hands_out_sequential_ids():
    vertices = VertexSet.from_records([(1, 2, 3, 4), (5, 6, 7, 8), (0, 0, 0, 0)])
    assert [v.id for v in vertices] == [0, 1, 2]
    assert vertices[1].a == (5, 6)
    assert vertices[1].b == (7, 8)
    assert vertices.order == 3


def test_vertex_set_rejects_misplaced_ids():
    with pytest.raises(ValueError):
        VertexSet([Vertex(1, (0, 0), (0, 0))])


def test_read_records(tmp_path):
    path = tmp_path / "coords.txt"
    path.write_text("0 0 1 1\n\n2.5 3 -1 4e1\n")
    assert read_records(path) == [(0.0, 0.0, 1.0, 1.0), (2.5, 3.0, -1.0, 40.0)]


def test_read_records_missing_file(tmp_path):
    with pytest.raises(InvalidInputFile, match="is empty or missing"):
        read_records(tmp_path / "nope.txt")


def test_read_records_empty_file(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("\n\n")
    with pytest.raises(InvalidInputFile, match="is empty or missing"):
        read_records(path)


@pytest.mark.parametrize("line", ["1 2 3", "1 2 3 x", "1 2 3 4 5", "nan 1 2 3"])
def test_read_records_invalid_line(tmp_path, line):
    path = tmp_path / "bad.txt"
    path.write_text(f"0 0 0 0\n{line}\n")
    with pytest.raises(InvalidInputFile, match="line 2"):
        read_records(path)


def test_sample_is_deterministic_per_seed():
    population = list(range(50))
    first = sample(population, 10, 0x2A)
    assert first == sample(population, 10, 0x2A)
    assert len(set(first)) == 10
    assert first == sorted(first)


def test_sample_whole_population():
    assert sample("abc", 3, 1) == ["a", "b", "c"]


def test_sample_more_than_available():
    with pytest.raises(InsufficientPopulation) as excinfo:
        sample(range(3), 4, 1)
    assert excinfo.value.available == 3
    assert excinfo.value.requested == 4


def test_read_records_undecodable_bytes(tmp_path):
    path = tmp_path / "coords.txt"
    path.write_bytes(b"0 0 0 0\n\xff\xfe 1 2 3\n")
    with pytest.raises(InvalidInputFile, match="line 2"):
        read_records(path)


def test_read_records_directory(tmp_path):
    with pytest.raises(InvalidInputFile, match="is empty or missing"):
        read_records(tmp_path)
