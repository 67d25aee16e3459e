import numpy as np
import pytest

from problems.tsp import (
    MatrixNode,
    Point,
    Tour,
    matrix_nodes,
    random_tour,
    read_points,
    read_weight_matrix,
    tour_length,
)


def test_point_distance_is_euclidean_and_symmetric():
    a, b = Point(0, 0), Point(3, 4)
    assert a.distance(b) == pytest.approx(5.0)
    assert b.distance(a) == a.distance(b)


def test_tour_length_is_cyclic(square_tour, crossing_tour):
    assert square_tour.length() == pytest.approx(4.0)
    assert crossing_tour.length() == pytest.approx(2.0 + 2 * np.sqrt(2))


def test_single_node_tour_has_zero_length():
    assert Tour([Point(2, 2)]).length() == 0.0


def test_empty_tour_is_rejected():
    with pytest.raises(ValueError):
        Tour([])


def test_replace_keeps_node_count(square_tour):
    with pytest.raises(AssertionError):
        square_tour.replace(square_tour.nodes[:2])


def test_nodes_returns_a_copy(square_tour):
    nodes = square_tour.nodes
    nodes.reverse()
    assert square_tour[0] == Point(0, 0)


def test_matrix_nodes_read_distances_from_matrix(tmp_path):
    path = tmp_path / "weights.csv"
    path.write_text("0,2,9\n2,0,6\n9,6,0\n")
    D = read_weight_matrix(str(path))
    nodes = matrix_nodes(D)
    assert nodes[0].distance(nodes[2]) == 9.0
    assert tour_length(nodes) == pytest.approx(17.0)
    assert nodes[1] == MatrixNode(1, D)


def test_read_weight_matrix_rejects_non_square(tmp_path):
    path = tmp_path / "weights.csv"
    path.write_text("0,1,2\n1,0,3\n")
    with pytest.raises(AssertionError):
        read_weight_matrix(str(path))


def test_read_points(tmp_path):
    path = tmp_path / "points.csv"
    path.write_text("0,0\n1.5,2\n")
    assert read_points(str(path)) == [Point(0.0, 0.0), Point(1.5, 2.0)]


def test_random_tour_is_a_permutation(random_instance):
    points, rng = random_instance
    tour = random_tour(points, rng)
    assert len(tour) == len(points)
    assert sorted(tour, key=lambda p: (p.x, p.y)) == sorted(points, key=lambda p: (p.x, p.y))
