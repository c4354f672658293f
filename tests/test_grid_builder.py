import math

import numpy as np
import pytest

from algorithms import path_cost
from dijkstra_engine import DijkstraSolver
from errors import InvalidEdgeQuery
from graph import Direction
from grid_builder import (
    build_from_streets,
    build_manhattan_grid,
    build_uniform_grid,
    example_manhattan_grid,
    example_square_grid,
)
from nodes import Intersection


def test_grid_nodes_are_row_major_and_frozen():
    g = build_uniform_grid(2, 3)

    assert list(g.nodes()) == [
        Intersection(0, 0),
        Intersection(1, 0),
        Intersection(2, 0),
        Intersection(0, 1),
        Intersection(1, 1),
        Intersection(2, 1),
    ]
    assert g.frozen


def test_grid_weights_follow_matrices():
    east = np.array([[2.0, 3.0], [1.0, 1.0]])
    south = np.array([[1.0, 2.0, 4.0]])
    g = build_manhattan_grid(east, south)

    assert g.weight(Intersection(1, 0), Intersection(2, 0)) == 3.0
    assert g.weight(Intersection(2, 0), Intersection(2, 1)) == 4.0
    assert g.neighbor(Intersection(2, 1), Direction.EAST) is None
    assert g.neighbor(Intersection(0, 1), Direction.SOUTH) is None


def test_infinite_weight_means_no_street():
    g = build_manhattan_grid(east_weights=[[math.inf], [1]], south_weights=[[1, 1]])

    assert g.neighbor(Intersection(0, 0), Direction.EAST) is None
    with pytest.raises(InvalidEdgeQuery):
        g.weight(Intersection(0, 0), Intersection(1, 0))


def test_four_way_grid_allows_travel_back():
    g = build_uniform_grid(2, 2, directions=tuple(Direction))

    path = DijkstraSolver().solve(Intersection(1, 1), Intersection(0, 0), g)

    assert path[0] == Intersection(1, 1)
    assert path[-1] == Intersection(0, 0)
    assert path_cost(g, path) == 2.0


def test_single_intersection_grid():
    g = build_manhattan_grid(np.zeros((1, 0)), np.zeros((0, 1)))

    assert list(g.nodes()) == [Intersection(0, 0)]
    assert DijkstraSolver().solve(Intersection(0, 0), Intersection(0, 0), g) == [Intersection(0, 0)]


@pytest.mark.parametrize(
    "east, south",
    [
        ([[1, 1]], [[1, 1]]),  # south needs 3 columns
        ([[1], [1]], [[1, 1], [1, 1]]),  # too many south rows
        ([1, 1], [[1, 1]]),  # not 2-D
    ],
)
def test_rejects_inconsistent_shapes(east, south):
    with pytest.raises(ValueError):
        build_manhattan_grid(east, south)


@pytest.mark.parametrize("bad", [-1.0, float("nan")])
def test_rejects_negative_or_nan_weights(bad):
    with pytest.raises(ValueError):
        build_manhattan_grid(east_weights=[[bad], [1]], south_weights=[[1, 1]])


def test_uniform_grid_requires_positive_size():
    with pytest.raises(ValueError):
        build_uniform_grid(0, 3)


def test_build_from_streets_keeps_given_order():
    a, b, c = Intersection(0, 0), Intersection(1, 0), Intersection(2, 0)
    g = build_from_streets([c, b, a], [(a, b, 1.0, Direction.EAST), (b, c, 2.0, Direction.EAST)])

    assert list(g.nodes()) == [c, b, a]
    assert DijkstraSolver().solve_with_cost(a, c, g) == (3.0, [a, b, c])


def test_example_grids():
    square = example_square_grid()
    assert len(square) == 4

    manhattan = example_manhattan_grid()
    cost, path = DijkstraSolver().solve_with_cost(Intersection(0, 0), Intersection(2, 2), manhattan)
    assert cost == 5.0
    assert path == [
        Intersection(0, 0),
        Intersection(0, 1),
        Intersection(1, 1),
        Intersection(2, 1),
        Intersection(2, 2),
    ]


def test_single_row_grid_from_empty_avenue_list():
    g = build_manhattan_grid(east_weights=[[1, 2]], south_weights=[])

    assert len(g) == 3
    assert DijkstraSolver().solve_with_cost(Intersection(0, 0), Intersection(2, 0), g)[0] == 3.0


def test_build_from_streets_routes_on_directed_weights():
    a, b = Intersection(0, 0), Intersection(1, 0)
    g = build_from_streets(
        [a, b],
        [(a, b, 1.0, Direction.EAST), (b, a, 5.0, Direction.WEST)],
        directions=tuple(Direction),
    )

    assert DijkstraSolver().solve_with_cost(a, b, g) == (1.0, [a, b])
    assert DijkstraSolver().solve_with_cost(b, a, g) == (5.0, [b, a])
