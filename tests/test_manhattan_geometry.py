"""
Unit tests for ManhattanGeometry.
"""

import pytest

from errors import InvalidEdgeQuery, UnknownNode
from graph import Direction, Edge
from manhattan_geometry import ManhattanGeometry
from nodes import Intersection


A = Intersection(0, 0)
B = Intersection(1, 0)
C = Intersection(0, 1)
D = Intersection(1, 1)


def test_add_streets_and_query_neighbours():
    g = ManhattanGeometry()

    g.add_street(A, B, 1.0, Direction.EAST)
    g.add_street(A, C, 3.0, Direction.SOUTH)
    g.add_street(B, D, 1.0, Direction.SOUTH)

    assert list(g.nodes()) == [A, B, C, D]
    assert g.directions() == (Direction.EAST, Direction.SOUTH)

    assert g.neighbor(A, Direction.EAST) == B
    assert g.neighbor(A, Direction.SOUTH) == C
    assert g.neighbor(B, Direction.EAST) is None
    assert g.neighbors(A) == [B, C]
    assert g.neighbors(D) == []

    assert g.weight(A, B) == 1.0
    assert g.weight(A, C) == 3.0


def test_one_way_streets_have_no_reverse_weight():
    g = ManhattanGeometry()
    g.add_street(A, B, 2.0, Direction.EAST)

    with pytest.raises(InvalidEdgeQuery):
        g.weight(B, A)
    # InvalidEdgeQuery is still a KeyError for callers doing mapping-style lookups
    with pytest.raises(KeyError):
        g.weight(A, D)


def test_undirected_weights_are_symmetric():
    g = ManhattanGeometry(undirected=True)
    g.add_street(A, B, 4.0, Direction.EAST)

    assert g.weight(A, B) == 4.0
    assert g.weight(B, A) == 4.0
    assert Edge.between(A, B) == Edge.between(B, A)
    # Neighbour maps still only expose east/south
    assert g.neighbor(B, Direction.EAST) is None


def test_four_way_geometry_links_reverse_direction():
    g = ManhattanGeometry(directions=tuple(Direction))
    g.add_street(A, B, 2.0, Direction.EAST)
    g.add_street(A, C, 5.0, Direction.SOUTH)

    assert g.neighbor(B, Direction.WEST) == A
    assert g.neighbor(C, Direction.NORTH) == A
    assert g.weight(B, A) == 2.0
    assert g.weight(C, A) == 5.0


def test_neighbor_of_unknown_node_raises():
    g = ManhattanGeometry()
    g.add_node(A)

    with pytest.raises(UnknownNode):
        g.neighbor(D, Direction.EAST)


def test_rejects_negative_weight_and_unexposed_direction():
    g = ManhattanGeometry()

    with pytest.raises(ValueError):
        g.add_street(A, B, -1.0, Direction.EAST)
    with pytest.raises(ValueError):
        g.add_street(B, A, 1.0, Direction.WEST)


def test_frozen_geometry_is_read_only():
    g = ManhattanGeometry()
    g.add_street(A, B, 1.0, Direction.EAST)
    g.freeze()

    assert g.frozen
    with pytest.raises(RuntimeError):
        g.add_node(C)
    with pytest.raises(RuntimeError):
        g.add_street(A, C, 1.0, Direction.SOUTH)
    # Queries still work
    assert g.weight(A, B) == 1.0


def test_nodes_returns_copy():
    g = ManhattanGeometry()
    g.add_street(A, B, 1.0, Direction.EAST)

    nodes = g.nodes()
    nodes.clear()

    assert list(g.nodes()) == [A, B]
    assert A in g
    assert len(g) == 2


def test_four_way_keeps_asymmetric_weights():
    """An explicit reverse street keeps its own weight in either insertion order."""
    g = ManhattanGeometry(directions=tuple(Direction))
    g.add_street(A, B, 1.0, Direction.EAST)
    g.add_street(B, A, 5.0, Direction.WEST)
    g.add_street(C, D, 2.0, Direction.EAST)
    g.add_street(D, C, 7.0, Direction.WEST)
    g.add_street(A, C, 4.0, Direction.SOUTH)

    assert g.weight(A, B) == 1.0
    assert g.weight(B, A) == 5.0
    assert g.weight(D, C) == 7.0
    # Updating one direction leaves an explicit reverse alone
    g.add_street(C, D, 3.0, Direction.EAST)
    assert g.weight(C, D) == 3.0
    assert g.weight(D, C) == 7.0
    # Implied reverse still follows its street until set explicitly
    assert g.weight(C, A) == 4.0
    g.add_street(A, C, 6.0, Direction.SOUTH)
    assert g.weight(C, A) == 6.0


def test_intersection_identity():
    assert Intersection(2, 3) == Intersection(2, 3)
    assert hash(Intersection(2, 3)) == hash(Intersection(2, 3))
    assert Intersection(2, 3).id == "2,3"
    with pytest.raises(AttributeError):
        Intersection(0, 0).x = 5  # type: ignore[misc]
