"""
Utilities to build ManhattanGeometry street grids.
"""

from typing import Iterable, List, Sequence, Tuple

import numpy as np

from graph import Direction
from manhattan_geometry import DEFAULT_DIRECTIONS, ManhattanGeometry
from nodes import Intersection, Node


def build_manhattan_grid(
    east_weights: Sequence[Sequence[float]] | np.ndarray,
    south_weights: Sequence[Sequence[float]] | np.ndarray,
    directions: Sequence[Direction] = DEFAULT_DIRECTIONS,
    undirected: bool = False,
) -> ManhattanGeometry:
    """
    Build a rectangular grid of Intersection nodes from street weights.

    Args:
        east_weights: shape (rows, cols - 1); entry [y, x] is the street from
            (x, y) to (x + 1, y).
        south_weights: shape (rows - 1, cols); entry [y, x] is the avenue from
            (x, y) to (x, y + 1).
        directions: directions exposed by the geometry. West/north
            neighbours are the inverse of east/south.
        undirected: share one weight for both travel directions.

    An entry of inf means there is no street. The returned geometry is frozen.
    """
    east = np.asarray(east_weights, dtype=float)
    south = np.asarray(south_weights, dtype=float)
    # An empty list stands for a single row (no avenues) or column (no streets).
    if south.ndim == 1 and south.size == 0 and east.ndim == 2:
        south = south.reshape(0, east.shape[1] + 1)
    if east.ndim == 1 and east.size == 0 and south.ndim == 2:
        east = east.reshape(south.shape[0] + 1, 0)
    rows, cols = _grid_shape(east, south)

    geometry = ManhattanGeometry(directions=directions, undirected=undirected)
    # Row-major insertion keeps node order (and solver tie-breaks) reproducible.
    for y in range(rows):
        for x in range(cols):
            geometry.add_node(Intersection(x, y))

    for y in range(rows):
        for x in range(cols):
            if x < cols - 1 and np.isfinite(east[y, x]):
                geometry.add_street(
                    Intersection(x, y), Intersection(x + 1, y), float(east[y, x]), Direction.EAST
                )
            if y < rows - 1 and np.isfinite(south[y, x]):
                geometry.add_street(
                    Intersection(x, y), Intersection(x, y + 1), float(south[y, x]), Direction.SOUTH
                )

    return geometry.freeze()


def build_uniform_grid(
    rows: int,
    cols: int,
    weight: float = 1.0,
    directions: Sequence[Direction] = DEFAULT_DIRECTIONS,
) -> ManhattanGeometry:
    """Grid of rows x cols intersections where every street has the same weight."""
    if rows <= 0 or cols <= 0:
        raise ValueError("Grid must have at least one row and one column")
    east = np.full((rows, cols - 1), weight, dtype=float)
    south = np.full((rows - 1, cols), weight, dtype=float)
    return build_manhattan_grid(east, south, directions=directions)


def build_from_streets(
    nodes: Iterable[Node],
    streets: Iterable[Tuple[Node, Node, float, Direction]],
    directions: Sequence[Direction] = DEFAULT_DIRECTIONS,
    undirected: bool = False,
) -> ManhattanGeometry:
    """
    Build a geometry from an explicit node list and (src, dst, weight, direction)
    streets. Nodes keep the order given.
    """
    geometry = ManhattanGeometry(directions=directions, undirected=undirected)
    for node in nodes:
        geometry.add_node(node)
    for src, dst, weight, direction in streets:
        geometry.add_street(src, dst, weight, direction)
    return geometry.freeze()


def example_square_grid() -> ManhattanGeometry:
    """
    Two-by-two grid:

        A(0,0) --1-- B(1,0)
          |            |
          3            1
          |            |
        C(0,1) --1-- D(1,1)
    """
    return build_manhattan_grid(east_weights=[[1], [1]], south_weights=[[3, 1]])


def example_manhattan_grid() -> ManhattanGeometry:
    """
    Three-by-three one-way grid (streets run east, avenues run south):

        a -2- b -3- c
        |     |     |
        1     2     1
        |     |     |
        d -1- e -1- f
        |     |     |
        2     4     2
        |     |     |
        g -1- h -2- i

    The shortest route from a to i is a, d, e, f, i at cost 5.
    """
    return build_manhattan_grid(
        east_weights=[[2, 3], [1, 1], [1, 2]],
        south_weights=[[1, 2, 1], [2, 4, 2]],
    )


def _grid_shape(east: np.ndarray, south: np.ndarray) -> Tuple[int, int]:
    if east.ndim != 2 or south.ndim != 2:
        raise ValueError("east_weights and south_weights must be 2-D")

    rows = east.shape[0]
    cols = south.shape[1]
    if east.shape != (rows, cols - 1) or south.shape != (rows - 1, cols):
        raise ValueError(
            f"Inconsistent grid shapes: east {east.shape}, south {south.shape}; "
            "expected (rows, cols - 1) and (rows - 1, cols)"
        )
    if rows <= 0 or cols <= 0:
        raise ValueError("Grid must have at least one row and one column")
    if np.isnan(east).any() or np.isnan(south).any():
        raise ValueError("Street weights must not be NaN")
    if (east < 0).any() or (south < 0).any():
        raise ValueError("Street weights must be non-negative")
    return rows, cols


def node_path_ids(path: Sequence[Node]) -> List[str]:
    """Readable ids for a node path, e.g. for CSV output."""
    return [n.id for n in path]
