"""
Weighted street-graph abstraction.

Nodes are Node instances. Adjacency is exposed per direction so a geometry
can describe one-way grids (east/south only) as well as full four-way grids.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from nodes import Node


class Direction(Enum):
    """Compass direction of a street segment leaving a node."""

    EAST = "east"
    SOUTH = "south"
    WEST = "west"
    NORTH = "north"

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_OPPOSITES = {
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
    Direction.SOUTH: Direction.NORTH,
    Direction.NORTH: Direction.SOUTH,
}


@dataclass(frozen=True)
class Edge:
    """
    Pair of adjacent nodes, used only as a key into a weight table.

    Edge(a, b) is directed. Edge.between(a, b) gives the undirected form,
    which orders the endpoints by id so both directions map to one key.
    """

    a: Node
    b: Node

    @classmethod
    def between(cls, a: Node, b: Node) -> "Edge":
        return cls(a, b) if a.id <= b.id else cls(b, a)


class Graph(ABC):
    """Weighted street graph queried by shortest-path solvers."""

    @abstractmethod
    def nodes(self) -> Iterable[Node]:
        """Return all nodes in the graph, in a stable order."""
        raise NotImplementedError

    @abstractmethod
    def weight(self, a: Node, b: Node) -> float:
        """
        Weight of the street from a to b.

        Raises InvalidEdgeQuery if no street connects them.
        """
        raise NotImplementedError

    @abstractmethod
    def neighbor(self, node: Node, direction: Direction) -> Optional[Node]:
        """
        Adjacent node in the given direction, or None at the grid edge.

        Raises UnknownNode if node is not in the graph.
        """
        raise NotImplementedError

    @abstractmethod
    def directions(self) -> Sequence[Direction]:
        """Directions in which this graph exposes adjacency."""
        raise NotImplementedError

    def neighbors(self, node: Node) -> List[Node]:
        """All adjacent nodes of node, in direction order."""
        out: List[Node] = []
        for direction in self.directions():
            n = self.neighbor(node, direction)
            if n is not None:
                out.append(n)
        return out
