"""
Concrete street-grid graph.

Implements the Graph interface with an edge-weight table plus one
node -> neighbour map per direction.
"""

from typing import Dict, Iterable, Optional, Sequence, Set

from errors import InvalidEdgeQuery, UnknownNode
from graph import Direction, Edge, Graph
from nodes import Node


DEFAULT_DIRECTIONS = (Direction.EAST, Direction.SOUTH)


class ManhattanGeometry(Graph):
    """
    Street grid backed by Dict[Edge, float] distances and per-direction
    neighbour maps.

    With undirected=True a street can be travelled both ways at the same
    cost; the neighbour maps still decide which streets a solver sees.
    """

    def __init__(
        self,
        directions: Sequence[Direction] = DEFAULT_DIRECTIONS,
        undirected: bool = False,
    ) -> None:
        self._directions = tuple(directions)
        self._undirected = undirected
        # dict preserves insertion order, which fixes tie-breaks for solvers
        self._nodes: Dict[Node, None] = {}
        self._distances: Dict[Edge, float] = {}
        # Directed edges added explicitly; implied reverse weights never override these.
        self._explicit: Set[Edge] = set()
        self._neighbor_of: Dict[Direction, Dict[Node, Node]] = {d: {} for d in self._directions}
        self._frozen = False

    # --- Mutation API (builders/tests only, not part of Graph interface) ----

    def add_node(self, node: Node) -> None:
        """Ensure node exists in the graph."""
        self._check_mutable()
        self._nodes.setdefault(node, None)

    def add_street(self, src: Node, dst: Node, weight: float, direction: Direction) -> None:
        """
        Add or update the street src -> dst lying in direction from src.
        Auto-adds nodes if they don't exist.

        When the geometry exposes direction.opposite as well, dst also
        sees src as its neighbour that way, at the same weight unless the
        reverse street was (or later is) added explicitly.
        """
        self._check_mutable()
        if weight < 0:
            raise ValueError(f"Street weight must be non-negative, got {weight}")
        if direction not in self._neighbor_of:
            raise ValueError(f"Direction {direction.value} is not exposed by this geometry")

        self.add_node(src)
        self.add_node(dst)
        edge = self._edge(src, dst)
        self._distances[edge] = weight
        self._explicit.add(edge)
        self._neighbor_of[direction][src] = dst

        reverse = self._neighbor_of.get(direction.opposite)
        if reverse is not None:
            reverse[dst] = src
            back = Edge(dst, src)
            if not self._undirected and back not in self._explicit:
                self._distances[back] = weight

    def freeze(self) -> "ManhattanGeometry":
        """Make the geometry read-only; returns self for chaining."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def undirected(self) -> bool:
        return self._undirected

    # --- Graph interface -----------------------------------------------------

    def nodes(self) -> Iterable[Node]:
        return list(self._nodes)

    def weight(self, a: Node, b: Node) -> float:
        try:
            return self._distances[self._edge(a, b)]
        except KeyError:
            raise InvalidEdgeQuery(a, b) from None

    def neighbor(self, node: Node, direction: Direction) -> Optional[Node]:
        if node not in self._nodes:
            raise UnknownNode(node)
        neighbor_of = self._neighbor_of.get(direction)
        if neighbor_of is None:
            return None
        return neighbor_of.get(node)

    def directions(self) -> Sequence[Direction]:
        return self._directions

    # --- Helpers ---------------------------------------------------------------

    def __contains__(self, node: object) -> bool:
        return node in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def _edge(self, a: Node, b: Node) -> Edge:
        return Edge.between(a, b) if self._undirected else Edge(a, b)

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RuntimeError("ManhattanGeometry is frozen and cannot be modified")
