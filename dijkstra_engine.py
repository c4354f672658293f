"""
Dijkstra solver over street grids.

Scans the unvisited set for the minimum tentative distance on every step
instead of keeping a priority queue, so each solve costs O(V^2) plus one
pass over every street.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Dict, List, Optional, Set
import math

from algorithms import ShortestPathSolver
from errors import NoPathFound, SolveCancelled, UnknownNode
from graph import Graph
from nodes import Node


class Phase(Enum):
    RELAXING = auto()
    SELECTING = auto()
    DONE = auto()


@dataclass
class SolveState:
    """
    Mutable algorithm state owned by a single solve.

    distance: tentative distance per node (math.inf until reached).
    unvisited: nodes not yet finalized; never regrows.
    predecessor: node -> node it was last relaxed from.
    order: node iteration order of the graph, used for tie-breaks.
    """

    origin: Node
    destination: Node
    current: Node
    distance: Dict[Node, float]
    unvisited: Set[Node]
    order: List[Node]
    predecessor: Dict[Node, Node] = field(default_factory=dict)
    phase: Phase = Phase.RELAXING
    # Instrumentation
    iterations: int = 0
    relaxations_examined: int = 0
    relaxations_updated: int = 0
    frontier_sizes: List[int] = field(default_factory=list)

    @classmethod
    def initial(cls, origin: Node, destination: Node, graph: Graph) -> "SolveState":
        order = list(graph.nodes())
        distance = {n: math.inf for n in order}
        distance[origin] = 0.0
        unvisited = set(order)
        unvisited.discard(origin)
        return cls(
            origin=origin,
            destination=destination,
            current=origin,
            distance=distance,
            unvisited=unvisited,
            order=order,
        )


FinalizeHook = Callable[[Node, float], None]


class DijkstraSolver(ShortestPathSolver):
    """
    Single-pair Dijkstra driven as an explicit state machine.

    Each RELAXING step relaxes the unvisited neighbours of the current node
    and then finalizes it; each SELECTING step picks the unvisited node with
    the smallest tentative distance. Ties go to the node that comes first in
    graph.nodes().

    Args:
        early_exit: stop as soon as the destination is finalized instead of
            draining the whole unvisited set. Same result for non-negative
            weights.
        should_cancel: polled once per iteration; returning True aborts the
            solve with SolveCancelled.
        on_finalize: called with (node, distance) when a node is finalized.
    """

    def __init__(
        self,
        early_exit: bool = False,
        should_cancel: Optional[Callable[[], bool]] = None,
        on_finalize: Optional[FinalizeHook] = None,
    ) -> None:
        self._early_exit = early_exit
        self._should_cancel = should_cancel
        self._on_finalize = on_finalize

    def solve(self, origin: Node, destination: Node, graph: Graph) -> List[Node]:
        state = self.run(origin, destination, graph)
        return self.reconstruct_path(state)

    def run(self, origin: Node, destination: Node, graph: Graph) -> SolveState:
        """
        Run the relaxation loop to completion and return the final state.
        """
        known = set(graph.nodes())
        for node in (origin, destination):
            if node not in known:
                raise UnknownNode(node)

        state = SolveState.initial(origin, destination, graph)
        if origin == destination:
            state.phase = Phase.DONE
            return state

        while state.phase is not Phase.DONE:
            if state.phase is Phase.RELAXING:
                self._check_cancelled(state)
                self._relax_neighbors(state, graph)
                self._finalize_current(state)
                if not state.unvisited or (self._early_exit and state.current == destination):
                    state.phase = Phase.DONE
                else:
                    state.phase = Phase.SELECTING
            else:
                state.current = self._select_nearest_unvisited(state)
                state.iterations += 1
                state.phase = Phase.RELAXING

        return state

    def reconstruct_path(self, state: SolveState) -> List[Node]:
        """
        Walk predecessors back from the destination to the origin.
        """
        origin, destination = state.origin, state.destination
        if destination != origin and destination not in state.predecessor:
            raise NoPathFound(origin, destination)

        path = [destination]
        node = destination
        while node != origin:
            node = state.predecessor[node]
            path.append(node)
        path.reverse()
        return path

    # --- Internal helpers ---------------------------------------------------

    def _relax_neighbors(self, state: SolveState, graph: Graph) -> None:
        current = state.current
        base = state.distance[current]
        for neighbor in graph.neighbors(current):
            if neighbor not in state.unvisited:
                continue

            state.relaxations_examined += 1
            candidate = base + graph.weight(current, neighbor)
            if candidate < state.distance[neighbor]:
                state.distance[neighbor] = candidate
                state.predecessor[neighbor] = current
                state.relaxations_updated += 1

    def _finalize_current(self, state: SolveState) -> None:
        # The origin is never in the unvisited set, so discard, not remove.
        state.unvisited.discard(state.current)
        state.frontier_sizes.append(len(state.unvisited))
        if self._on_finalize is not None:
            self._on_finalize(state.current, state.distance[state.current])

    def _select_nearest_unvisited(self, state: SolveState) -> Node:
        """
        Unvisited node with the globally smallest tentative distance.

        Not goal-directed: distance to the destination plays no part. When
        everything left is unreachable (all inf) the first remaining node
        in graph order is returned so the set still drains.
        """
        selected: Optional[Node] = None
        best = math.inf
        for node in state.order:
            if node not in state.unvisited:
                continue
            d = state.distance[node]
            if selected is None or d < best:
                selected = node
                best = d

        assert selected is not None, "run() only selects while the unvisited set is non-empty"
        return selected

    def _check_cancelled(self, state: SolveState) -> None:
        if self._should_cancel is not None and self._should_cancel():
            raise SolveCancelled(
                f"Solve from {state.origin!r} to {state.destination!r} cancelled "
                f"after {state.iterations} iterations"
            )
