"""
Algorithm interfaces for route calculation.

Keeps graph algorithms separate from grid construction and batch running.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple

from graph import Graph
from nodes import Node


class ShortestPathSolver(ABC):
    """
    Interface for point-to-point shortest-path computation.
    """

    @abstractmethod
    def solve(self, origin: Node, destination: Node, graph: Graph) -> List[Node]:
        """
        Compute a shortest path from origin to destination.

        Returns:
            Nodes from origin to destination inclusive, in traversal order.

        Raises:
            UnknownNode: origin or destination is not in graph.
            NoPathFound: destination is unreachable from origin.
        """
        raise NotImplementedError

    def solve_with_cost(
        self, origin: Node, destination: Node, graph: Graph
    ) -> Tuple[float, List[Node]]:
        """
        Same as solve, but also returns the total weight of the path.
        """
        path = self.solve(origin, destination, graph)
        return path_cost(graph, path), path


def path_cost(graph: Graph, path: Sequence[Node]) -> float:
    """Sum of street weights along consecutive nodes of path."""
    return sum((graph.weight(a, b) for a, b in zip(path, path[1:])), 0.0)
