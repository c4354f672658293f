"""
Node abstraction for the street grid.

Solvers only rely on nodes being hashable and value-equal; concrete
geometries supply the coordinates.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class Node(ABC):
    """Abstract node in a street graph."""

    @property
    @abstractmethod
    def id(self) -> str:
        """
        Stable identifier within a given graph.
        """
        raise NotImplementedError


@dataclass(frozen=True, order=True)
class Intersection(Node):
    """
    Street intersection at column x, row y.

    x grows eastward and y grows southward, matching the street/avenue
    layout of a Manhattan grid.
    """

    x: int
    y: int

    @property
    def id(self) -> str:
        return f"{self.x},{self.y}"

    def __repr__(self) -> str:
        return f"Intersection({self.x}, {self.y})"
